"""Shared fixtures for stylerules tests."""

from __future__ import annotations

import pytest

from stylerules.blocks.models import Block, ParamSpec
from stylerules.blocks.registry import BlockRegistry
from stylerules.editor.models import Attribute, RuleCollection


def _fill_block(**overrides: object) -> Block:
    data: dict[str, object] = {
        "kind": "Fill",
        "glyph": "polygon",
        "supportedTypes": ["polygon", "vector"],
        "params": {"color": {"type": "color", "label": "Fill"}},
        "defaultProperties": {"kind": "Fill", "color": "#dddddd"},
    }
    data.update(overrides)
    return Block.model_validate(data)


@pytest.fixture
def sample_rules() -> RuleCollection:
    """Fill rule, label rule, classification rule, in that order."""
    return RuleCollection.from_rules(
        [
            {
                "ruleId": "r1",
                "name": "Parks",
                "scaleDenominator": {"max": 50000},
                "symbolizers": [{"symbolizerId": "s1", "kind": "Fill", "color": "#00ff00"}],
            },
            {
                "ruleId": "r2",
                "name": "Labels",
                "symbolizers": [
                    {"symbolizerId": "s2", "kind": "Text", "label": "{{name}}"},
                    {"symbolizerId": "s3", "kind": "Line", "color": "#333333"},
                ],
            },
            {
                "ruleId": "r3",
                "kind": "Classification",
                "attribute": "pop",
                "method": "jenks",
                "intervals": 5,
            },
        ]
    )


@pytest.fixture
def attributes() -> list[Attribute]:
    return [
        Attribute(attribute="pop", type="number"),
        Attribute(attribute="name", type="string"),
    ]


@pytest.fixture
def small_registry() -> BlockRegistry:
    """Registry with a generic Fill, a polygon-scoped Fill variant and a Text block."""
    return BlockRegistry(
        rule_blocks={
            "Classification": Block(
                kind="Classification",
                supported_types=["polygon", "vector"],
                add=True,
                hide_input_label=True,
                default_properties={"kind": "Classification", "method": "equalInterval"},
                params={"method": ParamSpec(type="select")},
            ),
            "Locked": Block(kind="Locked", supported_types=["polygon"], add=False),
        },
        symbolizer_blocks={
            "Fill": _fill_block(glyph="generic", supportedTypes=["vector"]),
            "PolygonFill": _fill_block(glyph="polygon-fill", supportedTypes=["polygon"]),
            "Text": Block(
                kind="Text",
                supported_types=["point", "polygon", "vector"],
                params={"label": ParamSpec(type="input")},
                default_properties={"kind": "Text", "size": 14},
            ),
        },
    )
