"""Tests for editor/session.py — intent dispatch and callbacks."""

from __future__ import annotations

import logging

import pytest

from stylerules.blocks.models import Block
from stylerules.blocks.registry import BlockRegistry
from stylerules.editor.config import EditorConfig
from stylerules.editor.models import (
    Attribute,
    RemoveRule,
    RuleChanges,
    RuleCollection,
    UpdateRuleFields,
)
from stylerules.editor.session import EditorSession


class Recorder:
    def __init__(self) -> None:
        self.calls: list[object] = []

    def __call__(self, value: object) -> None:
        self.calls.append(value)


def _ids(rules: RuleCollection) -> list[str]:
    return [r.rule_id for r in rules.to_list()]


@pytest.fixture
def changes() -> Recorder:
    return Recorder()


@pytest.fixture
def updates() -> Recorder:
    return Recorder()


@pytest.fixture
def session(small_registry: BlockRegistry, changes: Recorder, updates: Recorder) -> EditorSession:
    config = EditorConfig(
        geometry_type="polygon",
        attributes=[
            Attribute(attribute="pop", type="number"),
            Attribute(attribute="name", type="string"),
        ],
        scales=[1000.0, 5000.0],
        fonts=["serif"],
    )
    return EditorSession(config, small_registry, on_change=changes, on_update=updates)


class TestDispatch:
    def test_reports_new_snapshot(
        self, session: EditorSession, sample_rules: RuleCollection, changes: Recorder
    ):
        intent = UpdateRuleFields(rule_id="r1", changes=RuleChanges(name="Green"))
        result = session.dispatch(sample_rules, intent)
        assert changes.calls == [result]
        assert result.get("r1").name == "Green"

    def test_threads_explicit_snapshots(
        self, session: EditorSession, sample_rules: RuleCollection, changes: Recorder
    ):
        first = session.update_rule(sample_rules, "r1", {"name": "A"})
        second = session.update_rule(first, "r2", {"name": "B"})
        assert [r.name for r in second.to_list()] == ["A", "B", None]
        assert len(changes.calls) == 2
        assert sample_rules.get("r1").name == "Parks"

    def test_unknown_id_still_reports(
        self, session: EditorSession, sample_rules: RuleCollection, changes: Recorder
    ):
        result = session.remove(sample_rules, "missing")
        assert result == sample_rules
        assert changes.calls == [sample_rules]

    def test_mandatory_rule_not_removed(self, session: EditorSession, changes: Recorder, caplog):
        rules = RuleCollection.from_rules([{"ruleId": "m", "mandatory": True}, {"ruleId": "o"}])
        with caplog.at_level(logging.WARNING):
            result = session.dispatch(rules, RemoveRule(rule_id="m"))
        assert result is rules
        assert changes.calls == []
        assert "mandatory" in caplog.text

    def test_helpers(self, session: EditorSession, sample_rules: RuleCollection):
        rules = session.update_symbolizer(sample_rules, "r1", "s1", {"color": "#123456"})
        assert rules.get("r1").symbolizers[0].properties["color"] == "#123456"
        rules = session.replace(rules, "r2", {"kind": "Classification", "method": "quantile"})
        assert rules.get("r2").kind == "Classification"
        assert rules.get("r2").symbolizers is None
        rules = session.reorder(rules, 2, 0)
        assert _ids(rules) == ["r3", "r1", "r2"]
        rules = session.remove(rules, "r1")
        assert _ids(rules) == ["r3", "r2"]


class TestAdd:
    def test_add_symbolizer_rule(
        self, session: EditorSession, sample_rules: RuleCollection, changes: Recorder
    ):
        result = session.add(sample_rules, "PolygonFill")
        assert len(result) == 4
        new_rule = result.to_list()[0]
        assert new_rule.rule_id not in sample_rules.rules
        assert new_rule.symbolizers[0].kind == "Fill"
        assert len(changes.calls) == 1

    def test_add_hidden_for_geometry(
        self, session: EditorSession, sample_rules: RuleCollection, changes: Recorder
    ):
        # generic Fill only supports "vector"
        assert session.add(sample_rules, "Fill") is sample_rules
        assert changes.calls == []

    def test_add_special_rule(self, session: EditorSession, sample_rules: RuleCollection):
        result = session.add(sample_rules, "Classification", source="rule")
        new_rule = result.to_list()[0]
        assert new_rule.kind == "Classification"
        assert new_rule.method == "equalInterval"

    def test_rule_block_without_add_flag(
        self, session: EditorSession, sample_rules: RuleCollection
    ):
        assert session.add(sample_rules, "Locked", source="rule") is sample_rules

    def test_unknown_key(self, session: EditorSession, sample_rules: RuleCollection):
        assert session.add(sample_rules, "Nope") is sample_rules

    def test_disabled_block(self, sample_rules: RuleCollection, changes: Recorder):
        registry = BlockRegistry(
            symbolizer_blocks={
                "Fill": Block(kind="Fill", supported_types=["polygon"], disable_add=lambda: True)
            }
        )
        session = EditorSession(EditorConfig(geometry_type="polygon"), registry, on_change=changes)
        assert session.add(sample_rules, "Fill") is sample_rules
        assert changes.calls == []

    def test_add_options(self, session: EditorSession):
        options = {(o.source, o.key): o.visible for o in session.add_options()}
        assert options == {
            ("symbolizer", "Fill"): False,
            ("symbolizer", "PolygonFill"): True,
            ("symbolizer", "Text"): True,
            ("rule", "Classification"): True,
        }


class TestRequestUpdate:
    def test_reports_partial_values(
        self, session: EditorSession, updates: Recorder, changes: Recorder
    ):
        session.request_update("r3", {"method": "quantile", "intervals": 4})
        assert updates.calls == [{"ruleId": "r3", "method": "quantile", "intervals": 4}]
        assert changes.calls == []

    def test_accepts_changes_model(self, session: EditorSession, updates: Recorder):
        session.request_update("r3", RuleChanges(attribute="name"))
        assert updates.calls == [{"ruleId": "r3", "attribute": "name"}]


class TestViews:
    def test_plain_rules(self, session: EditorSession, sample_rules: RuleCollection):
        views = session.views(sample_rules)
        assert [v.index for v in views] == [0, 1, 2]
        parks, labels, _ = views
        assert parks.composite is False
        assert [s.symbolizer.symbolizer_id for s in parks.symbolizers] == ["s1"]
        assert parks.symbolizers[0].block.glyph == "polygon-fill"
        assert parks.symbolizers[0].show_menu is True
        assert parks.affordances.show_scale_denominator is True
        # Line has no block in the small registry: skipped, still in the rule
        assert [s.symbolizer.kind for s in labels.symbolizers] == ["Text"]
        assert len(labels.rule.symbolizers) == 2
        assert labels.affordances.order_warning is True

    def test_composite_rule(self, session: EditorSession, sample_rules: RuleCollection):
        classification = session.views(sample_rules)[2]
        assert classification.composite is True
        assert classification.block is not None
        assert classification.symbolizers == []
        assert {a.attribute: a.disabled for a in classification.attributes} == {
            "pop": False,
            "name": True,
        }

    def test_simple_mode_hides_menu(self, small_registry: BlockRegistry, sample_rules):
        session = EditorSession(EditorConfig(geometry_type="polygon", simple=True), small_registry)
        assert session.views(sample_rules)[0].symbolizers[0].show_menu is False

    def test_empty(self, session: EditorSession):
        assert session.views(RuleCollection()) == []

    def test_context(self, session: EditorSession):
        context = session.context()
        assert context.fonts == ["serif"]
        assert context.bands == []

    def test_context_carries_map_settings(self, small_registry: BlockRegistry):
        def palette(name: str, count: int) -> list[str]:
            return [name] * count

        config = EditorConfig(scales=[1000, 5000.5], zoom=12, get_colors=palette)
        context = EditorSession(config, small_registry).context()
        assert context.scales == [1000, 5000.5]
        assert context.zoom == 12
        assert context.get_colors is palette
        dumped = context.model_dump(by_alias=True)
        assert dumped["scales"] == [1000, 5000.5]
        assert dumped["zoom"] == 12
        assert "getColors" not in dumped


class TestDefaults:
    def test_builtin_registry(self):
        session = EditorSession()
        assert session.registry.get_symbolizer_block("Mark") is not None
        assert session.config.geometry_type is None

    def test_blocks_path_from_config(self, tmp_path):
        path = tmp_path / "blocks.json"
        path.write_text('{"symbolizerBlock": {"Hatch": {"kind": "Hatch"}}}')
        session = EditorSession(EditorConfig(blocks_path=str(path)))
        assert session.registry.get_symbolizer_block("Hatch") is not None
        assert session.registry.get_symbolizer_block("Fill") is not None

    def test_callbacks_optional(self, sample_rules: RuleCollection):
        session = EditorSession(EditorConfig(geometry_type="polygon"))
        result = session.add(sample_rules, "Fill")
        assert len(result) == 4
        session.request_update("r1", {"name": "x"})
