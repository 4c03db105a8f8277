"""Capability resolution: map a rule or symbolizer kind to its block."""

from __future__ import annotations

from collections.abc import Mapping

from stylerules.blocks.models import AddOption, Block


def resolve_symbolizer_block(
    blocks: Mapping[str, Block],
    kind: str | None,
    geometry_type: str | None,
) -> Block | None:
    """Return the block governing a symbolizer kind for a geometry type.

    Geometry-scoped variants are registered under their own keys and declare
    the symbolizer kind in ``kind``, so they are searched first, in registry
    order. Plain registries key blocks directly by kind, which is the fallback.
    Returns None when neither lookup matches.
    """
    if not kind:
        return None
    for block in blocks.values():
        if block.supports(geometry_type) and block.kind == kind:
            return block
    return blocks.get(kind)


def resolve_rule_block(blocks: Mapping[str, Block], kind: str | None) -> Block | None:
    """Direct key lookup; rule kinds are unique per registry."""
    if not kind:
        return None
    return blocks.get(kind)


def add_options(
    rule_blocks: Mapping[str, Block],
    symbolizer_blocks: Mapping[str, Block],
    geometry_type: str | None,
) -> list[AddOption]:
    """List add affordances: every symbolizer block, then addable rule blocks."""
    options = [
        AddOption(
            key=key,
            source="symbolizer",
            glyph=block.glyph_add or block.glyph,
            tooltip_id=block.tooltip_add_id,
            visible=block.supports(geometry_type),
            disabled=block.is_add_disabled(),
        )
        for key, block in symbolizer_blocks.items()
    ]
    options.extend(
        AddOption(
            key=key,
            source="rule",
            glyph=block.glyph_add or block.glyph,
            tooltip_id=block.tooltip_add_id,
            visible=block.supports(geometry_type),
        )
        for key, block in rule_blocks.items()
        if block.add
    )
    return options
