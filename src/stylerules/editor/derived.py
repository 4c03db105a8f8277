"""Derived state: UI-agnostic facts computed from rules and blocks."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stylerules.blocks.models import Block
from stylerules.blocks.registry import BlockRegistry
from stylerules.editor.config import EditorConfig
from stylerules.editor.models import Attribute, Rule, RuleCollection, Symbolizer

TEXT_KIND = "Text"
CUSTOM_INTERVAL = "customInterval"
UNIQUE_INTERVAL = "uniqueInterval"
COMPOSITE_KINDS = frozenset({"Classification", "Raster"})


class RuleAffordances(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    draggable: bool
    removable: bool
    label_editable: bool
    show_filter: bool
    show_scale_denominator: bool
    order_warning: bool


def order_warning(rule: Rule, index: int) -> bool:
    """True for a label rule that is not first in the list.

    Some renderers always draw labels above every other rule, so the declared
    order may not match the rendered one. Advisory only.
    """
    has_text = any(s.kind == TEXT_KIND for s in rule.symbolizers or ())
    return has_text and index > 0


def is_custom_number(attributes: Sequence[Attribute] | None, rule: Rule) -> bool:
    """Whether the rule's selected attribute is numeric."""
    if not attributes:
        return False
    selected = next((a for a in attributes if a.attribute == rule.attribute), None)
    return selected is not None and selected.type == "number"


def attribute_eligibility(
    attributes: Sequence[Attribute] | None,
    rule: Rule,
) -> list[Attribute]:
    """Return the attributes with ``disabled`` set for a classification rule.

    customInterval: with a numeric selection only numeric attributes stay
    enabled, otherwise only the selected attribute does. uniqueInterval: flags
    are left as given. Any other method: non-numeric attributes are disabled.
    """
    if not attributes:
        return []
    if rule.method == CUSTOM_INTERVAL:
        numeric = is_custom_number(attributes, rule)
        return [
            a.model_copy(
                update={
                    "disabled": a.type != "number" if numeric else a.attribute != rule.attribute
                }
            )
            for a in attributes
        ]
    if rule.method == UNIQUE_INTERVAL:
        return list(attributes)
    return [a.model_copy(update={"disabled": a.type != "number"}) for a in attributes]


def uses_composite_editor(rule: Rule) -> bool:
    """Classification and raster rules are edited as a whole, not per symbolizer."""
    return rule.kind in COMPOSITE_KINDS


def active_rule_block(rule: Rule, registry: BlockRegistry) -> Block | None:
    return registry.rule_block(rule.kind)


def renderable_symbolizers(
    rule: Rule,
    registry: BlockRegistry,
    geometry_type: str | None,
) -> list[tuple[Symbolizer, Block]]:
    """Symbolizers with an editable block; the rest are skipped but kept in the rule."""
    entries: list[tuple[Symbolizer, Block]] = []
    for symbolizer in rule.symbolizers or ():
        block = registry.symbolizer_block(symbolizer.kind, geometry_type)
        if block is not None and block.params is not None:
            entries.append((symbolizer, block))
    return entries


def rule_affordances(
    rules: RuleCollection,
    index: int,
    registry: BlockRegistry,
    config: EditorConfig,
) -> RuleAffordances:
    rule = rules.to_list()[index]
    block = active_rule_block(rule, registry)
    return RuleAffordances(
        draggable=len(rules) > 1,
        removable=not rule.mandatory,
        label_editable=not (block is not None and block.hide_input_label),
        show_filter=not (block is not None and block.hide_filter),
        show_scale_denominator=bool(config.scales)
        and not (block is not None and block.hide_scale_denominator),
        order_warning=order_warning(rule, index),
    )
