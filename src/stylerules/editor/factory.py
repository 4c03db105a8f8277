"""Build new rules from capability block defaults."""

from __future__ import annotations

from stylerules.blocks.models import Block
from stylerules.editor.ids import mint_id
from stylerules.editor.models import Rule, Symbolizer


def new_symbolizer_rule(block: Block) -> Rule:
    """Plain rule holding one symbolizer seeded from the block defaults."""
    symbolizer = Symbolizer.model_validate(
        {**block.default_properties, "symbolizerId": mint_id()}
    )
    return Rule(name="", rule_id=mint_id(), symbolizers=(symbolizer,))


def new_special_rule(block: Block) -> Rule:
    """Rule of a special kind (e.g. classification) seeded from the block defaults."""
    return Rule.model_validate({"name": "", **block.default_properties, "ruleId": mint_id()})
