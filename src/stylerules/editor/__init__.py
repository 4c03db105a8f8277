"""Rule editor: data model, edit engine, derived state and dispatch session."""

from stylerules.editor.config import EditorConfig, load_editor_config
from stylerules.editor.derived import (
    RuleAffordances,
    active_rule_block,
    attribute_eligibility,
    is_custom_number,
    order_warning,
    renderable_symbolizers,
    rule_affordances,
    uses_composite_editor,
)
from stylerules.editor.factory import new_special_rule, new_symbolizer_rule
from stylerules.editor.ids import mint_id
from stylerules.editor.models import (
    AddRule,
    Attribute,
    Intent,
    RemoveRule,
    ReorderRules,
    ReplaceRule,
    Rule,
    RuleChanges,
    RuleCollection,
    ScaleDenominator,
    Symbolizer,
    SymbolizerChanges,
    UpdateRuleFields,
    UpdateSymbolizerFields,
    parse_intent,
    parse_intents,
)
from stylerules.editor.operations import (
    add_rule,
    apply_intent,
    apply_intents,
    remove_rule,
    reorder_rules,
    replace_rule,
    update_rule_fields,
    update_symbolizer_fields,
)
from stylerules.editor.session import EditorSession, RuleView, SymbolizerView

__all__ = [
    "AddRule",
    "Attribute",
    "EditorConfig",
    "EditorSession",
    "Intent",
    "RemoveRule",
    "ReorderRules",
    "ReplaceRule",
    "Rule",
    "RuleAffordances",
    "RuleChanges",
    "RuleCollection",
    "RuleView",
    "ScaleDenominator",
    "Symbolizer",
    "SymbolizerChanges",
    "SymbolizerView",
    "UpdateRuleFields",
    "UpdateSymbolizerFields",
    "active_rule_block",
    "add_rule",
    "apply_intent",
    "apply_intents",
    "attribute_eligibility",
    "is_custom_number",
    "load_editor_config",
    "mint_id",
    "new_special_rule",
    "new_symbolizer_rule",
    "order_warning",
    "parse_intent",
    "parse_intents",
    "remove_rule",
    "renderable_symbolizers",
    "reorder_rules",
    "replace_rule",
    "rule_affordances",
    "update_rule_fields",
    "update_symbolizer_fields",
    "uses_composite_editor",
]
