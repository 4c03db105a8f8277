"""Rule list edit engine: pure transforms from one rule snapshot to the next.

Every operation takes the current RuleCollection explicitly and returns a new
one; nothing is mutated in place. Identifier-addressed operations silently
ignore unknown ids and return an equal collection. Only ``reorder_rules`` is
addressed by position.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from stylerules.editor.models import (
    AddRule,
    Intent,
    RemoveRule,
    ReorderRules,
    ReplaceRule,
    Rule,
    RuleChanges,
    RuleCollection,
    Symbolizer,
    SymbolizerChanges,
    UpdateRuleFields,
    UpdateSymbolizerFields,
)

logger = logging.getLogger(__name__)


def _rebuild(model: Rule | Symbolizer, updates: dict[str, Any]) -> Any:
    return type(model).model_validate({**dict(model), **updates})


def _with_rule(rules: RuleCollection, rule: Rule) -> RuleCollection:
    return RuleCollection(rules={**rules.rules, rule.rule_id: rule}, order=rules.order)


def update_rule_fields(
    rules: RuleCollection,
    rule_id: str,
    changes: RuleChanges,
) -> RuleCollection:
    """Shallow-merge changes into one rule; other fields and rules persist."""
    rule = rules.get(rule_id)
    if rule is None:
        logger.debug(f"update_rule_fields: unknown ruleId {rule_id}")
        return rules
    updates = changes.field_updates()
    if changes.properties is not None:
        updates["properties"] = {**rule.properties, **changes.properties}
    return _with_rule(rules, _rebuild(rule, updates))


def update_symbolizer_fields(
    rules: RuleCollection,
    rule_id: str,
    symbolizer_id: str,
    changes: SymbolizerChanges,
) -> RuleCollection:
    """Shallow-merge changes into one symbolizer of one rule."""
    rule = rules.get(rule_id)
    if rule is None or rule.symbolizers is None:
        logger.debug(f"update_symbolizer_fields: no symbolizers for ruleId {rule_id}")
        return rules
    if not any(s.symbolizer_id == symbolizer_id for s in rule.symbolizers):
        logger.debug(f"update_symbolizer_fields: unknown symbolizerId {symbolizer_id}")
        return rules

    updates: dict[str, Any] = {}
    if changes.kind is not None:
        updates["kind"] = changes.kind

    symbolizers = tuple(
        _rebuild(
            s,
            {**updates, "properties": {**s.properties, **(changes.properties or {})}},
        )
        if s.symbolizer_id == symbolizer_id
        else s
        for s in rule.symbolizers
    )
    return _with_rule(rules, _rebuild(rule, {"symbolizers": symbolizers}))


def add_rule(rules: RuleCollection, rule: Rule) -> RuleCollection:
    """Prepend a fully formed rule so the newest rule is listed first."""
    if rule.rule_id in rules.rules:
        logger.debug(f"add_rule: ruleId {rule.rule_id} already present")
        return rules
    return RuleCollection(
        rules={rule.rule_id: rule, **rules.rules},
        order=(rule.rule_id, *rules.order),
    )


def remove_rule(rules: RuleCollection, rule_id: str) -> RuleCollection:
    """Drop one rule. Mandatory rules are guarded by the caller, not here."""
    if rule_id not in rules.rules:
        logger.debug(f"remove_rule: unknown ruleId {rule_id}")
        return rules
    return RuleCollection(
        rules={key: rule for key, rule in rules.rules.items() if key != rule_id},
        order=tuple(key for key in rules.order if key != rule_id),
    )


def replace_rule(rules: RuleCollection, rule_id: str, replacement: Rule) -> RuleCollection:
    """Swap a rule's whole field set, keeping its ruleId and position."""
    if rule_id not in rules.rules:
        logger.debug(f"replace_rule: unknown ruleId {rule_id}")
        return rules
    return _with_rule(rules, replacement.model_copy(update={"rule_id": rule_id}))


def reorder_rules(rules: RuleCollection, from_index: int, to_index: int) -> RuleCollection:
    """Move the rule at from_index next to the rule at to_index.

    Moving down inserts after the target, moving up inserts before it, so the
    moved rule always lands at to_index. Equal or out-of-range indices are a
    no-op.
    """
    size = len(rules.order)
    if from_index == to_index or not (0 <= from_index < size and 0 <= to_index < size):
        logger.debug(f"reorder_rules: ignored move {from_index} -> {to_index} of {size}")
        return rules

    moved = rules.order[from_index]
    order: list[str] = []
    for idx, rule_id in enumerate(rules.order):
        if idx == from_index:
            continue
        if idx == to_index:
            order.extend([moved, rule_id] if from_index > to_index else [rule_id, moved])
        else:
            order.append(rule_id)
    return RuleCollection(rules=rules.rules, order=tuple(order))


def _apply_update_rule(rules: RuleCollection, intent: UpdateRuleFields) -> RuleCollection:
    return update_rule_fields(rules, intent.rule_id, intent.changes)


def _apply_update_symbolizer(
    rules: RuleCollection, intent: UpdateSymbolizerFields
) -> RuleCollection:
    return update_symbolizer_fields(rules, intent.rule_id, intent.symbolizer_id, intent.changes)


def _apply_add(rules: RuleCollection, intent: AddRule) -> RuleCollection:
    return add_rule(rules, intent.rule)


def _apply_remove(rules: RuleCollection, intent: RemoveRule) -> RuleCollection:
    return remove_rule(rules, intent.rule_id)


def _apply_replace(rules: RuleCollection, intent: ReplaceRule) -> RuleCollection:
    return replace_rule(rules, intent.rule_id, intent.rule)


def _apply_reorder(rules: RuleCollection, intent: ReorderRules) -> RuleCollection:
    return reorder_rules(rules, intent.from_index, intent.to_index)


_HANDLERS: dict[str, Callable[[RuleCollection, Any], RuleCollection]] = {
    "update_rule": _apply_update_rule,
    "update_symbolizer": _apply_update_symbolizer,
    "add": _apply_add,
    "remove": _apply_remove,
    "replace": _apply_replace,
    "reorder": _apply_reorder,
}


def apply_intent(rules: RuleCollection, intent: Intent) -> RuleCollection:
    """Apply one intent to a snapshot and return the next snapshot."""
    return _HANDLERS[intent.op](rules, intent)


def apply_intents(rules: RuleCollection, intents: Iterable[Intent]) -> RuleCollection:
    for intent in intents:
        rules = apply_intent(rules, intent)
    return rules
