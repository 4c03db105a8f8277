"""EditorSession: dispatch edit intents and report new snapshots to the caller."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stylerules.blocks.models import AddOption, Block
from stylerules.blocks.registry import BlockRegistry
from stylerules.editor.config import EditorConfig
from stylerules.editor.derived import (
    RuleAffordances,
    active_rule_block,
    attribute_eligibility,
    renderable_symbolizers,
    rule_affordances,
    uses_composite_editor,
)
from stylerules.editor.factory import new_special_rule, new_symbolizer_rule
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
    Symbolizer,
    SymbolizerChanges,
    UpdateRuleFields,
    UpdateSymbolizerFields,
)
from stylerules.editor.operations import apply_intent

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[RuleCollection], Any]
UpdateCallback = Callable[[dict[str, Any]], Any]


class SymbolizerView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symbolizer: Symbolizer
    block: Block
    show_menu: bool


class EditorContext(BaseModel):
    """Settings passed through to field and composite editors."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    bands: list[int] = Field(default_factory=list)
    scales: list[int | float] = Field(default_factory=list)
    zoom: float | None = None
    fonts: list[str] = Field(default_factory=list)
    methods: list[str] = Field(default_factory=list)
    svg_symbols_path: str | None = None
    line_dash_options: list[dict[str, Any]] = Field(default_factory=list)
    enable_field_expression: bool = False
    classification: dict[str, Any] = Field(default_factory=dict)
    supported_symbolizer_menu_options: list[str] | None = None
    get_colors: Callable[..., Any] | None = Field(default=None, exclude=True)


class RuleView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    index: int
    rule: Rule
    block: Block | None
    affordances: RuleAffordances
    composite: bool
    symbolizers: list[SymbolizerView] = Field(default_factory=list)
    attributes: list[Attribute] = Field(default_factory=list)


def _noop(_value: Any) -> None:
    return None


class EditorSession:
    """Intent-dispatch boundary around the pure edit engine.

    The session holds no rule state: every method takes the latest snapshot
    from the caller and returns the next one, after reporting it through
    ``on_change``.
    """

    def __init__(
        self,
        config: EditorConfig | None = None,
        registry: BlockRegistry | None = None,
        *,
        on_change: ChangeCallback | None = None,
        on_update: UpdateCallback | None = None,
    ) -> None:
        self._config = config or EditorConfig()
        if registry is None:
            blocks_path = Path(self._config.blocks_path) if self._config.blocks_path else None
            registry = BlockRegistry.load_merged(blocks_path)
        self._registry = registry
        self._on_change = on_change or _noop
        self._on_update = on_update or _noop

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def registry(self) -> BlockRegistry:
        return self._registry

    def dispatch(self, rules: RuleCollection, intent: Intent) -> RuleCollection:
        """Apply one intent, report the new snapshot and return it."""
        if isinstance(intent, RemoveRule):
            target = rules.get(intent.rule_id)
            if target is not None and target.mandatory:
                logger.warning(f"Refusing to remove mandatory rule {intent.rule_id}")
                return rules
        new_rules = apply_intent(rules, intent)
        self._on_change(new_rules)
        return new_rules

    def update_rule(
        self, rules: RuleCollection, rule_id: str, values: dict[str, Any]
    ) -> RuleCollection:
        changes = RuleChanges.model_validate(values)
        return self.dispatch(rules, UpdateRuleFields(rule_id=rule_id, changes=changes))

    def update_symbolizer(
        self,
        rules: RuleCollection,
        rule_id: str,
        symbolizer_id: str,
        values: dict[str, Any],
    ) -> RuleCollection:
        changes = SymbolizerChanges.model_validate(values)
        intent = UpdateSymbolizerFields(
            rule_id=rule_id, symbolizer_id=symbolizer_id, changes=changes
        )
        return self.dispatch(rules, intent)

    def remove(self, rules: RuleCollection, rule_id: str) -> RuleCollection:
        return self.dispatch(rules, RemoveRule(rule_id=rule_id))

    def replace(
        self, rules: RuleCollection, rule_id: str, values: dict[str, Any]
    ) -> RuleCollection:
        replacement = Rule.model_validate({**values, "ruleId": rule_id})
        return self.dispatch(rules, ReplaceRule(rule_id=rule_id, rule=replacement))

    def reorder(self, rules: RuleCollection, from_index: int, to_index: int) -> RuleCollection:
        return self.dispatch(rules, ReorderRules(from_index=from_index, to_index=to_index))

    def add(self, rules: RuleCollection, key: str, source: str = "symbolizer") -> RuleCollection:
        """Add a rule seeded from the block registered under key.

        Hidden (geometry not supported) or disabled options leave the rules
        unchanged.
        """
        geometry_type = self._config.geometry_type
        if source == "rule":
            block = self._registry.get_rule_block(key)
            if block is not None and not block.add:
                block = None
        else:
            block = self._registry.get_symbolizer_block(key)

        if block is None:
            logger.warning(f"No addable {source} block registered under '{key}'")
            return rules
        if not block.supports(geometry_type):
            logger.warning(f"Block '{key}' is hidden for geometry type {geometry_type}")
            return rules
        if source != "rule" and block.is_add_disabled():
            logger.warning(f"Block '{key}' is disabled")
            return rules

        rule = new_special_rule(block) if source == "rule" else new_symbolizer_rule(block)
        return self.dispatch(rules, AddRule(rule=rule))

    def request_update(self, rule_id: str, values: RuleChanges | dict[str, Any]) -> None:
        """Report a field edit on the incremental path without changing the rules."""
        changes = values if isinstance(values, RuleChanges) else RuleChanges.model_validate(values)
        self._on_update({**changes.to_dict(), "ruleId": rule_id})

    def add_options(self) -> list[AddOption]:
        return self._registry.add_options(self._config.geometry_type)

    def context(self) -> EditorContext:
        cfg = self._config
        return EditorContext(
            bands=cfg.bands,
            scales=cfg.scales,
            zoom=cfg.zoom,
            fonts=cfg.fonts,
            methods=cfg.methods,
            svg_symbols_path=cfg.svg_symbols_path,
            line_dash_options=cfg.line_dash_options,
            enable_field_expression=cfg.enable_field_expression,
            classification=cfg.classification,
            supported_symbolizer_menu_options=cfg.supported_symbolizer_menu_options,
            get_colors=cfg.get_colors,
        )

    def views(self, rules: RuleCollection) -> list[RuleView]:
        views: list[RuleView] = []
        for index, rule in enumerate(rules.to_list()):
            composite = uses_composite_editor(rule)
            symbolizers: list[SymbolizerView] = []
            attributes: list[Attribute] = []
            if composite:
                attributes = attribute_eligibility(self._config.attributes, rule)
            else:
                symbolizers = [
                    SymbolizerView(
                        symbolizer=symbolizer,
                        block=block,
                        show_menu=not self._config.simple and not block.hide_menu,
                    )
                    for symbolizer, block in renderable_symbolizers(
                        rule, self._registry, self._config.geometry_type
                    )
                ]
            views.append(
                RuleView(
                    index=index,
                    rule=rule,
                    block=active_rule_block(rule, self._registry),
                    affordances=rule_affordances(rules, index, self._registry, self._config),
                    composite=composite,
                    symbolizers=symbolizers,
                    attributes=attributes,
                )
            )
        return views
