"""Pydantic models for rules, symbolizers, the rule collection and edit intents."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from stylerules.editor.ids import mint_id

_IDENTITY_KEYS = frozenset({"ruleId", "rule_id", "symbolizerId", "symbolizer_id"})


def _known_keys(model: type[BaseModel]) -> set[str]:
    keys: set[str] = set()
    for name, info in model.model_fields.items():
        keys.add(name)
        keys.add(info.alias or to_camel(name))
    return keys


def _fold(model: type[BaseModel], data: Any, *, drop_identity: bool = False) -> Any:
    """Move wire keys the model does not declare into its ``properties`` bag."""
    if not isinstance(data, dict):
        return data
    known = _known_keys(model)
    typed: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in data.items():
        if drop_identity and key in _IDENTITY_KEYS:
            continue
        if key in known:
            typed[key] = value
        else:
            extra[key] = value
    if extra:
        typed["properties"] = {**(typed.get("properties") or {}), **extra}
    return typed


def _check_unique_symbolizers(symbolizers: Iterable[Symbolizer] | None, owner: str) -> None:
    if not symbolizers:
        return
    counts = Counter(s.symbolizer_id for s in symbolizers)
    dupes = sorted(sid for sid, n in counts.items() if n > 1)
    if dupes:
        raise ValueError(f"{owner} has duplicate symbolizerId: {', '.join(dupes)}")


class ScaleDenominator(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int | float | None = None
    max: int | float | None = None


class Symbolizer(BaseModel):
    """One rendering instruction inside a rule."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    symbolizer_id: str = Field(default_factory=mint_id)
    kind: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fold_properties(cls, data: Any) -> Any:
        return _fold(cls, data)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.properties)
        if self.kind is not None:
            data["kind"] = self.kind
        data["symbolizerId"] = self.symbolizer_id
        return data


class Rule(BaseModel):
    """One style rule. Kind-specific fields live in ``properties``.

    Members that were absent on the wire stay ``None`` so ``to_dict`` gives
    back the record it was built from.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    rule_id: str = Field(default_factory=mint_id)
    kind: str | None = None
    name: str | None = None
    filter: Any = None
    scale_denominator: ScaleDenominator | None = None
    symbolizers: tuple[Symbolizer, ...] | None = None
    mandatory: bool | None = None
    error_id: str | None = None
    msg_params: dict[str, Any] | None = None
    attribute: str | None = None
    method: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fold_properties(cls, data: Any) -> Any:
        return _fold(cls, data)

    @model_validator(mode="after")
    def _check_symbolizer_ids(self) -> Rule:
        _check_unique_symbolizers(self.symbolizers, f"Rule '{self.rule_id}'")
        return self

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.properties)
        data.update(
            self.model_dump(
                by_alias=True,
                exclude_none=True,
                exclude={"properties", "symbolizers", "scale_denominator"},
            )
        )
        if self.scale_denominator is not None:
            data["scaleDenominator"] = self.scale_denominator.model_dump(exclude_none=True)
        if self.symbolizers is not None:
            data["symbolizers"] = [s.to_dict() for s in self.symbolizers]
        return data


class RuleChanges(BaseModel):
    """Partial rule record; only explicitly set members overwrite."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kind: str | None = None
    name: str | None = None
    filter: Any = None
    scale_denominator: ScaleDenominator | None = None
    symbolizers: tuple[Symbolizer, ...] | None = None
    mandatory: bool | None = None
    error_id: str | None = None
    msg_params: dict[str, Any] | None = None
    attribute: str | None = None
    method: str | None = None
    properties: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _fold_properties(cls, data: Any) -> Any:
        return _fold(cls, data, drop_identity=True)

    @model_validator(mode="after")
    def _check_symbolizer_ids(self) -> RuleChanges:
        _check_unique_symbolizers(self.symbolizers, "Rule changes")
        return self

    def field_updates(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set if name != "properties"}

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.properties or {})
        data.update(
            self.model_dump(by_alias=True, exclude_unset=True, exclude={"properties"})
        )
        return data


class SymbolizerChanges(BaseModel):
    """Partial symbolizer record; properties merge key by key."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kind: str | None = None
    properties: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _fold_properties(cls, data: Any) -> Any:
        return _fold(cls, data, drop_identity=True)


class Attribute(BaseModel):
    """Layer attribute offered to classification rules."""

    attribute: str
    type: str | None = None
    label: str | None = None
    disabled: bool = False


class RuleCollection(BaseModel):
    """Ordered rule collection: rules keyed by ruleId plus a display-order index."""

    model_config = ConfigDict(frozen=True)

    rules: dict[str, Rule] = Field(default_factory=dict)
    order: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_index(self) -> RuleCollection:
        if len(set(self.order)) != len(self.order):
            raise ValueError("Rule order lists a ruleId more than once")
        if set(self.order) != set(self.rules):
            raise ValueError("Rule order does not match the stored rules")
        for key, rule in self.rules.items():
            if key != rule.rule_id:
                raise ValueError(f"Rule stored under '{key}' has ruleId '{rule.rule_id}'")
        return self

    @classmethod
    def from_rules(cls, rules: Iterable[Rule | dict[str, Any]]) -> RuleCollection:
        parsed = [r if isinstance(r, Rule) else Rule.model_validate(r) for r in rules]
        counts = Counter(r.rule_id for r in parsed)
        dupes = sorted(rid for rid, n in counts.items() if n > 1)
        if dupes:
            raise ValueError(f"Duplicate ruleId: {', '.join(dupes)}")
        return cls(rules={r.rule_id: r for r in parsed}, order=tuple(r.rule_id for r in parsed))

    def __len__(self) -> int:
        return len(self.order)

    def get(self, rule_id: str) -> Rule | None:
        return self.rules.get(rule_id)

    def index_of(self, rule_id: str) -> int | None:
        try:
            return self.order.index(rule_id)
        except ValueError:
            return None

    def to_list(self) -> list[Rule]:
        return [self.rules[rule_id] for rule_id in self.order]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [rule.to_dict() for rule in self.to_list()]


# Intents


class _IntentBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class UpdateRuleFields(_IntentBase):
    op: Literal["update_rule"] = "update_rule"
    rule_id: str
    changes: RuleChanges


class UpdateSymbolizerFields(_IntentBase):
    op: Literal["update_symbolizer"] = "update_symbolizer"
    rule_id: str
    symbolizer_id: str
    changes: SymbolizerChanges


class AddRule(_IntentBase):
    op: Literal["add"] = "add"
    rule: Rule


class RemoveRule(_IntentBase):
    op: Literal["remove"] = "remove"
    rule_id: str


class ReplaceRule(_IntentBase):
    op: Literal["replace"] = "replace"
    rule_id: str
    rule: Rule  # its own ruleId is discarded


class ReorderRules(_IntentBase):
    op: Literal["reorder"] = "reorder"
    from_index: int
    to_index: int


Intent = Annotated[
    UpdateRuleFields | UpdateSymbolizerFields | AddRule | RemoveRule | ReplaceRule | ReorderRules,
    Field(discriminator="op"),
]

_INTENT = TypeAdapter(Intent)
_INTENTS = TypeAdapter(list[Intent])


def parse_intent(data: Any) -> Intent:
    return _INTENT.validate_python(data)


def parse_intents(data: Any) -> list[Intent]:
    return _INTENTS.validate_python(data)
