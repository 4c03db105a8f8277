"""Pydantic models for capability blocks."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GeometryType(StrEnum):
    POINT = "point"
    LINESTRING = "linestring"
    LINE = "line"
    POLYGON = "polygon"
    VECTOR = "vector"
    RASTER = "raster"


class ParamSpec(BaseModel):
    """Field descriptor handed to the presentation layer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    type: str  # "color" | "slider" | "select" | "input" | "toolbar" | "image" | ...
    label: str = ""
    options: list[Any] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict, alias="config")


class Block(BaseModel):
    """Capability block for one rule kind or symbolizer kind."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kind: str | None = None
    glyph: str | None = None
    glyph_add: str | None = None
    tooltip_add_id: str | None = None
    supported_types: list[str] = Field(default_factory=list)
    default_properties: dict[str, Any] = Field(default_factory=dict)
    # None = not editable; {} = editable with no fields
    params: dict[str, ParamSpec] | None = None
    add: bool = False
    disable_add: Callable[[], bool] | None = Field(default=None, exclude=True)
    hide_menu: bool = False
    hide_input_label: bool = False
    hide_filter: bool = False
    hide_scale_denominator: bool = False
    classification_type: str | None = None

    def supports(self, geometry_type: str | None) -> bool:
        return geometry_type is not None and geometry_type in self.supported_types

    def is_add_disabled(self) -> bool:
        return bool(self.disable_add()) if self.disable_add is not None else False


class AddOption(BaseModel):
    """One add affordance derived from a block."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: str
    source: str  # "rule" | "symbolizer"
    glyph: str | None = None
    tooltip_id: str | None = None
    visible: bool = True
    disabled: bool = False
