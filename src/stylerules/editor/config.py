"""EditorConfig dataclass and loader for rule editor settings."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stylerules.editor.models import Attribute

logger = logging.getLogger(__name__)

SETTINGS_FILE = ".stylerules.json"


@dataclass
class EditorConfig:
    geometry_type: str | None = None
    attributes: list[Attribute] | None = None
    bands: list[int] = field(default_factory=list)
    scales: list[int | float] = field(default_factory=list)
    zoom: float | None = None
    fonts: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)
    simple: bool = False
    svg_symbols_path: str | None = None
    line_dash_options: list[dict[str, Any]] = field(default_factory=list)
    classification: dict[str, Any] = field(default_factory=dict)
    enable_field_expression: bool = False
    supported_symbolizer_menu_options: list[str] | None = None
    blocks_path: str | None = None
    get_colors: Callable[..., Any] | None = None


def load_editor_config(path: Path | None = None) -> EditorConfig:
    """Load editor config from the ``editor`` section of .stylerules.json."""
    config = EditorConfig()
    if path is None:
        path = Path.cwd() / SETTINGS_FILE
    if path.exists():
        try:
            text = path.read_text()
            if text.strip():
                data = json.loads(text)
                section = data.get("editor", {})
                if isinstance(section, dict):
                    _apply(config, section)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load editor config from {path}: {e}")
    if env_geom := os.environ.get("STYLERULES_GEOMETRY_TYPE"):
        config.geometry_type = env_geom
    if env_simple := os.environ.get("STYLERULES_SIMPLE"):
        config.simple = env_simple.lower() in ("true", "1", "yes")
    return config


def _is_str_list(value: object) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _apply(cfg: EditorConfig, data: dict[str, Any]) -> None:
    if "geometry_type" in data and isinstance(data["geometry_type"], str):
        cfg.geometry_type = data["geometry_type"]
    if "attributes" in data and isinstance(data["attributes"], list):
        try:
            cfg.attributes = [Attribute.model_validate(a) for a in data["attributes"]]
        except ValidationError as e:
            logger.warning(f"Ignoring invalid editor attributes: {e}")
    if "bands" in data and isinstance(data["bands"], list):
        cfg.bands = [int(b) for b in data["bands"] if _is_number(b)]
    if "scales" in data and isinstance(data["scales"], list):
        cfg.scales = [s for s in data["scales"] if _is_number(s)]
    if "zoom" in data and _is_number(data["zoom"]):
        cfg.zoom = data["zoom"]
    if "fonts" in data and _is_str_list(data["fonts"]):
        cfg.fonts = list(data["fonts"])
    if "methods" in data and _is_str_list(data["methods"]):
        cfg.methods = list(data["methods"])
    if "simple" in data and isinstance(data["simple"], bool):
        cfg.simple = data["simple"]
    if "svg_symbols_path" in data and isinstance(data["svg_symbols_path"], str):
        cfg.svg_symbols_path = data["svg_symbols_path"]
    if "line_dash_options" in data and isinstance(data["line_dash_options"], list):
        cfg.line_dash_options = [o for o in data["line_dash_options"] if isinstance(o, dict)]
    if "classification" in data and isinstance(data["classification"], dict):
        cfg.classification = dict(data["classification"])
    if "enable_field_expression" in data and isinstance(data["enable_field_expression"], bool):
        cfg.enable_field_expression = data["enable_field_expression"]
    if "supported_symbolizer_menu_options" in data and _is_str_list(
        data["supported_symbolizer_menu_options"]
    ):
        cfg.supported_symbolizer_menu_options = list(data["supported_symbolizer_menu_options"])
    if "blocks_path" in data and isinstance(data["blocks_path"], str):
        cfg.blocks_path = data["blocks_path"]
