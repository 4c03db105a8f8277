"""BlockRegistry: load and query rule and symbolizer capability blocks."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from stylerules.blocks.models import AddOption, Block
from stylerules.blocks.resolver import (
    add_options,
    resolve_rule_block,
    resolve_symbolizer_block,
)

logger = logging.getLogger(__name__)

_BUNDLED = "blocks.json"


class BlockRegistry:
    """Rule blocks and symbolizer blocks, keyed in registration order."""

    def __init__(
        self,
        rule_blocks: dict[str, Block] | None = None,
        symbolizer_blocks: dict[str, Block] | None = None,
    ) -> None:
        self._rule_blocks = dict(rule_blocks or {})
        self._symbolizer_blocks = dict(symbolizer_blocks or {})

    @classmethod
    def load(cls) -> BlockRegistry:
        """Load the built-in registry from bundled package data."""
        pkg = resources.files("stylerules.blocks")
        data = json.loads(pkg.joinpath(_BUNDLED).read_text(encoding="utf-8"))
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockRegistry:
        return cls(
            rule_blocks=_parse_section(data.get("ruleBlock", {})),
            symbolizer_blocks=_parse_section(data.get("symbolizerBlock", {})),
        )

    @classmethod
    def load_merged(cls, path: Path | None = None) -> BlockRegistry:
        """Load the built-in registry overlaid with blocks from a JSON file.

        A user block with the same key replaces the bundled one; new keys are
        appended. A missing or unreadable file leaves the bundled registry.
        """
        bundled = cls.load()
        if path is None or not path.exists():
            return bundled

        try:
            user = cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError, ValueError) as e:
            logger.warning(f"Failed to load blocks from {path}: {e}")
            return bundled

        return cls(
            rule_blocks={**bundled._rule_blocks, **user._rule_blocks},
            symbolizer_blocks={**bundled._symbolizer_blocks, **user._symbolizer_blocks},
        )

    @property
    def rule_blocks(self) -> dict[str, Block]:
        return dict(self._rule_blocks)

    @property
    def symbolizer_blocks(self) -> dict[str, Block]:
        return dict(self._symbolizer_blocks)

    def get_rule_block(self, key: str) -> Block | None:
        return self._rule_blocks.get(key)

    def get_symbolizer_block(self, key: str) -> Block | None:
        return self._symbolizer_blocks.get(key)

    def rule_block(self, kind: str | None) -> Block | None:
        return resolve_rule_block(self._rule_blocks, kind)

    def symbolizer_block(self, kind: str | None, geometry_type: str | None) -> Block | None:
        return resolve_symbolizer_block(self._symbolizer_blocks, kind, geometry_type)

    def add_options(self, geometry_type: str | None) -> list[AddOption]:
        return add_options(self._rule_blocks, self._symbolizer_blocks, geometry_type)


def _parse_section(section: object) -> dict[str, Block]:
    if not isinstance(section, dict):
        return {}
    return {key: Block.model_validate(value) for key, value in section.items()}
