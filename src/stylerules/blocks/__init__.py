"""Capability blocks: registry and resolution for rule and symbolizer kinds."""

from stylerules.blocks.models import AddOption, Block, GeometryType, ParamSpec
from stylerules.blocks.registry import BlockRegistry
from stylerules.blocks.resolver import (
    add_options,
    resolve_rule_block,
    resolve_symbolizer_block,
)

__all__ = [
    "AddOption",
    "Block",
    "BlockRegistry",
    "GeometryType",
    "ParamSpec",
    "add_options",
    "resolve_rule_block",
    "resolve_symbolizer_block",
]
