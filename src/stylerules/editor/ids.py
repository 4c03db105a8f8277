"""Identifier minting for rules and symbolizers."""

from __future__ import annotations

import uuid


def mint_id() -> str:
    """Return a fresh time-based identifier, unique for the process lifetime."""
    return str(uuid.uuid1())
