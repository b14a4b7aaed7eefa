"""Identifier helpers for categories and tasks.

Ids are a fixed textual prefix followed by a random UUID4, e.g.
``TASK-6f1c0c0e5b7d4b6f9d0c3a2e1f4b5a69``.
"""

from __future__ import annotations

import re
import uuid

CATEGORY_PREFIX = "CAT"
TASK_PREFIX = "TASK"

ID_PATTERN = re.compile(r"^(CAT|TASK)-[0-9a-f]{32}$")


def generate_id(prefix: str) -> str:
    """Return a new unique identifier starting with *prefix*."""
    return f"{prefix}-{uuid.uuid4().hex}"


def is_valid_id(value: str) -> bool:
    """Check if a string looks like an id produced by generate_id."""
    if not isinstance(value, str):
        return False
    return ID_PATTERN.match(value) is not None


def shorten_id(value: str, length: int = 8) -> str:
    """Get a shortened version of an id for display.

    Keeps the prefix and the first *length* characters of the random part.

    Args:
        value: Full id
        length: Number of random characters to keep (default 8)

    Returns:
        Shortened id, or the value unchanged if it has no prefix
    """
    prefix, sep, token = value.partition("-")
    if not sep:
        return value
    return f"{prefix}-{token[:length]}"


def resolve_id(candidates: list[str], id_or_prefix: str) -> str:
    """Resolve a full id or a unique shortened id against *candidates*.

    Args:
        candidates: Full ids to search
        id_or_prefix: Full id, or a prefix of one (as printed by shorten_id)

    Returns:
        The matching full id

    Raises:
        ValueError: If nothing matches or the prefix is ambiguous
    """
    if id_or_prefix in candidates:
        return id_or_prefix

    needle = id_or_prefix.strip()
    if not needle:
        raise ValueError("No id given")

    matches = [c for c in candidates if c.lower().startswith(needle.lower())]
    if not matches:
        raise ValueError(f"No item found matching id '{id_or_prefix}'")
    if len(matches) > 1:
        raise ValueError(
            f"Ambiguous id '{id_or_prefix}' matches {len(matches)} items; use more characters"
        )
    return matches[0]
