"""Path resolution for sort rule fields.

Paths use ``.`` for object members and ``[N]`` for array indices, e.g.
``relationships.resource.id`` or ``slots[0].start``. Resolution never raises:
anything that cannot be followed resolves to ``None``.
"""

from __future__ import annotations

import re
from typing import Any, List

_INDEX_RE = re.compile(r"\[(\d+)\]")


def split_path(path: str) -> List[str]:
    """Normalize ``a[0].b`` to ``["a", "0", "b"]``."""
    normalized = _INDEX_RE.sub(r".\1", path)
    if normalized.startswith("."):
        normalized = normalized[1:]
    return normalized.split(".")


def resolve(value: Any, path: str) -> Any:
    """Resolve *path* against *value*.

    Returns None when any segment is missing, when an index is out of range,
    when a numeric segment meets a non-array, or when an intermediate value
    is null. A present null is also returned as None.
    """
    if not path or value is None:
        return None

    current = value
    for segment in split_path(path):
        if current is None:
            return None
        if segment.isdigit() and segment.isascii():
            if not isinstance(current, list):
                return None
            idx = int(segment)
            if idx >= len(current):
                return None
            current = current[idx]
        elif isinstance(current, dict):
            current = current.get(segment)
        else:
            return None
    return current


def has_value(value: Any, path: str) -> bool:
    """True when *path* resolves to something other than missing or null."""
    return resolve(value, path) is not None
