"""Deterministic canonicalization of JSON values.

Guarantees:
- canonicalize(v, rules) is deterministic: same input always yields an
  identical value (and identical serialized text)
- Object keys are sorted by UTF-16 code unit; the key set is unchanged
- Arrays of objects are reordered by the first matching sort rule; no
  element is added, removed or mutated
- Other arrays keep their order
- Input values are never mutated
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from .errors import UnsupportedValueError
from .options import DEFAULT_INDENT
from .rules import find_generic_rule, find_targeted_rule, sort_by_fields
from .types import SortRule

logger = logging.getLogger(__name__)


def canonicalize(value: Any, rules: Sequence[SortRule] = ()) -> Any:
    """Canonicalize a parsed JSON value.

    Args:
        value: None, bool, int, float, str, list/tuple or dict with str keys.
        rules: Sort rules in priority order. Read, never modified.

    Returns:
        A new value with sorted keys and rule-ordered arrays.

    Raises:
        UnsupportedValueError: If value contains something that is not JSON.
    """
    return _canon_value(value, tuple(rules), "$")


def serialize(value: Any, indent: int = DEFAULT_INDENT) -> str:
    """Pretty-print a value, preserving its key and element order."""
    try:
        return json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise UnsupportedValueError(value) from exc


def canonical_text(
    value: Any, rules: Sequence[SortRule] = (), indent: int = DEFAULT_INDENT
) -> str:
    """Canonicalize then serialize."""
    return serialize(canonicalize(value, rules), indent=indent)


def _utf16_key(key: str) -> bytes:
    # Astral characters sort as surrogate pairs, before U+E000..U+FFFF
    return key.encode("utf-16-be", "surrogatepass")


def _canon_value(value: Any, rules: Sequence[SortRule], path: str) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return _canon_object(value, rules, path)
    if isinstance(value, (list, tuple)):
        return _canon_array(value, rules, path)
    raise UnsupportedValueError(value, path)


def _canon_object(
    obj: Dict[str, Any], rules: Sequence[SortRule], path: str
) -> Dict[str, Any]:
    for key in obj:
        if not isinstance(key, str):
            raise UnsupportedValueError(key, path)

    result: Dict[str, Any] = {}
    for key in sorted(obj, key=_utf16_key):
        value = obj[key]
        child_path = f"{path}.{key}"
        if isinstance(value, (list, tuple)):
            result[key] = _canon_array(value, rules, child_path, key=key)
        else:
            result[key] = _canon_value(value, rules, child_path)
    return result


def _canon_array(
    items: Sequence[Any],
    rules: Sequence[SortRule],
    path: str,
    key: Optional[str] = None,
) -> List[Any]:
    # Children first, so sort keys are read from canonical elements
    elements = [_canon_value(item, rules, f"{path}[{i}]") for i, item in enumerate(items)]

    if key is not None:
        array_rule = find_targeted_rule(key, elements, rules)
        if array_rule is not None:
            logger.debug("Sorting %s by %s", path, list(array_rule.field_paths))
            return sort_by_fields(elements, array_rule.field_paths)

    rule = find_generic_rule(elements, rules)
    if rule is not None:
        logger.debug("Sorting %s by rule %r", path, rule.name)
        return sort_by_fields(elements, rule.fields)
    return elements
