"""
Sort rule matching and ordering.

A rule is matched in one of two modes:

- targeted: every field has the form ``<key>[].<sub.path>`` with the same
  ``<key>``. The rule then applies to the array stored under that key of
  any object, and ``<sub.path>`` is resolved against each element.
- generic: the fields are used as-is, against every element of any array
  of objects.

The first enabled rule wins. Arrays without an eligible rule keep their
order.
"""

from __future__ import annotations

import functools
import logging
import math
import re
import unicodedata
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .errors import InvalidRuleError
from .paths import has_value, resolve
from .types import SortRule

logger = logging.getLogger(__name__)

_ARRAY_FIELD_RE = re.compile(r"^([^[\]]+)\[\]\.(.+)$")

DEFAULT_RULE_ID = "default-id"


@dataclass(frozen=True)
class ArrayRule:
    """A rule's fields split into the targeted array key and sub-paths."""

    array_path: str
    field_paths: Tuple[str, ...]


def make_rule(
    name: str,
    fields: Iterable[str],
    description: str = "",
    rule_id: Optional[str] = None,
    enabled: bool = True,
) -> SortRule:
    """Build a validated rule.

    Name and description are stripped, blank fields are dropped.

    Raises:
        InvalidRuleError: If the name is blank or no field remains.
    """
    clean_name = (name or "").strip()
    if not clean_name:
        raise InvalidRuleError("Sort rule requires a name")
    clean_fields = tuple(f.strip() for f in fields if f and f.strip())
    if not clean_fields:
        raise InvalidRuleError(f"Sort rule '{clean_name}' requires at least one field")
    return SortRule(
        rule_id=rule_id or uuid.uuid4().hex,
        name=clean_name,
        fields=clean_fields,
        description=(description or "").strip(),
        enabled=enabled,
    )


def default_rules() -> List[SortRule]:
    """Rules a fresh installation starts with."""
    return [
        SortRule(
            rule_id=DEFAULT_RULE_ID,
            name="ID Field",
            fields=("id",),
            description="Sort arrays of objects by id field",
            enabled=True,
        )
    ]


def parse_array_rule(fields: Sequence[str]) -> Optional[ArrayRule]:
    """Split ``key[].sub`` fields, or None unless all fields share one key."""
    array_path = None
    field_paths = []
    for f in fields:
        match = _ARRAY_FIELD_RE.match(f)
        if match is None:
            return None
        if array_path is None:
            array_path = match.group(1)
        elif match.group(1) != array_path:
            return None
        field_paths.append(match.group(2))
    if array_path is None:
        return None
    return ArrayRule(array_path=array_path, field_paths=tuple(field_paths))


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def _all_have_fields(items: Sequence[Any], fields: Sequence[str]) -> bool:
    return all(all(has_value(item, f) for f in fields) for item in items)


def _is_object_array(items: Sequence[Any]) -> bool:
    return len(items) > 0 and all(is_object(item) for item in items)


def find_targeted_rule(
    key: str, items: Sequence[Any], rules: Sequence[SortRule]
) -> Optional[ArrayRule]:
    """Targeted-array mode for the array stored under *key*.

    Only the first enabled rule aimed at *key* is considered. Returns its
    parsed form if it applies to *items*, else None.
    """
    for rule in rules:
        if not rule.enabled:
            continue
        array_rule = parse_array_rule(rule.fields)
        if array_rule is None or array_rule.array_path != key:
            continue
        if _is_object_array(items) and _all_have_fields(items, array_rule.field_paths):
            logger.debug("Targeted rule %r applies to array %r", rule.name, key)
            return array_rule
        logger.debug("Targeted rule %r does not apply to array %r", rule.name, key)
        return None
    return None


def find_generic_rule(
    items: Sequence[Any], rules: Sequence[SortRule]
) -> Optional[SortRule]:
    """Generic-array mode: first enabled rule whose fields every element has."""
    if not _is_object_array(items):
        return None
    for rule in rules:
        if rule.enabled and _all_have_fields(items, rule.fields):
            logger.debug("Generic rule %r applies to array of %d", rule.name, len(items))
            return rule
    return None


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _js_number(value: Any) -> str:
    """Number-to-string conversion with JavaScript's notation thresholds.

    Decimal notation for 1e-6 <= |x| < 1e21, exponent notation otherwise,
    with an explicit sign and no zero padding in the exponent.
    """
    if isinstance(value, int):
        if abs(value) < 10 ** 21:
            return str(value)
        value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    text = repr(value)
    if "e" not in text:
        return text[:-2] if text.endswith(".0") else text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def js_string(value: Any) -> str:
    """String form of a JSON value as JavaScript's ``String()`` renders it."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_number(value):
        return _js_number(value)
    if isinstance(value, list):
        return ",".join("" if v is None else js_string(v) for v in value)
    return "[object Object]"


def collation_key(text: str) -> Tuple[str, str, str]:
    """Locale-style sort key: letters first, then accents, then case.

    Lowercase sorts before uppercase at the last level.
    """
    decomposed = unicodedata.normalize("NFD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), decomposed.casefold(), decomposed.swapcase())


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_by_fields(a: Any, b: Any, fields: Sequence[str]) -> int:
    """Compare two elements field by field, in priority order.

    A field missing (or null) on either side is skipped. Numbers compare
    numerically, everything else by collated string form.
    """
    for path in fields:
        value_a = resolve(a, path)
        value_b = resolve(b, path)
        if value_a is None or value_b is None:
            continue
        if _is_number(value_a) and _is_number(value_b):
            result = _cmp(value_a, value_b)
        else:
            result = _cmp(
                collation_key(js_string(value_a)), collation_key(js_string(value_b))
            )
        if result != 0:
            return result
    return 0


def sort_by_fields(items: Sequence[Any], fields: Sequence[str]) -> List[Any]:
    """Stable sort; elements tying on every field keep their input order."""
    return sorted(
        items, key=functools.cmp_to_key(lambda a, b: compare_by_fields(a, b, fields))
    )
