"""JSON rules files.

A rules file is a JSON array of objects with the keys ``id``, ``name``,
``description``, ``fields`` and ``enabled``, in priority order.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Sequence, Union

from ..core.errors import InvalidRuleError
from ..core.rules import make_rule
from ..core.types import SortRule


def rules_from_data(data: Any) -> List[SortRule]:
    """Validate decoded JSON and build rules from it.

    Raises:
        InvalidRuleError: If the structure or any rule is invalid.
    """
    if not isinstance(data, list):
        raise InvalidRuleError("Rules must be a JSON array")

    rules: List[SortRule] = []
    seen = set()
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise InvalidRuleError(f"Rule #{idx + 1} must be an object")
        fields = item.get("fields")
        if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
            raise InvalidRuleError(f"Rule #{idx + 1} fields must be a list of strings")
        for key in ("name", "description"):
            if item.get(key) is not None and not isinstance(item[key], str):
                raise InvalidRuleError(f"Rule #{idx + 1} {key} must be a string")
        enabled = item.get("enabled", True)
        if not isinstance(enabled, bool):
            raise InvalidRuleError(f"Rule #{idx + 1} enabled must be true or false")
        rule_id = item.get("id")
        rule = make_rule(
            name=item.get("name") or "",
            fields=fields,
            description=item.get("description") or "",
            rule_id=str(rule_id) if rule_id is not None else None,
            enabled=enabled,
        )
        if rule.rule_id in seen:
            raise InvalidRuleError(f"Duplicate rule id '{rule.rule_id}'")
        seen.add(rule.rule_id)
        rules.append(rule)
    return rules


def dump_rules(rules: Sequence[SortRule]) -> str:
    return json.dumps([r.to_dict() for r in rules], indent=2, ensure_ascii=False)


def load_rules_file(path: Union[str, Path]) -> List[SortRule]:
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidRuleError(f"Rules file {path} is not valid JSON: {exc.msg}") from exc
    return rules_from_data(data)


def save_rules_file(path: Union[str, Path], rules: Sequence[SortRule]) -> None:
    Path(path).write_text(dump_rules(rules) + "\n", encoding="utf-8")
