from __future__ import annotations

import json
import logging
import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Sequence

from ..core.errors import RuleNotFoundError
from ..core.rules import default_rules, make_rule
from ..core.types import SortRule
from ..version import RULES_SCHEMA_VERSION

logger = logging.getLogger(__name__)

_DIRECTIONS = ("up", "down")


@dataclass
class RuleStore:
    """SQLite-backed, ordered list of sort rules.

    A new database is seeded with default_rules() once. Deleting every rule
    afterwards leaves the store empty.
    """

    path: str = "canondiff.db"
    seed_defaults: bool = True

    def __post_init__(self) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sort_rules (
                    rule_id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    fields_json TEXT NOT NULL,
                    enabled INTEGER NOT NULL DEFAULT 1,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "INSERT OR IGNORE INTO meta (key, value) VALUES (?, ?)",
                ("schema_version", RULES_SCHEMA_VERSION),
            )
            seeded = conn.execute(
                "SELECT value FROM meta WHERE key = 'seeded'"
            ).fetchone()
            if seeded is None and self.seed_defaults:
                for position, rule in enumerate(default_rules()):
                    self._insert(conn, rule, position)
                logger.info("Seeded rule store %s with default rules", self.path)
            if seeded is None:
                conn.execute("INSERT INTO meta (key, value) VALUES ('seeded', '1')")

    def _utc_now(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _insert(self, conn: sqlite3.Connection, rule: SortRule, position: int) -> None:
        conn.execute(
            """
            INSERT INTO sort_rules
            (rule_id, position, name, description, fields_json, enabled, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                rule.rule_id,
                position,
                rule.name,
                rule.description,
                json.dumps(list(rule.fields)),
                int(rule.enabled),
                self._utc_now(),
            ),
        )

    @staticmethod
    def _row_to_rule(row: sqlite3.Row) -> SortRule:
        return SortRule(
            rule_id=row["rule_id"],
            name=row["name"],
            fields=tuple(json.loads(row["fields_json"])),
            description=row["description"],
            enabled=bool(row["enabled"]),
        )

    def schema_version(self) -> str:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM meta WHERE key = 'schema_version'"
            ).fetchone()
        return row["value"]

    def list_rules(self) -> List[SortRule]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT rule_id, name, description, fields_json, enabled
                FROM sort_rules
                ORDER BY position ASC
                """
            ).fetchall()
        return [self._row_to_rule(row) for row in rows]

    def get_rule(self, rule_id: str) -> SortRule:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT rule_id, name, description, fields_json, enabled
                FROM sort_rules WHERE rule_id = ?
                """,
                (rule_id,),
            ).fetchone()
        if row is None:
            raise RuleNotFoundError(rule_id)
        return self._row_to_rule(row)

    def add_rule(
        self, name: str, fields: Sequence[str], description: str = ""
    ) -> SortRule:
        rule = make_rule(name, fields, description)
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COALESCE(MAX(position) + 1, 0) AS next FROM sort_rules"
            ).fetchone()
            self._insert(conn, rule, row["next"])
        logger.info("Added sort rule %s (%s)", rule.rule_id, rule.name)
        return rule

    def update_rule(
        self, rule_id: str, name: str, fields: Sequence[str], description: str = ""
    ) -> SortRule:
        existing = self.get_rule(rule_id)
        rule = make_rule(
            name, fields, description, rule_id=rule_id, enabled=existing.enabled
        )
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE sort_rules
                SET name = ?, description = ?, fields_json = ?, updated_at = ?
                WHERE rule_id = ?
                """,
                (
                    rule.name,
                    rule.description,
                    json.dumps(list(rule.fields)),
                    self._utc_now(),
                    rule_id,
                ),
            )
        logger.info("Updated sort rule %s", rule_id)
        return rule

    def toggle_rule(self, rule_id: str) -> SortRule:
        existing = self.get_rule(rule_id)
        with self._connect() as conn:
            conn.execute(
                "UPDATE sort_rules SET enabled = ?, updated_at = ? WHERE rule_id = ?",
                (int(not existing.enabled), self._utc_now(), rule_id),
            )
        logger.info(
            "%s sort rule %s", "Disabled" if existing.enabled else "Enabled", rule_id
        )
        return self.get_rule(rule_id)

    def delete_rule(self, rule_id: str) -> None:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM sort_rules WHERE rule_id = ?", (rule_id,))
            if cursor.rowcount == 0:
                raise RuleNotFoundError(rule_id)
            self._renumber(conn)
        logger.info("Deleted sort rule %s", rule_id)

    def move_rule(self, rule_id: str, direction: str) -> List[SortRule]:
        """Swap a rule with its neighbour. Moving past either end is a no-op."""
        if direction not in _DIRECTIONS:
            raise ValueError(f"direction must be one of {_DIRECTIONS}")
        rules = self.list_rules()
        ids = [r.rule_id for r in rules]
        if rule_id not in ids:
            raise RuleNotFoundError(rule_id)

        index = ids.index(rule_id)
        new_index = index - 1 if direction == "up" else index + 1
        if new_index < 0 or new_index >= len(ids):
            return rules

        ids[index], ids[new_index] = ids[new_index], ids[index]
        with self._connect() as conn:
            for position, rid in enumerate(ids):
                conn.execute(
                    "UPDATE sort_rules SET position = ? WHERE rule_id = ?",
                    (position, rid),
                )
        logger.info("Moved sort rule %s %s", rule_id, direction)
        return self.list_rules()

    def replace_rules(self, rules: Sequence[SortRule]) -> None:
        """Replace the whole list, keeping ids, enabled flags and order."""
        validated = [
            make_rule(r.name, r.fields, r.description, rule_id=r.rule_id, enabled=r.enabled)
            for r in rules
        ]
        with self._connect() as conn:
            conn.execute("DELETE FROM sort_rules")
            for position, rule in enumerate(validated):
                self._insert(conn, rule, position)
        logger.info("Replaced rule store contents with %d rules", len(validated))

    def export_rules(self) -> List[SortRule]:
        return self.list_rules()

    def _renumber(self, conn: sqlite3.Connection) -> None:
        rows = conn.execute(
            "SELECT rule_id FROM sort_rules ORDER BY position ASC"
        ).fetchall()
        for position, row in enumerate(rows):
            conn.execute(
                "UPDATE sort_rules SET position = ? WHERE rule_id = ?",
                (position, row["rule_id"]),
            )
