"""
Tests for rule persistence.

These tests verify:
1. A new store is seeded with the default rule exactly once
2. Rule CRUD keeps ids, enabled flags and priority order
3. Rules files round-trip and reject malformed content
"""

import json
import os
import tempfile
import unittest

from canondiff import RULES_SCHEMA_VERSION
from canondiff.core.errors import InvalidRuleError, RuleNotFoundError
from canondiff.core.types import SortRule
from canondiff.storage.rules_file import (
    dump_rules,
    load_rules_file,
    rules_from_data,
    save_rules_file,
)
from canondiff.storage.store import RuleStore


class RuleStoreTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self._tmp.name, "nested", "rules.db")

    def tearDown(self):
        self._tmp.cleanup()

    def _store(self, **kwargs) -> RuleStore:
        return RuleStore(path=self.db_path, **kwargs)


class TestSeeding(RuleStoreTestCase):
    def test_new_store_has_default_rule(self):
        rules = self._store().list_rules()
        self.assertEqual([r.rule_id for r in rules], ["default-id"])

    def test_seeding_happens_once(self):
        store = self._store()
        store.delete_rule("default-id")
        self.assertEqual(self._store().list_rules(), [])

    def test_seeding_disabled(self):
        self.assertEqual(self._store(seed_defaults=False).list_rules(), [])

    def test_schema_version(self):
        self.assertEqual(self._store().schema_version(), RULES_SCHEMA_VERSION)


class TestRuleCrud(RuleStoreTestCase):
    def setUp(self):
        super().setUp()
        self.store = self._store(seed_defaults=False)

    def test_add_appends_enabled_rule(self):
        first = self.store.add_rule("First", ["id"])
        second = self.store.add_rule(" Second ", ["date", " ", "seq"], "by date")
        rules = self.store.list_rules()
        self.assertEqual([r.rule_id for r in rules], [first.rule_id, second.rule_id])
        self.assertEqual(rules[1].name, "Second")
        self.assertEqual(rules[1].fields, ("date", "seq"))
        self.assertEqual(rules[1].description, "by date")
        self.assertTrue(rules[1].enabled)

    def test_add_invalid(self):
        with self.assertRaises(InvalidRuleError):
            self.store.add_rule("", ["id"])
        with self.assertRaises(InvalidRuleError):
            self.store.add_rule("No fields", [" "])
        self.assertEqual(self.store.list_rules(), [])

    def test_get_unknown(self):
        with self.assertRaises(RuleNotFoundError):
            self.store.get_rule("missing")

    def test_update_keeps_identity(self):
        a = self.store.add_rule("A", ["id"])
        b = self.store.add_rule("B", ["name"])
        self.store.toggle_rule(a.rule_id)
        updated = self.store.update_rule(a.rule_id, "A2", ["key", "id"], "new")
        self.assertEqual(updated.rule_id, a.rule_id)
        self.assertFalse(updated.enabled)
        rules = self.store.list_rules()
        self.assertEqual([r.rule_id for r in rules], [a.rule_id, b.rule_id])
        self.assertEqual(rules[0].name, "A2")
        self.assertEqual(rules[0].fields, ("key", "id"))

    def test_update_invalid(self):
        a = self.store.add_rule("A", ["id"])
        with self.assertRaises(InvalidRuleError):
            self.store.update_rule(a.rule_id, "A", [])
        with self.assertRaises(RuleNotFoundError):
            self.store.update_rule("missing", "A", ["id"])

    def test_toggle(self):
        a = self.store.add_rule("A", ["id"])
        self.assertFalse(self.store.toggle_rule(a.rule_id).enabled)
        self.assertTrue(self.store.toggle_rule(a.rule_id).enabled)

    def test_delete(self):
        a = self.store.add_rule("A", ["id"])
        b = self.store.add_rule("B", ["id"])
        c = self.store.add_rule("C", ["id"])
        self.store.delete_rule(b.rule_id)
        self.assertEqual(
            [r.rule_id for r in self.store.list_rules()], [a.rule_id, c.rule_id]
        )
        with self.assertRaises(RuleNotFoundError):
            self.store.delete_rule(b.rule_id)
        d = self.store.add_rule("D", ["id"])
        self.assertEqual(self.store.list_rules()[-1].rule_id, d.rule_id)

    def test_move(self):
        a = self.store.add_rule("A", ["id"])
        b = self.store.add_rule("B", ["id"])
        c = self.store.add_rule("C", ["id"])
        rules = self.store.move_rule(c.rule_id, "up")
        self.assertEqual([r.name for r in rules], ["A", "C", "B"])
        rules = self.store.move_rule(a.rule_id, "down")
        self.assertEqual([r.name for r in rules], ["C", "A", "B"])
        self.assertEqual([r.name for r in self.store.list_rules()], ["C", "A", "B"])
        self.assertEqual(b.name, "B")

    def test_move_past_ends_is_noop(self):
        a = self.store.add_rule("A", ["id"])
        b = self.store.add_rule("B", ["id"])
        self.store.move_rule(a.rule_id, "up")
        self.store.move_rule(b.rule_id, "down")
        self.assertEqual([r.name for r in self.store.list_rules()], ["A", "B"])

    def test_move_invalid(self):
        a = self.store.add_rule("A", ["id"])
        with self.assertRaises(ValueError):
            self.store.move_rule(a.rule_id, "sideways")
        with self.assertRaises(RuleNotFoundError):
            self.store.move_rule("missing", "up")

    def test_replace_and_export(self):
        rules = [
            SortRule(rule_id="r1", name="One", fields=("id",), enabled=False),
            SortRule(rule_id="r2", name="Two", fields=("data[].id",), description="d"),
        ]
        self.store.add_rule("Old", ["id"])
        self.store.replace_rules(rules)
        self.assertEqual(self.store.export_rules(), rules)

    def test_persists_across_instances(self):
        a = self.store.add_rule("A", ["id"])
        self.assertEqual(self._store().get_rule(a.rule_id), a)


class TestRulesFile(unittest.TestCase):
    def test_save_and_load(self):
        rules = [
            SortRule(rule_id="r1", name="One", fields=("id",)),
            SortRule(rule_id="r2", name="Two", fields=("a", "b"), enabled=False),
        ]
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "rules.json")
            save_rules_file(path, rules)
            self.assertEqual(load_rules_file(path), rules)

    def test_dump_format(self):
        rule = SortRule(rule_id="r1", name="One", fields=("id",))
        self.assertEqual(
            json.loads(dump_rules([rule])),
            [
                {
                    "id": "r1",
                    "name": "One",
                    "description": "",
                    "fields": ["id"],
                    "enabled": True,
                }
            ],
        )

    def test_missing_id_gets_generated(self):
        rules = rules_from_data([{"name": "x", "fields": ["id"]}])
        self.assertEqual(len(rules[0].rule_id), 32)

    def test_invalid_structures(self):
        bad = [
            {"name": "x", "fields": ["id"]},
            [1],
            [{"name": "x", "fields": "id"}],
            [{"name": "x", "fields": [1]}],
            [{"name": "", "fields": ["id"]}],
            [{"id": "a", "name": "x", "fields": ["id"]}, {"id": "a", "name": "y", "fields": ["id"]}],
            [{"name": 5, "fields": ["id"]}],
            [{"name": "x", "description": ["d"], "fields": ["id"]}],
            [{"name": "x", "fields": ["id"], "enabled": "false"}],
            [{"name": "x", "fields": ["id"], "enabled": 0}],
        ]
        for data in bad:
            with self.subTest(data=data):
                with self.assertRaises(InvalidRuleError):
                    rules_from_data(data)

    def test_invalid_json_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "rules.json")
            with open(path, "w") as f:
                f.write("[{")
            with self.assertRaises(InvalidRuleError):
                load_rules_file(path)


if __name__ == "__main__":
    unittest.main()
