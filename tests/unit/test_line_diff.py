from __future__ import annotations

import unittest

from canondiff.core.line_diff import diff_lines, diff_values
from canondiff.core.types import DiffOp, LineType

EQ = LineType.EQUAL
ADD = LineType.ADDED
REM = LineType.REMOVED


def _pairs(ops):
    return [(op.type, op.content) for op in ops]


def _left(ops):
    return [op.content for op in ops if op.type in (EQ, REM)]


def _right(ops):
    return [op.content for op in ops if op.type in (EQ, ADD)]


class TestDiffLines(unittest.TestCase):
    def test_insertion(self):
        ops = diff_lines(["a", "b", "c"], ["a", "x", "b", "c"])
        self.assertEqual(
            _pairs(ops), [(EQ, "a"), (ADD, "x"), (EQ, "b"), (EQ, "c")]
        )

    def test_identical(self):
        lines = ["{", '  "a": 1', "}"]
        ops = diff_lines(lines, list(lines))
        self.assertTrue(all(op.type == EQ for op in ops))
        self.assertEqual(len(ops), 3)

    def test_empty_sides(self):
        self.assertEqual(diff_lines([], []), [])
        self.assertEqual(_pairs(diff_lines([], ["a", "b"])), [(ADD, "a"), (ADD, "b")])
        self.assertEqual(_pairs(diff_lines(["a", "b"], [])), [(REM, "a"), (REM, "b")])

    def test_removal_resyncs_on_left(self):
        ops = diff_lines(["a", "b", "c"], ["a", "c"])
        self.assertEqual(_pairs(ops), [(EQ, "a"), (REM, "b"), (EQ, "c")])

    def test_substitution(self):
        ops = diff_lines(["a", "b", "c"], ["a", "y", "c"])
        self.assertEqual(
            _pairs(ops), [(EQ, "a"), (REM, "b"), (ADD, "y"), (EQ, "c")]
        )

    def test_right_window_searched_first(self):
        # Both windows hold a match; the right side wins
        ops = diff_lines(["x", "y"], ["y", "x"])
        self.assertEqual(_pairs(ops), [(ADD, "y"), (EQ, "x"), (REM, "y")])

    def test_window_reaches_four_lines(self):
        ops = diff_lines(["a"], ["1", "2", "3", "4", "a"])
        self.assertEqual(
            _pairs(ops),
            [(ADD, "1"), (ADD, "2"), (ADD, "3"), (ADD, "4"), (EQ, "a")],
        )

    def test_beyond_window_is_substitution(self):
        ops = diff_lines(["a"], ["1", "2", "3", "4", "5", "a"])
        self.assertEqual(
            _pairs(ops),
            [(REM, "a"), (ADD, "1"), (ADD, "2"), (ADD, "3"), (ADD, "4"), (ADD, "5"), (ADD, "a")],
        )

    def test_configurable_lookahead(self):
        ops = diff_lines(["a"], ["1", "2", "3", "4", "5", "a"], lookahead=5)
        self.assertEqual(_pairs(ops)[-1], (EQ, "a"))
        self.assertEqual(sum(1 for op in ops if op.type == ADD), 5)

    def test_invalid_lookahead(self):
        with self.assertRaises(ValueError):
            diff_lines(["a"], ["b"], lookahead=0)

    def test_source_positions(self):
        ops = diff_lines(["a", "b"], ["x", "a", "b"])
        self.assertEqual(ops[0], DiffOp(ADD, "x", 0))
        self.assertEqual(ops[1], DiffOp(EQ, "a", 0))
        self.assertEqual(ops[1].path, "line-0")
        self.assertEqual(ops[2], DiffOp(EQ, "b", 1))

    def test_reconstruction(self):
        cases = [
            (["a", "b", "c", "d"], ["d", "c", "b", "a"]),
            (["a", "a", "b"], ["b", "a", "a", "a"]),
            (list("abcdefghij"), list("axcyefzhij")),
            (list("aaaaaa"), list("bbb")),
            (["{", "}"], ["{", '  "k": 1', "}"]),
        ]
        for left, right in cases:
            with self.subTest(left=left, right=right):
                ops = diff_lines(left, right)
                self.assertEqual(_left(ops), left)
                self.assertEqual(_right(ops), right)


class TestDiffValues(unittest.TestCase):
    def test_changed_scalar(self):
        ops = diff_values({"a": 1}, {"a": 2})
        self.assertEqual(
            _pairs(ops),
            [(EQ, "{"), (REM, '  "a": 1'), (ADD, '  "a": 2'), (EQ, "}")],
        )

    def test_identical_values(self):
        value = {"a": [1, {"b": None}], "c": "x"}
        self.assertTrue(all(op.type == EQ for op in diff_values(value, value)))

    def test_indent(self):
        ops = diff_values({"a": 1}, {"a": 1}, indent=4)
        self.assertEqual(ops[1].content, '    "a": 1')


if __name__ == "__main__":
    unittest.main()
