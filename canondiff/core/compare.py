"""End-to-end comparison of two JSON documents.

Pipeline: canonicalize both sides -> line diff -> side-by-side projection
-> chunks. Every stage is pure; the rule list is snapshotted once per run.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .canon import canonicalize
from .chunks import chunk
from .errors import InvalidJsonError
from .line_diff import diff_values
from .options import CompareOptions
from .side_by_side import project_side_by_side
from .types import DiffChunk, DiffOp, LineType, SideBySideProjection, SortRule

logger = logging.getLogger(__name__)

LEFT = "left"
RIGHT = "right"


@dataclass(frozen=True)
class ComparisonResult:
    """Everything produced by one comparison run."""

    left: Any
    right: Any
    ops: Tuple[DiffOp, ...]
    projection: SideBySideProjection
    chunks: Tuple[DiffChunk, ...]

    @property
    def identical(self) -> bool:
        return all(op.type == LineType.EQUAL for op in self.ops)

    @property
    def added_count(self) -> int:
        return sum(1 for op in self.ops if op.type == LineType.ADDED)

    @property
    def removed_count(self) -> int:
        return sum(1 for op in self.ops if op.type == LineType.REMOVED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identical": self.identical,
            "added": self.added_count,
            "removed": self.removed_count,
            "ops": [op.to_dict() for op in self.ops],
            "chunks": [c.to_dict() for c in self.chunks],
        }


def parse_json_text(text: str, side: str) -> Any:
    """Parse one side's document.

    Raises:
        InvalidJsonError: If the text is blank or not valid JSON.
    """
    if not text or not text.strip():
        raise InvalidJsonError("empty document", side=side)

    def reject_constant(name: str) -> Any:
        raise InvalidJsonError(f"{name} is not a JSON value", side=side)

    try:
        return json.loads(text, parse_constant=reject_constant)
    except json.JSONDecodeError as exc:
        raise InvalidJsonError(exc.msg, side=side, line=exc.lineno, column=exc.colno) from exc


def compare_values(
    left: Any,
    right: Any,
    rules: Sequence[SortRule] = (),
    options: Optional[CompareOptions] = None,
) -> ComparisonResult:
    """Compare two parsed JSON values."""
    opts = options or CompareOptions.default()
    snapshot = tuple(rules)

    canon_left = canonicalize(left, snapshot)
    canon_right = canonicalize(right, snapshot)

    ops: List[DiffOp] = diff_values(
        canon_left, canon_right, lookahead=opts.lookahead, indent=opts.indent
    )
    projection = project_side_by_side(ops)
    chunks = chunk(
        projection,
        context_size=opts.context_size,
        expand_threshold=opts.expand_threshold,
    )
    result = ComparisonResult(
        left=canon_left,
        right=canon_right,
        ops=tuple(ops),
        projection=projection,
        chunks=tuple(chunks),
    )
    logger.debug(
        "Compared with %d rules: +%d -%d in %d chunks",
        len(snapshot),
        result.added_count,
        result.removed_count,
        len(chunks),
    )
    return result


def compare_texts(
    left_text: str,
    right_text: str,
    rules: Sequence[SortRule] = (),
    options: Optional[CompareOptions] = None,
) -> ComparisonResult:
    """Parse and compare two JSON documents.

    Raises:
        InvalidJsonError: For the first side (left, then right) that fails.
    """
    left = parse_json_text(left_text, LEFT)
    right = parse_json_text(right_text, RIGHT)
    return compare_values(left, right, rules, options)
