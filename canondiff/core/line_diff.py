"""Line diff with bounded lookahead resynchronization.

Algorithm (single forward pass, cursors i on the left and j on the right):
1. Left exhausted: remaining right lines are added.
2. Right exhausted: remaining left lines are removed.
3. Equal lines: emit equal, advance both.
4. Search right[j+1 .. j+lookahead] for left[i]. On a hit at k, right[j..k-1]
   are added and the hit is equal.
5. Otherwise search left[i+1 .. i+lookahead] for right[j]. On a hit at k,
   left[i..k-1] are removed and the hit is equal.
6. Otherwise left[i] is removed and right[j] is added.

This is a greedy heuristic, not a minimal edit script. The right side is
always searched first, so it wins when both windows hold a match.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from .canon import serialize
from .options import DEFAULT_INDENT, DEFAULT_LOOKAHEAD
from .types import DiffOp, LineType

logger = logging.getLogger(__name__)


def _find_ahead(lines: Sequence[str], start: int, lookahead: int, target: str) -> Optional[int]:
    end = min(start + lookahead + 1, len(lines))
    for k in range(start + 1, end):
        if lines[k] == target:
            return k
    return None


def diff_lines(
    left: Sequence[str],
    right: Sequence[str],
    lookahead: int = DEFAULT_LOOKAHEAD,
) -> List[DiffOp]:
    """Align two line sequences into equal/added/removed operations.

    Each op's index is its line position on the side it came from (left for
    equal and removed, right for added).
    """
    if lookahead < 1:
        raise ValueError("lookahead must be >= 1")

    ops: List[DiffOp] = []
    i = 0
    j = 0
    while i < len(left) or j < len(right):
        if i >= len(left):
            ops.append(DiffOp(LineType.ADDED, right[j], j))
            j += 1
            continue
        if j >= len(right):
            ops.append(DiffOp(LineType.REMOVED, left[i], i))
            i += 1
            continue
        if left[i] == right[j]:
            ops.append(DiffOp(LineType.EQUAL, left[i], i))
            i += 1
            j += 1
            continue

        k = _find_ahead(right, j, lookahead, left[i])
        if k is not None:
            ops.extend(DiffOp(LineType.ADDED, right[n], n) for n in range(j, k))
            ops.append(DiffOp(LineType.EQUAL, left[i], i))
            i += 1
            j = k + 1
            continue

        k = _find_ahead(left, i, lookahead, right[j])
        if k is not None:
            ops.extend(DiffOp(LineType.REMOVED, left[n], n) for n in range(i, k))
            ops.append(DiffOp(LineType.EQUAL, left[k], k))
            i = k + 1
            j += 1
            continue

        ops.append(DiffOp(LineType.REMOVED, left[i], i))
        ops.append(DiffOp(LineType.ADDED, right[j], j))
        i += 1
        j += 1

    logger.debug(
        "Diffed %d/%d lines into %d ops", len(left), len(right), len(ops)
    )
    return ops


def diff_values(
    left: Any,
    right: Any,
    lookahead: int = DEFAULT_LOOKAHEAD,
    indent: int = DEFAULT_INDENT,
) -> List[DiffOp]:
    """Serialize two values and diff their lines.

    Key order is taken as given; pass canonicalized values.
    """
    left_lines = serialize(left, indent=indent).split("\n")
    right_lines = serialize(right, indent=indent).split("\n")
    return diff_lines(left_lines, right_lines, lookahead=lookahead)
