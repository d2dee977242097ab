from __future__ import annotations

from typing import Iterable, List

from .types import EMPTY_CELL, DiffCell, DiffOp, LineType, SideBySideProjection


def project_side_by_side(ops: Iterable[DiffOp]) -> SideBySideProjection:
    """Re-express a linear diff as two aligned, independently numbered columns."""
    left: List[DiffCell] = []
    right: List[DiffCell] = []
    left_num = 1
    right_num = 1

    for op in ops:
        if op.type == LineType.EQUAL:
            left.append(DiffCell(op.content, LineType.EQUAL, left_num))
            right.append(DiffCell(op.content, LineType.EQUAL, right_num))
            left_num += 1
            right_num += 1
        elif op.type == LineType.REMOVED:
            left.append(DiffCell(op.content, LineType.REMOVED, left_num))
            right.append(EMPTY_CELL)
            left_num += 1
        elif op.type == LineType.ADDED:
            left.append(EMPTY_CELL)
            right.append(DiffCell(op.content, LineType.ADDED, right_num))
            right_num += 1
        else:
            raise ValueError(f"Unexpected diff op type: {op.type}")

    return SideBySideProjection(left=tuple(left), right=tuple(right))
