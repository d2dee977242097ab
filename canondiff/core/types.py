from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple


class LineType(str, Enum):
    """Tag of a single line in a diff or side-by-side column."""

    EQUAL = "equal"
    ADDED = "added"
    REMOVED = "removed"
    EMPTY = "empty"  # Padding cell, only appears in side-by-side columns


class ChunkType(str, Enum):
    """Tag of a display chunk."""

    CONTEXT = "context"
    CHANGE = "change"


@dataclass(frozen=True)
class SortRule:
    """
    A user-authored rule deciding the order of an array of objects.

    Attributes:
        rule_id: Opaque, stable identifier
        name: Display label
        fields: Path expressions in priority order (first is the primary key)
        description: Optional free text
        enabled: Disabled rules are never matched
    """

    rule_id: str
    name: str
    fields: Tuple[str, ...]
    description: str = ""
    enabled: bool = True

    def __post_init__(self):
        # Accept any sequence of fields but store an immutable tuple
        object.__setattr__(self, "fields", tuple(self.fields))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.rule_id,
            "name": self.name,
            "description": self.description,
            "fields": list(self.fields),
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SortRule":
        return cls(
            rule_id=str(data["id"]),
            name=data.get("name", ""),
            fields=tuple(data.get("fields", ())),
            description=data.get("description") or "",
            enabled=bool(data.get("enabled", True)),
        )


@dataclass(frozen=True)
class DiffOp:
    """One aligned line of the linear diff."""

    type: LineType
    content: str
    index: int

    @property
    def path(self) -> str:
        return f"line-{self.index}"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "content": self.content, "path": self.path}


@dataclass(frozen=True)
class DiffCell:
    """One side of a side-by-side display row."""

    content: str
    type: LineType
    line_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "type": self.type.value,
            "line_number": self.line_number,
        }


EMPTY_CELL = DiffCell(content="", type=LineType.EMPTY)


@dataclass(frozen=True)
class DiffRow:
    left: DiffCell
    right: DiffCell

    @property
    def changed(self) -> bool:
        return self.left.type != LineType.EQUAL or self.right.type != LineType.EQUAL

    def to_dict(self) -> Dict[str, Any]:
        return {"left": self.left.to_dict(), "right": self.right.to_dict()}


@dataclass(frozen=True)
class SideBySideProjection:
    """Two parallel columns; row i of each is rendered on the same line."""

    left: Tuple[DiffCell, ...] = ()
    right: Tuple[DiffCell, ...] = ()

    def __len__(self) -> int:
        return max(len(self.left), len(self.right))

    def row(self, idx: int) -> DiffRow:
        left = self.left[idx] if idx < len(self.left) else EMPTY_CELL
        right = self.right[idx] if idx < len(self.right) else EMPTY_CELL
        return DiffRow(left=left, right=right)

    def rows(self) -> Iterator[DiffRow]:
        for idx in range(len(self)):
            yield self.row(idx)


@dataclass(frozen=True)
class DiffChunk:
    """
    A contiguous, independently collapsible run of side-by-side rows.

    Attributes:
        type: CHANGE for rows around a change, CONTEXT for unchanged runs
        start_line: Index of the first projection row in this chunk
        end_line: Index of the last projection row (inclusive)
        rows: The rows themselves
        context_before: Leading rows that are unchanged padding
        context_after: Trailing rows that are unchanged padding
        is_expanded: Display state; change chunks start expanded
    """

    type: ChunkType
    start_line: int
    end_line: int
    rows: Tuple[DiffRow, ...] = field(default_factory=tuple)
    context_before: int = 0
    context_after: int = 0
    is_expanded: bool = True

    def __len__(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "context_before": self.context_before,
            "context_after": self.context_after,
            "is_expanded": self.is_expanded,
            "rows": [r.to_dict() for r in self.rows],
        }
