"""Grouping of side-by-side rows into collapsible display chunks.

Change chunks hold a run of changed rows (nearby changes merged) plus up to
``context_size`` unchanged rows on each side. Unchanged rows between change
chunks become context chunks, collapsed when long. Every projection row
lands in exactly one chunk, in order.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import List, Sequence

from .options import DEFAULT_CONTEXT_SIZE, DEFAULT_EXPAND_THRESHOLD
from .types import ChunkType, DiffChunk, SideBySideProjection

logger = logging.getLogger(__name__)


def _extend_change(changed: Sequence[bool], start: int, bridge: int) -> int:
    """Last changed row of the region starting at *start*.

    The region keeps growing while another change lies within *bridge* rows.
    """
    total = len(changed)
    end = start
    while end < total - 1:
        if not changed[end + 1]:
            window = changed[end + 1 : min(total, end + 1 + bridge)]
            if not any(window):
                break
        end += 1
    return end


def chunk(
    projection: SideBySideProjection,
    context_size: int = DEFAULT_CONTEXT_SIZE,
    expand_threshold: int = DEFAULT_EXPAND_THRESHOLD,
) -> List[DiffChunk]:
    """Split a projection into context and change chunks.

    Args:
        projection: Output of project_side_by_side.
        context_size: Unchanged rows kept on each side of a change.
        expand_threshold: At or below this many rows, return everything as
            one expanded chunk.
    """
    if context_size < 0:
        raise ValueError("context_size must be >= 0")

    rows = list(projection.rows())
    total = len(rows)
    if total == 0:
        return []

    if total <= expand_threshold:
        return [
            DiffChunk(
                type=ChunkType.CHANGE,
                start_line=0,
                end_line=total - 1,
                rows=tuple(rows),
                context_before=0,
                context_after=0,
                is_expanded=True,
            )
        ]

    changed = [row.changed for row in rows]
    bridge = context_size * 2
    chunks: List[DiffChunk] = []
    emitted = 0  # first row not yet placed in a chunk
    i = 0

    while i < total:
        if changed[i]:
            change_end = _extend_change(changed, i, bridge)
            start = max(emitted, i - context_size)
            end = min(total - 1, change_end + context_size)
            chunks.append(
                DiffChunk(
                    type=ChunkType.CHANGE,
                    start_line=start,
                    end_line=end,
                    rows=tuple(rows[start : end + 1]),
                    context_before=i - start,
                    context_after=end - change_end,
                    is_expanded=True,
                )
            )
            emitted = i = end + 1
            continue

        run_end = i
        while run_end < total - 1 and not changed[run_end + 1]:
            run_end += 1

        # Leave the tail of the run as leading padding for the next change
        last = run_end
        if run_end < total - 1:
            last -= min(context_size, run_end - i + 1)

        if last >= i:
            length = last - i + 1
            chunks.append(
                DiffChunk(
                    type=ChunkType.CONTEXT,
                    start_line=i,
                    end_line=last,
                    rows=tuple(rows[i : last + 1]),
                    is_expanded=length <= bridge,
                )
            )
            emitted = last + 1
        i = run_end + 1

    logger.debug("Chunked %d rows into %d chunks", total, len(chunks))
    return chunks


def toggle_chunk(chunks: Sequence[DiffChunk], index: int) -> List[DiffChunk]:
    """Flip the expanded state of one chunk."""
    target = chunks[index]
    result = list(chunks)
    result[index] = dataclasses.replace(target, is_expanded=not target.is_expanded)
    return result


def expand_all(chunks: Sequence[DiffChunk]) -> List[DiffChunk]:
    return [dataclasses.replace(c, is_expanded=True) for c in chunks]


def collapse_all(chunks: Sequence[DiffChunk]) -> List[DiffChunk]:
    """Collapse context chunks; change chunks stay expanded."""
    return [
        dataclasses.replace(c, is_expanded=c.type == ChunkType.CHANGE) for c in chunks
    ]
