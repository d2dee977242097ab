from __future__ import annotations

import sys
from dataclasses import dataclass

DEFAULT_CONTEXT_SIZE = 3
DEFAULT_LOOKAHEAD = 4
DEFAULT_EXPAND_THRESHOLD = 20
DEFAULT_INDENT = 2


@dataclass(frozen=True)
class CompareOptions:
    """
    Configuration for one comparison run.

    Attributes:
        context_size: Unchanged rows kept around each change chunk.
        lookahead: Lines searched ahead on each side when resynchronizing.
        expand_threshold: Projections with at most this many rows are shown
            as a single expanded chunk.
        indent: Indentation of the pretty-printed documents.
    """

    context_size: int = DEFAULT_CONTEXT_SIZE
    lookahead: int = DEFAULT_LOOKAHEAD
    expand_threshold: int = DEFAULT_EXPAND_THRESHOLD
    indent: int = DEFAULT_INDENT

    def __post_init__(self):
        if self.context_size < 0:
            raise ValueError("context_size must be >= 0")
        if self.lookahead < 1:
            raise ValueError("lookahead must be >= 1")
        if self.expand_threshold < 0:
            raise ValueError("expand_threshold must be >= 0")
        if self.indent < 0:
            raise ValueError("indent must be >= 0")

    @classmethod
    def default(cls) -> "CompareOptions":
        """Create default options."""
        return cls()

    @classmethod
    def full(cls) -> "CompareOptions":
        """Create options that never collapse unchanged runs."""
        return cls(expand_threshold=sys.maxsize)
