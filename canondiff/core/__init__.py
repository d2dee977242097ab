"""Core types and logic for canondiff."""

from .canon import canonical_text, canonicalize, serialize
from .chunks import chunk, collapse_all, expand_all, toggle_chunk
from .compare import (
    ComparisonResult,
    compare_texts,
    compare_values,
    parse_json_text,
)
from .errors import (
    CanonDiffError,
    InvalidJsonError,
    InvalidRuleError,
    RuleNotFoundError,
    UnsupportedValueError,
)
from .line_diff import diff_lines, diff_values
from .options import CompareOptions
from .paths import has_value, resolve
from .rules import (
    ArrayRule,
    compare_by_fields,
    default_rules,
    find_generic_rule,
    find_targeted_rule,
    make_rule,
    parse_array_rule,
)
from .side_by_side import project_side_by_side
from .types import (
    ChunkType,
    DiffCell,
    DiffChunk,
    DiffOp,
    DiffRow,
    LineType,
    SideBySideProjection,
    SortRule,
)

__all__ = [
    # Core types
    "SortRule",
    "DiffOp",
    "DiffCell",
    "DiffRow",
    "DiffChunk",
    "LineType",
    "ChunkType",
    "SideBySideProjection",
    "CompareOptions",
    # Paths
    "resolve",
    "has_value",
    # Rules
    "ArrayRule",
    "make_rule",
    "default_rules",
    "parse_array_rule",
    "find_targeted_rule",
    "find_generic_rule",
    "compare_by_fields",
    # Canonicalization
    "canonicalize",
    "canonical_text",
    "serialize",
    # Diff
    "diff_lines",
    "diff_values",
    "project_side_by_side",
    # Chunks
    "chunk",
    "toggle_chunk",
    "expand_all",
    "collapse_all",
    # Comparison
    "ComparisonResult",
    "compare_values",
    "compare_texts",
    "parse_json_text",
    # Exceptions
    "CanonDiffError",
    "InvalidJsonError",
    "InvalidRuleError",
    "RuleNotFoundError",
    "UnsupportedValueError",
]
