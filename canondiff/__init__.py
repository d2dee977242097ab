from .core import (
    # Core types
    ChunkType,
    CompareOptions,
    ComparisonResult,
    DiffCell,
    DiffChunk,
    DiffOp,
    DiffRow,
    LineType,
    SideBySideProjection,
    SortRule,
    # Canonicalization
    canonical_text,
    canonicalize,
    # Chunks
    chunk,
    collapse_all,
    # Comparison
    compare_texts,
    compare_values,
    default_rules,
    # Diff
    diff_lines,
    diff_values,
    expand_all,
    has_value,
    make_rule,
    parse_json_text,
    project_side_by_side,
    # Paths
    resolve,
    serialize,
    toggle_chunk,
)
from .core.errors import (
    CanonDiffError,
    InvalidJsonError,
    InvalidRuleError,
    RuleNotFoundError,
    UnsupportedValueError,
)
from .storage import RuleStore, dump_rules, load_rules_file, save_rules_file
from .version import CANONDIFF_VERSION, RULES_SCHEMA_VERSION

__all__ = [
    # Version
    "CANONDIFF_VERSION",
    "RULES_SCHEMA_VERSION",
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
    "ComparisonResult",
    # Paths
    "resolve",
    "has_value",
    # Rules
    "make_rule",
    "default_rules",
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
    "compare_values",
    "compare_texts",
    "parse_json_text",
    # Storage
    "RuleStore",
    "dump_rules",
    "load_rules_file",
    "save_rules_file",
    # Exceptions
    "CanonDiffError",
    "InvalidJsonError",
    "InvalidRuleError",
    "RuleNotFoundError",
    "UnsupportedValueError",
]
