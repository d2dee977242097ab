"""Exceptions raised by canondiff.

Path resolution misses and arrays without a matching rule are not errors;
they are represented as absence and as unchanged order respectively.
"""

from __future__ import annotations

from typing import Optional


class CanonDiffError(Exception):
    """Base exception for canondiff errors."""

    pass


class InvalidJsonError(CanonDiffError):
    """
    Raised when one side of a comparison is not valid JSON.

    The error names the side so a host can surface it next to the
    offending document without touching the other one.
    """

    def __init__(
        self,
        message: str,
        side: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.side = side
        self.line = line
        self.column = column

    def __str__(self) -> str:
        location = f"side={self.side}"
        if self.line is not None:
            location += f", line={self.line}"
        if self.column is not None:
            location += f", column={self.column}"
        return f"Invalid JSON ({location}): {self.args[0]}"


class UnsupportedValueError(CanonDiffError, TypeError):
    """Raised when a value is not representable as JSON."""

    def __init__(self, value: object, path: str = "$"):
        super().__init__(
            f"Unsupported value of type {type(value).__name__} at {path}"
        )
        self.value = value
        self.path = path


class InvalidRuleError(CanonDiffError):
    """Raised when a sort rule fails validation."""

    pass


class RuleNotFoundError(InvalidRuleError):
    """Raised when a rule id does not exist in the store."""

    def __init__(self, rule_id: str):
        super().__init__(f"Sort rule '{rule_id}' not found")
        self.rule_id = rule_id
