"""
canondiff version constants.

This module defines version constants for the canondiff library and the
format of its persisted sort rules.
"""

# Library version (matches pyproject.toml)
CANONDIFF_VERSION = "0.2.0"

# Schema version for the SQLite rule store
# Increment when the table layout changes in a breaking way
RULES_SCHEMA_VERSION = "rules_v1"
