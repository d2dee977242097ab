"""Storage implementations for canondiff."""

from .rules_file import dump_rules, load_rules_file, rules_from_data, save_rules_file
from .store import RuleStore

__all__ = [
    "RuleStore",
    "dump_rules",
    "load_rules_file",
    "rules_from_data",
    "save_rules_file",
]
