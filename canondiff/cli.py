"""canondiff CLI.

Entry point for the ``canondiff`` command-line tool.

Usage:
    canondiff compare <left> <right> [--format json|text] [--context N]
                      [--lookahead N] [--full] [--rules-file F | --db PATH]
                      [--no-rules]
    canondiff sort <file> [--rules-file F | --db PATH] [--no-rules]
    canondiff rules [--db PATH] list|add|update|toggle|remove|move|export|import

A path of ``-`` reads the document from stdin.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

from .core.canon import canonical_text
from .core.compare import ComparisonResult, compare_texts, parse_json_text
from .core.errors import CanonDiffError
from .core.options import CompareOptions, DEFAULT_CONTEXT_SIZE, DEFAULT_LOOKAHEAD
from .core.rules import default_rules
from .core.types import ChunkType, DiffCell, LineType, SortRule
from .storage.rules_file import dump_rules, load_rules_file
from .storage.store import RuleStore
from .version import CANONDIFF_VERSION

logger = logging.getLogger(__name__)

_MARKERS = {
    LineType.EQUAL: " ",
    LineType.ADDED: "+",
    LineType.REMOVED: "-",
    LineType.EMPTY: " ",
}

# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------


def _read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def _resolve_rules(args: argparse.Namespace) -> List[SortRule]:
    if args.no_rules:
        return []
    if args.rules_file:
        rules = load_rules_file(args.rules_file)
    elif args.db:
        rules = RuleStore(path=args.db).list_rules()
    else:
        rules = default_rules()
    logger.debug("Using %d sort rules", len(rules))
    return rules


# ---------------------------------------------------------------------------
# Text formatter
# ---------------------------------------------------------------------------


def _format_cell(cell: DiffCell, width: int) -> str:
    number = "" if cell.line_number is None else str(cell.line_number)
    content = cell.content
    if len(content) > width:
        content = content[: width - 3] + "..."
    return f"{number:>5} {_MARKERS[cell.type]} {content:<{width}}"


def _format_text(result: ComparisonResult, width: int = 60) -> str:
    lines: List[str] = []
    if result.identical:
        lines.append("Documents are identical after canonicalization")
    else:
        lines.append(
            f"Documents differ: {result.removed_count} removed, "
            f"{result.added_count} added"
        )
    lines.append("")

    for c in result.chunks:
        if not c.is_expanded:
            lines.append(
                f"  @@ {len(c)} unchanged lines "
                f"({c.start_line + 1}-{c.end_line + 1}) @@"
            )
            continue
        for row in c.rows:
            left = _format_cell(row.left, width)
            right = _format_cell(row.right, width)
            lines.append(f"{left} | {right}".rstrip())
        if c.type == ChunkType.CHANGE:
            lines.append("")

    return "\n".join(lines).rstrip()


def _format_rule(index: int, rule: SortRule) -> str:
    state = "enabled" if rule.enabled else "disabled"
    text = f"#{index + 1} {rule.name} [{state}] id={rule.rule_id}"
    if rule.description:
        text += f"\n    {rule.description}"
    for n, f in enumerate(rule.fields):
        text += f"\n    {n + 1}. {f}"
    return text


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_compare(args: argparse.Namespace) -> int:
    if args.left == "-" and args.right == "-":
        raise ValueError("Only one document can be read from stdin")
    base = CompareOptions.full() if args.full else CompareOptions.default()
    options = dataclasses.replace(
        base, context_size=args.context, lookahead=args.lookahead
    )
    rules = _resolve_rules(args)
    result = compare_texts(
        _read_document(args.left), _read_document(args.right), rules, options
    )

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(_format_text(result, width=args.width))

    return 0 if result.identical else 1


def _cmd_sort(args: argparse.Namespace) -> int:
    rules = _resolve_rules(args)
    value = parse_json_text(_read_document(args.file), args.file)
    print(canonical_text(value, rules))
    return 0


def _cmd_rules(args: argparse.Namespace) -> int:
    store = RuleStore(path=args.db or "canondiff.db")
    action = args.rules_command

    if action == "list":
        rules = store.list_rules()
        if not rules:
            print("No sort rules configured")
        for idx, rule in enumerate(rules):
            print(_format_rule(idx, rule))
    elif action == "add":
        rule = store.add_rule(args.name, args.fields, args.description)
        print(rule.rule_id)
    elif action == "update":
        store.update_rule(args.rule_id, args.name, args.fields, args.description)
    elif action == "toggle":
        rule = store.toggle_rule(args.rule_id)
        print("enabled" if rule.enabled else "disabled")
    elif action == "remove":
        store.delete_rule(args.rule_id)
    elif action == "move":
        store.move_rule(args.rule_id, args.direction)
    elif action == "export":
        print(dump_rules(store.export_rules()))
    elif action == "import":
        rules = load_rules_file(args.path)
        store.replace_rules(rules)
        print(f"Imported {len(rules)} rules")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _add_rule_source_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--rules-file", help="JSON file with sort rules")
    source.add_argument("--db", help="Rule store database (default: built-in rules)")
    source.add_argument(
        "--no-rules", action="store_true", help="Only sort object keys"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="canondiff",
        description="canondiff: order-insensitive diffing of JSON documents",
    )
    parser.add_argument("--version", action="version", version=CANONDIFF_VERSION)
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command")

    compare_parser = subparsers.add_parser("compare", help="Compare two JSON files")
    compare_parser.add_argument("left", help="Baseline document")
    compare_parser.add_argument("right", help="Comparison document")
    compare_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )
    compare_parser.add_argument(
        "--context",
        type=int,
        default=DEFAULT_CONTEXT_SIZE,
        help=f"Unchanged lines around changes (default: {DEFAULT_CONTEXT_SIZE})",
    )
    compare_parser.add_argument(
        "--lookahead",
        type=int,
        default=DEFAULT_LOOKAHEAD,
        help=f"Resync window size (default: {DEFAULT_LOOKAHEAD})",
    )
    compare_parser.add_argument(
        "--full", action="store_true", help="Never collapse unchanged lines"
    )
    compare_parser.add_argument(
        "--width", type=int, default=60, help="Column width in text output"
    )
    _add_rule_source_args(compare_parser)
    compare_parser.set_defaults(func=_cmd_compare)

    sort_parser = subparsers.add_parser("sort", help="Print a canonicalized document")
    sort_parser.add_argument("file", help="Document to canonicalize")
    _add_rule_source_args(sort_parser)
    sort_parser.set_defaults(func=_cmd_sort)

    rules_parser = subparsers.add_parser("rules", help="Manage stored sort rules")
    rules_parser.add_argument(
        "--db", default=None, help="Rule store database (default: canondiff.db)"
    )
    rules_sub = rules_parser.add_subparsers(dest="rules_command", required=True)
    rules_sub.add_parser("list", help="List rules in priority order")
    add_parser = rules_sub.add_parser("add", help="Add a rule")
    add_parser.add_argument("name")
    add_parser.add_argument("fields", nargs="+", help="Sort fields, primary first")
    add_parser.add_argument("--description", default="")
    update_parser = rules_sub.add_parser("update", help="Edit a rule")
    update_parser.add_argument("rule_id")
    update_parser.add_argument("name")
    update_parser.add_argument("fields", nargs="+")
    update_parser.add_argument("--description", default="")
    for name in ("toggle", "remove"):
        p = rules_sub.add_parser(name, help=f"{name.capitalize()} a rule")
        p.add_argument("rule_id")
    move_parser = rules_sub.add_parser("move", help="Change a rule's priority")
    move_parser.add_argument("rule_id")
    move_parser.add_argument("direction", choices=["up", "down"])
    rules_sub.add_parser("export", help="Print rules as JSON")
    import_parser = rules_sub.add_parser("import", help="Replace rules from a file")
    import_parser.add_argument("path")
    rules_parser.set_defaults(func=_cmd_rules)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        code = args.func(args)
    except (CanonDiffError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    sys.exit(code)


if __name__ == "__main__":
    main()
