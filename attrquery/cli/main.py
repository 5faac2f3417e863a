"""
attrquery CLI — Read-Only Interface for Attribute Inspection.

Commands:
    attrquery describe <target> [--member NAME] [--short]
        Show the attributes declared on a class, function or member
    attrquery find <class> <attribute> [--strict]
        Show the methods, properties and constants carrying an attribute

Targets are dotted names ("myapp.views.UserView"). Unlike the library,
the CLI imports the target's module, since nothing else would.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Optional

from ..entries import AttributeEntry
from ..query import (
    get_class_constants_with_attribute,
    get_class_methods_with_attribute,
    get_class_properties_with_attribute,
)
from ..reflection.loader import locate
from ..resolution.item_resolver import resolve_item


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_entry(entry: AttributeEntry, short: bool = False) -> str:
    """Format an entry the way it was declared, e.g. ``Route('/users', methods=['GET'])``."""
    name = entry.short_name if short else entry.name
    arguments = [repr(a) for a in entry.arguments]
    arguments.extend(f"{key}={value!r}" for key, value in entry.keywords)

    status = "" if entry.load() is not None else "  [not loadable]"
    return f"{name}({', '.join(arguments)}){status}"


def format_section(title: str, rows: list[str]) -> list[str]:
    lines = [f"{title}:"]
    if not rows:
        lines.append("  (none)")
    lines.extend(f"  • {row}" for row in rows)
    return lines


def _load_target(path: str) -> Optional[Any]:
    return locate(path, import_modules=True)


def _load_attribute(spec: str) -> Any:
    """Prefer the attribute class if the name imports; fall back to the short-name string."""
    found = locate(spec, import_modules=True)
    return found if isinstance(found, type) else spec


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_describe(args: argparse.Namespace) -> int:
    """Show the attributes declared on a target."""
    target = _load_target(args.target)
    if target is None:
        print(f"Target not found: {args.target}")
        return 1

    member = getattr(args, "member", None)
    item = (target, member) if member else target
    result = resolve_item(item)

    if not result.success:
        print(f"Cannot inspect {args.target}{'.' + member if member else ''}")
        print(f"Reason: {result.failure.reason}")
        return 1

    label = f"{args.target}.{member}" if member else args.target
    print(f"Attributes of {label} ({result.member.kind.value})")
    print("=" * 50)

    entries = result.member.attribute_entries()
    if not entries:
        print("No attributes declared.")
        return 0

    short = getattr(args, "short", False)
    for entry in entries:
        print(f"  • {format_entry(entry, short)}")

    print()
    print(f"Total: {len(entries)} attributes")
    return 0


def cmd_find(args: argparse.Namespace) -> int:
    """Show the members of a class that carry an attribute."""
    target = _load_target(args.target)
    if not isinstance(target, type):
        print(f"Class not found: {args.target}")
        return 1

    attribute = _load_attribute(args.attribute)
    match_children = not getattr(args, "strict", False)

    methods = get_class_methods_with_attribute(target, attribute, match_children)
    properties = get_class_properties_with_attribute(target, attribute, match_children)
    constants = get_class_constants_with_attribute(target, attribute, match_children)

    print(f"Members of {args.target} with {args.attribute}")
    print("=" * 50)

    lines: list[str] = []
    lines.extend(format_section("METHODS", methods))
    lines.append("")
    lines.extend(format_section("PROPERTIES", properties))
    lines.append("")
    lines.extend(format_section(
        "CONSTANTS",
        [f"{name} = {value!r}" for name, value in constants.items()],
    ))
    print("\n".join(lines))

    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="attrquery",
        description="attrquery — Inspect declared attributes",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    # Describe command
    describe_parser = subparsers.add_parser(
        "describe",
        help="Show the attributes declared on a target",
    )
    describe_parser.add_argument(
        "target",
        help="Dotted name of a class or function",
    )
    describe_parser.add_argument(
        "--member",
        help="Method, property or constant of the target class",
    )
    describe_parser.add_argument(
        "--short",
        action="store_true",
        help="Show unqualified attribute names",
    )
    describe_parser.set_defaults(func=cmd_describe)

    # Find command
    find_parser = subparsers.add_parser(
        "find",
        help="Show members of a class carrying an attribute",
    )
    find_parser.add_argument(
        "target",
        help="Dotted name of a class",
    )
    find_parser.add_argument(
        "attribute",
        help="Attribute class (dotted) or unqualified attribute name",
    )
    find_parser.add_argument(
        "--strict",
        action="store_true",
        help="Do not match subclasses of the attribute",
    )
    find_parser.set_defaults(func=cmd_find)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
