"""Command line entry point for eloquent-composition.

Usage:
    eloquent-compose make:model <name> [--without-composition] [--force] [--dry-run]
    eloquent-compose make:collection <name> [-m MODEL] [--force] [--dry-run]
    eloquent-compose make:query-builder <name> [-m MODEL] [-c COLLECTION] [--force] [--dry-run]
    eloquent-compose resolve <name> [--kind model|collection|query-builder]
"""

import argparse
import logging
import sys
from pathlib import Path

from eloquent_composition.cli.make import (
    cmd_make_collection,
    cmd_make_model,
    cmd_make_query_builder,
)
from eloquent_composition.cli.resolve import cmd_resolve
from eloquent_composition.config import SUB_NAMESPACES, ProjectLayout, load_layout


def resolve_layout(args: argparse.Namespace) -> ProjectLayout:
    """Project layout from --base-path / --config, env or cwd."""
    raw = getattr(args, "base_path", None)
    base = Path(raw).expanduser().resolve() if raw else None
    return load_layout(base, getattr(args, "config", None))


def _add_write_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--force", action="store_true",
        help="Overwrite the class if it already exists",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eloquent-compose",
        description="Generate Eloquent models with composed collections and query builders",
    )
    parser.add_argument(
        "--base-path", default=None,
        help="Laravel project root (default: $ELOQUENT_COMPOSITION_BASE or cwd)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to composition.yaml (default: <base-path>/composition.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    model = sub.add_parser("make:model", help="Create a new Eloquent model")
    model.add_argument("name", help="The name of the Model")
    model.add_argument(
        "--without-composition", action="store_true",
        help="Do not create a collection and query builder for the model",
    )
    _add_write_flags(model)

    coll = sub.add_parser("make:collection", help="Create a new Eloquent Collection class")
    coll.add_argument("name", help="The name of the Collection")
    coll.add_argument(
        "-m", "--model", default=None,
        help="Name of the Model for composing",
    )
    _add_write_flags(coll)

    qb = sub.add_parser("make:query-builder", help="Create a new Eloquent Query Builder class")
    qb.add_argument("name", help="The name of the Query Builder")
    qb.add_argument(
        "-m", "--model", default=None,
        help="Name of the Model for composing",
    )
    qb.add_argument(
        "-c", "--collection", default=None,
        help="Name of the Collection for composing",
    )
    _add_write_flags(qb)

    res = sub.add_parser("resolve", help="Show the qualified name and path of a class")
    res.add_argument("name", help="Short or partial class name")
    res.add_argument(
        "--kind", choices=sorted(SUB_NAMESPACES), default="model",
        help="Class kind deciding the sub-namespace (default: model)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "make:model": cmd_make_model,
        "make:collection": cmd_make_collection,
        "make:query-builder": cmd_make_query_builder,
        "resolve": cmd_resolve,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
