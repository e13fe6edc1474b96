"""make:* CLI commands."""

import argparse
import sys

import yaml

from eloquent_composition.errors import CompositionError

# Failures reported as an ERROR line and exit code 1 instead of a traceback.
REPORTED_ERRORS = (CompositionError, ValueError, yaml.YAMLError)


def _report(result) -> int:
    for w in result.writes:
        label = "Created" if w.action == "created" else "Updated"
        print(f"  {label}: {w.path}")
    if result.dry_run:
        print("\n[DRY RUN] No files were modified.")
    return 0


def _run(args: argparse.Namespace, make) -> int:
    from eloquent_composition.cli import resolve_layout
    from eloquent_composition.generator import Generator

    try:
        generator = Generator(resolve_layout(args), dry_run=args.dry_run, force=args.force)
        result = make(generator)
    except REPORTED_ERRORS as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return _report(result)


def cmd_make_model(args: argparse.Namespace) -> int:
    return _run(
        args,
        lambda g: g.make_model(args.name.strip(), without_composition=args.without_composition),
    )


def cmd_make_collection(args: argparse.Namespace) -> int:
    model = args.model.strip() if args.model else None
    return _run(args, lambda g: g.make_collection(args.name.strip(), model))


def cmd_make_query_builder(args: argparse.Namespace) -> int:
    model = args.model.strip() if args.model else None
    collection = args.collection.strip() if args.collection else None
    return _run(args, lambda g: g.make_query_builder(args.name.strip(), model, collection))
