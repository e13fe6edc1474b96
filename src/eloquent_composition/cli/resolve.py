"""resolve CLI command."""

import argparse
import sys

from eloquent_composition.cli.make import REPORTED_ERRORS


def cmd_resolve(args: argparse.Namespace) -> int:
    from eloquent_composition.cli import resolve_layout
    from eloquent_composition.naming import NameQualifier, PathResolver

    try:
        layout = resolve_layout(args)
        qualifier = NameQualifier.for_layout(layout)
        qualified = qualifier.qualify(args.name, qualifier.selector(args.kind))
    except REPORTED_ERRORS as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    path = PathResolver(layout).path_for(qualified)

    print(f"  Class: {qualified}")
    print(f"  Path:  {path}")
    print(f"  Exists: {'yes' if path.is_file() else 'no'}")
    return 0
