"""CLI entry point: ``crudkit-generate <resourceName>``.

Usage::

    crudkit-generate task
    CRUDKIT_PROJECT_ROOT=./shop CRUDKIT_PATCH_MODE=splice crudkit-generate invoice
"""

from __future__ import annotations

import argparse
import asyncio

from jinja2 import TemplateError

from crudkit.config import Config
from crudkit.errors import CrudkitError
from crudkit.utils import print_error, print_success

from .generator import ResourceGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudkit-generate",
        description="Generate the model, controller and routes of a CRUD resource",
        epilog=(
            "Environment:\n"
            "  CRUDKIT_PROJECT_ROOT  target project directory (default: .)\n"
            "  CRUDKIT_PATCH_MODE    registry (default) or splice\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Optional at the argparse level so a missing name gets our own message.
    parser.add_argument(
        "resource_name",
        nargs="?",
        help="Singular lowercase resource name, e.g. 'task'",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the scaffolder and return the process exit status."""
    args = build_parser().parse_args(argv)

    if not args.resource_name or not args.resource_name.strip():
        print_error("Please provide a resource name.")
        return 1

    try:
        config = Config.from_env()
        generator = ResourceGenerator(config.scaffold)
        result = asyncio.run(generator.generate(args.resource_name))
    except (OSError, ValueError, TemplateError, CrudkitError) as exc:
        print_error(f"Error generating resource: {exc}")
        return 1

    print_success(f"Successfully generated resource: {result.names.name}")
    return 0
