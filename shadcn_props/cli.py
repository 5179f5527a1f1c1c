#!/usr/bin/env python3
"""
shadcn-props CLI — generate a props type file for a shadcn/ui component

  shadcn-props accordion                          # AccordionProps.ts
  shadcn-props https://ui.shadcn.com/docs/components/tabs
  shadcn-props dialog --deps-only                 # list required packages only
  shadcn-props select --registry                  # show static registry entry
  shadcn-props button --component-id btn-primary  # also write a JSON record
"""

import argparse
import sys
from pathlib import Path

from shadcn_props import __version__

from . import reporting
from .component_registry import describe_component
from .config import DEFAULT_CONFIG_FILE, load_config, settings_from_config
from .errors import InvalidInputError, WriteFailure
from .naming import normalize_component_name
from .pipeline import RunOptions, run

_TIPS = (
    "1. Check if the component name is correct",
    "2. Make sure shadcn is properly installed in your project",
    "3. Try running `npx shadcn@latest add <component-name> --yes` manually",
)


def _print_tips() -> None:
    print("\nTroubleshooting tips:")
    for tip in _TIPS:
        print(f"   {tip}")


def cmd_registry(component: str) -> int:
    identity = normalize_component_name(component)
    lines = describe_component(identity.normalized_key)
    if not lines:
        reporting.info(f"No registry information for '{identity.normalized_key}'")
        return 0
    print("\n".join(lines))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shadcn-props",
        description="Extract (or synthesize) TypeScript props types for a shadcn/ui component",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("component", help="Component name or docs URL (e.g. accordion, AlertDialog)")
    parser.add_argument("--deps-only", "-d", action="store_true",
                        help="Only detect required packages; install nothing, write nothing")
    parser.add_argument("--no-cleanup", "-n", action="store_true",
                        help="Keep the temporary component directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print debug output to stderr")
    parser.add_argument("--registry", "-r", action="store_true",
                        help="Show the static registry entry for the component and exit")
    parser.add_argument("--component-id", "-c", help="Write a record with this identifier to the record store")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="Config path")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    reporting.set_verbose(args.verbose)

    if not args.registry:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            reporting.fail(f"Error: could not read config {args.config}: {e}")
            return 1
        settings = settings_from_config(config, Path.cwd())

    try:
        if args.registry:
            return cmd_registry(args.component)
        options = RunOptions(
            deps_only=args.deps_only,
            cleanup=not args.no_cleanup,
            component_id=args.component_id,
        )
        print("🚀 shadcn props extractor")
        run(args.component, settings, options)
        if not args.deps_only:
            print("\n✅ Done")
        return 0
    except (InvalidInputError, WriteFailure) as e:
        reporting.fail(f"Error: {e}")
        _print_tips()
        return 1
    except KeyboardInterrupt:
        print("\n👋 Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
