#!/usr/bin/env python3
"""
neweden CLI Entry Point

Provides command-line access to routing and range queries.
Run with: python -m neweden <command> [args]
"""

import argparse
import json
import sys

from . import __version__
from .core.formatters import get_utc_timestamp


def output_json(data: dict, indent: int = 2) -> None:
    """Print JSON output to stdout."""
    print(json.dumps(data, indent=indent))


def output_error(message: str, exit_code: int = 1, **kwargs) -> None:
    """Print error JSON and exit."""
    error_data = {
        "error": kwargs.pop("error_type", "error"),
        "message": message,
        "query_timestamp": get_utc_timestamp(),
    }
    error_data.update(kwargs)
    output_json(error_data)
    sys.exit(exit_code)


# =============================================================================
# Built-in Commands
# =============================================================================


def cmd_help(args: argparse.Namespace) -> dict:
    """Show help message."""
    help_text = f"""
═══════════════════════════════════════════════════════════════════
neweden {__version__} - New Eden routing
───────────────────────────────────────────────────────────────────

Navigation Commands:
  route <systems...> [flags]  Route through two or more systems, in order
                              Flags: --safe, --shortest (default), --risky
                              --wormhole FROM TO (repeatable)
                              --wormhole-size very_large|large|medium|small
                              --bridge-from <system> --titan|--black-ops
                              --calibration N
  bridge <origin> [flags]     Systems in jump bridge range
                              --titan|--black-ops (required)
                              --calibration N, --fuel-conservation N
  range <origin> <ly>         Systems within a distance in lightyears

Data Sources (any command):
  --sde <path>                Fuzzwork SDE SQLite (sqlite-latest.sqlite)
  --cache <path>              JSON universe cache
  NEWEDEN_SDE_PATH / NEWEDEN_UNIVERSE_CACHE are used when neither is given.

System Commands:
  help                        Show this help message

Examples:
  neweden route Jita Amarr --safe
  neweden route Jita Perimeter Amarr
  neweden route Rancer Jark --wormhole Rancer Jark
  neweden bridge 1DQ1-A --titan --calibration 5
  neweden range Jita 5

Usage:
  python3 -m neweden <command> [args]

═══════════════════════════════════════════════════════════════════
"""
    print(help_text)
    return {}


# =============================================================================
# Main Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="neweden",
        description="neweden - New Eden routing and range queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    help_parser = subparsers.add_parser("help", help="Show help message")
    help_parser.set_defaults(func=cmd_help)

    from .commands import navigation

    navigation.register_parsers(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Default to help if no command
    if not args.command:
        cmd_help(args)
        return 0

    if not hasattr(args, "func"):
        output_error(
            f"Unknown command: {args.command}",
            error_type="unknown_command",
            hint="Run 'neweden help' for usage",
        )

    try:
        result = args.func(args)

        if isinstance(result, dict) and result:
            output_json(result)

            # Return non-zero exit code if result contains error
            if "error" in result:
                return 1

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        output_error(str(e), error_type="command_error", command=args.command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
