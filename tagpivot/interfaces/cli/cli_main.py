#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from tagpivot.helpers.logging_helper import configure_logging, set_log_context
from tagpivot.interfaces.cli.commands.bridges_cli import cmd_bridges
from tagpivot.interfaces.cli.commands.days_cli import cmd_days
from tagpivot.interfaces.cli.commands.field_cli import cmd_field
from tagpivot.interfaces.cli.commands.history_cli import cmd_history
from tagpivot.interfaces.cli.commands.polarization_cli import cmd_polarization
from tagpivot.interfaces.cli.commands.purge_cli import cmd_purge
from tagpivot.interfaces.cli.commands.record_cli import cmd_record
from tagpivot.services.cli_bootstrap_svc import get_config_service


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--db", help="path to the SQLite store (default: config db_path)")
    common.add_argument("--log-level", help="log level (default: config log_level)")

    p = argparse.ArgumentParser(
        prog="tagpivot",
        description="TagPivot - local structural signals from your browsing interest tags",
        epilog="Examples:\n"
        "  tagpivot record https://example.com/post rust memory-safety   # Store a page visit\n"
        "  tagpivot field                                                # Topic-mix temperature\n"
        "  tagpivot polarization --seed rust                             # Two-pole split + counter-view\n"
        "  tagpivot bridges rust memory-safety                           # Adjacent topics\n"
        "  tagpivot purge --force                                        # Delete local history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'tagpivot <command> --help' for command-specific help)",
    )

    # record: Store one page visit
    s = sub.add_parser("record", parents=[common], help="Record a page visit's interest tags")
    s.add_argument("url", help="page URL (only its canonical hash is stored)")
    s.add_argument("tags", nargs="+", help="interest tags (space or comma separated)")
    s.add_argument("--scroll", type=int, help="scroll count for the interaction probe")
    s.add_argument("--clicks", type=int, help="click count for the interaction probe")
    s.set_defaults(func=cmd_record)

    # field: Temperature reading
    s = sub.add_parser("field", parents=[common], help="Show how fast the topic mix is changing")
    s.add_argument("--day", help="last day of the window, YYYY-MM-DD (default: today)")
    s.set_defaults(func=cmd_field)

    # polarization: Two-pole split
    s = sub.add_parser("polarization", parents=[common], help="Show whether attention splits into two clusters")
    s.add_argument("--day", help="last day of the window, YYYY-MM-DD (default: today)")
    s.add_argument("--seed", nargs="*", default=[], help="current page tags, for the counter-view query")
    s.set_defaults(func=cmd_polarization)

    # bridges: Bridges + counterpoint
    s = sub.add_parser("bridges", parents=[common], help="Rank bridge and counterpoint tags for seed tags")
    s.add_argument("tags", nargs="+", help="seed tags (space or comma separated)")
    s.add_argument("--days", type=int, help="recency window in days (default: config bridge_days)")
    s.add_argument("--top-k", type=int, help="results per list (default: config bridge_top_k)")
    s.set_defaults(func=cmd_bridges)

    # history: Recent events
    s = sub.add_parser("history", parents=[common], help="List the most recent stored events")
    s.add_argument("--limit", type=int, default=20, help="number of events (default: 20)")
    s.set_defaults(func=cmd_history)

    # days: Daily aggregates
    s = sub.add_parser("days", parents=[common], help="List days with stored aggregates")
    s.set_defaults(func=cmd_days)

    # purge: Delete everything
    s = sub.add_parser("purge", parents=[common], help="Delete all local history")
    s.add_argument("--force", action="store_true", help="skip confirmation prompt")
    s.set_defaults(func=cmd_purge)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    configure_logging(args.log_level or get_config_service().get("log_level", "WARNING"))
    set_log_context(cmd=args.cmd)

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())
