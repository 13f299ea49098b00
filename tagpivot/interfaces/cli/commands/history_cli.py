"""
History command: list the most recent stored events.
"""

from __future__ import annotations

import argparse

from tagpivot.helpers.exceptions import StoreError
from tagpivot.interfaces.cli.cli_ui import TableDisplay, print_error, print_info
from tagpivot.services.cli_bootstrap_svc import get_cli_services


def cmd_history(args: argparse.Namespace) -> int:
    try:
        services = get_cli_services(args.db)
        try:
            events = services.store.recent_events(args.limit)
        finally:
            services.close()
    except (StoreError, ValueError) as e:
        print_error(f"Error reading history: {e}")
        return 1

    if not events:
        print_info("No local events yet.")
        return 0
    TableDisplay.show_events(events)
    return 0
