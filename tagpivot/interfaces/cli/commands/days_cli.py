"""
Days command: list days with aggregates and their event/tag counts.
"""

from __future__ import annotations

import argparse

from tagpivot.helpers.exceptions import StoreError
from tagpivot.interfaces.cli.cli_ui import TableDisplay, print_error, print_info
from tagpivot.services.cli_bootstrap_svc import get_cli_services


def cmd_days(args: argparse.Namespace) -> int:
    try:
        services = get_cli_services(args.db)
        try:
            days = services.store.list_days()
            daily = services.store.load_daily_aggs()
        finally:
            services.close()
    except (StoreError, ValueError) as e:
        print_error(f"Error reading days: {e}")
        return 1

    if not days:
        print_info("No local events yet.")
        return 0

    summary = {day: f"{daily[day].event_count} events, {daily[day].unique_tags} tags" for day in days}
    TableDisplay.show_summary("Days", summary)
    return 0
