"""
Field command: show the temperature (topic-mix change) reading.
"""

from __future__ import annotations

import argparse

from tagpivot.helpers.exceptions import StoreError
from tagpivot.interfaces.cli.cli_ui import InfoPanel, format_reading, print_error, print_info
from tagpivot.interfaces.cli.utils import format_day_range
from tagpivot.services.cli_bootstrap_svc import get_cli_services
from tagpivot.workflows.analytics.field_state_wf import field_state_workflow


def cmd_field(args: argparse.Namespace) -> int:
    """Compute the field state for today (or --day) and record the sample."""
    try:
        services = get_cli_services(args.db)
        try:
            result = field_state_workflow(services.store, services.temp_series, end_day=args.day, cfg=services.analysis)
        finally:
            services.close()
    except (StoreError, ValueError) as e:
        print_error(f"Error computing field state: {e}")
        return 1

    if not result.available or result.reading is None:
        print_info(result.reason or "Field state unavailable.")
        return 0

    content = f"""{format_reading(result.reading, "temp")}

[bold]Window:[/bold] {result.window_days}d
[bold]Now:[/bold] {format_day_range(result.now_range)}
[bold]Prev:[/bold] {format_day_range(result.prev_range)}"""
    InfoPanel.show("Field State", content)
    return 0
