"""
Polarization command: show whether attention splits into two opposing clusters.
"""

from __future__ import annotations

import argparse

from tagpivot.helpers.exceptions import StoreError
from tagpivot.interfaces.cli.cli_ui import InfoPanel, format_reading, print_error, print_info
from tagpivot.interfaces.cli.utils import split_tag_args
from tagpivot.services.cli_bootstrap_svc import get_cli_services
from tagpivot.workflows.analytics.polarization_state_wf import polarization_state_workflow

POLE_PREVIEW = 6


def cmd_polarization(args: argparse.Namespace) -> int:
    """Compute polarization for today (or --day) and record the sample."""
    seeds = split_tag_args(args.seed)
    try:
        services = get_cli_services(args.db)
        try:
            result = polarization_state_workflow(
                services.store,
                services.pol_series,
                seed_tags=seeds,
                end_day=args.day,
                cfg=services.analysis,
            )
        finally:
            services.close()
    except (StoreError, ValueError) as e:
        print_error(f"Error computing polarization: {e}")
        return 1

    if not result.available or result.reading is None:
        print_info(result.reason or "Polarization unavailable.")
        return 0

    content = f"""{format_reading(result.reading, "pol")} w={result.window_days}d

[bold]Active:[/bold] {", ".join(result.active_pole[:POLE_PREVIEW])}
[bold]Counter:[/bold] {", ".join(result.counter_pole[:POLE_PREVIEW])}
[bold]Sampled events:[/bold] {result.sampled_events}"""
    if result.counterview_query:
        content += f"\n[bold]CounterView:[/bold] {result.counterview_query}"
    InfoPanel.show("Polarization", content)
    return 0
