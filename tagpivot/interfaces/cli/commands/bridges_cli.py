"""
Bridges command: adjacent topics and counterpoint for a set of seed tags.
"""

from __future__ import annotations

import argparse
from dataclasses import replace

from tagpivot.helpers.exceptions import StoreError
from tagpivot.interfaces.cli.cli_ui import TableDisplay, print_error, print_info
from tagpivot.interfaces.cli.utils import split_tag_args
from tagpivot.services.cli_bootstrap_svc import get_cli_services
from tagpivot.workflows.analytics.bridges_wf import bridges_workflow


def cmd_bridges(args: argparse.Namespace) -> int:
    """Rank bridges for the given seed tags, then counterpoint."""
    seeds = split_tag_args(args.tags)
    if not seeds:
        print_error("Give at least one seed tag")
        return 1

    try:
        services = get_cli_services(args.db)
        try:
            cfg = services.analysis
            if args.days is not None:
                cfg = replace(cfg, bridge_days=args.days)
            if args.top_k is not None:
                cfg = replace(cfg, bridge_top_k=args.top_k)
            result = bridges_workflow(services.store, seeds, cfg=cfg)
        finally:
            services.close()
    except (StoreError, ValueError) as e:
        print_error(f"Error computing bridges: {e}")
        return 1

    if not result.bridges:
        print_info(f"No bridges yet for: {', '.join(result.seed_tags)}")
        return 0

    TableDisplay.show_bridges(result.bridges)
    if result.counterpoint:
        TableDisplay.show_counterpoint(result.counterpoint)
    else:
        print_info("No counterpoint yet")
    return 0
