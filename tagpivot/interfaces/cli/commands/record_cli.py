"""
Record command: store one page visit's tags in the local event log.
"""

from __future__ import annotations

import argparse

from tagpivot.components.events.probe_comp import build_probe
from tagpivot.helpers.exceptions import StoreError
from tagpivot.interfaces.cli.cli_ui import print_error, print_info, print_success
from tagpivot.interfaces.cli.utils import split_tag_args
from tagpivot.services.cli_bootstrap_svc import get_cli_services
from tagpivot.workflows.events.record_page_event_wf import record_page_event_workflow


def cmd_record(args: argparse.Namespace) -> int:
    """Record a page visit (URL is hashed, never stored)."""
    tags = split_tag_args(args.tags)
    probe = None
    if args.scroll is not None or args.clicks is not None:
        probe = build_probe(args.scroll or 0, args.clicks or 0)

    try:
        services = get_cli_services(args.db)
        try:
            result = record_page_event_workflow(services.store, args.url, tags, probe=probe)
        finally:
            services.close()
    except (StoreError, ValueError) as e:
        print_error(f"Error recording event: {e}")
        return 1

    if result.stored:
        print_success(f"Recorded {len(result.tags)} tag(s) for {result.day}: {', '.join(result.tags)}")
    else:
        print_info("Not recorded (no usable tags, or a repeat visit within 30s)")
    return 0
