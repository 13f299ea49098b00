"""
Purge command: delete every stored event, aggregate and rolling series.
"""

from __future__ import annotations

import argparse

from tagpivot.helpers.exceptions import StoreError
from tagpivot.interfaces.cli.cli_ui import InfoPanel, print_error, print_info, print_success
from tagpivot.services.cli_bootstrap_svc import get_cli_services


def cmd_purge(args: argparse.Namespace) -> int:
    try:
        services = get_cli_services(args.db)
    except (StoreError, ValueError) as e:
        print_error(f"Error opening store: {e}")
        return 1

    try:
        count = len(services.store.load_events())
        content = f"""[yellow]WARNING:[/yellow] This deletes all local history.
[bold]Stored events:[/bold] {count}
[bold]Database:[/bold] {services.db.path}"""
        InfoPanel.show("Purge Local History", content, "yellow")

        if not args.force:
            response = input("Continue? (yes/no): ").strip().lower()
            if response not in ("yes", "y"):
                print_info("Cancelled")
                return 0

        services.store.purge_all()
        services.temp_series.clear()
        services.pol_series.clear()
        print_success(f"Purged {count} event(s)")
        return 0
    except (StoreError, ValueError) as e:
        print_error(f"Error during purge: {e}")
        return 1
    finally:
        services.close()
