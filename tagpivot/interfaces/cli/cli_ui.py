#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tagpivot.helpers.dto.events_dto import TagEvent
from tagpivot.helpers.dto.metrics_dto import BizarroResult, BridgeResult, TrendReading

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"
COLOR_MUTED = "bright_black"

STATE_COLORS = {
    "Settled": COLOR_SUCCESS,
    "Active": COLOR_INFO,
    "Changing": COLOR_WARNING,
    "Calibrating": COLOR_ERROR,
    "Flat": COLOR_SUCCESS,
    "Split": COLOR_WARNING,
    "Peaks": COLOR_ERROR,
}


class InfoPanel:
    """
    Simple panel for displaying status/info.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


class TableDisplay:
    """
    Formatted tables for events and scored tags.
    """

    @staticmethod
    def show_bridges(bridges: Sequence[BridgeResult], title: str = "Bridges"):
        table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("Tag", style=COLOR_INFO)
        table.add_column("Score", justify="right")
        table.add_column("Co", justify="right")
        table.add_column("DF", justify="right")
        for b in bridges:
            table.add_row(b.tag, f"{b.score:.3f}", str(b.co), str(b.df))
        console.print(table)

    @staticmethod
    def show_counterpoint(items: Sequence[BizarroResult], title: str = "Counterpoint"):
        table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("Tag", style=COLOR_WARNING)
        table.add_column("Score", justify="right")
        table.add_column("Co (bridge)", justify="right")
        table.add_column("DF", justify="right")
        for b in items:
            table.add_row(b.tag, f"{b.score:.3f}", str(b.co_bridge), str(b.df))
        console.print(table)

    @staticmethod
    def show_events(events: Sequence[TagEvent], title: str = "Recent events"):
        table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("Captured", width=19)
        table.add_column("Domain", style=COLOR_INFO)
        table.add_column("Tags", overflow="fold")
        table.add_column("Energy", justify="right")
        for evt in events:
            captured = datetime.fromtimestamp(evt.captured_at_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")
            energy = f"{evt.probe.energy:.2f}" if evt.probe else ""
            table.add_row(captured, evt.domain, ", ".join(evt.tags), energy)
        console.print(table)

    @staticmethod
    def show_summary(title: str, data: dict[str, object], border_style: str = COLOR_INFO):
        """Display a summary table."""
        table = Table(title=title, box=box.ROUNDED, show_header=False, border_style=border_style)
        table.add_column("Metric", style="bold")
        table.add_column("Value")
        for key, value in data.items():
            table.add_row(key, str(value))
        console.print(table)


def format_reading(reading: TrendReading, label: str) -> str:
    """One-line rendering: state, sparkline, value, z."""
    color = STATE_COLORS.get(reading.state, "white")
    spark = f"{reading.sparkline} " if reading.sparkline else ""
    return f"[bold {color}]{reading.state}[/bold {color}] {spark}{label}={reading.value:.3f} z={reading.z_score:.2f}"


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {message}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[{COLOR_INFO}][i][/{COLOR_INFO}] {message}")
