"""CLI command to show one instant across several zones."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ...format import format_in_time_zone
from ...instant import Instant
from ...parse import parse_zoned
from ..base import BaseCLI

ROW_PATTERN = "yyyy-MM-dd HH:mm"


def build_compare_table(instant: Instant, zones: list[str], *, locale: str | None = None) -> Table:
    """Build a Rich table with one row per zone."""
    table = Table(title=f"{instant.isoformat()}")
    table.add_column("Zone", style="bold cyan")
    table.add_column("Wall clock")
    table.add_column("Offset", justify="right")
    table.add_column("Name", style="dim")

    for zone in zones:
        table.add_row(
            zone,
            format_in_time_zone(instant, zone, ROW_PATTERN, locale=locale),
            format_in_time_zone(instant, zone, "xxx"),
            format_in_time_zone(instant, zone, "zzzz", locale=locale),
        )
    return table


def compare_command(
    *,
    instant_text: str,
    zones: list[str],
    locale: str | None = None,
    console: Console | None = None,
) -> None:
    """Render the wall clock of ``instant_text`` in each of ``zones``."""
    cli = BaseCLI("compare")
    console = console or Console()

    def _compare() -> Table:
        return build_compare_table(parse_zoned(instant_text), zones, locale=locale)

    table = cli.handle_cli_operation(
        operation="compare", op_callable=_compare, echo_result=False
    )
    console.print(table)
