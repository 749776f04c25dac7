from __future__ import annotations

from typing import Annotated

import typer

from ..provider import HostZoneDataProvider, set_default_provider
from .base import configure_logging, get_version
from .commands.compare import compare_command
from .commands.convert import DEFAULT_PATTERN, ConvertCLI

configure_logging()
app = typer.Typer(
    help="Resolve time zone offsets and convert instants between zones.",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    system_tz: Annotated[
        str | None,
        typer.Option(
            "--system-tz",
            help="Zone to treat as the system zone (default: detected from the host)",
        ),
    ] = None,
) -> None:
    """Resolve time zone offsets and convert instants between zones."""
    if system_tz:
        set_default_provider(HostZoneDataProvider(system_zone=system_tz))


@app.command("offset")
def offset(
    zone: Annotated[str, typer.Argument(help="IANA identifier or fixed offset (e.g. +05:30)")],
    at: Annotated[
        str | None,
        typer.Option("--at", help="ISO-8601 instant to evaluate at (default: now)"),
    ] = None,
) -> None:
    """Show a zone's UTC offset at an instant."""
    ConvertCLI().offset(zone=zone, at=at)


@app.command("to-zoned")
def to_zoned(
    instant: Annotated[str, typer.Argument(help="ISO-8601 instant, e.g. 2014-06-25T10:00:00Z")],
    zone: Annotated[str, typer.Argument(help="Target zone")],
    pattern: Annotated[
        str,
        typer.Option("-p", "--pattern", help="LDML pattern for the output"),
    ] = DEFAULT_PATTERN,
) -> None:
    """Show the wall clock observed in ZONE at INSTANT."""
    ConvertCLI().to_zoned(instant=instant, zone=zone, pattern=pattern)


@app.command("to-utc")
def to_utc(
    local: Annotated[str, typer.Argument(help="Wall-clock text, e.g. 2014-06-25T10:00:00")],
    zone: Annotated[str, typer.Argument(help="Zone the wall clock was read in")],
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on wall clocks skipped or repeated by DST"),
    ] = False,
) -> None:
    """Convert a wall clock observed in ZONE to a UTC instant."""
    ConvertCLI().to_utc(local=local, zone=zone, strict=strict)


@app.command("parse")
def parse(
    text: Annotated[str, typer.Argument(help="ISO-8601 text, optionally ending in a zone")],
    tz: Annotated[
        str | None,
        typer.Option("--tz", help="Zone for text without offset or zone token"),
    ] = None,
) -> None:
    """Parse date/time text into a UTC instant."""
    ConvertCLI().parse(text=text, zone=tz)


@app.command("format")
def format_(
    instant: Annotated[str, typer.Argument(help="ISO-8601 instant")],
    pattern: Annotated[str, typer.Argument(help="LDML pattern or short/medium/long/full")],
    tz: Annotated[str | None, typer.Option("--tz", help="Zone to format in")] = None,
    locale: Annotated[str | None, typer.Option("--locale", help="Babel locale, e.g. de_DE")] = None,
) -> None:
    """Format an instant with zone-aware offset and name fields."""
    ConvertCLI().format(instant=instant, pattern=pattern, zone=tz, locale=locale)


@app.command("compare")
def compare(
    instant: Annotated[str, typer.Argument(help="ISO-8601 instant")],
    zones: Annotated[list[str], typer.Argument(help="Zones to show")],
    locale: Annotated[str | None, typer.Option("--locale", help="Babel locale")] = None,
) -> None:
    """Show one instant as it reads in several zones."""
    compare_command(instant_text=instant, zones=zones, locale=locale)


@app.command("version")
def version_() -> None:
    """Print the installed zonedtime version."""
    typer.echo(get_version())


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.
    """
    app()


if __name__ == "__main__":
    main()
