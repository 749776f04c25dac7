"""
zonedtime core package.

Reason about a fixed instant and how it reads in any time zone, using the
host's zone data at call time instead of a bundled database:

- Offset resolution (`zonedtime.offsets`): zone descriptor + instant -> minutes
- Faked-local conversion (`zonedtime.transform`): true instant <-> an instant
  that renders another zone's wall clock when displayed zone-naively
- Zone-aware parsing (`zonedtime.parse`) and formatting (`zonedtime.format`)
- A Typer CLI (`zonedtime.cli`)

Configuration:
- Defaults and environment variable names live in `zonedtime.global_config`.
- Zone data comes from a pluggable provider (`zonedtime.provider`).
"""

from .errors import (
    AmbiguousLocalTimeError,
    InstantOutOfRangeError,
    InvalidDateStringError,
    InvalidTimeZoneError,
    NonexistentLocalTimeError,
    ZonedTimeError,
)
from .format import format_in_time_zone, format_zoned
from .instant import FakedLocalInstant, Instant
from .offsets import format_offset, resolve_offset_minutes
from .options import FormatOptions
from .parse import parse_zoned
from .provider import (
    HostZoneDataProvider,
    UnavailableZoneDataProvider,
    ZoneDataProvider,
    get_default_provider,
    set_default_provider,
)
from .transform import (
    render_naive,
    to_faked_local,
    to_true_instant,
    utc_to_zoned_time,
    wall_clock,
    wall_clock_to_instant,
    zoned_time_to_utc,
)

__all__ = [
    # Errors
    "AmbiguousLocalTimeError",
    "InstantOutOfRangeError",
    "InvalidDateStringError",
    "InvalidTimeZoneError",
    "NonexistentLocalTimeError",
    "ZonedTimeError",
    # Values and options
    "FakedLocalInstant",
    "FormatOptions",
    "Instant",
    # Zone data
    "HostZoneDataProvider",
    "UnavailableZoneDataProvider",
    "ZoneDataProvider",
    "get_default_provider",
    "set_default_provider",
    # Operations
    "format_in_time_zone",
    "format_offset",
    "format_zoned",
    "parse_zoned",
    "render_naive",
    "resolve_offset_minutes",
    "to_faked_local",
    "to_true_instant",
    "utc_to_zoned_time",
    "wall_clock",
    "wall_clock_to_instant",
    "zoned_time_to_utc",
]
