"""Zone-aware formatting on top of Babel's LDML date formatter.

Babel does the pattern work: field vocabulary, padding, locale month and
day names. This module takes over every zone field, which Babel would
otherwise derive from the datetime it is handed:

    x..xxxxx  X..XXXXX  numeric offset (X renders zero as "Z")
    Z..ZZZ, ZZZZZ       numeric offset ("+0900", "+09:00"); ZZZZ as OOOO
    O, OOOO             localized GMT format ("GMT-4", "GMT-04:00")
    z..zzz, zzzz        short and long zone names from the zone data provider
    v, vvvv             short and long generic names ("ET", "Eastern Time")
    V..VVV, VVVV        zone identifier; VVVV is the long generic name

Zone fields are replaced by quoted literals computed from the offset
resolver and the provider, and Babel formats the rest from a naive
wall-clock datetime.

Two entry points:

- format_zoned renders the value the way a zone-naive formatter does, in
  the system zone. Only zone fields follow ``time_zone``. Pass it a
  FakedLocalInstant to show another zone's wall clock.
- format_in_time_zone renders a true instant directly in a zone.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from babel.dates import (
    format_datetime,
    get_date_format,
    get_datetime_format,
    get_time_format,
    tokenize_pattern,
)

from .instant import FakedLocalInstant, Instant
from .offsets import ZoneDescriptor, format_offset, is_fixed_offset, resolve_offset_minutes
from .options import FormatOptions, resolve_options
from .parse import parse_zoned
from .provider import ZoneDataProvider, get_default_provider
from .transform import InstantLike, coerce_instant, render_naive, to_true_instant, wall_clock

logger = logging.getLogger(__name__)

ZONE_FIELDS = frozenset("xXZOzvV")
NAMED_FORMATS = ("short", "medium", "long", "full")


def expand_named_format(pattern: str, locale: str) -> str:
    """Expand Babel's named formats into the locale's full date-time pattern."""
    if pattern not in NAMED_FORMATS:
        return pattern
    date_pattern = get_date_format(pattern, locale=locale).pattern
    time_pattern = get_time_format(pattern, locale=locale).pattern
    return (
        get_datetime_format(pattern, locale=locale)
        .replace("{0}", time_pattern)
        .replace("{1}", date_pattern)
    )


def format_gmt(minutes: int, *, long: bool = False) -> str:
    """Localized GMT format: "GMT", "GMT-4", "GMT+5:30", or "GMT-04:00" when long."""
    if minutes == 0:
        return "GMT"
    if long:
        return f"GMT{format_offset(minutes)}"
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"GMT{sign}{hours}" + (f":{mins:02d}" if mins else "")


def format_offset_field(char: str, count: int, minutes: int) -> str:
    """Render one x/X/Z/O field for an offset in minutes."""
    if char == "O" or (char == "Z" and count == 4):
        return format_gmt(minutes, long=count >= 4)
    if char == "Z":
        if count < 4:
            return format_offset(minutes, "")
        char = "X"
    if char == "X" and minutes == 0:
        return "Z"
    if count == 1:
        if minutes % 60 == 0:
            return format_offset(minutes)[:3]
        return format_offset(minutes, "")
    if count in (2, 4):
        return format_offset(minutes, "")
    return format_offset(minutes)


def _quote_literal(text: str) -> str:
    if any(ch.isalpha() for ch in text):
        return "'" + text.replace("'", "''") + "'"
    return text.replace("'", "''")


class _ZoneFields:
    """Zone values for one format call, evaluated at a single true instant."""

    def __init__(
        self,
        at: Instant,
        zone: ZoneDescriptor,
        locale: str,
        provider: ZoneDataProvider,
    ) -> None:
        self.at = at
        self.zone = zone
        self.locale = locale
        self.provider = provider
        self.offset = resolve_offset_minutes(at, zone, locale, provider=provider)

    def name(self, *, long: bool, generic: bool = False) -> str:
        if is_fixed_offset(self.zone):
            return format_gmt(self.offset, long=long)
        return self.provider.zone_name(
            self.at.millis,
            self.zone.strip(),
            self.locale,
            width="long" if long else "short",
            generic=generic,
        )

    def identifier(self) -> str:
        if is_fixed_offset(self.zone):
            return format_gmt(self.offset, long=True)
        return self.zone.strip()

    def render(self, char: str, count: int) -> str:
        if char == "z":
            return self.name(long=count >= 4)
        if char == "v":
            return self.name(long=count >= 4, generic=True)
        if char == "V":
            if count >= 4:
                return self.name(long=True, generic=True)
            return self.identifier()
        return format_offset_field(char, count, self.offset)


def _render(
    local: datetime,
    zone_fields: _ZoneFields,
    pattern: str,
) -> str:
    parts = []
    for kind, token in tokenize_pattern(expand_named_format(pattern, zone_fields.locale)):
        if kind == "chars":
            parts.append(_quote_literal(token))
            continue
        char, count = token
        if char in ZONE_FIELDS:
            parts.append(_quote_literal(zone_fields.render(char, count)))
        else:
            parts.append(char * count)

    rewritten = "".join(parts)
    logger.debug("Formatting %s in %s with %r", local.isoformat(), zone_fields.zone, rewritten)
    return format_datetime(local, rewritten, locale=zone_fields.locale)


def format_zoned(
    value: InstantLike,
    pattern: str,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    time_zone: ZoneDescriptor | None = None,
    locale: str | None = None,
    provider: ZoneDataProvider | None = None,
) -> str:
    """Format an instant with an LDML pattern, resolving zone fields per zone.

    Non-zone fields always show the value's wall clock in the system zone,
    exactly as a zone-naive formatter would. Zone fields use ``time_zone``
    (the system zone when absent). For a FakedLocalInstant they are
    evaluated at the true instant it stands for; any other value is
    evaluated at itself.

    Args:
        value: Instant, FakedLocalInstant, epoch millis, or datetime.
        pattern: LDML pattern (e.g. "yyyy-MM-dd HH:mm:ssXXX") or a named
            Babel format ("short", "medium", "long", "full").
        options: FormatOptions or mapping with ``time_zone``/``locale``.
        time_zone: Overrides ``options.time_zone``.
        locale: Overrides ``options.locale``.
        provider: Zone data provider. Defaults to the process-wide provider.

    Returns:
        The formatted string.

    Raises:
        InvalidTimeZoneError: If the zone cannot be resolved.
    """
    provider = provider or get_default_provider()
    opts = resolve_options(options, time_zone=time_zone, locale=locale)
    zone = opts.time_zone if opts.time_zone is not None else provider.system_zone()

    instant = coerce_instant(value, provider=provider)
    local = render_naive(instant, provider=provider)
    at = instant
    if isinstance(instant, FakedLocalInstant):
        at = to_true_instant(instant, zone, provider=provider)

    return _render(local, _ZoneFields(at, zone, opts.effective_locale, provider), pattern)


def format_in_time_zone(
    value: InstantLike | str,
    time_zone: ZoneDescriptor,
    pattern: str,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    locale: str | None = None,
    provider: ZoneDataProvider | None = None,
) -> str:
    """Format a true instant as it reads in ``time_zone``.

    Every field, zone fields included, shows ``time_zone``. The system zone
    plays no part, so wall clocks the system zone skips still render.
    Strings are parsed with parse_zoned first.

    Raises:
        TypeError: If ``value`` is a FakedLocalInstant; use format_zoned.
        InvalidTimeZoneError: If the zone cannot be resolved.
    """
    if isinstance(value, FakedLocalInstant):
        raise TypeError("Value is already a faked-local instant; format it with format_zoned()")
    provider = provider or get_default_provider()
    opts = resolve_options(options, time_zone=time_zone, locale=locale)

    if isinstance(value, str):
        instant = parse_zoned(value, provider=provider)
    else:
        instant = coerce_instant(value, provider=provider)

    local = wall_clock(instant, time_zone, provider=provider)
    return _render(local, _ZoneFields(instant, time_zone, opts.effective_locale, provider), pattern)
