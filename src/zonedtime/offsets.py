"""Offset resolution.

Offsets are integer minutes EAST of UTC: ``"+04:00"`` is 240, New York in
June is -240.

A zone descriptor is either an int (minutes east of UTC), a fixed-offset
string (``±HH:mm``, ``±HHmm``, ``±HH``, ``Z`` or ``UTC``), or an IANA
identifier. Fixed offsets are parsed directly and never touch zone data.
IANA identifiers go through the zone data provider, which formats the
instant as offset text; that text is parsed back into minutes here.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime

from .errors import InstantOutOfRangeError, InvalidTimeZoneError
from .instant import Instant, millis_from_datetime
from .provider import ZoneDataProvider, get_default_provider

logger = logging.getLogger(__name__)

ZoneDescriptor = int | str

MAX_OFFSET_MINUTES = 24 * 60 - 1
UTC_ALIASES = frozenset({"Z", "UTC"})

_FIXED_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2})(?::?(\d{2}))?$")
_OFFSET_TEXT_PATTERN = re.compile(
    r"^(?:GMT|UTC)?(?:([+-])(\d{1,2})(?::?(\d{2}))?(?::?(\d{2}))?)?$"
)


def to_millis(value: Instant | int | float | datetime) -> int:
    """Epoch milliseconds for an Instant, an epoch number, or an aware datetime.

    Raises:
        ValueError: If value is a naive datetime.
        TypeError: If value is of an unsupported type.
        InstantOutOfRangeError: If value is outside the supported range.
    """
    if isinstance(value, Instant):
        return value.millis
    if isinstance(value, bool):
        raise TypeError(f"Expected an instant, got bool: {value}")
    if isinstance(value, int):
        return Instant(value).millis
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InstantOutOfRangeError(f"Instant out of range: {value}")
        return Instant(int(value // 1)).millis
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(f"Cannot resolve an offset for naive datetime {value}")
        return Instant(millis_from_datetime(value)).millis
    raise TypeError(f"Expected an instant, got {type(value).__name__}: {value!r}")


def _checked_minutes(sign: str, hours: str, minutes: str | None, source: object) -> int:
    h = int(hours)
    m = int(minutes) if minutes else 0
    if h > 23 or m > 59:
        raise InvalidTimeZoneError(f"Offset out of range: {source!r}")
    total = h * 60 + m
    return -total if sign == "-" else total


def fixed_offset_minutes(zone: ZoneDescriptor) -> int | None:
    """Return minutes for a fixed-offset descriptor, or None for IANA identifiers.

    Raises:
        InvalidTimeZoneError: If the descriptor looks like an offset but is
            malformed or out of range.
    """
    if isinstance(zone, bool):
        raise InvalidTimeZoneError(f"Invalid time zone descriptor: {zone!r}")
    if isinstance(zone, int):
        if abs(zone) > MAX_OFFSET_MINUTES:
            raise InvalidTimeZoneError(f"Offset out of range: {zone} minutes")
        return zone
    if not isinstance(zone, str):
        raise InvalidTimeZoneError(
            f"Time zone must be an offset or identifier, got {type(zone).__name__}: {zone!r}"
        )

    text = zone.strip()
    if text in UTC_ALIASES:
        return 0
    if not text.startswith(("+", "-")):
        return None

    match = _FIXED_OFFSET_PATTERN.match(text)
    if match is None:
        raise InvalidTimeZoneError(
            f"Malformed fixed offset {zone!r}; expected ±HH:mm, ±HHmm or ±HH"
        )
    return _checked_minutes(*match.groups(), source=zone)


def is_fixed_offset(zone: ZoneDescriptor) -> bool:
    return fixed_offset_minutes(zone) is not None


def parse_offset_text(text: str) -> int:
    """Parse offset text produced by a zone data provider into minutes.

    Seconds, when present (historical local mean time), are dropped.

    Raises:
        InvalidTimeZoneError: If the text is not offset-shaped.
    """
    cleaned = (text or "").strip()
    match = _OFFSET_TEXT_PATTERN.match(cleaned) if cleaned else None
    if match is None:
        raise InvalidTimeZoneError(f"Unparseable offset text from zone data: {text!r}")
    sign, hours, minutes, _seconds = match.groups()
    if sign is None:
        return 0
    return _checked_minutes(sign, hours, minutes, source=text)


def resolve_offset_minutes(
    value: Instant | int | float | datetime,
    zone: ZoneDescriptor,
    locale: str | None = None,
    *,
    provider: ZoneDataProvider | None = None,
) -> int:
    """Return the UTC offset of ``zone`` in effect at ``value``, in minutes.

    Args:
        value: The instant to evaluate at (Instant, epoch millis, aware datetime).
        zone: Zone descriptor (int minutes, fixed-offset string, IANA identifier).
        locale: Passed through to the provider's offset formatting.
        provider: Zone data provider. Defaults to the process-wide provider.

    Returns:
        Minutes east of UTC.

    Raises:
        InvalidTimeZoneError: If the descriptor is malformed or unknown, or no
            zone data is available for an IANA identifier.
    """
    fixed = fixed_offset_minutes(zone)
    if fixed is not None:
        return fixed

    millis = to_millis(value)
    provider = provider or get_default_provider()
    text = provider.offset_text(millis, zone.strip(), locale)
    minutes = parse_offset_text(text)
    logger.debug("Resolved %s at %d ms: %r -> %d min", zone, millis, text, minutes)
    return minutes


def format_offset(minutes: int, separator: str = ":") -> str:
    """Format minutes as ±HH:MM (or ±HHMM with an empty separator)."""
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{mins:02d}"
