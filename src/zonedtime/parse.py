"""Zone-aware parsing of ISO-8601 text.

Rules, in precedence order:

1. Text with an offset attached to the time (``Z``, ``±HH:mm``, ``±HHmm``,
   ``±HH``) is parsed as is; the offset wins over any configured zone.
2. Text ending in a space-separated zone token (``... America/New_York``)
   is parsed as a wall clock in that zone.
3. Otherwise, a configured ``time_zone`` is the wall clock's zone.
4. Otherwise, the wall clock is read in the system zone.

ISO-8601 itself is delegated to ``datetime.fromisoformat``. Zone
abbreviations such as ``PDT`` are not mapped to zones; a token that is not
a fixed offset or known identifier raises InvalidTimeZoneError.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .errors import InvalidDateStringError
from .instant import Instant
from .offsets import ZoneDescriptor
from .options import FormatOptions, resolve_options
from .provider import ZoneDataProvider, get_default_provider
from .transform import InstantLike, coerce_instant, wall_clock_to_instant

logger = logging.getLogger(__name__)

_TRAILING_ZONE_PATTERN = re.compile(
    r"^(?P<body>.*\S)\s+(?P<zone>[A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*)$"
)


def _parse_iso(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def split_zone_suffix(text: str) -> tuple[str, str | None]:
    """Split a trailing space-separated zone token off ``text``.

    Returns:
        (body, zone) where zone is None when there is no trailing token.
    """
    match = _TRAILING_ZONE_PATTERN.match(text.strip())
    if match is None:
        return text.strip(), None
    return match.group("body"), match.group("zone")


def parse_zoned(
    value: str | InstantLike,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    time_zone: ZoneDescriptor | None = None,
    strict: bool = False,
    provider: ZoneDataProvider | None = None,
) -> Instant:
    """Parse date/time text into a true instant, honoring zone information.

    Args:
        value: ISO-8601 text, optionally followed by a zone token. Instants,
            epoch numbers and datetimes pass through; time_zone is ignored
            for them.
        options: FormatOptions or mapping; only ``time_zone`` is used.
        time_zone: Overrides ``options.time_zone``.
        strict: Raise on skipped or repeated wall clocks instead of
            resolving them silently.
        provider: Zone data provider. Defaults to the process-wide provider.

    Returns:
        The true Instant.

    Raises:
        InvalidDateStringError: If the date/time part is malformed.
        InvalidTimeZoneError: If a trailing zone token or the configured zone
            cannot be resolved.
    """
    provider = provider or get_default_provider()

    if not isinstance(value, str):
        instant = coerce_instant(value, provider=provider)
        return type(instant)(instant.millis)

    text = value.strip()
    if not text:
        raise InvalidDateStringError("Date string must be non-empty")

    opts = resolve_options(options, time_zone=time_zone)

    parsed = _parse_iso(text)
    if parsed is None:
        body, zone = split_zone_suffix(text)
        parsed = _parse_iso(body) if zone is not None else None
        if parsed is None:
            raise InvalidDateStringError(f"Invalid date string: {value!r}")
        if parsed.tzinfo is None:
            logger.debug("Parsing %r as wall clock in trailing zone %s", body, zone)
            return wall_clock_to_instant(parsed, zone, strict=strict, provider=provider)

    if parsed.tzinfo is not None:
        return Instant.from_datetime(parsed)

    zone = opts.time_zone
    if zone is None:
        zone = provider.system_zone()
        logger.debug("No zone in %r; reading it in system zone %s", text, zone)
    return wall_clock_to_instant(parsed, zone, strict=strict, provider=provider)
