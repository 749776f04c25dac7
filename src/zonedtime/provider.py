"""Zone data providers.

A provider is the only way zonedtime learns anything about an IANA zone.
Its contract is deliberately small: format an instant in a zone as offset
text, format it as a localized zone name, and report the system zone. The
offset resolver parses the offset text back into minutes, so a provider
never exposes an offset table directly.

Providers:
- HostZoneDataProvider: host tzdata through ``zoneinfo``, localized names
  through Babel's CLDR data, system zone through ``tzlocal``.
- UnavailableZoneDataProvider: a host without zone data. Fixed offsets keep
  working; every IANA query raises InvalidTimeZoneError.

Tests and callers can substitute any object implementing ZoneDataProvider.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal
from babel.dates import get_timezone_name

from .errors import InstantOutOfRangeError, InvalidTimeZoneError
from .global_config import (
    DEFAULT_LOCALE,
    FALLBACK_SYSTEM_ZONE,
    SYSTEM_ZONE_ENV,
    ZONE_DATA_ENV,
    ZONE_DATA_HOST,
    ZONE_DATA_NONE,
)
from .instant import EPOCH

logger = logging.getLogger(__name__)

NAME_WIDTHS = ("short", "long")


@runtime_checkable
class ZoneDataProvider(Protocol):
    """Minimal contract for a host zone-data service."""

    def system_zone(self) -> str:
        """Return the zone descriptor naive rendering happens in."""
        ...

    def offset_text(self, millis: int, zone_id: str, locale: str | None = None) -> str:
        """Format ``millis`` in ``zone_id`` as numeric offset text.

        Accepted shapes: ``+HHMM``, ``+HH:MM``, ``+HHMMSS``, optionally
        prefixed with ``GMT`` or ``UTC``, or a bare ``GMT``/``UTC`` for zero.
        """
        ...

    def zone_name(
        self,
        millis: int,
        zone_id: str,
        locale: str | None = None,
        *,
        width: str = "short",
        generic: bool = False,
    ) -> str:
        """Return the localized display name of ``zone_id`` at ``millis``.

        ``width`` is "short" or "long". With ``generic`` the name does not
        distinguish standard from daylight time ("Eastern Time").
        """
        ...


def load_zone(zone_id: str) -> ZoneInfo:
    """Load an IANA zone from host tzdata.

    Raises:
        InvalidTimeZoneError: If the identifier is unknown or malformed.
    """
    if not isinstance(zone_id, str) or not zone_id.strip():
        raise InvalidTimeZoneError(f"Time zone identifier must be non-empty, got: {zone_id!r}")
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimeZoneError(f"Unrecognized time zone identifier: {zone_id!r}") from e


def detect_system_zone() -> str:
    """Best-effort name of the host's system zone.

    Checks the ZONEDTIME_SYSTEM_TZ override, then asks tzlocal. Falls back
    to UTC when detection fails.
    """
    override = os.environ.get(SYSTEM_ZONE_ENV, "").strip()
    if override:
        return override

    try:
        name = tzlocal.get_localzone_name()
    except (LookupError, ValueError, OSError) as e:
        logger.warning(
            "Could not detect system time zone (%s); using %s", e, FALLBACK_SYSTEM_ZONE
        )
        return FALLBACK_SYSTEM_ZONE

    if not name:
        logger.warning("System time zone is not set; using %s", FALLBACK_SYSTEM_ZONE)
        return FALLBACK_SYSTEM_ZONE
    return name


class HostZoneDataProvider:
    """Zone data from the host: tzdata for offsets, CLDR for names."""

    def __init__(self, system_zone: str | None = None) -> None:
        self._system_zone = system_zone

    def __repr__(self) -> str:
        return f"HostZoneDataProvider(system_zone={self._system_zone!r})"

    def system_zone(self) -> str:
        return self._system_zone or detect_system_zone()

    def offset_text(self, millis: int, zone_id: str, locale: str | None = None) -> str:
        return self._localize(millis, zone_id).strftime("%z")

    def zone_name(
        self,
        millis: int,
        zone_id: str,
        locale: str | None = None,
        *,
        width: str = "short",
        generic: bool = False,
    ) -> str:
        if width not in NAME_WIDTHS:
            raise ValueError(f"width must be one of {NAME_WIDTHS}, got: {width}")
        # Babel names a bare tzinfo generically and a datetime specifically
        target = load_zone(zone_id) if generic else self._localize(millis, zone_id)
        return get_timezone_name(target, width=width, locale=locale or DEFAULT_LOCALE)

    @staticmethod
    def _localize(millis: int, zone_id: str) -> datetime:
        zone = load_zone(zone_id)
        try:
            return (EPOCH + timedelta(milliseconds=millis)).astimezone(zone)
        except OverflowError as e:
            raise InstantOutOfRangeError(f"Instant out of range: {millis} ms") from e


class UnavailableZoneDataProvider:
    """Stand-in for a host with no zone data at all."""

    def __init__(self, system_zone: str | None = None) -> None:
        self._system_zone = system_zone

    def __repr__(self) -> str:
        return f"UnavailableZoneDataProvider(system_zone={self._system_zone!r})"

    def system_zone(self) -> str:
        return self._system_zone or FALLBACK_SYSTEM_ZONE

    def offset_text(self, millis: int, zone_id: str, locale: str | None = None) -> str:
        raise InvalidTimeZoneError(
            f"Cannot resolve {zone_id!r}: no zone data available on this host"
        )

    def zone_name(
        self,
        millis: int,
        zone_id: str,
        locale: str | None = None,
        *,
        width: str = "short",
        generic: bool = False,
    ) -> str:
        raise InvalidTimeZoneError(
            f"Cannot name {zone_id!r}: no zone data available on this host"
        )


_default_provider: ZoneDataProvider | None = None


def provider_from_env() -> ZoneDataProvider:
    """Build the provider selected by ZONEDTIME_ZONE_DATA.

    Raises:
        ValueError: If the variable holds an unknown value.
    """
    choice = os.environ.get(ZONE_DATA_ENV, ZONE_DATA_HOST).strip().lower() or ZONE_DATA_HOST
    if choice == ZONE_DATA_HOST:
        return HostZoneDataProvider()
    if choice == ZONE_DATA_NONE:
        logger.debug("Zone data disabled via %s", ZONE_DATA_ENV)
        return UnavailableZoneDataProvider()
    raise ValueError(
        f"{ZONE_DATA_ENV} must be one of '{ZONE_DATA_HOST}', '{ZONE_DATA_NONE}', got: {choice}"
    )


def get_default_provider() -> ZoneDataProvider:
    """Return the process-wide provider, creating it from the environment once."""
    global _default_provider
    if _default_provider is None:
        _default_provider = provider_from_env()
    return _default_provider


def set_default_provider(provider: ZoneDataProvider | None) -> None:
    """Install a process-wide provider; None re-reads the environment on next use."""
    global _default_provider
    _default_provider = provider
