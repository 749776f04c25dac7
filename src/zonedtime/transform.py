"""Conversion between true instants and faked-local instants.

to_faked_local shifts a true instant so that rendering it in the system
zone shows the wall clock of a target zone. to_true_instant undoes that.
Both go through the wall clock: the zone-naive reading of an instant in
some zone, held as milliseconds whose UTC fields are the wall-clock fields.

Converting a wall clock back to an instant needs the zone's offset at the
instant being computed. wall_clock_to_instant estimates with the offset in
effect at the wall-clock value, then re-resolves once at the estimate. Near
a DST transition a wall clock can be skipped or repeated; by default the
offset found by that correction pass wins silently. Pass ``strict=True`` to
raise NonexistentLocalTimeError or AmbiguousLocalTimeError instead.
"""

from __future__ import annotations

import logging
from datetime import datetime

from .errors import AmbiguousLocalTimeError, NonexistentLocalTimeError
from .instant import (
    MS_PER_MINUTE,
    FakedLocalInstant,
    Instant,
    millis_from_naive,
    naive_from_millis,
)
from .offsets import ZoneDescriptor, resolve_offset_minutes, to_millis
from .provider import ZoneDataProvider, get_default_provider

logger = logging.getLogger(__name__)

DAY_MS = 86_400_000

InstantLike = Instant | int | float | datetime


def _local_millis(millis: int, zone: ZoneDescriptor, provider: ZoneDataProvider) -> int:
    offset = resolve_offset_minutes(millis, zone, provider=provider)
    return millis + offset * MS_PER_MINUTE


def _check_wall_clock(wall_ms: int, zone: ZoneDescriptor, provider: ZoneDataProvider) -> None:
    """Raise if the wall clock is skipped or repeated in ``zone``."""
    offsets = {
        resolve_offset_minutes(probe, zone, provider=provider)
        for probe in (wall_ms - DAY_MS, wall_ms, wall_ms + DAY_MS)
    }
    matches = set()
    for offset in offsets:
        candidate = wall_ms - offset * MS_PER_MINUTE
        if resolve_offset_minutes(candidate, zone, provider=provider) == offset:
            matches.add(candidate)

    iso_str = naive_from_millis(wall_ms).isoformat()
    if not matches:
        raise NonexistentLocalTimeError(f"Nonexistent local time: {iso_str} in {zone}")
    if len(matches) > 1:
        raise AmbiguousLocalTimeError(f"Ambiguous local time: {iso_str} in {zone}")


def _wall_to_millis(
    wall_ms: int,
    zone: ZoneDescriptor,
    provider: ZoneDataProvider,
    *,
    strict: bool = False,
) -> int:
    if strict:
        _check_wall_clock(wall_ms, zone, provider)

    first = resolve_offset_minutes(wall_ms, zone, provider=provider)
    estimate = wall_ms - first * MS_PER_MINUTE
    corrected = resolve_offset_minutes(estimate, zone, provider=provider)
    if corrected == first:
        return estimate

    logger.debug(
        "Offset of %s changes near %s (%d -> %d min); using corrected offset",
        zone,
        naive_from_millis(wall_ms).isoformat(),
        first,
        corrected,
    )
    return wall_ms - corrected * MS_PER_MINUTE


def wall_clock(
    value: InstantLike,
    zone: ZoneDescriptor | None = None,
    *,
    provider: ZoneDataProvider | None = None,
) -> datetime:
    """Return the naive wall-clock reading of an instant in ``zone``.

    Args:
        value: Instant, epoch millis, or aware datetime.
        zone: Zone descriptor. Defaults to the system zone.
        provider: Zone data provider. Defaults to the process-wide provider.
    """
    provider = provider or get_default_provider()
    if zone is None:
        zone = provider.system_zone()
    return naive_from_millis(_local_millis(to_millis(value), zone, provider))


def render_naive(value: InstantLike, *, provider: ZoneDataProvider | None = None) -> datetime:
    """Render an instant the way a zone-naive formatter does: in the system zone.

    This is how a FakedLocalInstant shows its target zone's wall clock.
    """
    return wall_clock(value, None, provider=provider)


def wall_clock_to_instant(
    naive: datetime,
    zone: ZoneDescriptor,
    *,
    strict: bool = False,
    provider: ZoneDataProvider | None = None,
) -> Instant:
    """Interpret a naive wall-clock datetime in ``zone`` and return the true instant.

    Raises:
        ValueError: If ``naive`` carries tzinfo.
        InvalidTimeZoneError: If the zone cannot be resolved.
        NonexistentLocalTimeError: In strict mode, if the wall clock is skipped.
        AmbiguousLocalTimeError: In strict mode, if the wall clock is repeated.
    """
    if naive.tzinfo is not None:
        raise ValueError(f"Expected naive datetime, got timezone-aware: {naive}")
    provider = provider or get_default_provider()
    return Instant(_wall_to_millis(millis_from_naive(naive), zone, provider, strict=strict))


def coerce_instant(value: InstantLike, *, provider: ZoneDataProvider | None = None) -> Instant:
    """Normalize instant-like input to an Instant.

    Instants (faked or not) pass through. A naive datetime is read as a
    wall clock in the system zone.
    """
    if isinstance(value, Instant):
        return value
    if isinstance(value, datetime) and value.tzinfo is None:
        provider = provider or get_default_provider()
        return wall_clock_to_instant(value, provider.system_zone(), provider=provider)
    return Instant(to_millis(value))


def to_faked_local(
    value: InstantLike | str,
    zone: ZoneDescriptor,
    *,
    provider: ZoneDataProvider | None = None,
) -> FakedLocalInstant:
    """Shift a true instant so system-zone rendering shows ``zone``'s wall clock.

    Strings are parsed with parse_zoned first (an ISO-8601 UTC or offset
    string is the usual input).

    Raises:
        TypeError: If ``value`` is already a FakedLocalInstant.
        InvalidTimeZoneError: If the zone cannot be resolved.
        InvalidDateStringError: If a string input cannot be parsed.
    """
    if isinstance(value, FakedLocalInstant):
        raise TypeError("Value is already a faked-local instant; convert it back first")
    provider = provider or get_default_provider()

    if isinstance(value, str):
        from .parse import parse_zoned

        instant = parse_zoned(value, provider=provider)
    else:
        instant = coerce_instant(value, provider=provider)

    wall_ms = _local_millis(instant.millis, zone, provider)
    return FakedLocalInstant(_wall_to_millis(wall_ms, provider.system_zone(), provider))


def to_true_instant(
    value: InstantLike,
    zone: ZoneDescriptor,
    *,
    strict: bool = False,
    provider: ZoneDataProvider | None = None,
) -> Instant:
    """Inverse of to_faked_local.

    The system zone's offset is resolved at the faked value itself, since
    its nominal zone is the system zone. A naive datetime is taken as the
    wall clock directly.

    Raises:
        TypeError: If ``value`` is a string; text has no agreed zone here.
        InvalidTimeZoneError: If the zone cannot be resolved.
        NonexistentLocalTimeError: In strict mode, if the wall clock is skipped.
        AmbiguousLocalTimeError: In strict mode, if the wall clock is repeated.
    """
    if isinstance(value, str):
        raise TypeError(
            "Strings are not accepted here; use zoned_time_to_utc() or parse_zoned() for text"
        )
    provider = provider or get_default_provider()

    if isinstance(value, datetime) and value.tzinfo is None:
        wall_ms = millis_from_naive(value)
    else:
        wall_ms = _local_millis(to_millis(value), provider.system_zone(), provider)
    return Instant(_wall_to_millis(wall_ms, zone, provider, strict=strict))


def utc_to_zoned_time(
    value: InstantLike | str,
    zone: ZoneDescriptor,
    *,
    provider: ZoneDataProvider | None = None,
) -> FakedLocalInstant:
    """Alias of to_faked_local for the UTC → zoned display use case."""
    return to_faked_local(value, zone, provider=provider)


def zoned_time_to_utc(
    value: InstantLike | str,
    zone: ZoneDescriptor,
    *,
    strict: bool = False,
    provider: ZoneDataProvider | None = None,
) -> Instant:
    """Return the UTC instant for a wall clock observed in ``zone``.

    A string is wall-clock text in ``zone`` (an explicit offset in the text
    still wins). Anything else goes through to_true_instant.
    """
    if isinstance(value, str):
        from .parse import parse_zoned

        return parse_zoned(value, time_zone=zone, strict=strict, provider=provider)
    return to_true_instant(value, zone, strict=strict, provider=provider)
