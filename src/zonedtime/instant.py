"""Instant value types.

An Instant is an absolute point in time stored as integer milliseconds since
the Unix epoch. A FakedLocalInstant is an Instant whose millisecond value has
been shifted so that rendering it in the system zone shows the wall clock of
some other zone. The target zone is not carried on the value; it must be
supplied again whenever the value is formatted with zone tokens.

Both types are frozen, and equality is class-sensitive:
``Instant(0) != FakedLocalInstant(0)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from .errors import InstantOutOfRangeError

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
NAIVE_EPOCH = datetime(1970, 1, 1)

MS_PER_MINUTE = 60_000
_ONE_MS = timedelta(milliseconds=1)

# Two days inside datetime's range, so wall clocks and the probes around
# them stay representable for any offset.
MIN_MILLIS = (datetime(1, 1, 3, tzinfo=UTC) - EPOCH) // _ONE_MS
MAX_MILLIS = (datetime(9999, 12, 29, tzinfo=UTC) - EPOCH) // _ONE_MS


@dataclass(frozen=True)
class Instant:
    """Absolute point in time, in milliseconds since the epoch."""

    millis: int

    def __post_init__(self) -> None:
        if isinstance(self.millis, bool) or not isinstance(self.millis, int):
            raise TypeError(
                f"millis must be an int, got {type(self.millis).__name__}: {self.millis!r}"
            )
        if not MIN_MILLIS <= self.millis <= MAX_MILLIS:
            raise InstantOutOfRangeError(
                f"Instant out of range: {self.millis} ms is outside {MIN_MILLIS}..{MAX_MILLIS}"
            )

    @classmethod
    def from_datetime(cls, dt: datetime) -> Instant:
        """Build from a timezone-aware datetime.

        Raises:
            ValueError: If dt is naive (the caller must say which zone it is in).
            InstantOutOfRangeError: If dt is within two days of datetime's limits.
        """
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise ValueError(
                f"Cannot build an instant from naive datetime {dt}. "
                "Use wall_clock_to_instant() with a zone instead."
            )
        return cls(millis_from_datetime(dt))

    def to_datetime(self) -> datetime:
        """Return the instant as an aware UTC datetime."""
        return EPOCH + timedelta(milliseconds=self.millis)

    def isoformat(self) -> str:
        """Format as YYYY-MM-DDTHH:MM:SS.mmmZ."""
        return self.to_datetime().isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class FakedLocalInstant(Instant):
    """Instant shifted for zone-naive display of another zone's wall clock."""


def millis_from_datetime(dt: datetime) -> int:
    """Milliseconds since epoch for an aware datetime (sub-millisecond part floored)."""
    return (dt - EPOCH) // _ONE_MS


def millis_from_naive(dt: datetime) -> int:
    """Milliseconds for a naive datetime's fields read as if they were UTC."""
    return (dt - NAIVE_EPOCH) // _ONE_MS


def naive_from_millis(millis: int) -> datetime:
    """Naive datetime whose fields are the UTC fields of ``millis``."""
    return NAIVE_EPOCH + timedelta(milliseconds=millis)
