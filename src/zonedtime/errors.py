"""Exception types raised by zonedtime operations."""

from __future__ import annotations


class ZonedTimeError(ValueError):
    """Base exception for zone resolution, parsing, and conversion errors."""


class InvalidTimeZoneError(ZonedTimeError):
    """Raised for a malformed fixed offset or an unrecognized IANA identifier.

    Also raised when IANA resolution is requested but no zone data is
    available on the host. Fixed offsets never need zone data.
    """


class InvalidDateStringError(ZonedTimeError):
    """Raised when date/time text cannot be parsed."""


class AmbiguousLocalTimeError(ZonedTimeError):
    """Raised in strict mode when a wall-clock time occurs twice (DST fall-back).

    The default conversion picks the offset in effect after one correction
    pass instead of raising.
    """


class NonexistentLocalTimeError(ZonedTimeError):
    """Raised in strict mode when a wall-clock time is skipped (DST spring-forward)."""


class InstantOutOfRangeError(ZonedTimeError):
    """Raised when an instant falls outside the range datetime can represent."""
