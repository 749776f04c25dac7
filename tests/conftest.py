from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime

import pytest

from zonedtime.errors import InvalidTimeZoneError
from zonedtime.global_config import SYSTEM_ZONE_ENV, ZONE_DATA_ENV
from zonedtime.instant import Instant
from zonedtime.provider import HostZoneDataProvider, set_default_provider


def utc_instant(*args: int) -> Instant:
    """Instant for a UTC calendar time, e.g. utc_instant(2014, 6, 25, 10)."""
    return Instant.from_datetime(datetime(*args, tzinfo=UTC))


# 2014-03-09T07:00:00Z, when "Test/Switch" moves from -05:00 to -04:00
SWITCH_MS = utc_instant(2014, 3, 9, 7).millis


class FakeZoneDataProvider:
    """Deterministic zone data for tests; records every offset query."""

    def __init__(self, system_zone: str = "UTC") -> None:
        self._system_zone = system_zone
        self.offset_calls: list[tuple[int, str, str | None]] = []

    def system_zone(self) -> str:
        return self._system_zone

    def offset_text(self, millis: int, zone_id: str, locale: str | None = None) -> str:
        self.offset_calls.append((millis, zone_id, locale))
        if zone_id == "Test/Plus90":
            return "GMT+01:30"
        if zone_id == "Test/Switch":
            return "-0400" if millis >= SWITCH_MS else "-0500"
        if zone_id == "Test/Quote":
            return "+0000"
        if zone_id == "Test/Garbled":
            return "about five hours"
        raise InvalidTimeZoneError(f"Unrecognized time zone identifier: {zone_id!r}")

    def zone_name(
        self,
        millis: int,
        zone_id: str,
        locale: str | None = None,
        *,
        width: str = "short",
        generic: bool = False,
    ) -> str:
        if zone_id == "Test/Switch":
            if generic:
                return "Test Time" if width == "long" else "TT"
            daylight = millis >= SWITCH_MS
            if width == "long":
                return "Test Daylight Time" if daylight else "Test Standard Time"
            return "TDT" if daylight else "TST"
        if zone_id == "Test/Quote":
            return "O'Higgins Time"
        return f"{zone_id} ({locale})"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Remove zonedtime environment overrides so host settings never leak in.
    Automatically applied to all tests.
    """
    monkeypatch.delenv(SYSTEM_ZONE_ENV, raising=False)
    monkeypatch.delenv(ZONE_DATA_ENV, raising=False)


@pytest.fixture(autouse=True)
def utc_system_zone() -> Generator[HostZoneDataProvider, None, None]:
    """
    Install host zone data with UTC as the system zone, so naive rendering
    does not depend on the machine running the tests.
    """
    provider = HostZoneDataProvider(system_zone="UTC")
    set_default_provider(provider)
    yield provider
    set_default_provider(None)


@pytest.fixture
def tokyo_provider() -> HostZoneDataProvider:
    """Host zone data with Asia/Tokyo (UTC+9, no DST) as the system zone."""
    return HostZoneDataProvider(system_zone="Asia/Tokyo")


@pytest.fixture
def fake_provider() -> FakeZoneDataProvider:
    return FakeZoneDataProvider()
