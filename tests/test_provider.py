"""Tests for zone data providers and default provider selection."""

from __future__ import annotations

import logging

import pytest

import zonedtime.provider as provider_module
from zonedtime.errors import InstantOutOfRangeError, InvalidTimeZoneError
from zonedtime.global_config import SYSTEM_ZONE_ENV, ZONE_DATA_ENV
from zonedtime.provider import (
    HostZoneDataProvider,
    UnavailableZoneDataProvider,
    ZoneDataProvider,
    detect_system_zone,
    get_default_provider,
    load_zone,
    provider_from_env,
    set_default_provider,
)

from conftest import FakeZoneDataProvider, utc_instant

JUNE_MS = utc_instant(2014, 6, 25, 10).millis


class TestSystemZoneDetection:
    def test_explicit_system_zone_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(SYSTEM_ZONE_ENV, "Europe/Paris")
        assert HostZoneDataProvider(system_zone="Asia/Tokyo").system_zone() == "Asia/Tokyo"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(SYSTEM_ZONE_ENV, "Europe/Paris")
        assert detect_system_zone() == "Europe/Paris"
        assert HostZoneDataProvider().system_zone() == "Europe/Paris"

    def test_uses_tzlocal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(provider_module.tzlocal, "get_localzone_name", lambda: "Asia/Seoul")
        assert detect_system_zone() == "Asia/Seoul"

    def test_falls_back_to_utc(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        def broken() -> str:
            raise LookupError("no /etc/localtime")

        monkeypatch.setattr(provider_module.tzlocal, "get_localzone_name", broken)
        with caplog.at_level(logging.WARNING, logger="zonedtime.provider"):
            assert detect_system_zone() == "UTC"
        assert "Could not detect system time zone" in caplog.text

    def test_unset_zone_falls_back_to_utc(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(provider_module.tzlocal, "get_localzone_name", lambda: None)
        assert detect_system_zone() == "UTC"


@pytest.mark.integration
class TestHostZoneDataProvider:
    """Host provider answers through formatted text only."""

    def test_offset_text_is_numeric_offset(self) -> None:
        provider = HostZoneDataProvider()
        assert provider.offset_text(JUNE_MS, "Asia/Kolkata") == "+0530"
        assert provider.offset_text(JUNE_MS, "America/New_York") == "-0400"

    def test_long_zone_name(self) -> None:
        provider = HostZoneDataProvider()
        assert provider.zone_name(JUNE_MS, "America/New_York", "en_US", width="long") == (
            "Eastern Daylight Time"
        )

    def test_generic_zone_name(self) -> None:
        provider = HostZoneDataProvider()
        name = provider.zone_name(JUNE_MS, "America/New_York", "en_US", width="long", generic=True)
        assert name == "Eastern Time"

    def test_out_of_range_millis(self) -> None:
        with pytest.raises(InstantOutOfRangeError):
            HostZoneDataProvider().offset_text(10**18, "Europe/Berlin")

    def test_zone_name_rejects_unknown_width(self) -> None:
        with pytest.raises(ValueError, match="width"):
            HostZoneDataProvider().zone_name(JUNE_MS, "America/New_York", width="narrow")

    def test_unknown_zone(self) -> None:
        with pytest.raises(InvalidTimeZoneError, match="Unrecognized"):
            HostZoneDataProvider().offset_text(JUNE_MS, "Nowhere/Special")

    def test_load_zone(self) -> None:
        assert load_zone("Europe/Berlin").key == "Europe/Berlin"


class TestUnavailableZoneDataProvider:
    def test_every_query_raises(self) -> None:
        provider = UnavailableZoneDataProvider()
        with pytest.raises(InvalidTimeZoneError):
            provider.offset_text(JUNE_MS, "Europe/Berlin")
        with pytest.raises(InvalidTimeZoneError):
            provider.zone_name(JUNE_MS, "Europe/Berlin")

    def test_system_zone_defaults_to_utc(self) -> None:
        assert UnavailableZoneDataProvider().system_zone() == "UTC"
        assert UnavailableZoneDataProvider("+02:00").system_zone() == "+02:00"


class TestDefaultProvider:
    def test_env_selects_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert isinstance(provider_from_env(), HostZoneDataProvider)
        monkeypatch.setenv(ZONE_DATA_ENV, "none")
        assert isinstance(provider_from_env(), UnavailableZoneDataProvider)
        monkeypatch.setenv(ZONE_DATA_ENV, "HOST")
        assert isinstance(provider_from_env(), HostZoneDataProvider)

    def test_env_rejects_unknown_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ZONE_DATA_ENV, "cloud")
        with pytest.raises(ValueError, match=ZONE_DATA_ENV):
            provider_from_env()

    def test_default_is_created_once_and_resettable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        set_default_provider(None)
        monkeypatch.setenv(ZONE_DATA_ENV, "none")
        first = get_default_provider()
        assert isinstance(first, UnavailableZoneDataProvider)
        assert get_default_provider() is first

        fake = FakeZoneDataProvider()
        set_default_provider(fake)
        assert get_default_provider() is fake


def test_providers_satisfy_protocol() -> None:
    assert isinstance(HostZoneDataProvider(), ZoneDataProvider)
    assert isinstance(UnavailableZoneDataProvider(), ZoneDataProvider)
    assert isinstance(FakeZoneDataProvider(), ZoneDataProvider)
