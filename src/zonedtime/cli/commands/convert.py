"""CLI commands for resolving offsets and converting between zones."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from ...format import format_in_time_zone, format_zoned
from ...instant import Instant
from ...offsets import format_offset, resolve_offset_minutes
from ...parse import parse_zoned
from ...transform import zoned_time_to_utc
from ..base import BaseCLI

DEFAULT_PATTERN = "yyyy-MM-dd HH:mm:ssXXX"


def _instant_or_now(text: str | None) -> Instant:
    if text is None:
        return Instant.from_datetime(datetime.now(UTC))
    return parse_zoned(text)


class ConvertCLI(BaseCLI):
    """CLI helpers for single-zone conversions."""

    def __init__(self) -> None:
        super().__init__("convert")

    def offset(self, *, zone: str, at: str | None) -> dict[str, Any]:
        """Resolve the offset of ``zone`` at ``at`` (default: now)."""

        def _offset() -> dict[str, Any]:
            instant = _instant_or_now(at)
            minutes = resolve_offset_minutes(instant, zone)
            return {
                "zone": zone,
                "at": instant.isoformat(),
                "minutes": minutes,
                "offset": format_offset(minutes),
            }

        return self.handle_cli_operation(operation="offset", op_callable=_offset)

    def to_zoned(self, *, instant: str, zone: str, pattern: str) -> str:
        """Show the wall clock of ``zone`` at a UTC (or offset) instant."""
        return self.handle_cli_operation(
            operation="to-zoned",
            op_callable=lambda: format_in_time_zone(instant, zone, pattern),
        )

    def to_utc(self, *, local: str, zone: str, strict: bool) -> str:
        """Interpret wall-clock text in ``zone`` and show the UTC instant."""
        return self.handle_cli_operation(
            operation="to-utc",
            op_callable=lambda: zoned_time_to_utc(local, zone, strict=strict).isoformat(),
        )

    def parse(self, *, text: str, zone: str | None) -> str:
        return self.handle_cli_operation(
            operation="parse",
            op_callable=lambda: parse_zoned(text, time_zone=zone).isoformat(),
        )

    def format(
        self,
        *,
        instant: str,
        pattern: str,
        zone: str | None,
        locale: str | None,
    ) -> str:
        """Format an instant in ``zone``, or as the system formatter would without one."""

        def _format() -> str:
            value = parse_zoned(instant)
            if zone is None:
                return format_zoned(value, pattern, locale=locale)
            return format_in_time_zone(value, zone, pattern, locale=locale)

        return self.handle_cli_operation(operation="format", op_callable=_format)
