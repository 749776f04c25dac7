"""Configuration bag shared by the parser and the formatter."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from .global_config import DEFAULT_LOCALE
from .offsets import ZoneDescriptor


@dataclass(frozen=True)
class FormatOptions:
    """Zone and locale configuration for a single call.

    Attributes:
        time_zone: Target zone descriptor. None means the system zone.
        locale: Babel locale identifier (e.g. "en_US", "de_DE"). None means
            DEFAULT_LOCALE.
    """

    time_zone: ZoneDescriptor | None = None
    locale: str | None = None

    @property
    def effective_locale(self) -> str:
        return self.locale or DEFAULT_LOCALE


def resolve_options(
    options: FormatOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> FormatOptions:
    """Merge an options object (or mapping) with keyword overrides.

    Overrides that are None leave the option unchanged.

    Raises:
        TypeError: If the mapping or overrides name an unknown option.
    """
    if options is None:
        resolved = FormatOptions()
    elif isinstance(options, FormatOptions):
        resolved = options
    elif isinstance(options, Mapping):
        known = {f.name for f in fields(FormatOptions)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise TypeError(f"Unknown options: {', '.join(unknown)}")
        resolved = FormatOptions(**options)
    else:
        raise TypeError(f"Expected FormatOptions or a mapping, got {type(options).__name__}")

    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(resolved, **changes) if changes else resolved
