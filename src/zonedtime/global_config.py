"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only defaults
and the names of environment variables that tune behavior at runtime.
"""

# Core Names
PACKAGE_NAME = "zonedtime"

# Locale used for localized zone names and month/day names when none is given
DEFAULT_LOCALE = "en_US"

# Zone used when the host's system zone cannot be detected
FALLBACK_SYSTEM_ZONE = "UTC"

# Environment overrides
# ZONEDTIME_SYSTEM_TZ: any zone descriptor ("Asia/Tokyo", "+09:00") used as system zone
SYSTEM_ZONE_ENV = "ZONEDTIME_SYSTEM_TZ"
# ZONEDTIME_ZONE_DATA: "host" (default) or "none" to run without zone data
ZONE_DATA_ENV = "ZONEDTIME_ZONE_DATA"
ZONE_DATA_HOST = "host"
ZONE_DATA_NONE = "none"
