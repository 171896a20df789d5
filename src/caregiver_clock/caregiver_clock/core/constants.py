"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta, timezone

# The organization operates in a single fixed offset; stored timestamps are
# wall-clock values in this zone and must round-trip bit-exact.
BUSINESS_UTC_OFFSET_HOURS = -5
BUSINESS_TZ = timezone(timedelta(hours=BUSINESS_UTC_OFFSET_HOURS))

STORE_DATETIME_FORMAT = "%d/%m/%Y, %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

MAX_SHIFT_HOURS = 24
LONG_SHIFT_HOURS = 8

ROSTER_HEADER_TOKENS = frozenset({"nombre", "name"})

DEFAULT_STORE_TIMEOUT_SECONDS = 10
