"""Constants shared between the components and the datetime type."""

Nanos = int  # 0-1_999_999_999 in a time of day (>= 1e9: leap second)

# Supported (proleptic Gregorian) year range, inclusive
MIN_YEAR = -262_144
MAX_YEAR = 262_143

# Days are counted from the start of the common era: 0001-01-01 is day 1,
# the same numbering as ``datetime.date.toordinal()``.
# This is the day number of the Unix epoch, 1970-01-01.
UNIX_EPOCH_DAYS = 719_163

# A carry of this many seconds (or more) is guaranteed to overflow any
# date, since the whole supported year range spans fewer seconds.
# Checking against it first keeps the carry within delta bounds.
MAX_SECS_BITS = 44

SECS_PER_DAY = 86_400
NS_PER_SEC = 1_000_000_000
NS_PER_DAY = SECS_PER_DAY * NS_PER_SEC

# Nanosecond values at or above this are inside a leap second
LEAP_NANOS = NS_PER_SEC
MAX_NANOS = 2 * NS_PER_SEC  # exclusive

# Durations are limited to 2**63 - 1 milliseconds in both directions,
# which makes negation always safe.
MAX_DELTA_NANOS = (2**63 - 1) * 1_000_000
