# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - The value types live in one file, so they can refer to each other
#   without circular imports. Calendar math, formatting and parsing work
#   on plain integers (day numbers, seconds, nanoseconds) in their own
#   modules.
# - Dates are stored as a day number counted from 0001-01-01 (day 1).
#   Times are stored as seconds since midnight plus nanoseconds, where
#   nanoseconds >= 1_000_000_000 mark a leap second.
from __future__ import annotations

__version__ = "0.1.0"

import enum
import re
from struct import pack, unpack
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Iterable,
    Optional,
    Tuple,
    no_type_check,
    overload,
)

from ._common import (
    LEAP_NANOS,
    MAX_DELTA_NANOS,
    MAX_NANOS,
    MAX_SECS_BITS,
    MAX_YEAR,
    MIN_YEAR,
    NS_PER_DAY,
    NS_PER_SEC,
    SECS_PER_DAY,
    UNIX_EPOCH_DAYS,
)
from ._format import (
    DATE_ITEMS,
    DATETIME_ITEMS,
    TIME_ITEMS,
    Item,
    format_fraction,
    render,
    strftime_items,
)
from ._math import (
    days_before_year,
    days_in_month,
    days_in_year,
    days_to_iso_week_date,
    days_to_ymd,
    iso_weekday,
    year_in_range,
    ymd_to_days,
)
from ._parse import date_from_items, datetime_from_items, time_from_items

__all__ = [
    # Date and time
    "Date",
    "Time",
    "CivilDateTime",
    "DelayedFormat",
    # Deltas and time units
    "TimeDelta",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
    "microseconds",
    "nanoseconds",
    # Constants
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
    "Weekday",
]


class Weekday(enum.Enum):
    """The days of the week; ``.value`` corresponds with ISO numbering."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


MONDAY = Weekday.MONDAY
TUESDAY = Weekday.TUESDAY
WEDNESDAY = Weekday.WEDNESDAY
THURSDAY = Weekday.THURSDAY
FRIDAY = Weekday.FRIDAY
SATURDAY = Weekday.SATURDAY
SUNDAY = Weekday.SUNDAY

# Helpers that pre-compute/lookup as much as possible
_object_new = object.__new__
_MIN_DAYS = days_before_year(MIN_YEAR) + 1
_MAX_DAYS = days_before_year(MAX_YEAR + 1)
_MAX_CARRY_SECS = 1 << MAX_SECS_BITS
_TimeParts = Optional[Tuple[int, int]]


class _ImmutableBase:
    __slots__ = ()

    # Immutable classes don't need to be copied
    @no_type_check
    def __copy__(self):
        return self

    @no_type_check
    def __deepcopy__(self, _):
        return self


if TYPE_CHECKING:
    from typing import final
else:

    def final(cls):

        def init_subclass_not_allowed(cls, **kwargs):  # pragma: no cover
            raise TypeError("Subclassing not allowed")

        cls.__init_subclass__ = init_subclass_not_allowed
        return cls


def _pydantic_schema(
    cls: type, parse: Callable[[Any], Any], accept_int: bool = False
) -> Any:
    from pydantic_core import core_schema

    accepted = (str, int) if accept_int else (str,)

    def validate(value: Any) -> Any:
        if isinstance(value, cls):
            return value
        # bool is an int subclass, but never a sensible input
        if not isinstance(value, accepted) or isinstance(value, bool):
            raise ValueError(f"Expected {cls.__name__} or a string")
        return parse(value)

    json_input = (
        core_schema.union_schema(
            [core_schema.str_schema(), core_schema.int_schema()]
        )
        if accept_int
        else core_schema.str_schema()
    )
    return core_schema.json_or_python_schema(
        json_schema=core_schema.no_info_after_validator_function(
            validate, json_input
        ),
        python_schema=core_schema.no_info_plain_validator_function(validate),
        serialization=core_schema.plain_serializer_function_ser_schema(
            str, when_used="json-unless-none"
        ),
    )


@final
class TimeDelta(_ImmutableBase):
    """A signed duration with nanosecond precision.

    The inputs are normalized, so 90 minutes becomes 1 hour and 30 minutes,
    for example. The range is symmetric (about 292 million years either
    way), so negating a delta always succeeds.

    Examples
    --------
    >>> d = TimeDelta(hours=1, minutes=30)
    TimeDelta(01:30:00)
    >>> d.in_minutes()
    90.0

    Note
    ----
    A shorter way to instantiate a timedelta is to use the helper functions
    :func:`~civiltime.hours`, :func:`~civiltime.minutes`, etc.
    """

    __slots__ = ("_total_ns",)

    def __init__(
        self,
        *,
        weeks: float = 0,
        days: float = 0,
        hours: float = 0,
        minutes: float = 0,
        seconds: float = 0,
        milliseconds: float = 0,
        microseconds: float = 0,
        nanoseconds: int = 0,
    ) -> None:
        assert type(nanoseconds) is int  # catch this common mistake
        ns = self._total_ns = (
            # Cast individual components to int to avoid floating point errors
            int(weeks * 7 * NS_PER_DAY)
            + int(days * NS_PER_DAY)
            + int(hours * 3_600_000_000_000)
            + int(minutes * 60_000_000_000)
            + int(seconds * 1_000_000_000)
            + int(milliseconds * 1_000_000)
            + int(microseconds * 1_000)
            + nanoseconds
        )
        if abs(ns) > MAX_DELTA_NANOS:
            raise ValueError("TimeDelta out of range")

    ZERO: ClassVar[TimeDelta]
    """A delta of zero"""
    MAX: ClassVar[TimeDelta]
    """The maximum possible delta"""
    MIN: ClassVar[TimeDelta]
    """The minimum possible delta"""

    def in_days_of_24h(self) -> float:
        """The total size in days (of exactly 24 hours each)"""
        return self._total_ns / NS_PER_DAY

    def in_hours(self) -> float:
        """The total size in hours

        Example
        -------
        >>> d = TimeDelta(hours=1, minutes=30)
        >>> d.in_hours()
        1.5
        """
        return self._total_ns / 3_600_000_000_000

    def in_minutes(self) -> float:
        """The total size in minutes

        Example
        -------
        >>> d = TimeDelta(hours=1, minutes=30, seconds=30)
        >>> d.in_minutes()
        90.5
        """
        return self._total_ns / 60_000_000_000

    def in_seconds(self) -> float:
        """The total size in seconds

        Example
        -------
        >>> d = TimeDelta(minutes=2, seconds=1, microseconds=500_000)
        >>> d.in_seconds()
        121.5
        """
        return self._total_ns / 1_000_000_000

    def in_milliseconds(self) -> float:
        """The total size in milliseconds"""
        return self._total_ns / 1_000_000

    def in_microseconds(self) -> float:
        """The total size in microseconds"""
        return self._total_ns / 1_000

    def in_nanoseconds(self) -> int:
        """The total size in nanoseconds

        >>> d = TimeDelta(seconds=2, nanoseconds=50)
        >>> d.in_nanoseconds()
        2_000_000_050
        """
        return self._total_ns

    def in_hrs_mins_secs_nanos(self) -> tuple[int, int, int, int]:
        """Convert to a tuple of (hours, minutes, seconds, nanoseconds)

        Example
        -------
        >>> d = TimeDelta(hours=1, minutes=30, microseconds=5_000_090)
        >>> d.in_hrs_mins_secs_nanos()
        (1, 30, 5, 90_000)
        """
        hours, rem = divmod(abs(self._total_ns), 3_600_000_000_000)
        mins, rem = divmod(rem, 60_000_000_000)
        secs, ns = divmod(rem, 1_000_000_000)
        return (
            (hours, mins, secs, ns)
            if self._total_ns >= 0
            else (-hours, -mins, -secs, -ns)
        )

    def format_common_iso(self) -> str:
        """Format as the *popular interpretation* of the ISO 8601 duration
        format, using hours, minutes and seconds only.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> TimeDelta(hours=1, minutes=30).format_common_iso()
        'PT1H30M'
        """
        hrs, mins, secs, ns = abs(self).in_hrs_mins_secs_nanos()
        seconds = f"{secs}.{ns:09d}".rstrip("0") if ns else str(secs)
        return f"{(self._total_ns < 0) * '-'}PT" + (
            (
                f"{hrs}H" * bool(hrs)
                + f"{mins}M" * bool(mins)
                + f"{seconds}S" * bool(secs or ns)
            )
            or "0S"
        )

    @classmethod
    def parse_common_iso(cls, s: str, /) -> TimeDelta:
        """Parse the *popular interpretation* of the ISO 8601 duration format.

        Inverse of :meth:`format_common_iso`

        Example
        -------
        >>> TimeDelta.parse_common_iso("PT1H30M")
        TimeDelta(01:30:00)

        Note
        ----
        Any duration with a date part is considered invalid.
        ``PT0S`` is valid, but ``P0D`` is not.
        """
        exc = ValueError(f"Invalid format: {s!r}")
        prev_unit = ""
        nanos = 0

        if len(s) < 4:
            raise exc

        if s.startswith("PT"):
            sign = 1
            rest = s[2:]
        elif s.startswith("-PT"):
            sign = -1
            rest = s[3:]
        elif s.startswith("+PT"):
            sign = 1
            rest = s[3:]
        else:
            raise exc

        while rest:
            rest, value, unit = _parse_timedelta_component(rest, exc)

            if unit == "H" and prev_unit == "":
                nanos += value * 3_600_000_000_000
            elif unit == "M" and prev_unit in "H":
                nanos += value * 60_000_000_000
            elif unit == "S":
                nanos += value
                if rest:
                    raise exc
                break
            else:
                raise exc  # components out of order

            prev_unit = unit

        if nanos > MAX_DELTA_NANOS:
            raise ValueError("TimeDelta out of range")

        return TimeDelta._from_nanos_unchecked(sign * nanos)

    def __add__(self, other: TimeDelta) -> TimeDelta:
        """Add two deltas together

        Example
        -------
        >>> d = TimeDelta(hours=1, minutes=30)
        >>> d + TimeDelta(minutes=30)
        TimeDelta(02:00:00)
        """
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return TimeDelta(nanoseconds=self._total_ns + other._total_ns)

    def __sub__(self, other: TimeDelta) -> TimeDelta:
        """Subtract two deltas

        Example
        -------
        >>> d = TimeDelta(hours=1, minutes=30)
        >>> d - TimeDelta(minutes=30)
        TimeDelta(01:00:00)
        """
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return TimeDelta(nanoseconds=self._total_ns - other._total_ns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return self._total_ns == other._total_ns

    def __hash__(self) -> int:
        return hash(self._total_ns)

    def __lt__(self, other: TimeDelta) -> bool:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return self._total_ns < other._total_ns

    def __le__(self, other: TimeDelta) -> bool:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return self._total_ns <= other._total_ns

    def __gt__(self, other: TimeDelta) -> bool:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return self._total_ns > other._total_ns

    def __ge__(self, other: TimeDelta) -> bool:
        if not isinstance(other, TimeDelta):
            return NotImplemented
        return self._total_ns >= other._total_ns

    def __bool__(self) -> bool:
        """True if the value is non-zero"""
        return bool(self._total_ns)

    def __mul__(self, other: float) -> TimeDelta:
        """Multiply by a number

        Example
        -------
        >>> d = TimeDelta(hours=1, minutes=30)
        >>> d * 2.5
        TimeDelta(03:45:00)
        """
        if not isinstance(other, (int, float)):
            return NotImplemented
        return TimeDelta(nanoseconds=int(self._total_ns * other))

    def __rmul__(self, other: float) -> TimeDelta:
        return self * other

    def __neg__(self) -> TimeDelta:
        return TimeDelta._from_nanos_unchecked(-self._total_ns)

    def __pos__(self) -> TimeDelta:
        return self

    @overload
    def __truediv__(self, other: float) -> TimeDelta: ...

    @overload
    def __truediv__(self, other: TimeDelta) -> float: ...

    def __truediv__(self, other: float | TimeDelta) -> TimeDelta | float:
        """Divide by a number or another delta

        Example
        -------
        >>> d = TimeDelta(hours=1, minutes=30)
        >>> d / 2.5
        TimeDelta(00:36:00)
        >>> d / TimeDelta(minutes=30)
        3.0
        """
        if isinstance(other, TimeDelta):
            return self._total_ns / other._total_ns
        elif isinstance(other, (int, float)):
            return TimeDelta(nanoseconds=int(self._total_ns / other))
        return NotImplemented

    def __abs__(self) -> TimeDelta:
        return TimeDelta._from_nanos_unchecked(abs(self._total_ns))

    __str__ = format_common_iso

    def __repr__(self) -> str:
        hrs, mins, secs, ns = abs(self).in_hrs_mins_secs_nanos()
        return (
            f"TimeDelta({'-'*(self._total_ns < 0)}{hrs:02}:{mins:02}:{secs:02}"
            + f".{ns:0>9}".rstrip("0") * bool(ns)
            + ")"
        )

    @no_type_check
    def __reduce__(self):
        return _unpkl_tdelta, (
            pack("<qI", *divmod(self._total_ns, 1_000_000_000)),
        )

    @classmethod
    def __get_pydantic_core_schema__(cls, *_: Any, **kwargs: Any) -> Any:
        return _pydantic_schema(cls, cls.parse_common_iso)

    @classmethod
    def _from_nanos_unchecked(cls, ns: int) -> TimeDelta:
        new = _object_new(cls)
        new._total_ns = ns
        return new


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_tdelta(data: bytes) -> TimeDelta:
    s, ns = unpack("<qI", data)
    return TimeDelta._from_nanos_unchecked(s * 1_000_000_000 + ns)


def _parse_timedelta_component(s: str, exc: Exception) -> tuple[str, int, str]:
    if (match := _match_next_timedelta_component(s)) is None:
        raise exc
    whole, fraction, unit = match.groups()
    if unit == "S":
        value = int(whole) * NS_PER_SEC + int((fraction or "").ljust(9, "0"))
    elif fraction is None:
        value = int(whole)
    else:
        raise exc  # only seconds may be fractional
    return s[match.end() :], value, unit


TimeDelta.ZERO = TimeDelta()
TimeDelta.MAX = TimeDelta._from_nanos_unchecked(MAX_DELTA_NANOS)
TimeDelta.MIN = TimeDelta._from_nanos_unchecked(-MAX_DELTA_NANOS)


@final
class Date(_ImmutableBase):
    """A date without a time component, in the proleptic Gregorian calendar.

    Years from -262144 through 262143 are supported.

    Example
    -------
    >>> d = Date(2021, 1, 2)
    Date(2021-01-02)
    """

    __slots__ = ("_days", "_ymd")

    MIN: ClassVar[Date]
    """The minimum possible date"""
    MAX: ClassVar[Date]
    """The maximum possible date"""

    def __init__(self, year: int, month: int, day: int) -> None:
        if not year_in_range(year):
            raise ValueError("Year out of range")
        if not 1 <= month <= 12:
            raise ValueError("Invalid month")
        if not 1 <= day <= days_in_month(year, month):
            raise ValueError("Invalid day")
        self._days = ymd_to_days(year, month, day)
        self._ymd = (year, month, day)

    @classmethod
    def from_days_since_ce(cls, n: int, /) -> Date:
        """Create from the day number, where 0001-01-01 is day 1.
        This is the same numbering as :meth:`datetime.date.toordinal`.

        Example
        -------
        >>> Date.from_days_since_ce(738_000)
        Date(2021-07-29)
        """
        if not _MIN_DAYS <= n <= _MAX_DAYS:
            raise ValueError("Date out of range")
        return cls._from_days_unchecked(n)

    def days_since_ce(self) -> int:
        """The day number, where 0001-01-01 is day 1"""
        return self._days

    @classmethod
    def from_year_and_day(cls, year: int, day_of_year: int, /) -> Date:
        """Create from a year and the day of the year (1-366)

        Example
        -------
        >>> Date.from_year_and_day(2020, 366)
        Date(2020-12-31)
        """
        if not year_in_range(year):
            raise ValueError("Year out of range")
        if not 1 <= day_of_year <= days_in_year(year):
            raise ValueError("Invalid day of year")
        return cls._from_days_unchecked(days_before_year(year) + day_of_year)

    @property
    def year(self) -> int:
        return self._ymd[0]

    @property
    def month(self) -> int:
        return self._ymd[1]

    @property
    def day(self) -> int:
        return self._ymd[2]

    def day_of_year(self) -> int:
        """The day of the year, starting at 1 for January 1st"""
        return self._days - days_before_year(self._ymd[0])

    @property
    def month0(self) -> int:
        """The month, counting from 0 for January"""
        return self._ymd[1] - 1

    @property
    def day0(self) -> int:
        """The day of the month, counting from 0"""
        return self._ymd[2] - 1

    def day_of_year0(self) -> int:
        """The day of the year, starting at 0 for January 1st"""
        return self.day_of_year() - 1

    def day_of_week(self) -> Weekday:
        """The day of the week

        Example
        -------
        >>> Date(2021, 1, 2).day_of_week()
        Weekday.SATURDAY
        >>> Weekday.SATURDAY.value
        6  # the ISO value
        """
        return Weekday(iso_weekday(self._days))

    def iso_week_date(self) -> tuple[int, int, Weekday]:
        """The ISO 8601 year, week number, and weekday

        Example
        -------
        >>> Date(2021, 1, 2).iso_week_date()
        (2020, 53, Weekday.SATURDAY)
        """
        year, week, weekday = days_to_iso_week_date(self._days)
        return year, week, Weekday(weekday)

    def replace(
        self,
        *,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
        month0: int | None = None,
        day0: int | None = None,
    ) -> Date:
        """Create a new instance with the given fields replaced.
        ``month0`` and ``day0`` are the 0-based alternatives
        to ``month`` and ``day``.

        Example
        -------
        >>> d = Date(2021, 1, 2)
        >>> d.replace(day=4)
        Date(2021-01-04)
        >>> d.replace(month0=11)
        Date(2021-12-02)
        """
        if month0 is not None:
            if month is not None:
                raise TypeError("Cannot specify both month and month0")
            month = month0 + 1
        if day0 is not None:
            if day is not None:
                raise TypeError("Cannot specify both day and day0")
            day = day0 + 1
        y, m, d = self._ymd
        return Date(
            y if year is None else year,
            m if month is None else month,
            d if day is None else day,
        )

    def replace_day_of_year(self, day_of_year: int, /) -> Date:
        """Create a new date in the same year, on the given day of the year"""
        return Date.from_year_and_day(self._ymd[0], day_of_year)

    def replace_day_of_year0(self, day_of_year0: int, /) -> Date:
        """Like :meth:`replace_day_of_year`, but counting from 0"""
        return self.replace_day_of_year(day_of_year0 + 1)

    def add_days(self, n: int, /) -> Date:
        """Add a (possibly negative) number of days

        Raises ValueError if the result is out of range.

        Example
        -------
        >>> Date(2021, 1, 2).add_days(30)
        Date(2021-02-01)
        """
        return Date.from_days_since_ce(self._days + n)

    def checked_add(self, delta: TimeDelta, /) -> Date | None:
        """Add the whole days of a delta, truncated toward zero.

        Returns ``None`` if the result is out of range.

        Example
        -------
        >>> Date(2021, 1, 2).checked_add(hours(47))
        Date(2021-01-03)
        >>> Date.MAX.checked_add(days(1)) is None
        True
        """
        whole_days = abs(delta._total_ns) // NS_PER_DAY
        if delta._total_ns < 0:
            whole_days = -whole_days
        n = self._days + whole_days
        if not _MIN_DAYS <= n <= _MAX_DAYS:
            return None
        return Date._from_days_unchecked(n)

    def checked_subtract(self, delta: TimeDelta, /) -> Date | None:
        """Subtract the whole days of a delta, truncated toward zero.

        Returns ``None`` if the result is out of range.
        """
        return self.checked_add(-delta)

    def days_until(self, other: Date, /) -> int:
        """Calculate the number of days from this date to another date.
        If the other date is before this date, the result is negative.

        Example
        -------
        >>> Date(2021, 1, 2).days_until(Date(2021, 1, 5))
        3
        """
        return other._days - self._days

    def days_since(self, other: Date, /) -> int:
        """Calculate the number of days this day is after another date.
        If the other date is after this date, the result is negative.

        Example
        -------
        >>> Date(2021, 1, 5).days_since(Date(2021, 1, 2))
        3
        """
        return self._days - other._days

    def duration_since(self, other: Date, /) -> TimeDelta:
        """The difference as a delta of whole (24-hour) days"""
        return TimeDelta._from_nanos_unchecked(
            (self._days - other._days) * NS_PER_DAY
        )

    def at(self, t: Time, /) -> CivilDateTime:
        """Combine a date with a time to create a datetime

        Example
        -------
        >>> d = Date(2021, 1, 2)
        >>> d.at(Time(12, 30))
        CivilDateTime(2021-01-02T12:30:00)
        """
        return CivilDateTime._from_parts_unchecked(self, t)

    def format(self, fmt: str, /) -> DelayedFormat:
        """Format with a strftime-like pattern. Only date fields may be used.

        Example
        -------
        >>> str(Date(2021, 1, 2).format("%A %-d %B"))
        'Saturday 2 January'
        """
        return DelayedFormat(self._days, None, fmt)

    def format_common_iso(self) -> str:
        """Format as the common ISO 8601 date format.
        Years outside 0-9999 get an explicit sign.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> Date(2021, 1, 2).format_common_iso()
        '2021-01-02'
        >>> Date(-1, 12, 31).format_common_iso()
        '-0001-12-31'
        """
        y, m, d = self._ymd
        if 0 <= y <= 9999:
            return f"{y:04d}-{m:02d}-{d:02d}"
        return f"{y:+05d}-{m:02d}-{d:02d}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Date:
        """Create from the common ISO 8601 date format ``YYYY-MM-DD``.

        Inverse of :meth:`format_common_iso`

        Example
        -------
        >>> Date.parse_common_iso("2021-01-02")
        Date(2021-01-02)
        """
        return cls._from_days_unchecked(date_from_items(s, DATE_ITEMS))

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Date({self})"

    def __eq__(self, other: object) -> bool:
        """Compare for equality

        Example
        -------
        >>> d = Date(2021, 1, 2)
        >>> d == Date(2021, 1, 2)
        True
        >>> d == Date(2021, 1, 3)
        False
        """
        if not isinstance(other, Date):
            return NotImplemented
        return self._days == other._days

    def __hash__(self) -> int:
        return hash(self._days)

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._days < other._days

    def __le__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._days <= other._days

    def __gt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._days > other._days

    def __ge__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._days >= other._days

    @classmethod
    def __get_pydantic_core_schema__(cls, *_: Any, **kwargs: Any) -> Any:
        return _pydantic_schema(cls, cls.parse_common_iso)

    @classmethod
    def _from_days_unchecked(cls, n: int, /) -> Date:
        self = _object_new(cls)
        self._days = n
        self._ymd = days_to_ymd(n)
        return self

    @no_type_check
    def __reduce__(self):
        return _unpkl_date, (pack("<i", self._days),)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_date(data: bytes) -> Date:
    return Date.from_days_since_ce(*unpack("<i", data))


Date.MIN = Date._from_days_unchecked(_MIN_DAYS)
Date.MAX = Date._from_days_unchecked(_MAX_DAYS)


@final
class Time(_ImmutableBase):
    """Time of day without a date component

    A nanosecond value of one billion or more represents a leap second:
    ``Time(23, 59, 59, nanosecond=1_500_000_000)`` is halfway through
    the 61st second of the minute, formatted as ``23:59:60.5``.

    Example
    -------
    >>> t = Time(12, 30, 0)
    Time(12:30:00)
    """

    __slots__ = ("_secs", "_nanos")

    MIDNIGHT: ClassVar[Time]
    """The time at midnight"""
    NOON: ClassVar[Time]
    """The time at noon"""
    MAX: ClassVar[Time]
    """The maximum time: the end of a leap second just before midnight"""

    def __init__(
        self,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        nanosecond: int = 0,
    ) -> None:
        if not (0 <= hour < 24 and 0 <= minute < 60 and 0 <= second < 60):
            raise ValueError("Invalid time")
        if not 0 <= nanosecond < MAX_NANOS:
            raise ValueError("Invalid nanosecond value")
        self._secs = hour * 3600 + minute * 60 + second
        self._nanos = nanosecond

    @classmethod
    def from_seconds_since_midnight(cls, secs: int, nanos: int = 0) -> Time:
        """Create from seconds since midnight (0-86399) and nanoseconds
        (below 2 billion, with a leap second above 1 billion)
        """
        if not 0 <= secs < SECS_PER_DAY:
            raise ValueError("Seconds out of range")
        if not 0 <= nanos < MAX_NANOS:
            raise ValueError("Invalid nanosecond value")
        return cls._from_unchecked(secs, nanos)

    def seconds_since_midnight(self) -> int:
        """Whole seconds since midnight. A leap second is not counted."""
        return self._secs

    @property
    def hour(self) -> int:
        return self._secs // 3600

    @property
    def minute(self) -> int:
        return self._secs // 60 % 60

    @property
    def second(self) -> int:
        return self._secs % 60

    @property
    def nanosecond(self) -> int:
        return self._nanos

    def is_leap_second(self) -> bool:
        return self._nanos >= LEAP_NANOS

    def replace(
        self,
        *,
        hour: int | None = None,
        minute: int | None = None,
        second: int | None = None,
        nanosecond: int | None = None,
    ) -> Time:
        """Create a new instance with the given fields replaced

        Example
        -------
        >>> t = Time(12, 30, 0)
        >>> t.replace(minute=3, nanosecond=4_000)
        Time(12:03:00.000004)
        """
        return Time(
            self.hour if hour is None else hour,
            self.minute if minute is None else minute,
            self.second if second is None else second,
            nanosecond=self._nanos if nanosecond is None else nanosecond,
        )

    def overflowing_add(self, delta: TimeDelta, /) -> tuple[Time, int]:
        """Add a delta, wrapping around midnight.

        Returns the new time, and the number of days carried over
        (negative when wrapping backwards).

        Inside a leap second, the result stays in the leap second as long as
        it fits. Otherwise it continues from the next whole second (forward)
        or from the start of the leap second (backward).

        Example
        -------
        >>> Time(23).overflowing_add(hours(3))
        (Time(02:00:00), 1)
        """
        rhs = delta._total_ns
        secs = self._secs
        frac = self._nanos
        if frac >= LEAP_NANOS:
            remaining = MAX_NANOS - frac
            if rhs >= remaining:
                rhs -= remaining
                secs += 1
                frac = 0
            elif rhs < -frac:
                rhs += frac
                frac = 0
            else:
                return Time._from_unchecked(secs, frac + rhs), 0

        carry, rem = divmod(secs * NS_PER_SEC + frac + rhs, NS_PER_DAY)
        return Time._from_unchecked(*divmod(rem, NS_PER_SEC)), carry

    def overflowing_subtract(self, delta: TimeDelta, /) -> tuple[Time, int]:
        """Subtract a delta, wrapping around midnight.

        Returns the new time, and the number of days to subtract
        (negative when wrapping forwards).
        """
        # negating a delta never overflows
        t, carry = self.overflowing_add(-delta)
        return t, -carry

    def duration_since(self, other: Time, /) -> TimeDelta:
        """The signed difference between two times of day.

        When the interval crosses a leap second encoded in either time,
        it counts as an extra second.

        Example
        -------
        >>> Time(12, 30).duration_since(Time(11))
        TimeDelta(01:30:00)
        """
        secs = self._secs - other._secs
        frac = self._nanos - other._nanos
        if self._secs > other._secs and other._nanos >= LEAP_NANOS:
            secs += 1
        elif self._secs < other._secs and self._nanos >= LEAP_NANOS:
            secs -= 1
        return TimeDelta._from_nanos_unchecked(secs * NS_PER_SEC + frac)

    def on(self, d: Date, /) -> CivilDateTime:
        """Combine a time with a date to create a datetime

        Example
        -------
        >>> t = Time(12, 30)
        >>> t.on(Date(2021, 1, 2))
        CivilDateTime(2021-01-02T12:30:00)
        """
        return CivilDateTime._from_parts_unchecked(d, self)

    def format(self, fmt: str, /) -> DelayedFormat:
        """Format with a strftime-like pattern. Only time fields may be used.

        Example
        -------
        >>> str(Time(15, 4).format("%-I:%M %p"))
        '3:04 PM'
        """
        return DelayedFormat(None, (self._secs, self._nanos), fmt)

    def format_common_iso(self) -> str:
        """Format as the common ISO 8601 time format.
        A leap second shows as second 60.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> Time(12, 30, 0).format_common_iso()
        '12:30:00'
        >>> Time(23, 59, 59, nanosecond=1_250_000_000).format_common_iso()
        '23:59:60.250'
        """
        secs = self._secs
        return (
            f"{secs // 3600:02d}:{secs // 60 % 60:02d}:"
            f"{secs % 60 + self._nanos // NS_PER_SEC:02d}"
            + format_fraction(self._nanos)
        )

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Time:
        """Create from the common ISO 8601 time format ``HH:MM:SS[.fff]``.
        Second 60 is parsed as a leap second.

        Inverse of :meth:`format_common_iso`

        Example
        -------
        >>> Time.parse_common_iso("12:30:00")
        Time(12:30:00)
        """
        return cls._from_unchecked(*time_from_items(s, TIME_ITEMS))

    @classmethod
    def _from_unchecked(cls, secs: int, nanos: int, /) -> Time:
        self = _object_new(cls)
        self._secs = secs
        self._nanos = nanos
        return self

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Time({self})"

    def __eq__(self, other: object) -> bool:
        """Compare for equality

        Example
        -------
        >>> t = Time(12, 30, 0)
        >>> t == Time(12, 30, 0)
        True
        >>> t == Time(12, 30, 1)
        False
        """
        if not isinstance(other, Time):
            return NotImplemented
        return (self._secs, self._nanos) == (other._secs, other._nanos)

    def __hash__(self) -> int:
        return hash((self._secs, self._nanos))

    def __lt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return (self._secs, self._nanos) < (other._secs, other._nanos)

    def __le__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return (self._secs, self._nanos) <= (other._secs, other._nanos)

    def __gt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return (self._secs, self._nanos) > (other._secs, other._nanos)

    def __ge__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return (self._secs, self._nanos) >= (other._secs, other._nanos)

    @classmethod
    def __get_pydantic_core_schema__(cls, *_: Any, **kwargs: Any) -> Any:
        return _pydantic_schema(cls, cls.parse_common_iso)

    @no_type_check
    def __reduce__(self):
        return _unpkl_time, (pack("<II", self._secs, self._nanos),)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_time(data: bytes) -> Time:
    return Time.from_seconds_since_midnight(*unpack("<II", data))


Time.MIDNIGHT = Time()
Time.NOON = Time(12)
Time.MAX = Time(23, 59, 59, nanosecond=MAX_NANOS - 1)


@final
class DelayedFormat:
    """A value and a format, rendered only when converted to a string.

    The value and format are captured when it's created, so it can be
    rendered any number of times. An invalid format only raises
    :class:`~civiltime.FormatError` once rendered.

    Example
    -------
    >>> f = CivilDateTime(2021, 1, 2, 15).format("%Y/%m/%d %-I%P")
    >>> str(f)
    '2021/01/02 3pm'
    >>> f"{f:>16}"
    '  2021/01/02 3pm'
    """

    __slots__ = ("_days", "_time", "_fmt")

    def __init__(
        self,
        days: int | None,
        time: _TimeParts,
        fmt: str | Iterable[Item],
    ) -> None:
        self._days = days
        self._time = time
        # patterns are tokenized on each render; item sequences are copied
        self._fmt = fmt if isinstance(fmt, str) else tuple(fmt)

    def __str__(self) -> str:
        items = (
            strftime_items(self._fmt)
            if isinstance(self._fmt, str)
            else self._fmt
        )
        return render(items, self._days, self._time)

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __repr__(self) -> str:
        return f"DelayedFormat({self._fmt!r})"


@final
class CivilDateTime(_ImmutableBase):
    """A date and time of day, without any timezone or offset.

    Leap seconds are represented with a nanosecond value of one billion
    or more, and shown as second 60.

    Example
    -------
    >>> CivilDateTime(2024, 12, 8, hour=11, minute=30)
    CivilDateTime(2024-12-08T11:30:00)
    """

    __slots__ = ("_date", "_time")

    MIN: ClassVar[CivilDateTime]
    """The minimum possible datetime"""
    MAX: ClassVar[CivilDateTime]
    """The maximum possible datetime (inside a leap second)"""

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        nanosecond: int = 0,
    ) -> None:
        self._date = Date(year, month, day)
        self._time = Time(hour, minute, second, nanosecond=nanosecond)

    @classmethod
    def combine(cls, date: Date, time: Time, /) -> CivilDateTime:
        """Combine a date and a time. Alias for ``date.at(time)``"""
        return cls._from_parts_unchecked(date, time)

    @classmethod
    def checked_from_timestamp(
        cls, secs: int, nanos: int = 0
    ) -> CivilDateTime | None:
        """Create from seconds since the Unix epoch (1970-01-01T00:00:00)
        plus nanoseconds, interpreted without any timezone.

        A nanosecond value of one billion or more gives a leap second.
        Returns ``None`` if the inputs are out of range.

        Example
        -------
        >>> CivilDateTime.checked_from_timestamp(1_000_000_000)
        CivilDateTime(2001-09-09T01:46:40)
        >>> CivilDateTime.checked_from_timestamp(2**60) is None
        True
        """
        days, secs_of_day = divmod(secs, SECS_PER_DAY)
        days += UNIX_EPOCH_DAYS
        if not (_MIN_DAYS <= days <= _MAX_DAYS and 0 <= nanos < MAX_NANOS):
            return None
        return cls._from_parts_unchecked(
            Date._from_days_unchecked(days),
            Time._from_unchecked(secs_of_day, nanos),
        )

    @classmethod
    def from_timestamp(cls, secs: int, nanos: int = 0) -> CivilDateTime:
        """Like :meth:`checked_from_timestamp`, but raises ``ValueError``
        if the inputs are out of range.

        Example
        -------
        >>> CivilDateTime.from_timestamp(0, 42_000_000)
        CivilDateTime(1970-01-01T00:00:00.042)
        """
        if (result := cls.checked_from_timestamp(secs, nanos)) is None:
            raise ValueError("Timestamp out of range")
        return result

    def date(self) -> Date:
        """The date part"""
        return self._date

    def time(self) -> Time:
        """The time-of-day part"""
        return self._time

    @property
    def year(self) -> int:
        return self._date.year

    @property
    def month(self) -> int:
        return self._date.month

    @property
    def day(self) -> int:
        return self._date.day

    @property
    def month0(self) -> int:
        return self._date.month0

    @property
    def day0(self) -> int:
        return self._date.day0

    @property
    def hour(self) -> int:
        return self._time.hour

    @property
    def minute(self) -> int:
        return self._time.minute

    @property
    def second(self) -> int:
        return self._time.second

    @property
    def nanosecond(self) -> int:
        return self._time._nanos

    def day_of_year(self) -> int:
        return self._date.day_of_year()

    def day_of_year0(self) -> int:
        return self._date.day_of_year0()

    def day_of_week(self) -> Weekday:
        return self._date.day_of_week()

    def iso_week_date(self) -> tuple[int, int, Weekday]:
        return self._date.iso_week_date()

    def replace(self, **kwargs: Any) -> CivilDateTime:
        """Construct a new instance with the given fields replaced.

        Example
        -------
        >>> d = CivilDateTime(2020, 8, 15, 23, 12)
        >>> d.replace(year=2021, nanosecond=5)
        CivilDateTime(2021-08-15T23:12:00.000000005)
        """
        date_kwargs = {
            k: kwargs.pop(k)
            for k in ("year", "month", "day", "month0", "day0")
            if k in kwargs
        }
        # the remaining keyword arguments are checked by Time.replace()
        return self._from_parts_unchecked(
            self._date.replace(**date_kwargs), self._time.replace(**kwargs)
        )

    def replace_day_of_year(self, day_of_year: int, /) -> CivilDateTime:
        """Move to the given day of the same year, keeping the time.

        Example
        -------
        >>> CivilDateTime(2020, 8, 15, 23, 12).replace_day_of_year(60)
        CivilDateTime(2020-02-29T23:12:00)
        """
        return self._from_parts_unchecked(
            self._date.replace_day_of_year(day_of_year), self._time
        )

    def replace_day_of_year0(self, day_of_year0: int, /) -> CivilDateTime:
        """Like :meth:`replace_day_of_year`, but counting from 0"""
        return self.replace_day_of_year(day_of_year0 + 1)

    def replace_date(self, date: Date, /) -> CivilDateTime:
        """Construct a new instance with the date replaced."""
        return self._from_parts_unchecked(date, self._time)

    def replace_time(self, time: Time, /) -> CivilDateTime:
        """Construct a new instance with the time replaced."""
        return self._from_parts_unchecked(self._date, time)

    def timestamp(self) -> int:
        """Whole seconds since the Unix epoch, treating the datetime as UTC.

        A leap second has the same timestamp as the second before it.

        Example
        -------
        >>> CivilDateTime(1970, 1, 1, 0, 1).timestamp()
        60
        """
        return (
            self._date._days - UNIX_EPOCH_DAYS
        ) * SECS_PER_DAY + self._time._secs

    def subsec_millis(self) -> int:
        """Milliseconds since the last whole second.
        May exceed 999 inside a leap second.
        """
        return self._time._nanos // 1_000_000

    def subsec_micros(self) -> int:
        """Microseconds since the last whole second.
        May exceed 999_999 inside a leap second.
        """
        return self._time._nanos // 1_000

    def subsec_nanos(self) -> int:
        """Nanoseconds since the last whole second.
        May exceed 999_999_999 inside a leap second.
        """
        return self._time._nanos

    def checked_add(self, delta: TimeDelta, /) -> CivilDateTime | None:
        """Add a delta, returning ``None`` if the result is out of range.

        Example
        -------
        >>> d = CivilDateTime(2014, 5, 6, 7, 8, 9)
        >>> d.checked_add(seconds(86_399))
        CivilDateTime(2014-05-07T07:08:08)
        >>> CivilDateTime.MAX.checked_add(seconds(1)) is None
        True
        """
        time, carry = self._time.overflowing_add(delta)
        carry_secs = carry * SECS_PER_DAY
        # beyond this, any date overflows
        if not -_MAX_CARRY_SECS < carry_secs < _MAX_CARRY_SECS:
            return None
        date = self._date.checked_add(
            TimeDelta._from_nanos_unchecked(carry_secs * NS_PER_SEC)
        )
        if date is None:
            return None
        return self._from_parts_unchecked(date, time)

    def checked_subtract(self, delta: TimeDelta, /) -> CivilDateTime | None:
        """Subtract a delta, returning ``None`` if the result is out of range.

        Example
        -------
        >>> d = CivilDateTime(2014, 5, 6, 7, 8, 9)
        >>> d.checked_subtract(seconds(86_399))
        CivilDateTime(2014-05-05T07:08:10)
        """
        time, carry = self._time.overflowing_subtract(delta)
        carry_secs = carry * SECS_PER_DAY
        if not -_MAX_CARRY_SECS < carry_secs < _MAX_CARRY_SECS:
            return None
        date = self._date.checked_subtract(
            TimeDelta._from_nanos_unchecked(carry_secs * NS_PER_SEC)
        )
        if date is None:
            return None
        return self._from_parts_unchecked(date, time)

    def add(self, **kwargs: Any) -> CivilDateTime:
        """Add a time amount, given as ``TimeDelta`` keyword arguments.

        Raises ``OverflowError`` if the result is out of range.

        Example
        -------
        >>> CivilDateTime(2020, 8, 15, 23, 12).add(hours=2, minutes=30)
        CivilDateTime(2020-08-16T01:42:00)
        """
        return self + TimeDelta(**kwargs)

    def subtract(self, **kwargs: Any) -> CivilDateTime:
        """Subtract a time amount, given as ``TimeDelta`` keyword arguments.

        Raises ``OverflowError`` if the result is out of range.
        """
        return self - TimeDelta(**kwargs)

    def duration_since(self, other: CivilDateTime, /) -> TimeDelta:
        """The signed duration between two datetimes.
        Leap seconds count as described in :meth:`Time.duration_since`.

        Example
        -------
        >>> a = CivilDateTime(2016, 7, 8, 9, 10, 11)
        >>> a.duration_since(CivilDateTime(2016, 7, 7, 9, 10, 11))
        TimeDelta(24:00:00)
        """
        return self._date.duration_since(
            other._date
        ) + self._time.duration_since(other._time)

    def __add__(self, delta: TimeDelta) -> CivilDateTime:
        """Add a delta. Raises ``OverflowError`` if out of range.
        Use :meth:`checked_add` to get ``None`` instead.
        """
        if not isinstance(delta, TimeDelta):
            return NotImplemented
        if (result := self.checked_add(delta)) is None:
            raise OverflowError("Result out of range")
        return result

    @overload
    def __sub__(self, other: CivilDateTime) -> TimeDelta: ...

    @overload
    def __sub__(self, other: TimeDelta) -> CivilDateTime: ...

    def __sub__(
        self, other: TimeDelta | CivilDateTime
    ) -> CivilDateTime | TimeDelta:
        """Subtract a delta, or calculate the duration between datetimes.

        Subtracting a delta raises ``OverflowError`` if out of range.

        Example
        -------
        >>> d = CivilDateTime(2020, 8, 15, 23, 12)
        >>> d - hours(24)
        CivilDateTime(2020-08-14T23:12:00)
        >>> d - CivilDateTime(2020, 8, 14)
        TimeDelta(47:12:00)
        """
        if isinstance(other, CivilDateTime):
            return self.duration_since(other)
        elif isinstance(other, TimeDelta):
            if (result := self.checked_subtract(other)) is None:
                raise OverflowError("Result out of range")
            return result
        return NotImplemented

    def format_with_items(self, items: Iterable[Item], /) -> DelayedFormat:
        """Format with a sequence of format items.

        The items are captured immediately, but only rendered (and
        checked) when the result is converted to a string.
        """
        return DelayedFormat(
            self._date._days, (self._time._secs, self._time._nanos), items
        )

    def format(self, fmt: str, /) -> DelayedFormat:
        """Format with a strftime-like pattern.

        Rendering happens when the result is converted to a string,
        so an invalid pattern only raises at that point.

        Example
        -------
        >>> d = CivilDateTime(2010, 9, 8, 7, 6, 54, nanosecond=321_000_000)
        >>> str(d.format("%c"))
        'Wed Sep  8 07:06:54 2010'
        >>> f"{d.format('%Y-%m-%d %H:%M:%S%.3f')}"
        '2010-09-08 07:06:54.321'
        """
        return DelayedFormat(
            self._date._days, (self._time._secs, self._time._nanos), fmt
        )

    def format_common_iso(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS[.fff]``.
        A leap second shows as second 60.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> CivilDateTime(2016, 7, 8, 9, 10, 48, nanosecond=90_000_000)
        CivilDateTime(2016-07-08T09:10:48.090)
        """
        return (
            f"{self._date.format_common_iso()}T"
            f"{self._time.format_common_iso()}"
        )

    @classmethod
    def parse_common_iso(cls, s: str, /) -> CivilDateTime:
        """Parse ``YYYY-MM-DDTHH:MM:SS[.fff]``.

        Whitespace is allowed between fields, and digits beyond
        nanosecond precision are ignored. Second 60 is a leap second.

        Inverse of :meth:`format_common_iso`

        Example
        -------
        >>> CivilDateTime.parse_common_iso("2015-02-18T23:16:09.153")
        CivilDateTime(2015-02-18T23:16:09.153)
        """
        return cls._from_fields_unchecked(
            *datetime_from_items(s, DATETIME_ITEMS)
        )

    @classmethod
    def strptime(cls, s: str, /, fmt: str) -> CivilDateTime:
        """Parse with a strftime-like pattern.

        Redundant fields (like a weekday, or ``%s``) must agree with the
        rest. An offset (``%z``) must be well-formed, but is ignored.

        Example
        -------
        >>> CivilDateTime.strptime("94/9/4 7:15", "%y/%m/%d %H:%M")
        CivilDateTime(1994-09-04T07:15:00)
        """
        return cls._from_fields_unchecked(
            *datetime_from_items(s, strftime_items(fmt))
        )

    @classmethod
    def parse_lenient(cls, value: str | int, /) -> CivilDateTime:
        """Parse the common ISO format, or a Unix timestamp in seconds
        (as an integer or a string of digits with an optional sign).

        Example
        -------
        >>> CivilDateTime.parse_lenient("-1")
        CivilDateTime(1969-12-31T23:59:59)
        >>> CivilDateTime.parse_lenient("2016-07-08T09:10:48")
        CivilDateTime(2016-07-08T09:10:48)
        """
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_timestamp(value)
        elif isinstance(value, str):
            if _match_integer(value):
                return cls.from_timestamp(int(value))
            return cls.parse_common_iso(value)
        raise TypeError(f"Expected str or int, got {type(value)!r}")

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"CivilDateTime({self})"

    def __eq__(self, other: object) -> bool:
        """Compare for equality. A leap second is not equal to the
        second before it.

        Example
        -------
        >>> d = CivilDateTime(2020, 8, 15, 23)
        >>> d == CivilDateTime(2020, 8, 15, 23)
        True
        >>> d == CivilDateTime(2020, 8, 15, 22)
        False
        """
        if not isinstance(other, CivilDateTime):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: CivilDateTime) -> bool:
        if not isinstance(other, CivilDateTime):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: CivilDateTime) -> bool:
        if not isinstance(other, CivilDateTime):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: CivilDateTime) -> bool:
        if not isinstance(other, CivilDateTime):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: CivilDateTime) -> bool:
        if not isinstance(other, CivilDateTime):
            return NotImplemented
        return self._key() >= other._key()

    def _key(self) -> tuple[int, int, int]:
        return (self._date._days, self._time._secs, self._time._nanos)

    @classmethod
    def __get_pydantic_core_schema__(cls, *_: Any, **kwargs: Any) -> Any:
        return _pydantic_schema(cls, cls.parse_lenient, accept_int=True)

    @classmethod
    def _from_parts_unchecked(cls, date: Date, time: Time) -> CivilDateTime:
        self = _object_new(cls)
        self._date = date
        self._time = time
        return self

    @classmethod
    def _from_fields_unchecked(
        cls, days: int, secs: int, nanos: int
    ) -> CivilDateTime:
        return cls._from_parts_unchecked(
            Date._from_days_unchecked(days), Time._from_unchecked(secs, nanos)
        )

    # a custom pickle implementation with a smaller payload
    @no_type_check
    def __reduce__(self):
        return _unpkl_civil, (pack("<iII", *self._key()),)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_civil(data: bytes) -> CivilDateTime:
    days, secs, nanos = unpack("<iII", data)
    return CivilDateTime.combine(
        Date.from_days_since_ce(days),
        Time.from_seconds_since_midnight(secs, nanos),
    )


CivilDateTime.MIN = CivilDateTime.combine(Date.MIN, Time.MIDNIGHT)
CivilDateTime.MAX = CivilDateTime.combine(Date.MAX, Time.MAX)

_match_integer = re.compile(r"[+-]?\d+", re.ASCII).fullmatch
_match_next_timedelta_component = re.compile(
    r"^(\d{1,35})(?:\.(\d{1,9}))?([HMS])", re.ASCII
).match


def weeks(i: float, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of weeks.
    ``weeks(1) == TimeDelta(weeks=1)``
    """
    return TimeDelta(weeks=i)


def days(i: float, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of 24-hour days.
    ``days(1) == TimeDelta(days=1)``
    """
    return TimeDelta(days=i)


def hours(i: float, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of hours.
    ``hours(1) == TimeDelta(hours=1)``
    """
    return TimeDelta(hours=i)


def minutes(i: float, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of minutes.
    ``minutes(1) == TimeDelta(minutes=1)``
    """
    return TimeDelta(minutes=i)


def seconds(i: float, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of seconds.
    ``seconds(1) == TimeDelta(seconds=1)``
    """
    return TimeDelta(seconds=i)


def milliseconds(i: float, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of milliseconds.
    ``milliseconds(1) == TimeDelta(milliseconds=1)``
    """
    return TimeDelta(milliseconds=i)


def microseconds(i: float, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of microseconds.
    ``microseconds(1) == TimeDelta(microseconds=1)``
    """
    return TimeDelta(microseconds=i)


def nanoseconds(i: int, /) -> TimeDelta:
    """Create a :class:`TimeDelta` with the given number of nanoseconds.
    ``nanoseconds(1) == TimeDelta(nanoseconds=1)``
    """
    return TimeDelta(nanoseconds=i)


# We expose the public members in the root of the module.
# For clarity, we remove the "_pycivil" part from the names,
# since this is an implementation detail.
for name in __all__:
    member = locals()[name]
    if getattr(member, "__module__", None) == __name__:  # pragma: no branch
        member.__module__ = "civiltime"

# clear up loop variables so they don't leak into the namespace
del name
del member

for _unpkl in (_unpkl_date, _unpkl_time, _unpkl_tdelta, _unpkl_civil):
    _unpkl.__module__ = "civiltime"


# disable further subclassing
final(_ImmutableBase)
