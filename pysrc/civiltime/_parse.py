"""Parsing text into fields, and resolving those fields into values.

Parsing happens in two phases: :func:`scan` matches the input against
format items and records every field it sees in a :class:`Parsed`. Then
the fields are resolved into a date, time, or date-and-time, checking
that any redundant fields (weekday, ordinal, timestamp...) agree.
"""

from __future__ import annotations

import enum
import re
from typing import Iterable, NoReturn

from ._common import (
    LEAP_NANOS,
    NS_PER_SEC,
    SECS_PER_DAY,
    UNIX_EPOCH_DAYS,
    Nanos,
)
from ._format import (
    MONTH_NAMES,
    WEEKDAY_NAMES,
    ErrorItem,
    Fixed,
    FixedItem,
    Item,
    LiteralItem,
    Numeric,
    NumericItem,
    SpaceItem,
)
from ._math import (
    days_before_year,
    days_in_month,
    days_in_year,
    days_to_iso_week_date,
    days_to_year_and_ordinal,
    days_to_ymd,
    iso_week_date_to_days,
    iso_weekday,
    year_in_range,
    ymd_to_days,
)


class ParseErrorKind(enum.Enum):
    """Why parsing failed"""

    OUT_OF_RANGE = "input is out of range"
    IMPOSSIBLE = "no possible date and time matching input"
    NOT_ENOUGH = "input is not enough for unique date and time"
    INVALID = "input contains invalid characters"
    TOO_SHORT = "premature end of input"
    TOO_LONG = "trailing input"
    BAD_FORMAT = "bad or unsupported format string"


class ParseError(ValueError):
    """Text could not be parsed. The ``kind`` attribute tells why."""

    def __init__(self, kind: ParseErrorKind, msg: str | None = None):
        super().__init__(msg or kind.value)
        self.kind = kind


def _fail(kind: ParseErrorKind) -> NoReturn:
    raise ParseError(kind)


_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_I64_MAX = 2**63 - 1


def _check_i32(value: int) -> int:
    if not _I32_MIN <= value <= _I32_MAX:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    return value


def _check_u32(value: int) -> int:
    if not 0 <= value <= 2**32 - 1:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    return value


class Parsed:
    """The fields seen while parsing, each ``None`` until set.

    Setting a field twice is fine, as long as the value is the same.
    Hours are stored split into ``hour_div_12`` and ``hour_mod_12``, so
    that 12-hour clock and AM/PM fields combine with 24-hour ones.
    Weekdays use ISO numbering (Monday=1).
    """

    __slots__ = (
        "year",
        "year_div_100",
        "year_mod_100",
        "isoyear",
        "isoyear_div_100",
        "isoyear_mod_100",
        "month",
        "week_from_sun",
        "week_from_mon",
        "isoweek",
        "weekday",
        "ordinal",
        "day",
        "hour_div_12",
        "hour_mod_12",
        "minute",
        "second",
        "nanosecond",
        "timestamp",
        "offset",
    )

    def __init__(self) -> None:
        for name in self.__slots__:
            setattr(self, name, None)

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={getattr(self, name)!r}"
            for name in self.__slots__
            if getattr(self, name) is not None
        )
        return f"Parsed({fields})"

    def copy(self) -> Parsed:
        new = Parsed()
        for name in self.__slots__:
            setattr(new, name, getattr(self, name))
        return new

    def _set(self, name: str, value: object) -> None:
        old = getattr(self, name)
        if old is not None and old != value:
            _fail(ParseErrorKind.IMPOSSIBLE)
        setattr(self, name, value)

    def set_year(self, value: int) -> None:
        self._set("year", _check_i32(value))

    def set_year_div_100(self, value: int) -> None:
        if value < 0:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        self._set("year_div_100", _check_i32(value))

    def set_year_mod_100(self, value: int) -> None:
        if value < 0:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        self._set("year_mod_100", _check_i32(value))

    def set_isoyear(self, value: int) -> None:
        self._set("isoyear", _check_i32(value))

    def set_isoyear_div_100(self, value: int) -> None:
        if value < 0:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        self._set("isoyear_div_100", _check_i32(value))

    def set_isoyear_mod_100(self, value: int) -> None:
        if value < 0:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        self._set("isoyear_mod_100", _check_i32(value))

    def set_month(self, value: int) -> None:
        self._set("month", _check_u32(value))

    def set_week_from_sun(self, value: int) -> None:
        self._set("week_from_sun", _check_u32(value))

    def set_week_from_mon(self, value: int) -> None:
        self._set("week_from_mon", _check_u32(value))

    def set_isoweek(self, value: int) -> None:
        self._set("isoweek", _check_u32(value))

    def set_weekday(self, value: int) -> None:
        self._set("weekday", value)

    def set_ordinal(self, value: int) -> None:
        self._set("ordinal", _check_u32(value))

    def set_day(self, value: int) -> None:
        self._set("day", _check_u32(value))

    def set_ampm(self, pm: bool) -> None:
        self._set("hour_div_12", int(pm))

    def set_hour12(self, value: int) -> None:
        if not 1 <= value <= 12:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        self._set("hour_mod_12", value % 12)

    def set_hour(self, value: int) -> None:
        if not 0 <= value <= 23:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        self._set("hour_div_12", value // 12)
        self._set("hour_mod_12", value % 12)

    def set_minute(self, value: int) -> None:
        self._set("minute", _check_u32(value))

    def set_second(self, value: int) -> None:
        self._set("second", _check_u32(value))

    def set_nanosecond(self, value: int) -> None:
        self._set("nanosecond", _check_u32(value))

    def set_timestamp(self, value: int) -> None:
        self._set("timestamp", value)

    def set_offset(self, value: int) -> None:
        self._set("offset", value)

    # --- resolution ---

    def to_date(self) -> int:
        """Resolve the date fields into a day number"""
        year = _resolve_year(self.year, self.year_div_100, self.year_mod_100)
        isoyear = _resolve_year(
            self.isoyear, self.isoyear_div_100, self.isoyear_mod_100
        )
        weekday = self.weekday

        if (
            year is not None
            and self.month is not None
            and self.day is not None
        ):
            days = _from_ymd(year, self.month, self.day)
            verified = self._verify_isoweekdate(
                days
            ) and self._verify_ordinal(days)
        elif year is not None and self.ordinal is not None:
            days = _from_year_and_ordinal(year, self.ordinal)
            verified = (
                self._verify_ymd(days)
                and self._verify_isoweekdate(days)
                and self._verify_ordinal(days)
            )
        elif (
            year is not None
            and self.week_from_sun is not None
            and weekday is not None
        ):
            days = _from_week_number(
                year, self.week_from_sun, weekday % 7, first_weekday=7
            )
            verified = (
                self._verify_ymd(days)
                and self._verify_isoweekdate(days)
                and self._verify_ordinal(days)
            )
        elif (
            year is not None
            and self.week_from_mon is not None
            and weekday is not None
        ):
            days = _from_week_number(
                year, self.week_from_mon, weekday - 1, first_weekday=1
            )
            verified = (
                self._verify_ymd(days)
                and self._verify_isoweekdate(days)
                and self._verify_ordinal(days)
            )
        elif (
            isoyear is not None
            and self.isoweek is not None
            and weekday is not None
        ):
            if not year_in_range(isoyear):
                _fail(ParseErrorKind.OUT_OF_RANGE)
            maybe_days = iso_week_date_to_days(isoyear, self.isoweek, weekday)
            if maybe_days is None or not year_in_range(
                days_to_year_and_ordinal(maybe_days)[0]
            ):
                _fail(ParseErrorKind.OUT_OF_RANGE)
            days = maybe_days
            verified = self._verify_ymd(days) and self._verify_ordinal(days)
        else:
            _fail(ParseErrorKind.NOT_ENOUGH)

        if not verified:
            _fail(ParseErrorKind.IMPOSSIBLE)
        return days

    def _verify_ymd(self, days: int) -> bool:
        year, month, day = days_to_ymd(days)
        ydiv, ymod = divmod(year, 100) if year >= 0 else (None, None)
        return (
            self.year in (None, year)
            and (self.year_div_100 is None or self.year_div_100 == ydiv)
            and (self.year_mod_100 is None or self.year_mod_100 == ymod)
            and self.month in (None, month)
            and self.day in (None, day)
        )

    def _verify_isoweekdate(self, days: int) -> bool:
        isoyear, isoweek, weekday = days_to_iso_week_date(days)
        idiv, imod = divmod(isoyear, 100) if isoyear >= 0 else (None, None)
        return (
            self.isoyear in (None, isoyear)
            and (self.isoyear_div_100 is None or self.isoyear_div_100 == idiv)
            and (self.isoyear_mod_100 is None or self.isoyear_mod_100 == imod)
            and self.isoweek in (None, isoweek)
            and self.weekday in (None, weekday)
        )

    def _verify_ordinal(self, days: int) -> bool:
        ordinal = days - days_before_year(days_to_year_and_ordinal(days)[0])
        weekday = iso_weekday(days)
        week_from_sun = (ordinal - weekday % 7 + 7) // 7
        week_from_mon = (ordinal - (weekday - 1) + 7) // 7
        return (
            self.ordinal in (None, ordinal)
            and self.week_from_sun in (None, week_from_sun)
            and self.week_from_mon in (None, week_from_mon)
            and self.weekday in (None, weekday)
        )

    def to_time(self) -> tuple[int, Nanos]:
        """Resolve the time fields into seconds since midnight and nanos"""
        if self.hour_div_12 is None:
            _fail(ParseErrorKind.NOT_ENOUGH)
        if not 0 <= self.hour_div_12 <= 1:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        if self.hour_mod_12 is None:
            _fail(ParseErrorKind.NOT_ENOUGH)
        if not 0 <= self.hour_mod_12 <= 11:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        hour = self.hour_div_12 * 12 + self.hour_mod_12

        if self.minute is None:
            _fail(ParseErrorKind.NOT_ENOUGH)
        if not 0 <= self.minute <= 59:
            _fail(ParseErrorKind.OUT_OF_RANGE)

        # leap seconds are represented as second 59 with extra nanos
        second = self.second or 0
        leap = 0
        if second == 60:
            second = 59
            leap = LEAP_NANOS
        elif second > 60:
            _fail(ParseErrorKind.OUT_OF_RANGE)

        nanos = self.nanosecond or 0
        if self.nanosecond is not None:
            if nanos >= NS_PER_SEC:
                _fail(ParseErrorKind.OUT_OF_RANGE)
            if self.second is None:
                _fail(ParseErrorKind.NOT_ENOUGH)

        return hour * 3600 + self.minute * 60 + second, nanos + leap

    def to_datetime(self, offset: int = 0) -> tuple[int, int, Nanos]:
        """Resolve all fields into (day number, seconds, nanos).

        The ``offset`` (in seconds) is applied to the timestamp field only,
        which counts from the epoch in UTC.
        """
        date_err = time_err = None
        try:
            days = self.to_date()
        except ParseError as e:
            date_err = e
        try:
            secs, nanos = self.to_time()
        except ParseError as e:
            time_err = e

        if date_err is None and time_err is None:
            if self.timestamp is not None:
                ts = (days - UNIX_EPOCH_DAYS) * SECS_PER_DAY + secs - offset
                # a leap second may be written as the following second
                if self.timestamp != ts and not (
                    nanos >= LEAP_NANOS and self.timestamp == ts + 1
                ):
                    _fail(ParseErrorKind.IMPOSSIBLE)
            return days, secs, nanos

        if self.timestamp is None:
            raise date_err or time_err  # type: ignore[misc]

        # Derive the missing fields from the timestamp, unless the fields
        # present are already known to be wrong.
        kinds = {e.kind for e in (date_err, time_err) if e is not None}
        for kind in (ParseErrorKind.OUT_OF_RANGE, ParseErrorKind.IMPOSSIBLE):
            if kind in kinds:
                _fail(kind)

        ts = self.timestamp + offset
        parsed = self.copy()
        if parsed.second == 60:
            if ts % 60 == 0:
                ts -= 1
            elif ts % 60 != 59:
                _fail(ParseErrorKind.IMPOSSIBLE)
        else:
            parsed.set_second(ts % 60)

        days, secs = divmod(ts, SECS_PER_DAY)
        days += UNIX_EPOCH_DAYS
        year, ordinal = days_to_year_and_ordinal(days)
        if not year_in_range(year):
            _fail(ParseErrorKind.OUT_OF_RANGE)
        parsed.set_year(year)
        parsed.set_ordinal(ordinal)
        parsed.set_hour(secs // 3600)
        parsed.set_minute(secs // 60 % 60)
        return (parsed.to_date(), *parsed.to_time())


def _resolve_year(
    year: int | None, div_100: int | None, mod_100: int | None
) -> int | None:
    if div_100 is None and mod_100 is None:
        return year
    if year is not None and (mod_100 is None or 0 <= mod_100 <= 99):
        if year < 0:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        q, r = divmod(year, 100)
        if div_100 in (None, q) and mod_100 in (None, r):
            return year
        _fail(ParseErrorKind.IMPOSSIBLE)
    if mod_100 is not None and 0 <= mod_100 <= 99:
        # (year is None here)
        if div_100 is None:
            # two-digit years: 1970-2069
            return mod_100 + (2000 if mod_100 < 70 else 1900)
        if div_100 < 0:
            _fail(ParseErrorKind.OUT_OF_RANGE)
        return div_100 * 100 + mod_100
    if mod_100 is None:
        _fail(ParseErrorKind.NOT_ENOUGH)
    _fail(ParseErrorKind.OUT_OF_RANGE)


def _from_ymd(year: int, month: int, day: int) -> int:
    if not (
        year_in_range(year)
        and 1 <= month <= 12
        and 1 <= day <= days_in_month(year, month)
    ):
        _fail(ParseErrorKind.OUT_OF_RANGE)
    return ymd_to_days(year, month, day)


def _from_year_and_ordinal(year: int, ordinal: int) -> int:
    if not (year_in_range(year) and 1 <= ordinal <= days_in_year(year)):
        _fail(ParseErrorKind.OUT_OF_RANGE)
    return days_before_year(year) + ordinal


def _from_week_number(
    year: int, week: int, days_into_week: int, first_weekday: int
) -> int:
    # Week 1 starts on the first ``first_weekday`` (ISO number) of the year.
    # Days before it are in week 0.
    newyear = _from_year_and_ordinal(year, 1)
    first_week = (first_weekday - iso_weekday(newyear)) % 7
    if week > 53:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    days = newyear + first_week + (week - 1) * 7 + days_into_week
    if days_to_year_and_ordinal(days)[0] != year:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    return days


_match_digits = re.compile(r"[0-9]+", re.ASCII).match
_match_colons = re.compile(r"[:\s]*").match


def _number(s: str, min_digits: int, max_digits: int) -> tuple[str, int]:
    if len(s) < min_digits:
        _fail(ParseErrorKind.TOO_SHORT)
    m = _match_digits(s, 0, max_digits)
    ndigits = m.end() if m else 0
    if ndigits < min_digits:
        _fail(ParseErrorKind.INVALID)
    # more digits than any 64-bit value has
    if ndigits > 19:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    value = int(s[:ndigits]) if ndigits else 0
    if value > _I64_MAX:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    return s[ndigits:], value


def _fraction(s: str) -> tuple[str, int]:
    # up to 9 digits, scaled to nanoseconds. Further digits are ignored.
    rest, value = _number(s, 1, 9)
    value *= 10 ** (9 - (len(s) - len(rest)))
    m = _match_digits(rest)
    return (rest[m.end() :] if m else rest), value


def _fraction_fixed(s: str, digits: int) -> tuple[str, int]:
    rest, value = _number(s, digits, digits)
    return rest, value * 10 ** (9 - digits)


def _name(s: str, names: Iterable[str]) -> tuple[str, int]:
    # matches an abbreviated name case-insensitively, followed optionally
    # by the rest of the full name. Returns the 1-based index.
    if len(s) < 3:
        _fail(ParseErrorKind.TOO_SHORT)
    prefix = s[:3].lower()
    for i, name in enumerate(names, start=1):
        if name[:3].lower() == prefix:
            suffix = name[3:].lower()
            if s[3 : 3 + len(suffix)].lower() == suffix:
                return s[3 + len(suffix) :], i
            return s[3:], i
    _fail(ParseErrorKind.INVALID)


def _ampm(s: str) -> tuple[str, bool]:
    if len(s) < 2:
        _fail(ParseErrorKind.TOO_SHORT)
    marker = s[:2].lower()
    if marker == "am":
        return s[2:], False
    elif marker == "pm":
        return s[2:], True
    _fail(ParseErrorKind.INVALID)


def _two_digits(s: str) -> str:
    if len(s) < 2:
        _fail(ParseErrorKind.TOO_SHORT)
    return s[:2]


def _offset(s: str) -> tuple[str, int]:
    """Parse ``[+-]HH[:]MM`` into seconds.

    Colons and whitespace between hours and minutes are skipped.
    """
    if not s:
        _fail(ParseErrorKind.TOO_SHORT)
    sign = s[0]
    if sign not in "+-":
        _fail(ParseErrorKind.INVALID)
    hh = _two_digits(s[1:])
    if not (hh.isdigit() and hh.isascii()):
        _fail(ParseErrorKind.INVALID)
    s = s[_match_colons(s, 3).end() :]
    mm = _two_digits(s)
    if not (mm.isdigit() and mm.isascii()):
        _fail(ParseErrorKind.INVALID)
    if mm[0] > "5":
        _fail(ParseErrorKind.OUT_OF_RANGE)
    seconds = int(hh) * 3600 + int(mm) * 60
    return s[2:], -seconds if sign == "-" else seconds


_NUMERIC_SETTERS = {
    Numeric.YEAR: Parsed.set_year,
    Numeric.YEAR_DIV_100: Parsed.set_year_div_100,
    Numeric.YEAR_MOD_100: Parsed.set_year_mod_100,
    Numeric.ISO_YEAR: Parsed.set_isoyear,
    Numeric.ISO_YEAR_DIV_100: Parsed.set_isoyear_div_100,
    Numeric.ISO_YEAR_MOD_100: Parsed.set_isoyear_mod_100,
    Numeric.MONTH: Parsed.set_month,
    Numeric.DAY: Parsed.set_day,
    Numeric.WEEK_FROM_SUN: Parsed.set_week_from_sun,
    Numeric.WEEK_FROM_MON: Parsed.set_week_from_mon,
    Numeric.ISO_WEEK: Parsed.set_isoweek,
    Numeric.ORDINAL: Parsed.set_ordinal,
    Numeric.HOUR: Parsed.set_hour,
    Numeric.HOUR12: Parsed.set_hour12,
    Numeric.MINUTE: Parsed.set_minute,
    Numeric.SECOND: Parsed.set_second,
    Numeric.NANOSECOND: Parsed.set_nanosecond,
    Numeric.TIMESTAMP: Parsed.set_timestamp,
}


def _set_weekday_from_sun(parsed: Parsed, value: int) -> None:
    if not 0 <= value <= 6:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    parsed.set_weekday(value or 7)


def _set_weekday_from_mon(parsed: Parsed, value: int) -> None:
    if not 1 <= value <= 7:
        _fail(ParseErrorKind.OUT_OF_RANGE)
    parsed.set_weekday(value)


_NUMERIC_SETTERS[Numeric.NUM_DAYS_FROM_SUN] = _set_weekday_from_sun
_NUMERIC_SETTERS[Numeric.WEEKDAY_FROM_MON] = _set_weekday_from_mon


def _scan_numeric(s: str, spec: Numeric) -> tuple[str, int]:
    s = s.lstrip()
    if spec.signed and s[:1] == "-":
        s, value = _number(s[1:], 1, len(s))
        return s, -value
    elif spec.signed and s[:1] == "+":
        return _number(s[1:], 1, len(s))
    elif spec is Numeric.TIMESTAMP:
        return _number(s, 1, len(s))
    return _number(s, 1, spec.width)


def _scan_fixed(parsed: Parsed, s: str, spec: Fixed) -> str:
    if spec in (Fixed.SHORT_MONTH_NAME, Fixed.LONG_MONTH_NAME):
        s, month = _name(s, MONTH_NAMES)
        parsed.set_month(month)
    elif spec in (Fixed.SHORT_WEEKDAY_NAME, Fixed.LONG_WEEKDAY_NAME):
        s, weekday = _name(s, WEEKDAY_NAMES)
        parsed.set_weekday(weekday)
    elif spec in (Fixed.LOWER_AMPM, Fixed.UPPER_AMPM):
        s, pm = _ampm(s)
        parsed.set_ampm(pm)
    elif spec in (
        Fixed.NANOSECOND,
        Fixed.NANOSECOND3,
        Fixed.NANOSECOND6,
        Fixed.NANOSECOND9,
    ):
        # optional, with any number of digits
        if s.startswith("."):
            s, nanos = _fraction(s[1:])
            parsed.set_nanosecond(nanos)
    elif spec is Fixed.NANOSECOND3_NO_DOT:
        s, nanos = _fraction_fixed(s, 3)
        parsed.set_nanosecond(nanos)
    elif spec is Fixed.NANOSECOND6_NO_DOT:
        s, nanos = _fraction_fixed(s, 6)
        parsed.set_nanosecond(nanos)
    elif spec is Fixed.NANOSECOND9_NO_DOT:
        s, nanos = _fraction_fixed(s, 9)
        parsed.set_nanosecond(nanos)
    elif spec in (Fixed.TIMEZONE_OFFSET, Fixed.TIMEZONE_OFFSET_COLON):
        s, offset = _offset(s.lstrip())
        parsed.set_offset(offset)
    else:
        assert spec is Fixed.TIMEZONE_NAME
        _fail(ParseErrorKind.BAD_FORMAT)
    return s


def scan(parsed: Parsed, s: str, items: Iterable[Item]) -> None:
    """Match the whole input against the items, recording fields"""
    for item in items:
        if isinstance(item, LiteralItem):
            if len(s) < len(item.text):
                _fail(ParseErrorKind.TOO_SHORT)
            if not s.startswith(item.text):
                _fail(ParseErrorKind.INVALID)
            s = s[len(item.text) :]
        elif isinstance(item, SpaceItem):
            s = s.lstrip()
        elif isinstance(item, NumericItem):
            s, value = _scan_numeric(s, item.spec)
            _NUMERIC_SETTERS[item.spec](parsed, value)
        elif isinstance(item, FixedItem):
            s = _scan_fixed(parsed, s, item.spec)
        else:
            assert isinstance(item, ErrorItem)
            _fail(ParseErrorKind.BAD_FORMAT)
    if s:
        _fail(ParseErrorKind.TOO_LONG)


def _parse(s: str, items: Iterable[Item]) -> Parsed:
    parsed = Parsed()
    scan(parsed, s, items)
    return parsed


def _parse_err(s: str, err: ParseError) -> NoReturn:
    raise ParseError(
        err.kind, f"Invalid format: {s!r} ({err.kind.value})"
    ) from None


def date_from_items(s: str, items: Iterable[Item]) -> int:
    try:
        return _parse(s, items).to_date()
    except ParseError as e:
        _parse_err(s, e)


def time_from_items(s: str, items: Iterable[Item]) -> tuple[int, Nanos]:
    try:
        return _parse(s, items).to_time()
    except ParseError as e:
        _parse_err(s, e)


def datetime_from_items(
    s: str, items: Iterable[Item]
) -> tuple[int, int, Nanos]:
    """Parse into (day number, seconds of day, nanos).

    An offset in the input is checked for syntax, but otherwise ignored.
    """
    try:
        return _parse(s, items).to_datetime()
    except ParseError as e:
        _parse_err(s, e)
