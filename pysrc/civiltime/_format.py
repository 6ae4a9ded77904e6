"""Format items, strftime pattern tokenizing, and rendering.

A format is a sequence of items. Patterns like ``"%Y-%m-%d"`` are
tokenized lazily, so an invalid pattern only fails once it is rendered
(or used for parsing).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union

from ._common import NS_PER_SEC, SECS_PER_DAY, UNIX_EPOCH_DAYS, Nanos
from ._math import (
    days_before_year,
    days_to_iso_week_date,
    days_to_ymd,
    iso_weekday,
)


class FormatError(ValueError):
    """A format pattern is invalid, or needs fields the value doesn't have"""


class Pad(enum.Enum):
    """Padding of numeric fields up to their width"""

    NONE = "none"
    ZERO = "zero"
    SPACE = "space"


class Numeric(enum.Enum):
    """Numeric fields.

    Each has a default ``width``, the maximum number of digits read when
    parsing. ``signed`` fields accept an explicit sign with any number of
    digits instead.
    """

    YEAR = enum.auto()
    YEAR_DIV_100 = enum.auto()
    YEAR_MOD_100 = enum.auto()
    ISO_YEAR = enum.auto()
    ISO_YEAR_DIV_100 = enum.auto()
    ISO_YEAR_MOD_100 = enum.auto()
    MONTH = enum.auto()
    DAY = enum.auto()
    WEEK_FROM_SUN = enum.auto()
    WEEK_FROM_MON = enum.auto()
    ISO_WEEK = enum.auto()
    NUM_DAYS_FROM_SUN = enum.auto()
    WEEKDAY_FROM_MON = enum.auto()
    ORDINAL = enum.auto()
    HOUR = enum.auto()
    HOUR12 = enum.auto()
    MINUTE = enum.auto()
    SECOND = enum.auto()
    NANOSECOND = enum.auto()
    TIMESTAMP = enum.auto()

    @property
    def width(self) -> int:
        return _WIDTHS.get(self, 2)

    @property
    def signed(self) -> bool:
        return self in _SIGNED


_WIDTHS = {
    Numeric.YEAR: 4,
    Numeric.ISO_YEAR: 4,
    Numeric.NUM_DAYS_FROM_SUN: 1,
    Numeric.WEEKDAY_FROM_MON: 1,
    Numeric.ORDINAL: 3,
    Numeric.NANOSECOND: 9,
    Numeric.TIMESTAMP: 1,
}
_SIGNED = frozenset([Numeric.YEAR, Numeric.ISO_YEAR, Numeric.TIMESTAMP])


class Fixed(enum.Enum):
    """Fields with a fixed textual form"""

    SHORT_MONTH_NAME = enum.auto()
    LONG_MONTH_NAME = enum.auto()
    SHORT_WEEKDAY_NAME = enum.auto()
    LONG_WEEKDAY_NAME = enum.auto()
    LOWER_AMPM = enum.auto()
    UPPER_AMPM = enum.auto()
    # fractional seconds. The plain variant is shortest-of 0/3/6/9 digits
    NANOSECOND = enum.auto()
    NANOSECOND3 = enum.auto()
    NANOSECOND6 = enum.auto()
    NANOSECOND9 = enum.auto()
    NANOSECOND3_NO_DOT = enum.auto()
    NANOSECOND6_NO_DOT = enum.auto()
    NANOSECOND9_NO_DOT = enum.auto()
    TIMEZONE_NAME = enum.auto()
    TIMEZONE_OFFSET = enum.auto()
    TIMEZONE_OFFSET_COLON = enum.auto()


@dataclass(frozen=True)
class LiteralItem:
    """Text that must appear as-is"""

    text: str


@dataclass(frozen=True)
class SpaceItem:
    """Whitespace. Any amount of whitespace is accepted when parsing"""

    text: str


@dataclass(frozen=True)
class NumericItem:
    spec: Numeric
    pad: Pad = Pad.ZERO


@dataclass(frozen=True)
class FixedItem:
    spec: Fixed


@dataclass(frozen=True)
class ErrorItem:
    """An invalid part of a pattern. Fails when rendered or parsed"""


Item = Union[LiteralItem, SpaceItem, NumericItem, FixedItem, ErrorItem]


def _num(spec: Numeric, pad: Pad = Pad.ZERO) -> NumericItem:
    return NumericItem(spec, pad)


def _lit(text: str) -> LiteralItem:
    return LiteralItem(text)


_SP = SpaceItem(" ")
_DATE_MDY = (
    _num(Numeric.MONTH),
    _lit("/"),
    _num(Numeric.DAY),
    _lit("/"),
    _num(Numeric.YEAR_MOD_100),
)
_DATE_YMD = (
    _num(Numeric.YEAR),
    _lit("-"),
    _num(Numeric.MONTH),
    _lit("-"),
    _num(Numeric.DAY),
)
_TIME_HMS = (
    _num(Numeric.HOUR),
    _lit(":"),
    _num(Numeric.MINUTE),
    _lit(":"),
    _num(Numeric.SECOND),
)

# specifiers with a single item
_SIMPLE: dict[str, Item] = {
    "Y": _num(Numeric.YEAR),
    "C": _num(Numeric.YEAR_DIV_100),
    "y": _num(Numeric.YEAR_MOD_100),
    "G": _num(Numeric.ISO_YEAR),
    "g": _num(Numeric.ISO_YEAR_MOD_100),
    "m": _num(Numeric.MONTH),
    "b": FixedItem(Fixed.SHORT_MONTH_NAME),
    "h": FixedItem(Fixed.SHORT_MONTH_NAME),
    "B": FixedItem(Fixed.LONG_MONTH_NAME),
    "d": _num(Numeric.DAY),
    "e": _num(Numeric.DAY, Pad.SPACE),
    "a": FixedItem(Fixed.SHORT_WEEKDAY_NAME),
    "A": FixedItem(Fixed.LONG_WEEKDAY_NAME),
    "w": _num(Numeric.NUM_DAYS_FROM_SUN),
    "u": _num(Numeric.WEEKDAY_FROM_MON),
    "U": _num(Numeric.WEEK_FROM_SUN),
    "W": _num(Numeric.WEEK_FROM_MON),
    "V": _num(Numeric.ISO_WEEK),
    "j": _num(Numeric.ORDINAL),
    "H": _num(Numeric.HOUR),
    "k": _num(Numeric.HOUR, Pad.SPACE),
    "I": _num(Numeric.HOUR12),
    "l": _num(Numeric.HOUR12, Pad.SPACE),
    "P": FixedItem(Fixed.LOWER_AMPM),
    "p": FixedItem(Fixed.UPPER_AMPM),
    "M": _num(Numeric.MINUTE),
    "S": _num(Numeric.SECOND),
    "f": _num(Numeric.NANOSECOND),
    "s": _num(Numeric.TIMESTAMP),
    "Z": FixedItem(Fixed.TIMEZONE_NAME),
    "z": FixedItem(Fixed.TIMEZONE_OFFSET),
    "t": _lit("\t"),
    "n": _lit("\n"),
    "%": _lit("%"),
}

# specifiers expanding to several items
_COMPOSITE: dict[str, tuple[Item, ...]] = {
    "D": _DATE_MDY,
    "x": _DATE_MDY,
    "F": _DATE_YMD,
    "v": (
        _num(Numeric.DAY, Pad.SPACE),
        _lit("-"),
        FixedItem(Fixed.SHORT_MONTH_NAME),
        _lit("-"),
        _num(Numeric.YEAR),
    ),
    "R": _TIME_HMS[:3],
    "T": _TIME_HMS,
    "X": _TIME_HMS,
    "r": (
        _num(Numeric.HOUR12),
        _lit(":"),
        _num(Numeric.MINUTE),
        _lit(":"),
        _num(Numeric.SECOND),
        _SP,
        FixedItem(Fixed.UPPER_AMPM),
    ),
    "c": (
        FixedItem(Fixed.SHORT_WEEKDAY_NAME),
        _SP,
        FixedItem(Fixed.SHORT_MONTH_NAME),
        _SP,
        _num(Numeric.DAY, Pad.SPACE),
        _SP,
        *_TIME_HMS,
        _SP,
        _num(Numeric.YEAR),
    ),
    "+": (
        *_DATE_YMD,
        _lit("T"),
        *_TIME_HMS,
        FixedItem(Fixed.NANOSECOND),
        FixedItem(Fixed.TIMEZONE_OFFSET_COLON),
    ),
}

_PAD_MODIFIERS = {"-": Pad.NONE, "0": Pad.ZERO, "_": Pad.SPACE}
_FRACTIONS_DOT = {
    "3": Fixed.NANOSECOND3,
    "6": Fixed.NANOSECOND6,
    "9": Fixed.NANOSECOND9,
}
_FRACTIONS_NO_DOT = {
    "3": Fixed.NANOSECOND3_NO_DOT,
    "6": Fixed.NANOSECOND6_NO_DOT,
    "9": Fixed.NANOSECOND9_NO_DOT,
}


def strftime_items(fmt: str) -> Iterator[Item]:
    """Tokenize a strftime-style pattern into format items.

    The pattern is consumed lazily: unknown specifiers become
    :class:`ErrorItem` instead of raising.
    """
    i = 0
    end = len(fmt)
    while i < end:
        c = fmt[i]
        if c == "%":
            i, items = _read_specifier(fmt, i + 1)
            yield from items
        elif c.isspace():
            start = i
            while i < end and fmt[i].isspace():
                i += 1
            yield SpaceItem(fmt[start:i])
        else:
            start = i
            while i < end and fmt[i] != "%" and not fmt[i].isspace():
                i += 1
            yield LiteralItem(fmt[start:i])


def _read_specifier(fmt: str, i: int) -> tuple[int, tuple[Item, ...]]:
    # returns the index after the specifier, and its items
    try:
        c = fmt[i]
        pad = _PAD_MODIFIERS.get(c)
        if pad is not None:
            i += 1
            c = fmt[i]
        i += 1
        if c == "." and fmt[i] == "f":
            item: Item = FixedItem(Fixed.NANOSECOND)
            i += 1
        elif c == "." and fmt[i] in _FRACTIONS_DOT and fmt[i + 1] == "f":
            item = FixedItem(_FRACTIONS_DOT[fmt[i]])
            i += 2
        elif c in _FRACTIONS_NO_DOT and fmt[i] == "f":
            item = FixedItem(_FRACTIONS_NO_DOT[c])
            i += 1
        elif c == ":" and fmt[i] == "z":
            item = FixedItem(Fixed.TIMEZONE_OFFSET_COLON)
            i += 1
        elif c in _COMPOSITE:
            return i, (_COMPOSITE[c] if pad is None else (ErrorItem(),))
        elif c in _SIMPLE:
            item = _SIMPLE[c]
        else:
            return i, (ErrorItem(),)
    except IndexError:  # the pattern ends mid-specifier
        return len(fmt), (ErrorItem(),)

    if pad is not None:
        # padding modifiers only make sense for numbers
        item = (
            NumericItem(item.spec, pad)
            if isinstance(item, NumericItem)
            else ErrorItem()
        )
    return i, (item,)


# The canonical ISO 8601-like forms. Spaces are allowed between all fields
# when parsing, but never rendered.
DATE_ITEMS: tuple[Item, ...] = (
    SpaceItem(""),
    _num(Numeric.YEAR),
    SpaceItem(""),
    _lit("-"),
    SpaceItem(""),
    _num(Numeric.MONTH),
    SpaceItem(""),
    _lit("-"),
    SpaceItem(""),
    _num(Numeric.DAY),
    SpaceItem(""),
)
TIME_ITEMS: tuple[Item, ...] = (
    SpaceItem(""),
    _num(Numeric.HOUR),
    SpaceItem(""),
    _lit(":"),
    SpaceItem(""),
    _num(Numeric.MINUTE),
    SpaceItem(""),
    _lit(":"),
    SpaceItem(""),
    _num(Numeric.SECOND),
    FixedItem(Fixed.NANOSECOND),
    SpaceItem(""),
)
DATETIME_ITEMS: tuple[Item, ...] = (*DATE_ITEMS, _lit("T"), *TIME_ITEMS)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
# Monday first, matching ISO weekday numbers
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_TimeParts = Optional[Tuple[int, Nanos]]


class _DateFields:
    """Calendar fields of a day number, computed once per render"""

    __slots__ = ("days", "year", "month", "day", "ordinal", "weekday", "iso")

    def __init__(self, days: int) -> None:
        self.days = days
        self.year, self.month, self.day = days_to_ymd(days)
        self.ordinal = days - days_before_year(self.year)
        self.weekday = iso_weekday(days)
        self.iso = days_to_iso_week_date(days)


def render(
    items: Iterable[Item], days: int | None, time: _TimeParts
) -> str:
    """Render the items for the given date (day number) and/or time.

    Raises :class:`FormatError` for invalid items, or items which need a
    missing part (e.g. a year when formatting a time alone).
    """
    date = None if days is None else _DateFields(days)
    out = []
    for item in items:
        if isinstance(item, (LiteralItem, SpaceItem)):
            out.append(item.text)
        elif isinstance(item, NumericItem):
            out.append(_render_numeric(item, date, time))
        elif isinstance(item, FixedItem):
            out.append(_render_fixed(item.spec, date, time))
        else:
            raise FormatError("Invalid format pattern")
    return "".join(out)


def _need_date(date: _DateFields | None, what: object) -> _DateFields:
    if date is None:
        raise FormatError(f"Cannot format {what} without a date")
    return date


def _need_time(time: _TimeParts, what: object) -> tuple[int, Nanos]:
    if time is None:
        raise FormatError(f"Cannot format {what} without a time")
    return time


def _numeric_value(
    spec: Numeric, date: _DateFields | None, time: _TimeParts
) -> int:
    if spec is Numeric.NANOSECOND:
        return _need_time(time, spec)[1] % NS_PER_SEC
    elif spec is Numeric.TIMESTAMP:
        secs = _need_time(time, spec)[0]
        days = _need_date(date, spec).days
        return (days - UNIX_EPOCH_DAYS) * SECS_PER_DAY + secs
    elif spec in _TIME_FIELDS:
        secs, nanos = _need_time(time, spec)
        return _TIME_FIELDS[spec](secs, nanos)

    d = _need_date(date, spec)
    if spec is Numeric.YEAR:
        return d.year
    elif spec is Numeric.YEAR_DIV_100:
        return d.year // 100
    elif spec is Numeric.YEAR_MOD_100:
        return d.year % 100
    elif spec is Numeric.ISO_YEAR:
        return d.iso[0]
    elif spec is Numeric.ISO_YEAR_DIV_100:
        return d.iso[0] // 100
    elif spec is Numeric.ISO_YEAR_MOD_100:
        return d.iso[0] % 100
    elif spec is Numeric.MONTH:
        return d.month
    elif spec is Numeric.DAY:
        return d.day
    elif spec is Numeric.WEEK_FROM_SUN:
        return (d.ordinal - d.weekday % 7 + 7) // 7
    elif spec is Numeric.WEEK_FROM_MON:
        return (d.ordinal - (d.weekday - 1) + 7) // 7
    elif spec is Numeric.ISO_WEEK:
        return d.iso[1]
    elif spec is Numeric.NUM_DAYS_FROM_SUN:
        return d.weekday % 7
    elif spec is Numeric.WEEKDAY_FROM_MON:
        return d.weekday
    else:
        assert spec is Numeric.ORDINAL
        return d.ordinal


_TIME_FIELDS = {
    Numeric.HOUR: lambda secs, _: secs // 3600,
    Numeric.HOUR12: lambda secs, _: (secs // 3600 % 12) or 12,
    Numeric.MINUTE: lambda secs, _: secs // 60 % 60,
    # a leap second shows as second 60
    Numeric.SECOND: lambda secs, nanos: secs % 60 + nanos // NS_PER_SEC,
}


def _render_numeric(
    item: NumericItem, date: _DateFields | None, time: _TimeParts
) -> str:
    value = _numeric_value(item.spec, date, time)
    width = item.spec.width
    pad = item.pad
    if item.spec in (Numeric.YEAR, Numeric.ISO_YEAR) and not (
        0 <= value < 10_000
    ):
        # years outside 4 digits always carry an explicit sign
        if pad is Pad.ZERO:
            return f"{value:+0{width + 1}d}"
        elif pad is Pad.SPACE:
            return f"{value:+{width + 1}d}"
        return f"{value:+d}"
    if pad is Pad.ZERO:
        return f"{value:0{width}d}"
    elif pad is Pad.SPACE:
        return f"{value:{width}d}"
    return str(value)


def format_fraction(nanos: Nanos) -> str:
    """The shortest of 0, 3, 6 or 9 fractional digits, with a dot"""
    nanos %= NS_PER_SEC
    if nanos == 0:
        return ""
    elif nanos % 1_000_000 == 0:
        return f".{nanos // 1_000_000:03d}"
    elif nanos % 1_000 == 0:
        return f".{nanos // 1_000:06d}"
    return f".{nanos:09d}"


def _render_fixed(
    spec: Fixed, date: _DateFields | None, time: _TimeParts
) -> str:
    if spec is Fixed.SHORT_MONTH_NAME:
        return MONTH_NAMES[_need_date(date, spec).month - 1][:3]
    elif spec is Fixed.LONG_MONTH_NAME:
        return MONTH_NAMES[_need_date(date, spec).month - 1]
    elif spec is Fixed.SHORT_WEEKDAY_NAME:
        return WEEKDAY_NAMES[_need_date(date, spec).weekday - 1][:3]
    elif spec is Fixed.LONG_WEEKDAY_NAME:
        return WEEKDAY_NAMES[_need_date(date, spec).weekday - 1]
    elif spec is Fixed.LOWER_AMPM:
        return "am" if _need_time(time, spec)[0] < 43_200 else "pm"
    elif spec is Fixed.UPPER_AMPM:
        return "AM" if _need_time(time, spec)[0] < 43_200 else "PM"
    elif spec in (
        Fixed.TIMEZONE_NAME,
        Fixed.TIMEZONE_OFFSET,
        Fixed.TIMEZONE_OFFSET_COLON,
    ):
        raise FormatError(f"Cannot format {spec} without an offset")

    nanos = _need_time(time, spec)[1] % NS_PER_SEC
    if spec is Fixed.NANOSECOND:
        return format_fraction(nanos)
    elif spec is Fixed.NANOSECOND3:
        return f".{nanos // 1_000_000:03d}"
    elif spec is Fixed.NANOSECOND6:
        return f".{nanos // 1_000:06d}"
    elif spec is Fixed.NANOSECOND9:
        return f".{nanos:09d}"
    elif spec is Fixed.NANOSECOND3_NO_DOT:
        return f"{nanos // 1_000_000:03d}"
    elif spec is Fixed.NANOSECOND6_NO_DOT:
        return f"{nanos // 1_000:06d}"
    else:
        assert spec is Fixed.NANOSECOND9_NO_DOT
        return f"{nanos:09d}"
