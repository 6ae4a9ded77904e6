import pickle
from copy import copy, deepcopy
from datetime import date as py_date

import pytest
from hypothesis import given
from hypothesis.strategies import integers

from civiltime import (
    CivilDateTime,
    Date,
    FormatError,
    ParseError,
    ParseErrorKind,
    Time,
    Weekday,
    days,
    hours,
)

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual


class TestInit:

    def test_args(self):
        d = Date(2021, 1, 2)
        assert d.year == 2021
        assert d.month == 1
        assert d.day == 2

    def test_kwargs(self):
        assert Date(year=2021, month=1, day=2) == Date(2021, 1, 2)

    @pytest.mark.parametrize(
        "args",
        [
            (2021, 1, 0),
            (2021, 0, 1),
            (2021, 13, 1),
            (2021, 2, 29),
            (1900, 2, 29),
            (2021, 4, 31),
            (262_144, 1, 1),
            (-262_145, 12, 31),
        ],
    )
    def test_invalid(self, args):
        with pytest.raises(ValueError):
            Date(*args)

    @pytest.mark.parametrize(
        "args",
        [
            (2000, 2, 29),
            (0, 2, 29),
            (-4, 2, 29),
            (262_143, 12, 31),
            (-262_144, 1, 1),
        ],
    )
    def test_valid_extremes_and_leap_days(self, args):
        assert Date(*args).year == args[0]


class TestDaysSinceCe:

    def test_known_values(self):
        assert Date(1, 1, 1).days_since_ce() == 1
        assert Date(1970, 1, 1).days_since_ce() == 719_163
        assert Date(0, 12, 31).days_since_ce() == 0
        assert Date.from_days_since_ce(738_000) == Date(2021, 7, 29)

    @given(integers(1, py_date.max.toordinal()))
    def test_matches_stdlib(self, n):
        d = Date.from_days_since_ce(n)
        py = py_date.fromordinal(n)
        assert (d.year, d.month, d.day) == (py.year, py.month, py.day)
        assert Date(py.year, py.month, py.day).days_since_ce() == n

    @given(
        integers(Date.MIN.days_since_ce(), Date.MAX.days_since_ce()),
    )
    def test_roundtrip(self, n):
        d = Date.from_days_since_ce(n)
        assert Date(d.year, d.month, d.day).days_since_ce() == n

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="range"):
            Date.from_days_since_ce(Date.MAX.days_since_ce() + 1)
        with pytest.raises(ValueError, match="range"):
            Date.from_days_since_ce(Date.MIN.days_since_ce() - 1)


class TestFromYearAndDay:

    def test_valid(self):
        assert Date.from_year_and_day(2020, 1) == Date(2020, 1, 1)
        assert Date.from_year_and_day(2020, 60) == Date(2020, 2, 29)
        assert Date.from_year_and_day(2020, 366) == Date(2020, 12, 31)
        assert Date.from_year_and_day(-1, 365) == Date(-1, 12, 31)

    @pytest.mark.parametrize(
        "year, day", [(2021, 366), (2021, 0), (262_144, 1)]
    )
    def test_invalid(self, year, day):
        with pytest.raises(ValueError):
            Date.from_year_and_day(year, day)

    def test_day_of_year(self):
        assert Date(2021, 1, 1).day_of_year() == 1
        assert Date(2021, 12, 31).day_of_year() == 365
        assert Date(2024, 12, 31).day_of_year() == 366
        assert Date(-4, 3, 1).day_of_year() == 61


class TestWeekdays:

    def test_day_of_week(self):
        assert Date(2021, 1, 2).day_of_week() is Weekday.SATURDAY
        assert Date(1, 1, 1).day_of_week() is Weekday.MONDAY
        assert Date(0, 12, 31).day_of_week() is Weekday.SUNDAY

    def test_iso_week_date(self):
        assert Date(2021, 1, 2).iso_week_date() == (
            2020,
            53,
            Weekday.SATURDAY,
        )
        assert Date(2015, 2, 2).iso_week_date() == (2015, 6, Weekday.MONDAY)
        assert Date(2018, 12, 31).iso_week_date() == (
            2019,
            1,
            Weekday.MONDAY,
        )

    @given(integers(1, py_date.max.toordinal()))
    def test_matches_stdlib(self, n):
        d = Date.from_days_since_ce(n)
        py = py_date.fromordinal(n)
        assert d.day_of_week().value == py.isoweekday()
        year, week, weekday = d.iso_week_date()
        assert (year, week, weekday.value) == tuple(py.isocalendar())


def test_replace():
    d = Date(2021, 1, 31)
    assert d.replace() == d
    assert d.replace(year=2022) == Date(2022, 1, 31)
    assert d.replace(month=3) == Date(2021, 3, 31)
    assert d.replace(day=2) == Date(2021, 1, 2)
    with pytest.raises(ValueError):
        d.replace(month=2)
    with pytest.raises(TypeError):
        d.replace(hour=3)  # type: ignore[call-arg]


def test_replace_day_of_year():
    assert Date(2020, 5, 5).replace_day_of_year(366) == Date(2020, 12, 31)
    with pytest.raises(ValueError):
        Date(2021, 5, 5).replace_day_of_year(366)


class TestZeroBased:

    def test_getters(self):
        d = Date(2020, 12, 31)
        assert d.month0 == 11
        assert d.day0 == 30
        assert d.day_of_year0() == 365
        assert Date(2021, 1, 1).day_of_year0() == 0

    def test_replace(self):
        d = Date(2021, 1, 31)
        assert d.replace(month0=2) == Date(2021, 3, 31)
        assert d.replace(day0=0) == Date(2021, 1, 1)
        assert d.replace(month0=11, day0=24) == Date(2021, 12, 25)
        with pytest.raises(ValueError):
            d.replace(month0=12)
        with pytest.raises(ValueError):
            d.replace(month0=1)  # February 31st
        with pytest.raises(ValueError):
            d.replace(day0=-1)
        with pytest.raises(TypeError, match="month0"):
            d.replace(month=1, month0=0)
        with pytest.raises(TypeError, match="day0"):
            d.replace(day=1, day0=0)

    def test_replace_day_of_year0(self):
        d = Date(2020, 5, 5)
        assert d.replace_day_of_year0(0) == Date(2020, 1, 1)
        assert d.replace_day_of_year0(365) == Date(2020, 12, 31)
        with pytest.raises(ValueError):
            d.replace_day_of_year0(366)
        with pytest.raises(ValueError):
            d.replace_day_of_year0(-1)


class TestArithmetic:

    def test_add_days(self):
        assert Date(2021, 1, 2).add_days(30) == Date(2021, 2, 1)
        assert Date(2021, 1, 2).add_days(-2) == Date(2020, 12, 31)
        with pytest.raises(ValueError):
            Date.MAX.add_days(1)

    def test_checked_add_truncates_to_whole_days(self):
        d = Date(2021, 1, 2)
        assert d.checked_add(hours(47)) == Date(2021, 1, 3)
        assert d.checked_add(hours(-47)) == Date(2021, 1, 1)
        assert d.checked_add(hours(23)) == d
        assert d.checked_subtract(days(2)) == Date(2020, 12, 31)

    def test_checked_add_out_of_range(self):
        assert Date.MAX.checked_add(days(1)) is None
        assert Date.MIN.checked_subtract(days(1)) is None
        assert Date.MIN.checked_add(days(-1)) is None

    def test_span(self):
        span = Date.MAX.days_since(Date.MIN)
        assert Date.MIN.checked_add(days(span)) == Date.MAX
        assert Date.MAX.checked_add(days(-span)) == Date.MIN

    def test_days_since_and_until(self):
        a = Date(2021, 1, 5)
        b = Date(2021, 1, 2)
        assert a.days_since(b) == 3
        assert b.days_since(a) == -3
        assert b.days_until(a) == 3
        assert a.duration_since(b) == days(3)
        assert b.duration_since(a) == days(-3)


def test_at():
    d = Date(2021, 1, 2)
    assert d.at(Time(12, 30)) == CivilDateTime(2021, 1, 2, 12, 30)


class TestFormatCommonIso:

    @pytest.mark.parametrize(
        "d, expect",
        [
            (Date(2021, 1, 2), "2021-01-02"),
            (Date(1, 1, 1), "0001-01-01"),
            (Date(0, 1, 1), "0000-01-01"),
            (Date(9999, 12, 31), "9999-12-31"),
            (Date(10_000, 1, 1), "+10000-01-01"),
            (Date(-1, 12, 31), "-0001-12-31"),
            (Date(12_345, 6, 7), "+12345-06-07"),
            (Date.MIN, "-262144-01-01"),
            (Date.MAX, "+262143-12-31"),
        ],
    )
    def test_format(self, d, expect):
        assert d.format_common_iso() == expect
        assert str(d) == expect
        assert Date.parse_common_iso(expect) == d

    def test_repr(self):
        assert repr(Date(2021, 1, 2)) == "Date(2021-01-02)"


class TestParseCommonIso:

    @pytest.mark.parametrize(
        "s, expect",
        [
            ("2021-01-02", Date(2021, 1, 2)),
            ("2021-1-2", Date(2021, 1, 2)),
            (" 2021 - 01 - 02 ", Date(2021, 1, 2)),
            ("-77-02-18", Date(-77, 2, 18)),
            ("+82701-05-06", Date(82_701, 5, 6)),
        ],
    )
    def test_valid(self, s, expect):
        assert Date.parse_common_iso(s) == expect

    @pytest.mark.parametrize(
        "s",
        [
            "",
            "2021",
            "2021-01",
            "20210102",
            "2021-02-30",
            "2001-02-29",
            "2021-13-01",
            "2021-01-02T",
            "2021-001-02",
            "+ 2021-01-02",
            "+802701-01-01",
        ],
    )
    def test_invalid(self, s):
        with pytest.raises(ParseError, match="Invalid format"):
            Date.parse_common_iso(s)

    def test_error_kind(self):
        with pytest.raises(ParseError) as exc:
            Date.parse_common_iso("2021-02-30")
        assert exc.value.kind is ParseErrorKind.OUT_OF_RANGE


def test_format():
    d = Date(2021, 1, 2)
    assert str(d.format("%A %-d %B")) == "Saturday 2 January"
    assert str(d.format("%G-W%V-%u")) == "2020-W53-6"
    with pytest.raises(FormatError):
        str(d.format("%H:%M"))


def test_eq():
    d = Date(2021, 1, 2)
    same = Date(2021, 1, 2)
    different = Date(2021, 1, 3)

    assert d == same
    assert not d == different
    assert not d == NeverEqual()
    assert d == AlwaysEqual()

    assert not d != same
    assert d != different
    assert d != NeverEqual()
    assert not d != AlwaysEqual()
    assert d != None  # noqa: E711
    assert not d == None  # noqa: E711

    assert hash(d) == hash(same)


def test_comparison():
    d = Date(2021, 5, 10)
    same = Date(2021, 5, 10)
    bigger = Date(2022, 2, 28)
    smaller = Date(-2020, 12, 31)

    assert d <= same
    assert d <= bigger
    assert not d <= smaller
    assert d <= AlwaysLarger()
    assert not d <= AlwaysSmaller()

    assert not d < same
    assert d < bigger
    assert not d < smaller
    assert d < AlwaysLarger()
    assert not d < AlwaysSmaller()

    assert d >= same
    assert not d >= bigger
    assert d >= smaller
    assert not d >= AlwaysLarger()
    assert d >= AlwaysSmaller()

    assert not d > same
    assert not d > bigger
    assert d > smaller
    assert not d > AlwaysLarger()
    assert d > AlwaysSmaller()


def test_pickling():
    for d in (Date(2021, 1, 2), Date.MIN, Date.MAX):
        assert pickle.loads(pickle.dumps(d)) == d


def test_copy():
    d = Date(2021, 1, 2)
    assert copy(d) is d
    assert deepcopy(d) is d


def test_singletons():
    assert Date.MIN == Date(-262_144, 1, 1)
    assert Date.MAX == Date(262_143, 12, 31)


def test_cannot_subclass():
    with pytest.raises(TypeError):

        class SubclassDate(Date):  # type: ignore[misc]
            pass
