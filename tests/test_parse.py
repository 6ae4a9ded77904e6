import pytest

from civiltime import (
    CivilDateTime,
    Date,
    ParseError,
    ParseErrorKind,
    strftime_items,
)
from civiltime._parse import Parsed, scan


class TestStrptime:

    @pytest.mark.parametrize(
        "s, fmt, expected",
        [
            (
                "2015-02-18T23:16:09.153",
                "%Y-%m-%dT%H:%M:%S%.f",
                CivilDateTime(2015, 2, 18, 23, 16, 9, nanosecond=153_000_000),
            ),
            (
                "2015-02-18T23:16:09",
                "%Y-%m-%dT%H:%M:%S%.f",
                CivilDateTime(2015, 2, 18, 23, 16, 9),
            ),
            (
                "Sat Jun 30 23:59:60.234567 2012",
                "%a %b %e %T%.f %Y",
                CivilDateTime(
                    2012, 6, 30, 23, 59, 59, nanosecond=1_234_567_000
                ),
            ),
            (
                "94/9/4 7:15",
                "%y/%m/%d %H:%M",
                CivilDateTime(1994, 9, 4, 7, 15),
            ),
            (
                "12/31/69 23:59:59",
                "%D %T",
                CivilDateTime(2069, 12, 31, 23, 59, 59),
            ),
            (
                "1/1/70 0:0:0",
                "%D %T",
                CivilDateTime(1970, 1, 1),
            ),
            # the offset must be well-formed, but has no effect
            (
                "2014-5-7T12:34:56+09:30",
                "%Y-%m-%dT%H:%M:%S%z",
                CivilDateTime(2014, 5, 7, 12, 34, 56),
            ),
            (
                "2014-5-7T12:34:56 -09 : 30",
                "%Y-%m-%dT%H:%M:%S %:z",
                CivilDateTime(2014, 5, 7, 12, 34, 56),
            ),
            (
                "2012-06-30 03:04 PM",
                "%Y-%m-%d %I:%M %p",
                CivilDateTime(2012, 6, 30, 15, 4),
            ),
            (
                "2012-06-30 12:04 am",
                "%Y-%m-%d %I:%M %p",
                CivilDateTime(2012, 6, 30, 0, 4),
            ),
            (
                "2012-182 12:00",
                "%Y-%j %H:%M",
                CivilDateTime(2012, 6, 30, 12),
            ),
            (
                "2015-W06-1 00:00",
                "%G-W%V-%u %H:%M",
                CivilDateTime(2015, 2, 2),
            ),
            (
                "2015 05 1 00:00",
                "%Y %U %w %H:%M",
                CivilDateTime(2015, 2, 2),
            ),
            (
                "2015 05 1 00:00",
                "%Y %W %u %H:%M",
                CivilDateTime(2015, 2, 2),
            ),
            (
                "1994 12 25 00:00",
                "%C%y %m %d %H:%M",
                CivilDateTime(1994, 12, 25),
            ),
            (
                "december 25, 1994 8:00",
                "%B %d, %Y %H:%M",
                CivilDateTime(1994, 12, 25, 8),
            ),
            (
                "Sunday 1994-12-25 08:00",
                "%A %F %R",
                CivilDateTime(1994, 12, 25, 8),
            ),
            (
                "2015-02-18 23:16:09 123",
                "%F %T %3f",
                CivilDateTime(2015, 2, 18, 23, 16, 9, nanosecond=123_000_000),
            ),
            # a timestamp alone
            ("1441497364", "%s", CivilDateTime(2015, 9, 5, 23, 56, 4)),
            (
                "1441497364.649",
                "%s%.3f",
                CivilDateTime(2015, 9, 5, 23, 56, 4, nanosecond=649_000_000),
            ),
            ("-1", "%s", CivilDateTime(1969, 12, 31, 23, 59, 59)),
            # a timestamp agreeing with the other fields
            (
                "2015-09-05 23:56:04 1441497364",
                "%F %T %s",
                CivilDateTime(2015, 9, 5, 23, 56, 4),
            ),
            # a leap second may be written as either timestamp
            (
                "2012-06-30 23:59:60 1341100799",
                "%F %T %s",
                CivilDateTime(2012, 6, 30, 23, 59, 59, nanosecond=10**9),
            ),
            (
                "2012-06-30 23:59:60 1341100800",
                "%F %T %s",
                CivilDateTime(2012, 6, 30, 23, 59, 59, nanosecond=10**9),
            ),
            (
                "1341100800 60",
                "%s %S",
                CivilDateTime(2012, 6, 30, 23, 59, 59, nanosecond=10**9),
            ),
        ],
    )
    def test_valid(self, s, fmt, expected):
        assert CivilDateTime.strptime(s, fmt) == expected

    @pytest.mark.parametrize(
        "s, fmt, kind",
        [
            # fields that disagree
            ("2012 2013", "%Y %Y", ParseErrorKind.IMPOSSIBLE),
            (
                "Fri 2012-06-30 00:00:00",
                "%a %F %T",
                ParseErrorKind.IMPOSSIBLE,
            ),
            (
                "2012-182 2012-07-01 00:00",
                "%Y-%j %F %R",
                ParseErrorKind.IMPOSSIBLE,
            ),
            (
                "2012-06-30 23:59:60 1341100801",
                "%F %T %s",
                ParseErrorKind.IMPOSSIBLE,
            ),
            (
                "2015-09-05 1441497364 01",
                "%F %s %S",
                ParseErrorKind.IMPOSSIBLE,
            ),
            ("13 AM", "%H %p", ParseErrorKind.IMPOSSIBLE),
            # missing fields
            ("2012-06-30", "%F", ParseErrorKind.NOT_ENOUGH),
            ("12:00", "%R", ParseErrorKind.NOT_ENOUGH),
            ("2012-06 12:00", "%Y-%m %R", ParseErrorKind.NOT_ENOUGH),
            ("2012-06-30 03:04", "%F %I:%M", ParseErrorKind.NOT_ENOUGH),
            ("2012-06-30 12 .5", "%F %H %.f", ParseErrorKind.NOT_ENOUGH),
            # out of range
            ("2012-06-31 00:00", "%F %R", ParseErrorKind.OUT_OF_RANGE),
            ("2012-06-30 24:00", "%F %R", ParseErrorKind.OUT_OF_RANGE),
            (
                "2012-06-30 13:00 PM",
                "%F %I:%M %p",
                ParseErrorKind.OUT_OF_RANGE,
            ),
            (
                "2012-06-30 00:00 PM",
                "%F %I:%M %p",
                ParseErrorKind.OUT_OF_RANGE,
            ),
            ("2012-06-30 12:00:61", "%F %T", ParseErrorKind.OUT_OF_RANGE),
            (
                "2012-06-30 12:00 +09:60",
                "%F %R %z",
                ParseErrorKind.OUT_OF_RANGE,
            ),
            ("2011-366 00:00", "%Y-%j %R", ParseErrorKind.OUT_OF_RANGE),
            ("99999999999999999999", "%s", ParseErrorKind.OUT_OF_RANGE),
            ("9223372036854775807", "%s", ParseErrorKind.OUT_OF_RANGE),
            ("8 00:00", "%w %R", ParseErrorKind.OUT_OF_RANGE),
            # malformed input
            ("", "%Y", ParseErrorKind.TOO_SHORT),
            ("Ju", "%b", ParseErrorKind.TOO_SHORT),
            ("Jux 1", "%b %d", ParseErrorKind.INVALID),
            ("2012-06-30 12:00 +9:00", "%F %R %z", ParseErrorKind.INVALID),
            ("2012-06-30 12:00 09:00", "%F %R %z", ParseErrorKind.INVALID),
            ("2012-06-30 12:00 xm", "%F %R %p", ParseErrorKind.INVALID),
            ("x2012", "%Y", ParseErrorKind.INVALID),
            ("2012-06-30 12:00:00.", "%F %T%.f", ParseErrorKind.TOO_SHORT),
            ("2012-06-30 12:00:00 12", "%F %T %3f", ParseErrorKind.TOO_SHORT),
            ("2012-06-30 12:00 ", "%F %R", ParseErrorKind.TOO_LONG),
            ("2012-06-30 12:00x", "%F %R", ParseErrorKind.TOO_LONG),
            # unsupported format
            ("2012", "%Y%Q", ParseErrorKind.BAD_FORMAT),
            ("2012 UTC", "%Y %Z", ParseErrorKind.BAD_FORMAT),
        ],
    )
    def test_invalid(self, s, fmt, kind):
        with pytest.raises(ParseError, match="Invalid format") as exc:
            CivilDateTime.strptime(s, fmt)
        assert exc.value.kind is kind

    def test_error_message(self):
        with pytest.raises(ParseError) as exc:
            CivilDateTime.strptime("2012-06-31 00:00", "%F %R")
        assert str(exc.value) == (
            "Invalid format: '2012-06-31 00:00' (input is out of range)"
        )


class TestParsed:

    def test_repr(self):
        p = Parsed()
        assert repr(p) == "Parsed()"
        p.set_year(2012)
        p.set_month(6)
        assert repr(p) == "Parsed(year=2012, month=6)"

    def test_set_twice(self):
        p = Parsed()
        p.set_year(2012)
        p.set_year(2012)
        with pytest.raises(ParseError) as exc:
            p.set_year(2013)
        assert exc.value.kind is ParseErrorKind.IMPOSSIBLE
        assert p.year == 2012

    def test_hours(self):
        p = Parsed()
        p.set_hour12(12)
        p.set_ampm(False)
        p.set_minute(30)
        assert p.to_time() == (30 * 60, 0)

        p = Parsed()
        p.set_hour(15)
        p.set_hour12(3)
        p.set_ampm(True)
        p.set_minute(0)
        assert p.to_time() == (15 * 3600, 0)

        with pytest.raises(ParseError):
            p.set_ampm(False)

    @pytest.mark.parametrize(
        "setter, value",
        [
            (Parsed.set_hour, 24),
            (Parsed.set_hour, -1),
            (Parsed.set_hour12, 0),
            (Parsed.set_hour12, 13),
            (Parsed.set_year, 2**31),
            (Parsed.set_month, -1),
            (Parsed.set_month, 2**32),
            (Parsed.set_year_div_100, -1),
            (Parsed.set_year_mod_100, -1),
        ],
    )
    def test_out_of_range(self, setter, value):
        with pytest.raises(ParseError) as exc:
            setter(Parsed(), value)
        assert exc.value.kind is ParseErrorKind.OUT_OF_RANGE

    def test_copy(self):
        p = Parsed()
        p.set_year(2012)
        q = p.copy()
        q.set_month(1)
        assert p.month is None
        assert q.year == 2012

    @pytest.mark.parametrize(
        "mod_100, expected",
        [(0, 2000), (69, 2069), (70, 1970), (99, 1999)],
    )
    def test_two_digit_years(self, mod_100, expected):
        p = Parsed()
        p.set_year_mod_100(mod_100)
        p.set_month(1)
        p.set_day(1)
        assert p.to_date() == Date(expected, 1, 1).days_since_ce()

    def test_century_and_year(self):
        p = Parsed()
        p.set_year_div_100(19)
        p.set_year_mod_100(4)
        p.set_ordinal(1)
        assert p.to_date() == Date(1904, 1, 1).days_since_ce()

    def test_full_year_must_match_parts(self):
        p = Parsed()
        p.set_year(1994)
        p.set_year_mod_100(95)
        p.set_ordinal(1)
        with pytest.raises(ParseError) as exc:
            p.to_date()
        assert exc.value.kind is ParseErrorKind.IMPOSSIBLE

    def test_negative_year_with_parts(self):
        p = Parsed()
        p.set_year(-5)
        p.set_year_mod_100(95)
        p.set_ordinal(1)
        with pytest.raises(ParseError) as exc:
            p.to_date()
        assert exc.value.kind is ParseErrorKind.OUT_OF_RANGE

    def test_offset_applies_to_timestamp(self):
        p = Parsed()
        scan(p, "1970-01-01 09:00 +0900 0", strftime_items("%F %R %z %s"))
        assert p.offset == 9 * 3600
        days, secs, nanos = p.to_datetime(p.offset)
        assert (secs, nanos) == (9 * 3600, 0)
        # without the offset, the timestamp disagrees
        with pytest.raises(ParseError) as exc:
            p.to_datetime()
        assert exc.value.kind is ParseErrorKind.IMPOSSIBLE
