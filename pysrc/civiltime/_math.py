"""Proleptic Gregorian calendar arithmetic on plain integers.

Days are numbered from the start of the common era (0001-01-01 is day 1),
and extend indefinitely in both directions. Floor division keeps
the formulas valid for years before 1.
"""

from __future__ import annotations

from ._common import MAX_YEAR, MIN_YEAR

_DAYS_IN_400Y = 146_097

# 1-indexed days per month
_MONTHDAYS = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
# days before the first of the month, in a common year
_DAYS_BEFORE_MONTH = [0, 0]
for _m in range(1, 12):
    _DAYS_BEFORE_MONTH.append(_DAYS_BEFORE_MONTH[-1] + _MONTHDAYS[_m])
del _m


def is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    return _MONTHDAYS[month] + (month == 2 and is_leap(year))


def days_in_year(year: int) -> int:
    return 365 + is_leap(year)


def days_before_year(year: int) -> int:
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def days_before_month(year: int, month: int) -> int:
    return _DAYS_BEFORE_MONTH[month] + (month > 2 and is_leap(year))


def year_in_range(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def ymd_to_days(year: int, month: int, day: int) -> int:
    # no validation: callers check the fields first
    return days_before_year(year) + days_before_month(year, month) + day


def days_to_year_and_ordinal(n: int) -> tuple[int, int]:
    cycles, rem = divmod(n - 1, _DAYS_IN_400Y)
    # 366-day years give an estimate that is never too high,
    # and at most one year too low.
    year = cycles * 400 + rem // 366 + 1
    while days_before_year(year + 1) < n:
        year += 1
    return year, n - days_before_year(year)


def ordinal_to_month_and_day(year: int, ordinal: int) -> tuple[int, int]:
    month = 12
    while days_before_month(year, month) >= ordinal:
        month -= 1
    return month, ordinal - days_before_month(year, month)


def days_to_ymd(n: int) -> tuple[int, int, int]:
    year, ordinal = days_to_year_and_ordinal(n)
    return (year, *ordinal_to_month_and_day(year, ordinal))


def iso_weekday(n: int) -> int:
    """Monday=1 ... Sunday=7. Day 1 (0001-01-01) was a Monday."""
    return (n - 1) % 7 + 1


def _iso_week1_monday(year: int) -> int:
    jan1 = days_before_year(year) + 1
    jan1_weekday = (jan1 - 1) % 7  # Monday=0
    monday = jan1 - jan1_weekday
    # week 1 is the week containing the first Thursday
    if jan1_weekday > 3:
        monday += 7
    return monday


def iso_weeks_in_year(year: int) -> int:
    jan1_weekday = iso_weekday(days_before_year(year) + 1)
    if jan1_weekday == 4 or (jan1_weekday == 3 and is_leap(year)):
        return 53
    return 52


def days_to_iso_week_date(n: int) -> tuple[int, int, int]:
    year = days_to_year_and_ordinal(n)[0]
    week, day = divmod(n - _iso_week1_monday(year), 7)
    if week < 0:
        year -= 1
        week, day = divmod(n - _iso_week1_monday(year), 7)
    elif week >= 52 and n >= _iso_week1_monday(year + 1):
        year += 1
        week = 0
    return year, week + 1, day + 1


def iso_week_date_to_days(year: int, week: int, weekday: int) -> int | None:
    if not (1 <= week <= iso_weeks_in_year(year) and 1 <= weekday <= 7):
        return None
    return _iso_week1_monday(year) + (week - 1) * 7 + weekday - 1
