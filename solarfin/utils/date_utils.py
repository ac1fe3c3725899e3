"""Date manipulation utilities"""

import calendar
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Tuple

from solarfin.domain.exceptions import DateOutOfRangeError


def _check_year(year: int) -> None:
    if not MINYEAR <= year <= MAXYEAR:
        raise DateOutOfRangeError(f"Year {year} is outside the supported calendar range")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, using the month's last day when `day` overflows it"""
    _check_year(year)
    return date(year, month, min(day, days_in_month(year, month)))


def shift_month(month: int, year: int, months: int) -> Tuple[int, int]:
    """Move a (month, year) pair by a number of months"""
    index = year * 12 + (month - 1) + months
    return index % 12 + 1, index // 12


def add_months(anchor: date, months: int, day: int | None = None) -> date:
    """
    Advance a date by calendar months keeping its day-of-month.

    The day is clamped to the target month's length. Pass `day` to clamp a
    different day-of-month than the anchor's (e.g. a card's closing day).
    """
    month, year = shift_month(anchor.month, anchor.year, months)
    return clamp_day(year, month, anchor.day if day is None else day)


def add_days(anchor: date, days: int) -> date:
    try:
        return anchor + timedelta(days=days)
    except OverflowError as e:
        raise DateOutOfRangeError(f"{anchor.isoformat()} shifted by {days} days is outside the calendar") from e


def months_between(start: date, end: date) -> int:
    """Whole calendar-month distance between two dates, ignoring the day"""
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_bounds(month: int, year: int) -> Tuple[date, date]:
    """First and last day of a month"""
    return clamp_day(year, month, 1), clamp_day(year, month, 31)


def previous_month(month: int, year: int) -> Tuple[int, int]:
    return shift_month(month, year, -1)
