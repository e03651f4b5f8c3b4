"""Calendar helpers used to scope every time-bounded query.

All functions are pure: the reference date is always passed in, and
``now_local`` is the single place that reads the clock.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime

from ..core.constants import ISO_DATE_FORMAT


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date range, serialized as YYYY-MM-DD strings."""

    start: str
    end: str

    @property
    def start_date(self) -> date:
        return parse_iso_date(self.start)

    @property
    def end_date(self) -> date:
        return parse_iso_date(self.end)

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date


@dataclass(frozen=True)
class MonthWindow:
    year: int
    month: int
    bounds: DateRange

    @property
    def label(self) -> str:
        return calendar.month_abbr[self.month]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(ref: date) -> DateRange:
    last_day = calendar.monthrange(ref.year, ref.month)[1]
    return DateRange(
        start=format_iso_date(date(ref.year, ref.month, 1)),
        end=format_iso_date(date(ref.year, ref.month, last_day)),
    )


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trailing_months(ref: date, n: int) -> list[MonthWindow]:
    """The ``n`` month windows ending with the month of ``ref``, oldest first."""
    if n < 1:
        raise ValueError("n must be >= 1")

    windows = []
    for offset in range(n - 1, -1, -1):
        year, month = shift_month(ref.year, ref.month, -offset)
        windows.append(MonthWindow(year=year, month=month, bounds=month_bounds(date(year, month, 1))))
    return windows


def year_bounds(ref: date) -> DateRange:
    return DateRange(start=format_iso_date(date(ref.year, 1, 1)), end=format_iso_date(date(ref.year, 12, 31)))


def month_name(month: int) -> str:
    return calendar.month_name[month]
