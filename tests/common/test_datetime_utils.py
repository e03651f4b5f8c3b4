from __future__ import annotations

from datetime import date

import pytest

from dayflow.common.datetime_utils import DateRange, month_bounds, shift_month, trailing_months, year_bounds


def test_month_bounds_cover_whole_month():
    assert month_bounds(date(2025, 2, 15)) == DateRange("2025-02-01", "2025-02-28")
    assert month_bounds(date(2024, 2, 3)) == DateRange("2024-02-01", "2024-02-29")
    assert month_bounds(date(2025, 12, 31)) == DateRange("2025-12-01", "2025-12-31")


def test_year_bounds():
    assert year_bounds(date(2025, 6, 1)) == DateRange("2025-01-01", "2025-12-31")


def test_shift_month_crosses_year_boundary():
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2025, 3, -14) == (2024, 1)


def test_trailing_months_oldest_first_across_year():
    windows = trailing_months(date(2025, 2, 15), 6)

    assert [w.label for w in windows] == ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb"]
    assert [(w.year, w.month) for w in windows][0] == (2024, 9)
    assert windows[-1].bounds == DateRange("2025-02-01", "2025-02-28")


def test_trailing_months_single_window_is_current_month():
    windows = trailing_months(date(2025, 7, 4), 1)
    assert len(windows) == 1
    assert windows[0].bounds == month_bounds(date(2025, 7, 4))


def test_trailing_months_rejects_zero():
    with pytest.raises(ValueError):
        trailing_months(date(2025, 7, 4), 0)


def test_date_range_contains_is_inclusive():
    r = DateRange("2025-03-01", "2025-03-31")
    assert r.contains(date(2025, 3, 1))
    assert r.contains(date(2025, 3, 31))
    assert not r.contains(date(2025, 4, 1))
