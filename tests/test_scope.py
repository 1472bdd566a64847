from datetime import date, datetime

import pytest
from pydantic import ValidationError

from case_analytics.adapters import CASE_ADAPTER
from case_analytics.models import UNBOUNDED, ViewMode, ViewSelection
from case_analytics.scope import available_years, reconcile_year, resolve_window

from factories import make_case, noon


def test_all_time_is_unbounded():
    window = resolve_window(ViewSelection(mode=ViewMode.ALL, year=2024))
    assert window == UNBOUNDED
    assert window.is_unbounded


def test_yearly_window():
    window = resolve_window(ViewSelection(mode=ViewMode.YEARLY, year=2023))
    assert window.start == datetime(2023, 1, 1)
    assert window.end == datetime(2023, 12, 31, 23, 59, 59, 999000)


def test_monthly_window_uses_leap_february():
    window = resolve_window(ViewSelection(mode=ViewMode.MONTHLY, year=2024, month=2))
    assert window.start == datetime(2024, 2, 1)
    assert window.end == datetime(2024, 2, 29, 23, 59, 59, 999000)


def test_weekly_window():
    window = resolve_window(ViewSelection(mode=ViewMode.WEEKLY, year=2024, week=1))
    assert window.start == datetime(2024, 1, 1, 0, 0, 0)
    assert window.end == datetime(2024, 1, 7, 23, 59, 59, 999000)


def test_custom_range_clamps_to_whole_days():
    selection = ViewSelection(
        mode=ViewMode.CUSTOM, year=2024,
        custom_start=date(2024, 3, 1), custom_end=date(2024, 3, 10),
    )
    window = resolve_window(selection)
    assert window.start == datetime(2024, 3, 1)
    assert window.end == datetime(2024, 3, 10, 23, 59, 59, 999000)


def test_custom_range_with_only_start_stays_half_open():
    selection = ViewSelection(mode=ViewMode.CUSTOM, year=2024, custom_start=date(2024, 3, 1))
    window = resolve_window(selection)
    assert window.start == datetime(2024, 3, 1)
    assert window.end is None
    assert not window.is_unbounded
    assert not window.contains(datetime(2024, 2, 29, 23, 59))
    assert window.contains(datetime(2031, 1, 1))


def test_custom_range_with_only_end_stays_half_open():
    selection = ViewSelection(mode=ViewMode.CUSTOM, year=2024, custom_end=date(2024, 3, 1))
    window = resolve_window(selection)
    assert window.start is None
    assert window.end == datetime(2024, 3, 1, 23, 59, 59, 999000)
    assert window.contains(datetime(1999, 1, 1))
    assert not window.contains(datetime(2024, 3, 2))


@pytest.mark.parametrize("fields", [{"month": 13}, {"month": 0}, {"week": 54}, {"week": 0}])
def test_out_of_range_selection_is_rejected(fields):
    with pytest.raises(ValidationError):
        ViewSelection(mode=ViewMode.MONTHLY, year=2024, **fields)


def test_selection_is_immutable():
    selection = ViewSelection(year=2024)
    with pytest.raises(ValidationError):
        selection.year = 2023


def test_custom_start_after_end_clears_end():
    selection = ViewSelection(mode=ViewMode.CUSTOM, year=2024, custom_end=date(2024, 1, 10))
    moved = selection.with_custom_start(date(2024, 2, 1))
    assert moved.custom_start == date(2024, 2, 1)
    assert moved.custom_end is None
    assert selection.custom_end == date(2024, 1, 10)


def test_current_selection():
    selection = ViewSelection.current(date(2024, 6, 15))
    assert (selection.mode, selection.year, selection.month, selection.week) == (ViewMode.ALL, 2024, 6, 24)


def test_current_week_at_year_end_contains_today():
    today = date(2024, 12, 30)
    selection = ViewSelection.current(today, mode=ViewMode.WEEKLY)
    assert (selection.year, selection.week) == (2024, 53)
    window = resolve_window(selection)
    assert window.start == datetime(2024, 12, 30)
    assert window.contains(noon(2024, 12, 30))
    assert window.contains(noon(2025, 1, 5))


def test_current_week_in_early_january_stays_in_calendar_year():
    selection = ViewSelection.current(date(2021, 1, 2), mode=ViewMode.WEEKLY)
    assert (selection.year, selection.week) == (2021, 1)
    assert resolve_window(selection).start == datetime(2021, 1, 4)


def test_available_years_include_current_year_descending():
    cases = [make_case(noon(2021, 5, 1)), make_case(noon(2023, 1, 1)), make_case(None)]
    years = available_years(cases, CASE_ADAPTER, today=date(2025, 6, 1))
    assert years == [2025, 2023, 2021]


def test_available_years_without_records():
    assert available_years([], CASE_ADAPTER, today=date(2025, 6, 1)) == [2025]


def test_reconcile_year_moves_to_newest():
    selection = ViewSelection(mode=ViewMode.YEARLY, year=2019)
    reconciled = reconcile_year(selection, [2025, 2023])
    assert reconciled.year == 2025
    assert reconciled.mode == ViewMode.YEARLY


def test_reconcile_year_keeps_available_year():
    selection = ViewSelection(mode=ViewMode.YEARLY, year=2023)
    assert reconcile_year(selection, [2025, 2023]) is selection
