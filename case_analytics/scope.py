"""Resolve a view selection to a concrete time window."""
import logging
from datetime import date, datetime, time

from .adapters import RecordAdapter
from .calendar_math import END_OF_DAY, days_in_month, end_of_day, start_and_end_of_week, start_of_day
from .models import UNBOUNDED, ViewMode, ViewSelection, Window

logger = logging.getLogger(__name__)


def resolve_window(selection: ViewSelection) -> Window:
    """Window of instants covered by ``selection``.

    Custom ranges keep each bound independently: a range with only a start
    (or only an end) stays half-open.
    """
    mode = selection.mode
    year = selection.year

    if mode == ViewMode.ALL:
        return UNBOUNDED

    if mode == ViewMode.YEARLY:
        return Window(
            start=datetime(year, 1, 1),
            end=datetime.combine(date(year, 12, 31), END_OF_DAY),
        )

    if mode == ViewMode.MONTHLY:
        last_day = days_in_month(year, selection.month)
        return Window(
            start=datetime.combine(date(year, selection.month, 1), time.min),
            end=datetime.combine(date(year, selection.month, last_day), END_OF_DAY),
        )

    if mode == ViewMode.WEEKLY:
        start, end = start_and_end_of_week(selection.week, year)
        return Window(start=start, end=end)

    if mode == ViewMode.CUSTOM:
        start = start_of_day(selection.custom_start) if selection.custom_start else None
        end = end_of_day(selection.custom_end) if selection.custom_end else None
        return Window(start=start, end=end)

    raise ValueError(f"Unsupported view mode: {mode!r}")


def available_years(records, adapter: RecordAdapter, today: date | None = None) -> list[int]:
    """Years present in ``records`` plus the current year, newest first."""
    today = today or date.today()
    years = {today.year}
    for record in records:
        timestamp = adapter.timestamp(record)
        if timestamp is not None:
            years.add(timestamp.year)
    return sorted(years, reverse=True)


def reconcile_year(selection: ViewSelection, years: list[int]) -> ViewSelection:
    """Move the selection to the newest available year if its year has no data."""
    if not years or selection.year in years:
        return selection
    logger.debug("Year %s not available, switching to %s", selection.year, years[0])
    return selection.model_copy(update={"year": years[0]})
