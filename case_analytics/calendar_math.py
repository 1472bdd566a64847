"""Calendar helpers for time bucketing."""
import logging
from calendar import monthrange
from datetime import date, datetime, time, timedelta, timezone

logger = logging.getLogger(__name__)

# Day boundaries carry millisecond precision, like the exported timestamps.
END_OF_DAY = time(23, 59, 59, 999000)

LEGACY_ANSWER_FORMAT = "%d-%b-%Y %H:%M"


def week_of_year(value: date) -> int:
    """ISO-8601 week number (the week belongs to the year of its Thursday)."""
    return value.isocalendar()[1]


def iso_year(value: date) -> int:
    """Year that owns the ISO week of ``value``."""
    return value.isocalendar()[0]


def start_and_end_of_week(week: int, year: int) -> tuple[datetime, datetime]:
    """Monday 00:00:00.000 and Sunday 23:59:59.999 of an ISO week.

    Week 1 is the week containing January 4th. Week numbers past the last
    week of ``year`` roll into the following year.
    """
    jan4 = date(year, 1, 4)
    first_monday = jan4 - timedelta(days=jan4.weekday())
    monday = first_monday + timedelta(weeks=week - 1)
    sunday = monday + timedelta(days=6)
    return datetime.combine(monday, time.min), datetime.combine(sunday, END_OF_DAY)


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``."""
    return monthrange(year, month)[1]


def start_of_day(value: datetime | date) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def end_of_day(value: datetime | date) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, END_OF_DAY)


def sub_days(value: datetime, days: int) -> datetime:
    return value - timedelta(days=days)


def utc_weekday(value: datetime) -> int:
    """Monday-first weekday (0-6) of the UTC calendar day of a local timestamp."""
    return value.astimezone(timezone.utc).weekday()


def parse_timestamp(value) -> datetime | None:
    """Parse an exported timestamp into naive local time.

    Accepts datetimes, epoch milliseconds (int or digit string), the legacy
    ``DD-Mon-YYYY HH:mm`` answer format (UTC) and ISO-8601 strings.
    Returns None when the value cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _to_local(value)

    if isinstance(value, date):
        return datetime.combine(value, time.min)

    if isinstance(value, (int, float)):
        return _from_epoch_millis(value)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if text.isdigit():
        return _from_epoch_millis(int(text))

    try:
        parsed = datetime.strptime(text, LEGACY_ANSWER_FORMAT)
        return _to_local(parsed.replace(tzinfo=timezone.utc))
    except ValueError:
        pass

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable timestamp: %r", value)
        return None
    return _to_local(parsed)


def _from_epoch_millis(millis: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(millis / 1000)
    except (OverflowError, OSError, ValueError):
        logger.debug("Epoch value out of range: %r", millis)
        return None


def _to_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
