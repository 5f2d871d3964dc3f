"""Calendar-day arithmetic shared by the metric and aggregate functions.

All comparisons happen on naive wall-clock values in the configured zone:
aware datetimes are converted, naive ones are taken as already local.
"""
from datetime import date, datetime, time, timedelta
from typing import Union
from zoneinfo import ZoneInfo

from wardrobe_cpw.core.config import settings

DateLike = Union[date, datetime]


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def now_local() -> datetime:
    return datetime.now(get_timezone())


def to_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(get_timezone()).replace(tzinfo=None)


def local_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(local_date(value), time.min)


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if reversed)."""
    return (local_date(end) - local_date(start)).days


def add_months(value: DateLike, months: int) -> date:
    """First day of the month ``months`` away from the month of ``value``."""
    d = local_date(value)
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def iter_days(first: date, last: date):
    day = first
    while day <= last:
        yield day
        day += timedelta(days=1)
