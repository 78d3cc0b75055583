"""
Time rules service.
Handles timezone conversions for "today" and month bucketing.
"""
from datetime import date, datetime
from typing import List, Optional, Tuple
import pytz
from ..config import settings


def utc_to_local(dt: datetime, timezone_str: Optional[str] = None) -> datetime:
    """
    Convert a UTC datetime to the configured local timezone.

    Naive datetimes are assumed to be UTC.
    """
    tz = pytz.timezone(timezone_str or settings.tz_default)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=pytz.UTC)
    return dt.astimezone(tz)


def local_date(dt: datetime, timezone_str: Optional[str] = None) -> date:
    return utc_to_local(dt, timezone_str).date()


def local_today(timezone_str: Optional[str] = None) -> date:
    return local_date(datetime.now(tz=pytz.UTC), timezone_str)


def is_same_local_day(dt: Optional[datetime], day: date, timezone_str: Optional[str] = None) -> bool:
    if dt is None:
        return False
    return local_date(dt, timezone_str) == day


def trailing_months(count: int, today: Optional[date] = None) -> List[Tuple[int, int]]:
    """
    (year, month) pairs for the last ``count`` months, oldest first,
    ending with the month of ``today``.
    """
    today = today or local_today()
    year, month = today.year, today.month
    months = []
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    months.reverse()
    return months
