import math
from datetime import datetime, timezone
from typing import Iterator, Optional

from cron_scheduler.cron.bitset import has_bit
from cron_scheduler.cron.calendar import from_epoch_seconds, normalize, to_epoch_seconds
from cron_scheduler.cron.expression import CronExpression

# Searching further than this many years ahead gives up and returns None.
SEARCH_HORIZON_YEARS = 1500


def next_occurrence(expression: CronExpression, from_seconds: int) -> Optional[int]:
    """
    Find the first matching minute strictly after ``from_seconds``.

    Args:
        expression (CronExpression): The parsed expression.
        from_seconds (int): Unix timestamp in seconds (UTC) to search from.

    Returns:
        Optional[int]: Unix timestamp of the next occurrence, always on a whole
        minute, or None if nothing matches within the search horizon.
    """
    year, month, day, hour, minute = from_epoch_seconds(from_seconds)
    year, month, day, hour, minute = normalize(year, month, day, hour, minute + 1)
    last_year = year + SEARCH_HORIZON_YEARS

    while year <= last_year:
        if not has_bit(expression.months, month):
            year, month, day, hour, minute = normalize(year, month + 1, 1, 0, 0)
            continue
        if not expression.matches_day(year, month, day):
            year, month, day, hour, minute = normalize(year, month, day + 1, 0, 0)
            continue
        if not has_bit(expression.hours, hour):
            year, month, day, hour, minute = normalize(year, month, day, hour + 1, 0)
            continue
        if not has_bit(expression.minutes, minute):
            year, month, day, hour, minute = normalize(year, month, day, hour, minute + 1)
            continue
        return to_epoch_seconds(year, month, day, hour, minute)
    return None


def next_datetime(expression: CronExpression, after: datetime) -> Optional[datetime]:
    """
    Datetime variant of :func:`next_occurrence`. Naive datetimes are read as UTC.
    """
    if after.tzinfo is None:
        after = after.replace(tzinfo=timezone.utc)
    found = next_occurrence(expression, math.floor(after.timestamp()))
    if found is None:
        return None
    return datetime.fromtimestamp(found, tz=timezone.utc)


def iter_occurrences(expression: CronExpression, start: datetime) -> Iterator[datetime]:
    """
    Yield successive occurrences after ``start`` until the search horizon runs out.
    """
    current = next_datetime(expression, start)
    while current is not None:
        yield current
        current = next_datetime(expression, current)
