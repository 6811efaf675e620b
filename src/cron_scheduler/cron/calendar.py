"""
Proleptic Gregorian calendar arithmetic in UTC.

Dates are converted through the Julian day number so that the engine never
depends on platform time functions. All functions expect years >= 1.
"""
import math
from typing import Tuple

SECONDS_PER_MINUTE = 60
SECONDS_PER_DAY = 86400

# Julian day number of 1970-01-01.
UNIX_EPOCH_JDN = 2440588

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_SAKAMOTO_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)

DateTimeTuple = Tuple[int, int, int, int, int]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def julian_day_number(year: int, month: int, day: int) -> int:
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def from_julian_day_number(jdn: int) -> Tuple[int, int, int]:
    """
    Convert a Julian day number back to a (year, month, day) triple.
    """
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - 146097 * b // 4
    d = (4 * c + 3) // 1461
    e = c - 1461 * d // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + m // 10
    return year, month, day


def day_of_week(year: int, month: int, day: int) -> int:
    """
    Sakamoto's method. Returns 0 for Sunday through 6 for Saturday.
    """
    if month < 3:
        year -= 1
    return (year + year // 4 - year // 100 + year // 400 + _SAKAMOTO_OFFSETS[month - 1] + day) % 7


def normalize(year: int, month: int, day: int, hour: int, minute: int) -> DateTimeTuple:
    """
    Carry overflowing fields upwards: minute -> hour -> day -> month -> year.

    Only forward overflow is handled; every field must be non-negative and
    ``day``/``month`` at least 1.
    """
    hour += minute // 60
    minute %= 60
    day += hour // 24
    hour %= 24
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    while day > days_in_month(year, month):
        day -= days_in_month(year, month)
        month += 1
        if month > 12:
            month = 1
            year += 1
    return year, month, day, hour, minute


def from_epoch_seconds(seconds: int) -> DateTimeTuple:
    """
    Decompose epoch seconds into a UTC (year, month, day, hour, minute) tuple.
    Seconds within the minute are dropped.
    """
    days, remainder = divmod(math.floor(seconds), SECONDS_PER_DAY)
    year, month, day = from_julian_day_number(days + UNIX_EPOCH_JDN)
    return year, month, day, remainder // 3600, remainder % 3600 // 60


def to_epoch_seconds(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    days = julian_day_number(year, month, day) - UNIX_EPOCH_JDN
    return days * SECONDS_PER_DAY + hour * 3600 + minute * SECONDS_PER_MINUTE
