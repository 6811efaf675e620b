from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cron_scheduler.cron.bitset import has_bit
from cron_scheduler.cron.calendar import day_of_week
from cron_scheduler.cron.fields import DAY, HOUR, MINUTE, MONTH, WEEKDAY, CronField


def _check_mask(bits: int, field: CronField) -> int:
    if bits <= 0 or bits & ~field.mask:
        raise ValueError(f"{field.name} bitset {bits:#x} has bits outside {field.low}-{field.high}")
    return bits


class CronExpression(BaseModel):
    """
    A parsed cron expression.

    Each field is stored as an integer bitset. ``days_is_wildcard`` and
    ``weekdays_is_wildcard`` record whether the source day/weekday field
    covered its whole range, which decides between POSIX-OR and AND
    matching of the two day fields.
    """
    model_config = ConfigDict(frozen=True)

    minutes: int = Field(..., description="Bitset of minutes, 0-59")
    hours: int = Field(..., description="Bitset of hours, 0-23")
    days: int = Field(..., description="Bitset of days of month, 1-31")
    months: int = Field(..., description="Bitset of months, 1-12")
    weekdays: int = Field(..., description="Bitset of weekdays, 0-6 with 0 as Sunday")
    days_is_wildcard: bool = False
    weekdays_is_wildcard: bool = False

    @field_validator("minutes")
    def check_minutes(cls, v: int) -> int:
        return _check_mask(v, MINUTE)

    @field_validator("hours")
    def check_hours(cls, v: int) -> int:
        return _check_mask(v, HOUR)

    @field_validator("days")
    def check_days(cls, v: int) -> int:
        return _check_mask(v, DAY)

    @field_validator("months")
    def check_months(cls, v: int) -> int:
        return _check_mask(v, MONTH)

    @field_validator("weekdays")
    def check_weekdays(cls, v: int) -> int:
        return _check_mask(v, WEEKDAY)

    @property
    def uses_posix_or(self) -> bool:
        """
        True when both day fields are restricted, so either one may match.
        """
        return not self.days_is_wildcard and not self.weekdays_is_wildcard

    def matches_day(self, year: int, month: int, day: int) -> bool:
        day_match = has_bit(self.days, day)
        weekday_match = has_bit(self.weekdays, day_of_week(year, month, day))
        if self.uses_posix_or:
            return day_match or weekday_match
        return day_match and weekday_match

    def matches(self, moment: datetime) -> bool:
        """
        Check whether ``moment`` (converted to UTC) falls on a matching minute.
        """
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return (
            has_bit(self.months, moment.month)
            and self.matches_day(moment.year, moment.month, moment.day)
            and has_bit(self.hours, moment.hour)
            and has_bit(self.minutes, moment.minute)
        )
