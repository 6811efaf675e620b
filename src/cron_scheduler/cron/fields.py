from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from cron_scheduler.cron.bitset import full_mask
from cron_scheduler.cron.names import MONTH_NAMES, WEEKDAY_NAMES


@dataclass(frozen=True)
class CronField:
    """
    Describes one of the five cron fields.

    ``low``/``high`` bound the stored bitset. ``max_value`` is the largest
    value accepted in source text, which is only larger than ``high`` for
    the weekday field (7 is accepted as Sunday and folded into 0).
    """
    name: str
    low: int
    high: int
    max_value: int
    names: Optional[Mapping[str, int]] = None

    @property
    def mask(self) -> int:
        return full_mask(self.low, self.high)


MINUTE = CronField("minute", 0, 59, 59)
HOUR = CronField("hour", 0, 23, 23)
DAY = CronField("day", 1, 31, 31)
MONTH = CronField("month", 1, 12, 12, MONTH_NAMES)
WEEKDAY = CronField("weekday", 0, 6, 7, WEEKDAY_NAMES)

# Source order of the five fields.
FIELDS: Tuple[CronField, ...] = (MINUTE, HOUR, DAY, MONTH, WEEKDAY)
