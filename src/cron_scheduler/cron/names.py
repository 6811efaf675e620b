from types import MappingProxyType
from typing import Mapping

_WEEKDAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
_MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)


def _build_table(names, first: int) -> Mapping[str, int]:
    table = {}
    for offset, name in enumerate(names):
        table[name] = first + offset
        table[name[:3]] = first + offset
    return MappingProxyType(table)


# Lower-case full names and 3-letter abbreviations. 0 is Sunday.
WEEKDAY_NAMES: Mapping[str, int] = _build_table(_WEEKDAYS, 0)
MONTH_NAMES: Mapping[str, int] = _build_table(_MONTHS, 1)

WEEKDAY_ABBREVIATIONS = tuple(name[:3].upper() for name in _WEEKDAYS)
