from types import MappingProxyType
from typing import Mapping, Tuple

from cron_scheduler.cron.bitset import set_range
from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.cron.fields import DAY, FIELDS, WEEKDAY, CronField
from cron_scheduler.errors import ParseError, ParseErrorKind

NICKNAMES: Mapping[str, str] = MappingProxyType({
    "@yearly": "0 0 1 1 *",
    "@annually": "0 0 1 1 *",
    "@monthly": "0 0 1 * *",
    "@weekly": "0 0 * * 0",
    "@daily": "0 0 * * *",
    "@midnight": "0 0 * * *",
    "@hourly": "0 * * * *",
})

_SUNDAY_AS_SEVEN = 1 << 7


def parse(text: str) -> CronExpression:
    """
    Parse a 5-field cron expression or an ``@nickname``.

    Args:
        text (str): The expression, e.g. ``"*/15 9-17 * * mon-fri"``.

    Returns:
        CronExpression: The parsed expression.

    Raises:
        ParseError: If the expression does not follow the cron grammar.
    """
    text = text.strip()
    if text.startswith("@"):
        expanded = NICKNAMES.get(text.lower())
        if expanded is None:
            raise ParseError(ParseErrorKind.UNKNOWN_NICKNAME, f"Unknown nickname '{text}'")
        text = expanded

    parts = text.split()
    if len(parts) > len(FIELDS):
        raise ParseError(
            ParseErrorKind.TOO_MANY_FIELDS,
            f"Too many fields in '{text}': expected {len(FIELDS)}, got {len(parts)}",
        )
    if len(parts) < len(FIELDS):
        raise ParseError(
            ParseErrorKind.TOO_FEW_FIELDS,
            f"Too few fields in '{text}': expected {len(FIELDS)}, got {len(parts)}",
        )

    minutes, hours, days, months, weekdays = (
        parse_field(part, field) for part, field in zip(parts, FIELDS)
    )
    return CronExpression(
        minutes=minutes,
        hours=hours,
        days=days,
        months=months,
        weekdays=weekdays,
        days_is_wildcard=days == DAY.mask,
        weekdays_is_wildcard=weekdays == WEEKDAY.mask,
    )


def parse_field(text: str, field: CronField) -> int:
    """
    Parse one comma-separated field into its bitset.
    """
    if not text:
        raise ParseError(ParseErrorKind.EMPTY_FIELD, f"Empty {field.name} field")

    bits = 0
    for element in text.split(","):
        if not element:
            raise ParseError(
                ParseErrorKind.EMPTY_LIST_ELEMENT,
                f"Empty list element in {field.name} field '{text}'",
            )
        low, high, step = _parse_element(element, field, text)
        bits = set_range(bits, low, high, step)

    if field is WEEKDAY and bits & _SUNDAY_AS_SEVEN:
        bits = (bits & ~_SUNDAY_AS_SEVEN) | 1
    return bits


def _parse_element(element: str, field: CronField, text: str) -> Tuple[int, int, int]:
    pieces = element.split("/")
    if len(pieces) > 2:
        raise ParseError(
            ParseErrorKind.INVALID_STEP,
            f"Too many '/' in {field.name} field '{text}'",
        )
    base = pieces[0]
    step = 1
    if len(pieces) == 2:
        step = _parse_step(pieces[1], field, text)

    if base == "*":
        return field.low, field.high, step

    if "-" in base:
        bounds = base.split("-")
        if len(bounds) != 2 or not bounds[0] or not bounds[1]:
            raise ParseError(
                ParseErrorKind.INVALID_RANGE,
                f"Invalid range '{base}' in {field.name} field '{text}'",
            )
        low = _lookup_value(bounds[0], field, text)
        high = _lookup_value(bounds[1], field, text)
        if low > high:
            raise ParseError(
                ParseErrorKind.INVALID_RANGE,
                f"Range start is after range end in {field.name} field '{text}'",
            )
        return low, high, step

    value = _lookup_value(base, field, text)
    if len(pieces) == 2:
        return value, max(field.high, value), step
    return value, value, step


def _parse_step(raw: str, field: CronField, text: str) -> int:
    if not (raw.isascii() and raw.isdigit()) or int(raw) < 1:
        raise ParseError(
            ParseErrorKind.INVALID_STEP,
            f"Step must be a positive integer in {field.name} field '{text}'",
        )
    return int(raw)


def _lookup_value(raw: str, field: CronField, text: str) -> int:
    if field.names is not None:
        named = field.names.get(raw.lower())
        if named is not None:
            return named
    if raw.isascii() and raw.isdigit():
        value = int(raw)
        if field.low <= value <= field.max_value:
            return value
        raise ParseError(
            ParseErrorKind.INVALID_VALUE,
            f"Value {value} out of range {field.low}-{field.max_value} in {field.name} field '{text}'",
        )
    raise ParseError(
        ParseErrorKind.INVALID_VALUE,
        f"Invalid value '{raw}' in {field.name} field '{text}'",
    )
