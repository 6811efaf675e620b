import pytest
from pydantic import ValidationError

from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.cron.formatter import format_expression
from cron_scheduler.cron.parser import parse


@pytest.mark.parametrize("text, expected", [
    ("* * * * *", "* * * * *"),
    ("*/15 * * * *", "0,15,30,45 * * * *"),
    ("@weekly", "0 0 * * 0"),
    ("0 0 * * 7", "0 0 * * 0"),
    ("0 9 * jan-mar mon-fri", "0 9 * 1,2,3 1,2,3,4,5"),
    ("0 0 */1 * 1", "0 0 * * 1"),
    ("0 0 1-31 1-12 0-6", "0 0 * * *"),
])
def test_format_expression(text: str, expected: str) -> None:
    assert format_expression(parse(text)) == expected


def test_expressions_compare_structurally() -> None:
    assert parse("0 0 * * 0") == parse("@weekly")
    assert parse("0 0 * * 0") != parse("0 0 * * 1")
    assert hash(parse("@daily")) == hash(parse("0 0 * * *"))


def test_expression_is_immutable() -> None:
    expression = parse("@hourly")
    with pytest.raises(ValidationError):
        expression.minutes = 1


@pytest.mark.parametrize("field, value", [
    ("minutes", 1 << 60),
    ("hours", 1 << 24),
    ("days", 1),
    ("months", 1),
    ("weekdays", 1 << 7),
    ("minutes", 0),
])
def test_expression_rejects_bits_outside_field(field: str, value: int) -> None:
    values = parse("* * * * *").model_dump()
    values[field] = value
    with pytest.raises(ValidationError):
        CronExpression(**values)
