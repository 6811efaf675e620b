from cron_scheduler.cron.bitset import iter_bits
from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.cron.fields import DAY, HOUR, MINUTE, MONTH, WEEKDAY, CronField


def format_field(bits: int, field: CronField) -> str:
    if bits == field.mask:
        return "*"
    return ",".join(str(value) for value in iter_bits(bits))


def format_expression(expression: CronExpression) -> str:
    """
    Render an expression in normal form: ``*`` for full fields, otherwise a
    sorted comma-separated list. ``*/15`` becomes ``0,15,30,45``.
    """
    return " ".join((
        format_field(expression.minutes, MINUTE),
        format_field(expression.hours, HOUR),
        format_field(expression.days, DAY),
        format_field(expression.months, MONTH),
        format_field(expression.weekdays, WEEKDAY),
    ))
