from .expression import CronExpression
from .parser import NICKNAMES, parse
from .engine import iter_occurrences, next_datetime, next_occurrence
from .formatter import format_expression

__all__ = [
    "CronExpression",
    "NICKNAMES",
    "parse",
    "next_occurrence",
    "next_datetime",
    "iter_occurrences",
    "format_expression",
]
