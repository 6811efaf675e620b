"""
Cron Job Scheduling

This package parses cron expressions and installs named jobs into a scheduler.

Core Concepts:

CronExpression:
    A parsed 5-field cron expression, stored as one integer bitset per field.
    It can compute its next occurrence in UTC and be rendered back to text.

ScheduledJob:
    A named command with a cron schedule, installed into a backend.
    The backend's own store (crontab, launchd agents, Task Scheduler or
    process memory) is the only record of which jobs exist.

Backend:
    A scheduler that runs installed jobs. Every backend offers install,
    remove, list_jobs and remove_all; BackendFactory picks the one native
    to the current platform.

Relationships:
    - A ScheduledJob has exactly one CronExpression, parsed from its schedule on install.
    - The in-process backend delivers a ScheduledEvent for each occurrence it fires.
"""

from .cron import CronExpression, format_expression, iter_occurrences, next_datetime, next_occurrence, parse
from .domain import ScheduledEvent, ScheduledJob
from .errors import BackendError, InstallError, InstallErrorKind, ParseError, ParseErrorKind, SchedulerError
from .backends import *
from .backend_factory import BackendFactory
from .config import Settings

__all__ = [
    "CronExpression",
    "parse",
    "next_occurrence",
    "next_datetime",
    "iter_occurrences",
    "format_expression",
    "ScheduledJob",
    "ScheduledEvent",
    "SchedulerError",
    "ParseError",
    "ParseErrorKind",
    "InstallError",
    "InstallErrorKind",
    "BackendError",
    "BaseBackend",
    "CrontabBackend",
    "LaunchdBackend",
    "SchtasksBackend",
    "InProcessBackend",
    "BackendFactory",
    "Settings",
]
