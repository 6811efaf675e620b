from enum import Enum
from typing import Optional


class ParseErrorKind(str, Enum):
    TOO_MANY_FIELDS = "too_many_fields"
    TOO_FEW_FIELDS = "too_few_fields"
    EMPTY_FIELD = "empty_field"
    EMPTY_LIST_ELEMENT = "empty_list_element"
    INVALID_STEP = "invalid_step"
    INVALID_RANGE = "invalid_range"
    INVALID_VALUE = "invalid_value"
    UNKNOWN_NICKNAME = "unknown_nickname"


class InstallErrorKind(str, Enum):
    INVALID_JOB_NAME = "invalid_job_name"
    INVALID_COMMAND = "invalid_command"
    UNSUPPORTED_SCHEDULE = "unsupported_schedule"
    BACKEND_WRITE_FAILURE = "backend_write_failure"


class SchedulerError(Exception):
    """
    Base class for all errors raised by cron_scheduler.
    """


class ParseError(SchedulerError, ValueError):
    """
    Raised when a cron expression does not follow the grammar.
    """

    def __init__(self, kind: ParseErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class InstallError(SchedulerError):
    """
    Raised when a job cannot be installed into a backend.
    """

    def __init__(self, kind: InstallErrorKind, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.name = name


class BackendError(SchedulerError):
    """
    Raised when backend state cannot be read, or a job cannot be deleted.
    """
