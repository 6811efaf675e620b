from .base import BaseBackend
from .crontab import CrontabBackend
from .launchd import LaunchdBackend
from .schtasks import SchtasksBackend
from .in_process import InProcessBackend

__all__ = ["BaseBackend", "CrontabBackend", "LaunchdBackend", "SchtasksBackend", "InProcessBackend"]
