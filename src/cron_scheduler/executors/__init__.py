from .protocol import JobExecutor
from .shell import CommandFailedError, ShellExecutor

__all__ = ["JobExecutor", "ShellExecutor", "CommandFailedError"]
