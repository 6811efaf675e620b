from .protocol import CommandResult, CommandRunner
from .process import SubprocessRunner

__all__ = ["CommandResult", "CommandRunner", "SubprocessRunner"]
