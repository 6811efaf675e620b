"""
Quoting helpers that turn a job command into the text each backend expects.
"""
import shlex
import subprocess
from typing import List, Union

Command = Union[str, List[str]]


def shell_command(command: Command) -> str:
    if isinstance(command, str):
        return command
    return shlex.join(command)


def crontab_command(command: Command) -> str:
    """
    cron turns an unescaped ``%`` into a newline, so each one is escaped.
    """
    return shell_command(command).replace("%", "\\%")


def windows_command(command: Command) -> str:
    if isinstance(command, str):
        return command
    return subprocess.list2cmdline(command)


def program_arguments(command: Command) -> List[str]:
    if isinstance(command, str):
        return ["/bin/sh", "-c", command]
    return list(command)
