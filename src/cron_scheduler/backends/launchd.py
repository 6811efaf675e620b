import itertools
import logging
import os
import plistlib
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from cron_scheduler.backends.base import BaseBackend
from cron_scheduler.backends.commands import program_arguments
from cron_scheduler.cron.bitset import iter_bits
from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.cron.fields import HOUR, MINUTE, MONTH
from cron_scheduler.domain.job import ScheduledJob
from cron_scheduler.errors import BackendError, InstallError, InstallErrorKind
from cron_scheduler.system.process import SubprocessRunner
from cron_scheduler.system.protocol import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_LABEL_PREFIX = "com.cron-scheduler."
DEFAULT_AGENTS_DIRECTORY = Path.home() / "Library" / "LaunchAgents"


def _values(bits: int, full: int) -> List[Optional[int]]:
    """
    The values of a field, or ``[None]`` when the field is unrestricted.
    """
    if bits == full:
        return [None]
    return list(iter_bits(bits))


def calendar_intervals(expression: CronExpression) -> List[Dict[str, int]]:
    """
    Expand an expression into launchd ``StartCalendarInterval`` entries.

    launchd ANDs the keys of one entry and ORs separate entries, so every
    combination of the restricted fields becomes its own dictionary. When
    both day fields are restricted, the Day entries and the Weekday entries
    are enumerated separately: they never share a dictionary, which keeps
    cron's either-day-matches rule.
    """
    if expression.uses_posix_or:
        day_keys = [("Day", day) for day in iter_bits(expression.days)]
        day_keys += [("Weekday", weekday) for weekday in iter_bits(expression.weekdays)]
    elif not expression.days_is_wildcard:
        day_keys = [("Day", day) for day in iter_bits(expression.days)]
    elif not expression.weekdays_is_wildcard:
        day_keys = [("Weekday", weekday) for weekday in iter_bits(expression.weekdays)]
    else:
        day_keys = [None]

    intervals = []
    for month, day_key, hour, minute in itertools.product(
        _values(expression.months, MONTH.mask),
        day_keys,
        _values(expression.hours, HOUR.mask),
        _values(expression.minutes, MINUTE.mask),
    ):
        entry: Dict[str, int] = {}
        if month is not None:
            entry["Month"] = month
        if day_key is not None:
            entry[day_key[0]] = day_key[1]
        if hour is not None:
            entry["Hour"] = hour
        if minute is not None:
            entry["Minute"] = minute
        intervals.append(entry)
    return intervals


def _atomic_write(path: Path, data: bytes) -> None:
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(temp_path, path)
    except BaseException:
        Path(temp_path).unlink(missing_ok=True)
        raise


class LaunchdBackend(BaseBackend):
    """
    Keeps one launchd agent property list per job in a LaunchAgents directory.
    """

    def __init__(
        self,
        directory: Union[str, Path] = DEFAULT_AGENTS_DIRECTORY,
        label_prefix: str = DEFAULT_LABEL_PREFIX,
        runner: Optional[CommandRunner] = None,
        load: bool = True,
    ):
        super().__init__()
        self.directory = Path(directory)
        self.label_prefix = label_prefix
        self.runner: CommandRunner = runner or SubprocessRunner()
        self.load = load

    def label(self, name: str) -> str:
        return f"{self.label_prefix}{name}"

    def plist_path(self, name: str) -> Path:
        return self.directory / f"{self.label(name)}.plist"

    def render(self, job: ScheduledJob, expression: CronExpression) -> bytes:
        document = {
            "Label": self.label(job.name),
            "ProgramArguments": program_arguments(job.command),
            "StartCalendarInterval": calendar_intervals(expression),
        }
        return plistlib.dumps(document)

    async def _launchctl(self, *args: str) -> bool:
        if not self.load:
            return True
        try:
            result = await self.runner.run(["launchctl", *args])
        except OSError as e:
            logger.debug("launchctl %s failed to start: %s", args[0], e)
            return False
        if not result.ok:
            logger.debug("launchctl %s exited with %d: %s", args[0], result.returncode, result.stderr.strip())
        return result.ok

    async def _install(self, job: ScheduledJob, expression: CronExpression) -> None:
        path = self.plist_path(job.name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            if path.exists():
                await self._launchctl("unload", str(path))
            _atomic_write(path, self.render(job, expression))
        except OSError as e:
            raise InstallError(InstallErrorKind.BACKEND_WRITE_FAILURE, f"Cannot write {path}: {e}", name=job.name) from e
        if not await self._launchctl("load", "-w", str(path)):
            raise InstallError(
                InstallErrorKind.BACKEND_WRITE_FAILURE,
                f"launchctl could not load {path}",
                name=job.name,
            )

    async def _remove(self, name: str) -> None:
        path = self.plist_path(name)
        if not path.exists():
            return
        await self._launchctl("unload", "-w", str(path))
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise BackendError(f"Cannot delete {path}: {e}") from e

    async def _list_jobs(self) -> List[str]:
        if not self.directory.is_dir():
            return []
        names = []
        for path in sorted(self.directory.glob(f"{self.label_prefix}*.plist")):
            names.append(path.name[len(self.label_prefix):-len(".plist")])
        return names
