import csv
import io
import logging
from typing import List, Optional

from cron_scheduler.backends.base import BaseBackend
from cron_scheduler.backends.commands import windows_command
from cron_scheduler.cron.bitset import count_bits, iter_bits
from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.cron.fields import HOUR, MINUTE, MONTH
from cron_scheduler.cron.formatter import format_expression
from cron_scheduler.cron.names import WEEKDAY_ABBREVIATIONS
from cron_scheduler.domain.job import ScheduledJob
from cron_scheduler.errors import BackendError, InstallError, InstallErrorKind
from cron_scheduler.system.process import SubprocessRunner
from cron_scheduler.system.protocol import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_TASK_PREFIX = "CronScheduler_"


def _single(bits: int) -> Optional[int]:
    if count_bits(bits) != 1:
        return None
    return next(iter_bits(bits))


def _minute_step(bits: int) -> Optional[int]:
    """
    The step ``n`` if ``bits`` is exactly 0, n, 2n, ... with n dividing 60.
    """
    values = list(iter_bits(bits))
    if len(values) < 2 or values[0] != 0:
        return None
    step = values[1]
    if 60 % step != 0:
        return None
    if bits != sum(1 << value for value in range(0, 60, step)):
        return None
    return step


def schedule_arguments(expression: CronExpression) -> List[str]:
    """
    Map an expression onto one of the schedule types Task Scheduler supports.

    Shapes are tried in order: every n minutes, every minute, hourly at a
    minute, daily at a time, weekly on one day at a time.

    Raises:
        InstallError: If the expression has none of these shapes.
    """
    any_day = expression.days_is_wildcard and expression.months == MONTH.mask
    any_hour = expression.hours == HOUR.mask
    any_weekday = expression.weekdays_is_wildcard
    minute = _single(expression.minutes)
    hour = _single(expression.hours)

    if any_day and any_weekday and any_hour:
        step = _minute_step(expression.minutes)
        if step is not None and step > 1:
            return ["/SC", "MINUTE", "/MO", str(step)]
        if expression.minutes == MINUTE.mask:
            return ["/SC", "MINUTE", "/MO", "1"]
        if minute is not None:
            return ["/SC", "HOURLY", "/MO", "1", "/ST", f"00:{minute:02d}"]
    if minute is not None and hour is not None and any_day:
        start_time = f"{hour:02d}:{minute:02d}"
        if any_weekday:
            return ["/SC", "DAILY", "/ST", start_time]
        weekday = _single(expression.weekdays)
        if weekday is not None:
            return ["/SC", "WEEKLY", "/D", WEEKDAY_ABBREVIATIONS[weekday], "/ST", start_time]
    raise InstallError(
        InstallErrorKind.UNSUPPORTED_SCHEDULE,
        f"Schedule '{format_expression(expression)}' is too complex for Task Scheduler",
    )


class SchtasksBackend(BaseBackend):
    """
    Keeps jobs as Windows scheduled tasks named ``<task_prefix><name>``.
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        task_prefix: str = DEFAULT_TASK_PREFIX,
        schtasks: str = "schtasks",
    ):
        super().__init__()
        self.runner: CommandRunner = runner or SubprocessRunner()
        self.task_prefix = task_prefix
        self.schtasks = schtasks

    def task_name(self, name: str) -> str:
        return f"{self.task_prefix}{name}"

    async def _run(self, *args: str):
        try:
            return await self.runner.run([self.schtasks, *args])
        except OSError as e:
            raise BackendError(f"Cannot run {self.schtasks}: {e}") from e

    async def _install(self, job: ScheduledJob, expression: CronExpression) -> None:
        arguments = schedule_arguments(expression)
        try:
            result = await self._run(
                "/Create", "/F",
                "/TN", self.task_name(job.name),
                "/TR", windows_command(job.command),
                *arguments,
            )
        except BackendError as e:
            raise InstallError(InstallErrorKind.BACKEND_WRITE_FAILURE, str(e), name=job.name) from e
        if not result.ok:
            raise InstallError(
                InstallErrorKind.BACKEND_WRITE_FAILURE,
                f"schtasks /Create failed: {result.stderr.strip()}",
                name=job.name,
            )

    async def _remove(self, name: str) -> None:
        if name not in await self._list_jobs():
            return
        result = await self._run("/Delete", "/F", "/TN", self.task_name(name))
        if not result.ok:
            raise BackendError(f"schtasks /Delete failed: {result.stderr.strip()}")

    async def _list_jobs(self) -> List[str]:
        result = await self._run("/Query", "/FO", "CSV", "/NH")
        if not result.ok:
            raise BackendError(f"schtasks /Query failed: {result.stderr.strip()}")
        names = []
        for row in csv.reader(io.StringIO(result.stdout)):
            if not row:
                continue
            task = row[0].lstrip("\\")
            if task.startswith(self.task_prefix):
                name = task[len(self.task_prefix):]
                if name not in names:
                    names.append(name)
        return names
