import logging
from typing import List, Optional

from cron_scheduler.backends.base import BaseBackend
from cron_scheduler.backends.commands import crontab_command
from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.cron.formatter import format_expression
from cron_scheduler.domain.job import ScheduledJob
from cron_scheduler.errors import BackendError, InstallError, InstallErrorKind
from cron_scheduler.system.process import SubprocessRunner
from cron_scheduler.system.protocol import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "# cron-scheduler"


def marker_line(marker: str, name: str) -> str:
    return f"{marker}: {name}"


def _join(lines: List[str]) -> str:
    return "\n".join(lines) + "\n" if lines else ""


def _strip_records(text: str, marker: str, name: Optional[str]) -> str:
    """
    Drop marker lines (all of ours, or only ``name``'s) together with the
    generated line after each. The following line is kept when it is itself
    a comment, so an adjacent record is never eaten.
    """
    prefix = marker_line(marker, "")
    lines = text.splitlines()
    kept = []
    index = 0
    while index < len(lines):
        line = lines[index].strip()
        is_ours = line.startswith(prefix) and (name is None or line[len(prefix):].strip() == name)
        if not is_ours:
            kept.append(lines[index])
            index += 1
            continue
        index += 1
        if index < len(lines) and not lines[index].lstrip().startswith("#"):
            index += 1
    return _join(kept)


def strip_job(text: str, marker: str, name: str) -> str:
    return _strip_records(text, marker, name)


def strip_all_jobs(text: str, marker: str) -> str:
    return _strip_records(text, marker, None)


def add_job(text: str, marker: str, name: str, entry: str) -> str:
    lines = strip_job(text, marker, name).splitlines()
    lines.extend([marker_line(marker, name), entry])
    return _join(lines)


def list_job_names(text: str, marker: str) -> List[str]:
    prefix = marker_line(marker, "")
    names = []
    for line in text.splitlines():
        line = line.strip()
        if line.startswith(prefix):
            name = line[len(prefix):].strip()
            if name and name not in names:
                names.append(name)
    return names


def crontab_entry(expression: CronExpression, job: ScheduledJob) -> str:
    return f"{format_expression(expression)} {crontab_command(job.command)}"


class CrontabBackend(BaseBackend):
    """
    Keeps jobs in the current user's crontab.

    Each job is a marker comment followed by the generated crontab line::

        # cron-scheduler: backup
        0 3 * * * /usr/local/bin/backup --full
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        marker: str = DEFAULT_MARKER,
        crontab: str = "crontab",
    ):
        super().__init__()
        self.runner: CommandRunner = runner or SubprocessRunner()
        self.marker = marker
        self.crontab = crontab

    async def read_crontab(self) -> str:
        try:
            result = await self.runner.run([self.crontab, "-l"])
        except OSError as e:
            raise BackendError(f"Cannot run {self.crontab}: {e}") from e
        if result.ok:
            return result.stdout
        if "no crontab" in result.stderr.lower():
            return ""
        raise BackendError(f"{self.crontab} -l failed: {result.stderr.strip()}")

    async def write_crontab(self, text: str) -> None:
        try:
            result = await self.runner.run([self.crontab, "-"], input=text)
        except OSError as e:
            raise BackendError(f"Cannot run {self.crontab}: {e}") from e
        if not result.ok:
            raise BackendError(f"{self.crontab} - failed: {result.stderr.strip()}")

    async def _install(self, job: ScheduledJob, expression: CronExpression) -> None:
        entry = crontab_entry(expression, job)
        if "\n" in entry or "\r" in entry:
            raise InstallError(
                InstallErrorKind.INVALID_COMMAND,
                f"Command of job '{job.name}' contains a line break, which crontab cannot hold",
                name=job.name,
            )
        try:
            current = await self.read_crontab()
            await self.write_crontab(add_job(current, self.marker, job.name, entry))
        except BackendError as e:
            raise InstallError(InstallErrorKind.BACKEND_WRITE_FAILURE, str(e), name=job.name) from e

    async def _remove(self, name: str) -> None:
        current = await self.read_crontab()
        updated = strip_job(current, self.marker, name)
        if updated == _join(current.splitlines()):
            logger.debug("Job %s not in crontab", name)
            return
        await self.write_crontab(updated)

    async def _list_jobs(self) -> List[str]:
        return list_job_names(await self.read_crontab(), self.marker)

    async def _remove_all(self) -> None:
        current = await self.read_crontab()
        updated = strip_all_jobs(current, self.marker)
        if updated != _join(current.splitlines()):
            await self.write_crontab(updated)
