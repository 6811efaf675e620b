import logging
from typing import Optional

from cron_scheduler.domain.event import ScheduledEvent
from cron_scheduler.domain.job import ScheduledJob
from cron_scheduler.executors.protocol import JobExecutor
from cron_scheduler.system.process import SubprocessRunner
from cron_scheduler.system.protocol import CommandRunner

logger = logging.getLogger(__name__)


class CommandFailedError(RuntimeError):
    def __init__(self, job: ScheduledJob, returncode: int, stderr: str):
        super().__init__(f"Job '{job.name}' exited with status {returncode}: {stderr.strip()}")
        self.returncode = returncode


class ShellExecutor(JobExecutor):
    """
    Runs the job's command: strings through the shell, argument vectors directly.
    """

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner: CommandRunner = runner or SubprocessRunner()

    async def async_execute(self, job: ScheduledJob, event: ScheduledEvent) -> None:
        logger.info("Running job %s scheduled at %d", job.name, event.scheduled_time)
        if isinstance(job.command, str):
            result = await self.runner.run_shell(job.command)
        else:
            result = await self.runner.run(job.command)
        if not result.ok:
            raise CommandFailedError(job, result.returncode, result.stderr)
