from abc import ABC, abstractmethod
import asyncio
import logging
from typing import List, Union

from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.cron.parser import parse
from cron_scheduler.domain.job import ScheduledJob, is_valid_job_name
from cron_scheduler.errors import InstallError, InstallErrorKind

logger = logging.getLogger(__name__)


class BaseBackend(ABC):
    """
    A registry of named cron jobs kept by some scheduler.

    The backend's own store is the source of truth; nothing is cached
    between calls. All operations on one backend instance are serialized
    by a single lock, so an install that replaces an existing job is seen
    as one update by concurrent callers.
    """

    def __init__(self):
        self._lock = asyncio.Lock()

    async def start(self):
        pass

    async def stop(self):
        pass

    def validate_job(self, name: str, schedule: str, command: Union[str, List[str]]) -> ScheduledJob:
        if not is_valid_job_name(name):
            raise InstallError(
                InstallErrorKind.INVALID_JOB_NAME,
                f"Invalid job name '{name}': use letters, digits, '_' and '-' only",
                name=name,
            )
        if not command:
            raise InstallError(InstallErrorKind.INVALID_COMMAND, f"Job '{name}' has an empty command", name=name)
        return ScheduledJob(name=name, schedule=schedule, command=command)

    async def install(self, name: str, schedule: str, command: Union[str, List[str]]) -> ScheduledJob:
        """
        Install a job, replacing any job with the same name.

        Raises:
            InstallError: If the name or command is invalid, the backend cannot
                express the schedule, or writing to the backend fails.
            ParseError: If the schedule is not a valid cron expression.
        """
        job = self.validate_job(name, schedule, command)
        expression = parse(schedule)
        async with self._lock:
            await self._install(job, expression)
        logger.info("Installed job %s (%s)", name, schedule)
        return job

    async def remove(self, name: str) -> None:
        """
        Remove a job. Removing a job that does not exist is not an error.
        """
        if not is_valid_job_name(name):
            logger.debug("Ignoring remove of invalid job name %r", name)
            return
        async with self._lock:
            await self._remove(name)
        logger.info("Removed job %s", name)

    async def list_jobs(self) -> List[str]:
        async with self._lock:
            return await self._list_jobs()

    async def remove_all(self) -> None:
        async with self._lock:
            await self._remove_all()
        logger.info("Removed all jobs")

    @abstractmethod
    async def _install(self, job: ScheduledJob, expression: CronExpression) -> None:
        pass

    @abstractmethod
    async def _remove(self, name: str) -> None:
        pass

    @abstractmethod
    async def _list_jobs(self) -> List[str]:
        pass

    async def _remove_all(self) -> None:
        for name in await self._list_jobs():
            await self._remove(name)
