from typing import Protocol

from cron_scheduler.domain.event import ScheduledEvent
from cron_scheduler.domain.job import ScheduledJob


class JobExecutor(Protocol):
    """
    Protocol class for executors invoked by the in-process backend.
    """

    async def async_execute(self, job: ScheduledJob, event: ScheduledEvent) -> None:
        """
        Asynchronously execute the given job for one fired occurrence.

        Args:
            job (ScheduledJob): The job that fired.
            event (ScheduledEvent): Details of the occurrence.
        """
        ...
