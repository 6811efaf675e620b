import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional

from cron_scheduler.backends.base import BaseBackend
from cron_scheduler.cron.engine import next_occurrence
from cron_scheduler.cron.expression import CronExpression
from cron_scheduler.domain.event import ScheduledEvent
from cron_scheduler.domain.job import ScheduledJob
from cron_scheduler.executors.protocol import JobExecutor
from cron_scheduler.executors.shell import ShellExecutor

logger = logging.getLogger(__name__)


class InProcessBackend(BaseBackend):
    """
    Runs jobs from asyncio tasks inside the current process.

    Each job gets one task that sleeps until the next occurrence, hands a
    ScheduledEvent to the executor and repeats. Nothing survives a restart,
    and occurrences missed while the process was down are not replayed.
    """

    def __init__(
        self,
        executor: Optional[JobExecutor] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        super().__init__()
        self.executor: JobExecutor = executor or ShellExecutor()
        self.clock = clock
        self.sleep = sleep
        self.jobs: Dict[str, ScheduledJob] = {}
        self.job_futures: Dict[str, asyncio.Task] = {}

    async def stop(self):
        """
        Cancel every job task.
        """
        async with self._lock:
            futures = list(self.job_futures.values())
            for future in futures:
                future.cancel()
            await asyncio.gather(*futures, return_exceptions=True)
            self.job_futures.clear()
            self.jobs.clear()

    async def _install(self, job: ScheduledJob, expression: CronExpression) -> None:
        self._cancel(job.name)
        self.jobs[job.name] = job
        self.job_futures[job.name] = asyncio.create_task(
            self._run_job(job, expression), name=f"cron-job-{job.name}"
        )

    async def _remove(self, name: str) -> None:
        self._cancel(name)
        self.jobs.pop(name, None)

    async def _list_jobs(self) -> List[str]:
        return list(self.jobs)

    def _cancel(self, name: str) -> None:
        future = self.job_futures.pop(name, None)
        if future is not None and not future.done():
            future.cancel()

    async def _run_job(self, job: ScheduledJob, expression: CronExpression) -> None:
        last_fired = 0.0
        while True:
            # never fire the same occurrence twice if the sleep woke up early
            now = max(self.clock(), last_fired)
            fire_at = next_occurrence(expression, now)
            if fire_at is None:
                logger.warning("Job %s has no future occurrence, stopping", job.name)
                return
            await self.sleep(max(fire_at - now, 0))
            last_fired = fire_at
            event = ScheduledEvent(name=job.name, cron=job.schedule, scheduled_time=fire_at * 1000)
            try:
                await self.executor.async_execute(job, event)
            except Exception:
                logger.exception("Error executing job %s", job.name)
