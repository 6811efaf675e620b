import asyncio
import logging
from datetime import datetime, timezone
from typing import List

import pytest
import pytest_asyncio

from cron_scheduler.backends.in_process import InProcessBackend
from cron_scheduler.domain.event import ScheduledEvent
from cron_scheduler.domain.job import ScheduledJob
from cron_scheduler.errors import InstallError, InstallErrorKind, ParseError
from cron_scheduler.executors.protocol import JobExecutor

START = int(datetime(2025, 1, 1, tzinfo=timezone.utc).timestamp())


class FakeClock:
    """
    A clock that only moves when the backend sleeps.
    """

    def __init__(self, now: float):
        self.now = now

    def time(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.now += delay
        await asyncio.sleep(0)


class RecordingExecutor(JobExecutor):
    def __init__(self, wanted: int = 3):
        self.events: List[ScheduledEvent] = []
        self.wanted = wanted
        self.done = asyncio.Event()

    async def async_execute(self, job: ScheduledJob, event: ScheduledEvent) -> None:
        self.events.append(event)
        if len(self.events) >= self.wanted:
            self.done.set()


class FailingExecutor(RecordingExecutor):
    async def async_execute(self, job: ScheduledJob, event: ScheduledEvent) -> None:
        await super().async_execute(job, event)
        raise RuntimeError(f"handler failed for {job.name}")


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture(scope="function")
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest_asyncio.fixture(scope="function")
async def backend(executor: RecordingExecutor, clock: FakeClock):
    backend = InProcessBackend(executor, clock=clock.time, sleep=clock.sleep)
    await backend.start()
    yield backend
    await backend.stop()


@pytest.mark.asyncio
async def test_job_fires_at_each_occurrence(backend: InProcessBackend, executor: RecordingExecutor) -> None:
    await backend.install("quarterly", "*/15 * * * *", "true")
    await asyncio.wait_for(executor.done.wait(), timeout=5)

    assert [event.scheduled_time for event in executor.events[:3]] == [
        (START + 15 * 60) * 1000,
        (START + 30 * 60) * 1000,
        (START + 45 * 60) * 1000,
    ]
    first = executor.events[0]
    assert first.type == "scheduled"
    assert first.name == "quarterly"
    assert first.cron == "*/15 * * * *"


@pytest.mark.asyncio
async def test_remove_cancels_job(backend: InProcessBackend, executor: RecordingExecutor) -> None:
    await backend.install("job", "* * * * *", "true")
    await asyncio.wait_for(executor.done.wait(), timeout=5)
    future = backend.job_futures["job"]

    await backend.remove("job")
    await asyncio.gather(future, return_exceptions=True)
    assert future.cancelled()
    assert await backend.list_jobs() == []

    fired = len(executor.events)
    await asyncio.sleep(0.01)
    assert len(executor.events) == fired

    await backend.remove("job")


@pytest.mark.asyncio
async def test_reinstall_replaces_job(backend: InProcessBackend) -> None:
    await backend.install("job", "@daily", "echo old")
    old_future = backend.job_futures["job"]
    await backend.install("job", "@hourly", "echo new")

    await asyncio.gather(old_future, return_exceptions=True)
    assert old_future.cancelled()
    assert await backend.list_jobs() == ["job"]
    assert backend.jobs["job"].command == "echo new"


@pytest.mark.asyncio
async def test_executor_errors_do_not_stop_the_job(clock: FakeClock, caplog: pytest.LogCaptureFixture) -> None:
    executor = FailingExecutor(wanted=3)
    backend = InProcessBackend(executor, clock=clock.time, sleep=clock.sleep)
    with caplog.at_level(logging.ERROR, logger="cron_scheduler.backends.in_process"):
        await backend.install("flaky", "* * * * *", "true")
        await asyncio.wait_for(executor.done.wait(), timeout=5)
        await backend.stop()

    assert len(executor.events) >= 3
    assert "Error executing job flaky" in caplog.text


@pytest.mark.asyncio
async def test_stop_cancels_every_job(backend: InProcessBackend) -> None:
    await backend.install("a", "@daily", "true")
    await backend.install("b", "@weekly", "true")
    futures = list(backend.job_futures.values())

    await backend.stop()
    assert all(future.done() for future in futures)
    assert await backend.list_jobs() == []


@pytest.mark.asyncio
async def test_remove_all(backend: InProcessBackend) -> None:
    await backend.install("a", "@daily", "true")
    await backend.install("b", "@weekly", "true")
    await backend.remove_all()
    assert await backend.list_jobs() == []
    assert backend.job_futures == {}


@pytest.mark.asyncio
async def test_install_validates(backend: InProcessBackend) -> None:
    with pytest.raises(InstallError):
        await backend.install("bad/name", "@daily", "true")
    with pytest.raises(ParseError):
        await backend.install("job", "@bogus", "true")
    assert await backend.list_jobs() == []


@pytest.mark.asyncio
async def test_empty_command_is_rejected(backend: InProcessBackend) -> None:
    with pytest.raises(InstallError) as exc_info:
        await backend.install("job", "* * * * *", "")
    assert exc_info.value.kind == InstallErrorKind.INVALID_COMMAND
    assert await backend.list_jobs() == []


@pytest.mark.asyncio
async def test_remove_ignores_invalid_name(backend: InProcessBackend) -> None:
    await backend.install("job", "@daily", "true")
    await backend.remove("job/../job")
    assert await backend.list_jobs() == ["job"]
