from typing import List, Optional, Sequence

import pytest

from cron_scheduler.domain.event import ScheduledEvent
from cron_scheduler.domain.job import ScheduledJob
from cron_scheduler.executors.shell import CommandFailedError, ShellExecutor
from cron_scheduler.system.protocol import CommandResult, CommandRunner


class RecordingRunner(CommandRunner):
    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.calls: List[object] = []

    async def run(self, argv: Sequence[str], input: Optional[str] = None) -> CommandResult:
        self.calls.append(list(argv))
        return CommandResult(returncode=self.returncode, stderr="boom")

    async def run_shell(self, command: str) -> CommandResult:
        self.calls.append(command)
        return CommandResult(returncode=self.returncode, stderr="boom")


@pytest.fixture(scope="function")
def event() -> ScheduledEvent:
    return ScheduledEvent(name="job", cron="* * * * *", scheduled_time=0)


@pytest.mark.asyncio
async def test_string_command_runs_through_shell(event: ScheduledEvent) -> None:
    runner = RecordingRunner()
    job = ScheduledJob(name="job", schedule="* * * * *", command="echo hi > /tmp/out")
    await ShellExecutor(runner).async_execute(job, event)
    assert runner.calls == ["echo hi > /tmp/out"]


@pytest.mark.asyncio
async def test_argument_vector_runs_directly(event: ScheduledEvent) -> None:
    runner = RecordingRunner()
    job = ScheduledJob(name="job", schedule="* * * * *", command=["echo", "hi"])
    await ShellExecutor(runner).async_execute(job, event)
    assert runner.calls == [["echo", "hi"]]


@pytest.mark.asyncio
async def test_failed_command_raises(event: ScheduledEvent) -> None:
    job = ScheduledJob(name="job", schedule="* * * * *", command="false")
    with pytest.raises(CommandFailedError, match="exited with status 2: boom"):
        await ShellExecutor(RecordingRunner(returncode=2)).async_execute(job, event)
