import pytest
from pydantic import ValidationError

from cron_scheduler.domain.event import ScheduledEvent
from cron_scheduler.domain.job import ScheduledJob, is_valid_job_name


@pytest.mark.parametrize("name", ["backup", "nightly_report", "job-1", "A_b-9"])
def test_valid_job_names(name: str) -> None:
    assert is_valid_job_name(name)


@pytest.mark.parametrize("name", ["", "has space", "a/b", "dot.name", "naïve", "tab\tname"])
def test_invalid_job_names(name: str) -> None:
    assert not is_valid_job_name(name)


def test_scheduled_job_rejects_invalid_name() -> None:
    with pytest.raises(ValidationError):
        ScheduledJob(name="bad name", schedule="* * * * *", command="true")


def test_scheduled_job_rejects_empty_command() -> None:
    with pytest.raises(ValidationError):
        ScheduledJob(name="empty", schedule="* * * * *", command=[])


def test_command_line_quotes_argument_vector() -> None:
    job = ScheduledJob(name="echo", schedule="@daily", command=["echo", "hello world"])
    assert job.command_line == "echo 'hello world'"
    assert ScheduledJob(name="echo", schedule="@daily", command="echo hi").command_line == "echo hi"


def test_scheduled_event_defaults() -> None:
    event = ScheduledEvent(name="job", cron="* * * * *", scheduled_time=1735689600000)
    assert event.type == "scheduled"
    assert event.scheduled_time == 1735689600000
