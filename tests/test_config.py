from pathlib import Path

import pytest
from pydantic import ValidationError

from cron_scheduler.config import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in Settings.model_fields:
        monkeypatch.delenv(f"CRON_SCHEDULER_{name.upper()}", raising=False)


def test_defaults() -> None:
    settings = Settings()
    assert settings.backend is None
    assert settings.crontab_marker == "# cron-scheduler"
    assert settings.launchd_label_prefix == "com.cron-scheduler."
    assert settings.launchd_load is True
    assert settings.schtasks_prefix == "CronScheduler_"


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRON_SCHEDULER_BACKEND", "in_process")
    monkeypatch.setenv("CRON_SCHEDULER_LAUNCHD_DIRECTORY", "/tmp/agents")
    monkeypatch.setenv("CRON_SCHEDULER_LAUNCHD_LOAD", "false")
    monkeypatch.setenv("CRON_SCHEDULER_SCHTASKS_PREFIX", "Acme_")
    monkeypatch.setenv("SCHTASKS_PREFIX", "ignored")

    settings = Settings()
    assert settings.backend == "in_process"
    assert settings.launchd_directory == Path("/tmp/agents")
    assert settings.launchd_load is False
    assert settings.schtasks_prefix == "Acme_"


def test_keyword_arguments_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRON_SCHEDULER_BACKEND", "crontab")
    assert Settings(backend="launchd").backend == "launchd"


def test_rejects_unknown_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRON_SCHEDULER_BACKEND", "cloud")
    with pytest.raises(ValidationError):
        Settings()
