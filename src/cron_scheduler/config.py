from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cron_scheduler.backends.crontab import DEFAULT_MARKER
from cron_scheduler.backends.launchd import DEFAULT_AGENTS_DIRECTORY, DEFAULT_LABEL_PREFIX
from cron_scheduler.backends.schtasks import DEFAULT_TASK_PREFIX

ENV_PREFIX = "CRON_SCHEDULER_"

BackendName = Literal["crontab", "launchd", "schtasks", "in_process"]


class Settings(BaseSettings):
    """
    Backend configuration. Every field can be set from a ``CRON_SCHEDULER_<FIELD>``
    environment variable, e.g. ``CRON_SCHEDULER_BACKEND=in_process``.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    backend: Optional[BackendName] = Field(None, description="Backend to use; probed from the platform when unset")
    crontab_marker: str = Field(DEFAULT_MARKER, description="Comment prefix that marks managed crontab records")
    crontab_command: str = Field("crontab", description="crontab executable")
    launchd_directory: Path = Field(DEFAULT_AGENTS_DIRECTORY, description="Directory holding agent property lists")
    launchd_label_prefix: str = Field(DEFAULT_LABEL_PREFIX, description="Prefix of agent labels and file names")
    launchd_load: bool = Field(True, description="Whether to (un)load agents with launchctl")
    schtasks_prefix: str = Field(DEFAULT_TASK_PREFIX, description="Prefix of scheduled task names")
