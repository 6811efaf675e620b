import logging
import sys
from typing import Callable, Dict, Optional

from cron_scheduler.backends.base import BaseBackend
from cron_scheduler.backends.crontab import CrontabBackend
from cron_scheduler.backends.in_process import InProcessBackend
from cron_scheduler.backends.launchd import LaunchdBackend
from cron_scheduler.backends.schtasks import SchtasksBackend
from cron_scheduler.config import Settings
from cron_scheduler.system.protocol import CommandRunner

logger = logging.getLogger(__name__)

BackendBuilder = Callable[[Settings, Optional[CommandRunner]], BaseBackend]


def _crontab(settings: Settings, runner: Optional[CommandRunner]) -> BaseBackend:
    return CrontabBackend(runner=runner, marker=settings.crontab_marker, crontab=settings.crontab_command)


def _launchd(settings: Settings, runner: Optional[CommandRunner]) -> BaseBackend:
    return LaunchdBackend(
        directory=settings.launchd_directory,
        label_prefix=settings.launchd_label_prefix,
        runner=runner,
        load=settings.launchd_load,
    )


def _schtasks(settings: Settings, runner: Optional[CommandRunner]) -> BaseBackend:
    return SchtasksBackend(runner=runner, task_prefix=settings.schtasks_prefix)


def _in_process(settings: Settings, runner: Optional[CommandRunner]) -> BaseBackend:
    return InProcessBackend()


def platform_backend_name(platform: str = sys.platform) -> str:
    if platform == "darwin":
        return "launchd"
    if platform.startswith("win"):
        return "schtasks"
    return "crontab"


class BackendFactory:
    """
    Factory class for creating the backend used by this process.
    """
    def __init__(self, settings: Optional[Settings] = None):
        self.settings: Settings = settings or Settings()
        self._builders: Dict[str, BackendBuilder] = {
            "crontab": _crontab,
            "launchd": _launchd,
            "schtasks": _schtasks,
            "in_process": _in_process,
        }

    @property
    def supported_backends(self):
        return sorted(self._builders)

    def register(self, name: str, builder: BackendBuilder) -> None:
        """
        Register a builder for a custom backend.

        Raises:
            ValueError: If a builder with this name is already registered.
        """
        if name in self._builders:
            raise ValueError(f"A backend named '{name}' is already registered")
        self._builders[name] = builder

    def create(
        self,
        name: Optional[str] = None,
        runner: Optional[CommandRunner] = None,
        platform: str = sys.platform,
    ) -> BaseBackend:
        """
        Build a backend by name, falling back to the configured backend and
        then to the one native to ``platform``.

        Raises:
            KeyError: If no backend with that name is registered.
        """
        name = name or self.settings.backend or platform_backend_name(platform)
        if name not in self._builders:
            raise KeyError(f"No backend registered with name '{name}'")
        logger.debug("Using %s backend", name)
        return self._builders[name](self.settings, runner)
