import re
import shlex
from typing import List, Union

from pydantic import BaseModel, Field, field_validator

JOB_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_job_name(name: str) -> bool:
    return isinstance(name, str) and JOB_NAME_PATTERN.fullmatch(name) is not None


class ScheduledJob(BaseModel):
    """
    A named command installed into a backend.
    """
    name: str = Field(..., description="Job name, letters, digits, '_' and '-' only")
    schedule: str = Field(..., description="Cron expression as written by the user")
    command: Union[str, List[str]] = Field(..., description="Shell command string or argument vector")

    @field_validator("name")
    def check_name(cls, v: str) -> str:
        if not is_valid_job_name(v):
            raise ValueError(f"Invalid job name '{v}'")
        return v

    @field_validator("command")
    def check_command(cls, v: Union[str, List[str]]) -> Union[str, List[str]]:
        if not v:
            raise ValueError("Command must not be empty")
        return v

    @property
    def command_line(self) -> str:
        """
        The command as a single POSIX shell string.
        """
        if isinstance(self.command, str):
            return self.command
        return shlex.join(self.command)
