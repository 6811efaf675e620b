from typing import Optional, Protocol, Sequence

from pydantic import BaseModel


class CommandResult(BaseModel):
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """
    Runs external programs on behalf of the backends.
    """

    async def run(self, argv: Sequence[str], input: Optional[str] = None) -> CommandResult:
        """
        Run ``argv`` to completion, feeding ``input`` to stdin when given.

        Raises:
            OSError: If the program cannot be started.
        """
        ...

    async def run_shell(self, command: str) -> CommandResult:
        """Run ``command`` through the system shell."""
        ...
