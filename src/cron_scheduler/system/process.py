import asyncio
import logging
from typing import Optional, Sequence

from cron_scheduler.system.protocol import CommandResult, CommandRunner

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """
    CommandRunner backed by asyncio subprocesses.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def run(self, argv: Sequence[str], input: Optional[str] = None) -> CommandResult:
        logger.debug("Running %s", list(argv))
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE if input is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        return await self._communicate(process, input)

    async def run_shell(self, command: str) -> CommandResult:
        logger.debug("Running shell command %r", command)
        process = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        return await self._communicate(process, None)

    async def _communicate(self, process: asyncio.subprocess.Process, input: Optional[str]) -> CommandResult:
        stdout, stderr = await process.communicate(
            input.encode(self.encoding) if input is not None else None
        )
        return CommandResult(
            returncode=process.returncode,
            stdout=stdout.decode(self.encoding, errors="replace"),
            stderr=stderr.decode(self.encoding, errors="replace"),
        )
