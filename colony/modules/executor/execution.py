"""
Non-interactive execution of external commands.

A CommandExecution spawns exactly one process with stdin closed, drains
stdout and stderr concurrently while forwarding each line to a progress
sink, and only resolves once both streams hit end-of-data and the process
has exited.
"""

import asyncio
import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from colony.config.provider import DEFAULT_STREAM_LIMIT
from colony.errors import CommandFailedError, CommandSpawnError
from colony.modules.progress import NullProgress, ProgressSink

logger = logging.getLogger("colony.executor")


@dataclass
class Command:
    """Description of a process that has not been spawned yet."""

    program: str
    args: List[str] = field(default_factory=list)
    env: Optional[Dict[str, str]] = None  # None inherits the caller's environment
    cwd: Optional[Union[str, Path]] = None

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ExitStatus:
    """How a process terminated: an exit code or the signal that killed it."""

    code: Optional[int] = None
    signal: Optional[int] = None

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitStatus":
        # asyncio reports death by signal N as -N
        if returncode < 0:
            return cls(signal=-returncode)
        return cls(code=returncode)

    @property
    def success(self) -> bool:
        return self.code == 0 and self.signal is None

    def __str__(self) -> str:
        if self.signal is not None:
            return f"signal {self.signal}"
        return f"exit code {self.code}"


@dataclass
class ExecutionResult:
    """Outcome of one run with the full newline-normalized logs."""

    status: ExitStatus
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.status.success


async def read_line(stream: asyncio.StreamReader) -> bytes:
    """
    Read one line including its terminator, however long it is.

    Returns b"" only at end of data.
    """
    chunks = []

    while True:
        try:
            chunks.append(await stream.readuntil(b"\n"))
            break
        except asyncio.IncompleteReadError as e:
            # EOF: whatever is left is the final, unterminated line
            chunks.append(e.partial)
            break
        except asyncio.LimitOverrunError as e:
            # Line is longer than the reader limit; take the buffered part and keep going
            chunks.append(await stream.readexactly(e.consumed))

    return b"".join(chunks)


async def capture_stream(stream: asyncio.StreamReader, progress: ProgressSink) -> str:
    """
    Drain a stream line by line.

    Each line loses its trailing terminator, is forwarded to the progress
    sink and appended to the returned log followed by a single newline.
    Lines longer than the reader limit are read in pieces and logged whole.
    """
    log = []

    while True:
        line = await read_line(stream)
        if not line:
            break

        trimmed = line.decode("utf-8", errors="replace").rstrip("\r\n")
        progress.log(trimmed)
        log.append(trimmed + "\n")

    return "".join(log)


class CommandExecution:
    """Non-interactive execution of an arbitrary command."""

    def __init__(
        self,
        command: Command,
        progress: Optional[ProgressSink] = None,
        stream_limit: int = DEFAULT_STREAM_LIMIT,
    ):
        self.command = command
        self.progress: ProgressSink = progress or NullProgress()
        self.stream_limit = stream_limit
        self.stdout: Optional[str] = None
        self.stderr: Optional[str] = None

    def set_progress(self, progress: ProgressSink) -> None:
        """Provide a progress sink to display output."""
        self.progress = progress

    def get_logs(self) -> Tuple[Optional[str], Optional[str]]:
        """Retrieve (stdout, stderr) from the last invocation."""
        return self.stdout, self.stderr

    async def run(self) -> ExecutionResult:
        """
        Run the command to completion.

        Returns:
            ExecutionResult for a zero exit status

        Raises:
            CommandSpawnError: If the process could not be started
            CommandFailedError: If the process exited unsuccessfully
        """
        self.stdout = ""
        self.stderr = ""

        logger.debug(f"Running: {self.command}")

        try:
            process = await asyncio.create_subprocess_exec(
                *self.command.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self.command.env,
                cwd=self.command.cwd,
                limit=self.stream_limit,
            )
        except OSError as e:
            logger.error(f"Failed to spawn {self.command.program!r}: {e}")
            raise CommandSpawnError(self.command.program, e.strerror or str(e)) from e

        try:
            stdout, stderr, returncode = await asyncio.gather(
                capture_stream(process.stdout, self.progress.clone()),
                capture_stream(process.stderr, self.progress.clone()),
                process.wait(),
            )
        except (asyncio.CancelledError, Exception):
            # Never leave the child running or unreaped
            if process.returncode is None:
                logger.warning(f"Killing {self.command.program!r} after failed output capture")
                process.kill()
            await process.wait()
            raise

        self.stdout = stdout
        self.stderr = stderr

        result = ExecutionResult(
            status=ExitStatus.from_returncode(returncode),
            stdout=stdout,
            stderr=stderr,
        )

        if not result.success:
            logger.debug(f"Command {self.command} failed with {result.status}")
            raise CommandFailedError(result)

        return result
