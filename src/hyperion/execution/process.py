"""
Process execution for tasks.

The ProcessRunner starts a command as an asyncio subprocess, streams the
merged stdout/stderr line by line to an optional callback and reports the
collected lines together with the exit code. It is the only place where
Hyperion spawns processes; tasks receive it through their TaskParameters
so tests can substitute a recording fake.

Example:
    >>> runner = ProcessRunner()
    >>> result = asyncio.run(runner.run(["bash", "-c", "echo hello"]))
    >>> result.success, result.lines
    (True, ['hello'])
"""

import asyncio
import contextlib
import os
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, List, Mapping, Optional, Sequence

from hyperion.core.exceptions.custom_exceptions import ExecutionError
from hyperion.core.logging.logger import get_logger

logger = get_logger(__name__)

LineCallback = Callable[[str], None]

READ_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ProcessResult:
    """
    Outcome of one process run.

    Attributes:
        exit_code (int): Process exit code
        lines (List[str]): Output lines, stdout and stderr merged
    """

    exit_code: int
    lines: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Runs commands as asyncio subprocesses"""

    async def run(
        self,
        command: Sequence[str],
        *,
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        on_line: Optional[LineCallback] = None,
    ) -> ProcessResult:
        """
        Run a command until it exits.

        Args:
            command: Executable and arguments
            env: Extra environment variables on top of the current ones
            cwd: Working directory for the process
            on_line: Called for every output line as it arrives

        Returns:
            ProcessResult: Exit code and output lines

        Raises:
            ExecutionError: If the process cannot be started or read
        """
        process_env = dict(os.environ)
        if env:
            process_env.update(env)

        logger.debug("Starting process", command=list(command), cwd=cwd)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                env=process_env,
                cwd=cwd,
            )
        except OSError as e:
            raise ExecutionError(
                f"Failed to start process: {e}",
                error_code="PROCESS_START_ERROR",
                details={"command": list(command)},
            ) from e

        lines: List[str] = []
        try:
            stdout = process.stdout
            if stdout is None:
                raise ExecutionError(
                    "Process output is not readable",
                    error_code="PROCESS_OUTPUT_ERROR",
                    details={"command": list(command)},
                )
            async for line in _read_lines(stdout):
                lines.append(line)
                if on_line is not None:
                    on_line(line)
            exit_code = await process.wait()
        finally:
            if process.returncode is None:
                logger.warning("Killing unfinished process", command=list(command))
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()

        logger.debug("Process finished", command=list(command), exit_code=exit_code)
        return ProcessResult(exit_code=exit_code, lines=lines)


async def _read_lines(stream: asyncio.StreamReader) -> AsyncIterator[str]:
    """
    Yield the decoded lines of a stream.

    The stream is read in chunks instead of with readline() so a single line
    may be longer than the StreamReader buffer limit.
    """
    pending: List[bytes] = []
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        *complete, rest = chunk.split(b"\n")
        for part in complete:
            pending.append(part)
            yield _decode(b"".join(pending))
            pending = []
        if rest:
            pending.append(rest)
    if pending:
        yield _decode(b"".join(pending))


def _decode(raw: bytes) -> str:
    return raw.decode(errors="replace").rstrip("\r\n")
