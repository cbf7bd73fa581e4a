"""Abstract interface for external command execution."""

import shlex
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from pathlib import Path

from ondemand.errors import ProcessError
from ondemand.models.process import OutputLine, ProcessExit, ProcessResult

STDERR_TAIL_LINES = 20


def format_command(command: Sequence[str]) -> str:
    """Render a command as a copy-pasteable shell line."""
    return shlex.join(str(arg) for arg in command)


class Executor(ABC):
    """Capability for running external commands.

    Implementations stream output as it is produced. run() is built on top of
    execute_streaming(), so wrappers that observe the stream (LoggingExecutor)
    also observe run().
    """

    @abstractmethod
    def execute_streaming(
        self,
        command: Sequence[str],
        cwd: Path | None = None,
    ) -> AsyncIterator[OutputLine | ProcessExit]:
        """Run a command and yield its output lines as they arrive.

        Args:
            command: Program and arguments
            cwd: Working directory for the command

        Yields:
            OutputLine for every stdout/stderr line, then exactly one
            ProcessExit once the command has finished

        Raises:
            SpawnError: If the command could not be started
        """
        ...

    async def run(self, command: Sequence[str], cwd: Path | None = None) -> ProcessResult:
        """Run a command to completion.

        Args:
            command: Program and arguments
            cwd: Working directory for the command

        Returns:
            ProcessResult with the collected stdout and stderr

        Raises:
            SpawnError: If the command could not be started
            ProcessError: If the command exited with a nonzero status
        """
        stdout_lines: list[str] = []
        stderr_lines: list[str] = []
        exit_code = -1

        async for event in self.execute_streaming(command, cwd):
            if isinstance(event, ProcessExit):
                exit_code = event.exit_code
            elif event.stream == "stdout":
                stdout_lines.append(event.text)
            else:
                stderr_lines.append(event.text)

        if exit_code != 0:
            tail = "\n".join(stderr_lines[-STDERR_TAIL_LINES:])
            raise ProcessError(format_command(command), exit_code, tail)

        return ProcessResult(
            exit_code=exit_code,
            stdout="\n".join(stdout_lines),
            stderr="\n".join(stderr_lines),
        )
