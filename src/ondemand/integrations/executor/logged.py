"""Logging executor wrapper.

Streams every command and its output through a logger while delegating the
actual execution to the wrapped implementation (which could be Real or Fake).
"""

import logging
from collections.abc import AsyncIterator, Sequence
from pathlib import Path

from ondemand.integrations.executor.abc import Executor, format_command
from ondemand.models.process import OutputLine, ProcessExit

COMMAND_PREFIX = "Running $ "
OUTPUT_INDENT = " " * len(COMMAND_PREFIX)

default_logger = logging.getLogger(__name__)


class LoggingExecutor(Executor):
    """Wrapper that logs commands and their output line by line.

    The command line is logged before execution. Output lines are logged as
    soon as the wrapped executor yields them, stdout at INFO and stderr at
    ERROR, so long installs show progress.

    Usage:
        executor = LoggingExecutor(RealExecutor())
        result = await executor.run(["python", "-m", "pip", "--version"])
    """

    def __init__(self, wrapped: Executor, logger: logging.Logger | None = None) -> None:
        """Create a logging wrapper around an Executor implementation.

        Args:
            wrapped: The Executor to delegate to
            logger: Logger receiving the output, defaults to this module's logger
        """
        self._wrapped = wrapped
        self._logger = logger or default_logger

    async def execute_streaming(
        self,
        command: Sequence[str],
        cwd: Path | None = None,
    ) -> AsyncIterator[OutputLine | ProcessExit]:
        self._logger.info("%s%s", COMMAND_PREFIX, format_command(command))

        async for event in self._wrapped.execute_streaming(command, cwd):
            if isinstance(event, OutputLine):
                level = logging.INFO if event.stream == "stdout" else logging.ERROR
                self._logger.log(level, "%s%s", OUTPUT_INDENT, event.text)
            yield event
