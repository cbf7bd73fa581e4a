"""In-memory fake implementation of Executor for testing."""

import asyncio
from collections.abc import AsyncIterator, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from ondemand.errors import SpawnError
from ondemand.integrations.executor.abc import Executor, format_command
from ondemand.models.process import OutputLine, ProcessExit, ProcessResult


@dataclass(frozen=True)
class ExecuteCall:
    """A recorded command invocation."""

    command: tuple[str, ...]
    cwd: Path | None


class FakeExecutor(Executor):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(
        self,
        *,
        results: dict[str, ProcessResult] | None = None,
        default_result: ProcessResult | None = None,
        on_execute: Callable[[tuple[str, ...], Path | None], None] | None = None,
        spawn_failure: str | None = None,
        delay_seconds: float = 0.0,
    ) -> None:
        """Create FakeExecutor with pre-configured results.

        Args:
            results: Mapping of program argument (e.g. "pip" for a
                "python -m pip" call, otherwise command[0]) to the result to report
            default_result: Result for commands not in results (exit 0, no output)
            on_execute: Side effect run before output is produced, used to
                simulate what the command does on disk
            spawn_failure: If set, every call raises SpawnError with this reason
            delay_seconds: Time to suspend before producing output, used to
                interleave concurrent callers
        """
        self._results = results or {}
        self._default_result = default_result or ProcessResult(exit_code=0, stdout="", stderr="")
        self._on_execute = on_execute
        self._spawn_failure = spawn_failure
        self._delay_seconds = delay_seconds
        self._calls: list[ExecuteCall] = []

    @property
    def calls(self) -> list[ExecuteCall]:
        """Read-only access to executed commands for test assertions."""
        return self._calls.copy()

    def _result_for(self, command: tuple[str, ...]) -> ProcessResult:
        if len(command) >= 3 and command[1] == "-m":
            key = command[2]
        else:
            key = command[0]
        return self._results.get(key, self._default_result)

    async def execute_streaming(
        self,
        command: Sequence[str],
        cwd: Path | None = None,
    ) -> AsyncIterator[OutputLine | ProcessExit]:
        recorded = tuple(str(arg) for arg in command)
        self._calls.append(ExecuteCall(command=recorded, cwd=cwd))

        if self._spawn_failure is not None:
            raise SpawnError(format_command(recorded), self._spawn_failure)

        if self._delay_seconds > 0:
            await asyncio.sleep(self._delay_seconds)

        if self._on_execute is not None:
            self._on_execute(recorded, cwd)

        result = self._result_for(recorded)
        for line in result.stdout.splitlines():
            yield OutputLine(stream="stdout", text=line)
        for line in result.stderr.splitlines():
            yield OutputLine(stream="stderr", text=line)
        yield ProcessExit(exit_code=result.exit_code)
