"""Process execution data models."""

from dataclasses import dataclass
from typing import Literal

StreamName = Literal["stdout", "stderr"]


@dataclass(frozen=True)
class OutputLine:
    """A single line emitted by a running command.

    Lines are yielded as they arrive, without the trailing newline.
    """

    stream: StreamName
    text: str


@dataclass(frozen=True)
class ProcessExit:
    """Terminal event of a streamed command."""

    exit_code: int


@dataclass(frozen=True)
class ProcessResult:
    """Collected outcome of a finished command."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.exit_code == 0
