"""Exception hierarchy for package acquisition.

Install failures and load failures are kept distinct: only LoadError is
remediated by the importer's forced-reinstall loop.
"""

from pathlib import Path


class OnDemandError(Exception):
    """Base class for all ondemand failures."""


class SpawnError(OnDemandError):
    """Raised when an external command could not be started."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Could not start '{command}': {reason}")


class ProcessError(OnDemandError):
    """Raised when an external command exits with a nonzero status."""

    def __init__(self, command: str, exit_code: int, stderr_tail: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr_tail = stderr_tail
        message = f"Command '{command}' failed with exit code {exit_code}"
        if stderr_tail:
            message += f"\n{stderr_tail}"
        super().__init__(message)


class InstallError(OnDemandError):
    """Raised when installing a package into its cache slot fails.

    Always chained from the SpawnError or ProcessError that caused it.
    """

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Failed to install '{identifier}': {reason}")


class LoadError(OnDemandError):
    """Raised when an installed package cannot be imported."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Failed to load '{identifier}': {reason}")


class FilesystemError(OnDemandError):
    """Raised when creating, reading or removing cache files fails."""

    def __init__(self, path: Path, operation: str, reason: str) -> None:
        self.path = path
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation} '{path}': {reason}")


class ResolutionError(OnDemandError):
    """Raised when the package index URL cannot be discovered."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to discover package index: {reason}")
