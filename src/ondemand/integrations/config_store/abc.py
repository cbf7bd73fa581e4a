"""Configuration data structure and abstract store."""

import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


def default_package_path() -> Path:
    """Default cache root: a subfolder of the system temp directory."""
    return Path(tempfile.gettempdir()) / "ondemand"


@dataclass(frozen=True)
class OnDemandConfig:
    """Immutable configuration consumed by the acquisition core.

    Attributes:
        package_path: Root directory holding every cache slot
        registry: Package index URL, "" means resolve lazily on first install
    """

    package_path: Path
    registry: str = ""

    @staticmethod
    def default() -> "OnDemandConfig":
        return OnDemandConfig(package_path=default_package_path(), registry="")


class ConfigStore(ABC):
    """Abstract interface for configuration persistence.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a persisted config exists."""
        ...

    @abstractmethod
    def load(self) -> OnDemandConfig:
        """Load config, falling back to defaults for absent keys.

        Returns:
            OnDemandConfig with loaded values

        Raises:
            ValueError: If the stored config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: OnDemandConfig) -> None:
        """Persist config.

        Args:
            config: OnDemandConfig instance to save
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the location of the persisted config (for messages)."""
        ...
