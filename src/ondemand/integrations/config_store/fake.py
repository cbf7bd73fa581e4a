"""In-memory configuration store for testing."""

from pathlib import Path

from ondemand.integrations.config_store.abc import ConfigStore, OnDemandConfig


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(
        self,
        config: OnDemandConfig | None = None,
        *,
        save_failure: str | None = None,
    ) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = config doesn't exist)
            save_failure: If set, save() raises PermissionError with this message
        """
        self._config = config
        self._save_failure = save_failure
        self._save_count = 0

    @property
    def save_count(self) -> int:
        """Number of successful save() calls, for test assertions."""
        return self._save_count

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> OnDemandConfig:
        if self._config is None:
            return OnDemandConfig.default()
        return self._config

    def save(self, config: OnDemandConfig) -> None:
        if self._save_failure is not None:
            raise PermissionError(self._save_failure)
        self._config = config
        self._save_count += 1

    def path(self) -> Path:
        return Path("/fake/ondemand/config.toml")
