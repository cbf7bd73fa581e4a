"""In-memory fake implementation of ModuleLoader for testing."""

from pathlib import Path
from types import ModuleType

from ondemand.errors import LoadError
from ondemand.integrations.module_loader.abc import ModuleLoader


class FakeModuleLoader(ModuleLoader):
    """Fake loader that fails a configured number of times, then succeeds.

    Successful loads return the same module object per identifier unless
    fresh=True is passed, like a real import cache.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(
        self,
        *,
        failures: int = 0,
        always_fail: bool = False,
        failure_reason: str = "Simulated corrupted package",
    ) -> None:
        """Create FakeModuleLoader.

        Args:
            failures: Number of load() calls that fail before loads succeed
            always_fail: If True, every load() fails
            failure_reason: Reason carried by the raised LoadError
        """
        self._remaining_failures = failures
        self._always_fail = always_fail
        self._failure_reason = failure_reason
        self._load_calls: list[tuple[Path, str, bool]] = []
        self._modules: dict[str, ModuleType] = {}

    @property
    def load_calls(self) -> list[tuple[Path, str, bool]]:
        """Read-only access to (site, identifier, fresh) passed to load()."""
        return self._load_calls.copy()

    def load(self, site: Path, identifier: str, *, fresh: bool = False) -> ModuleType:
        self._load_calls.append((site, identifier, fresh))

        if self._always_fail:
            raise LoadError(identifier, self._failure_reason)
        if self._remaining_failures > 0:
            self._remaining_failures -= 1
            raise LoadError(identifier, self._failure_reason)

        if not fresh and identifier in self._modules:
            return self._modules[identifier]

        module = ModuleType(identifier.replace("-", "_"))
        module.__file__ = str(site / identifier / "__init__.py")
        self._modules[identifier] = module
        return module
