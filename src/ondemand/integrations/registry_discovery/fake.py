"""In-memory fake implementation of RegistryDiscovery for testing."""

from ondemand.errors import ResolutionError
from ondemand.integrations.registry_discovery.abc import RegistryDiscovery


class FakeRegistryDiscovery(RegistryDiscovery):
    """Fake discovery returning a fixed URL and counting queries.

    This class has NO public setup methods.
    """

    def __init__(
        self,
        *,
        url: str = "https://index.example/simple",
        failure: str | None = None,
    ) -> None:
        """Create FakeRegistryDiscovery.

        Args:
            url: URL returned by discover()
            failure: If set, discover() raises ResolutionError with this reason
        """
        self._url = url
        self._failure = failure
        self._discover_count = 0

    @property
    def discover_count(self) -> int:
        """Number of discover() calls, for test assertions."""
        return self._discover_count

    async def discover(self) -> str:
        self._discover_count += 1
        if self._failure is not None:
            raise ResolutionError(self._failure)
        return self._url
