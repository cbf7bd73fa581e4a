"""Abstract interface for package index discovery."""

from abc import ABC, abstractmethod


class RegistryDiscovery(ABC):
    """Capability for finding the package index the host environment uses."""

    @abstractmethod
    async def discover(self) -> str:
        """Return the package index URL configured for the host environment.

        Raises:
            ResolutionError: If the environment could not be queried
        """
        ...
