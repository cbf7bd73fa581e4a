"""Abstract interface for loading an installed package."""

from abc import ABC, abstractmethod
from pathlib import Path
from types import ModuleType


class ModuleLoader(ABC):
    """Capability for turning an installed cache slot into a module.

    The loader only imports the package found in the given site directory.
    It never evaluates caller-supplied code.
    """

    @abstractmethod
    def load(self, site: Path, identifier: str, *, fresh: bool = False) -> ModuleType:
        """Import the package installed for identifier under site.

        Args:
            site: The slot's site-packages directory
            identifier: Distribution name of the installed package
            fresh: Discard a module already imported from site and import it
                again, used right after the slot was (re)installed

        Returns:
            The imported top-level module

        Raises:
            LoadError: If the package is missing, incomplete or fails to import
        """
        ...
