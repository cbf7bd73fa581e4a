"""The retrying acquire-and-load loop."""

import asyncio
import logging
from pathlib import Path
from types import ModuleType

from ondemand.errors import LoadError
from ondemand.integrations.module_loader.abc import ModuleLoader
from ondemand.models.package import PackageSpec, RetryPolicy
from ondemand.services.installer import Installer
from ondemand.services.slot_lock import SlotLocks
from ondemand.slots import find_distribution, site_dir, slot_path

logger = logging.getLogger(__name__)


class Importer:
    """Returns a loaded package, installing or reinstalling it as needed.

    Each attempt runs check-cache, install on a miss, then load, while holding
    the identifier's slot lock. A load failure consumes one retry and forces a
    clean reinstall on the next attempt; install failures are raised at once
    and never consume the retry budget.
    """

    def __init__(
        self,
        package_path: Path,
        installer: Installer,
        loader: ModuleLoader,
        locks: SlotLocks,
    ) -> None:
        self._package_path = package_path
        self._installer = installer
        self._loader = loader
        self._locks = locks

    async def safe_import(self, spec: PackageSpec, policy: RetryPolicy | None = None) -> ModuleType:
        """Load spec, self-healing a corrupted cache within the retry budget.

        Args:
            spec: Package to load; only the identifier selects the slot, the
                version is used when an install is needed
            policy: Retry budget and forced-reinstall flag, defaults to
                RetryPolicy() (3 retries, no forced install)

        Returns:
            The imported top-level module

        Raises:
            InstallError: If an install attempt fails (not retried)
            ResolutionError: If the package index cannot be discovered
            FilesystemError: If the slot cannot be written
            LoadError: The last load failure, once the budget is exhausted
        """
        policy = policy or RetryPolicy()
        remaining = policy.max_retries
        force_install = policy.force_install

        while True:
            try:
                return await self._attempt(spec, force_install=force_install)
            except LoadError as e:
                if remaining == 0:
                    logger.error(
                        "Giving up on package '%s' after %d retries: %s",
                        spec.identifier,
                        policy.max_retries,
                        e.reason,
                    )
                    raise
                remaining -= 1
                force_install = True
                logger.warning(
                    "Failed to load package '%s': %s. Reinstalling (%d retries left).",
                    spec.identifier,
                    e.reason,
                    remaining,
                )

    async def _attempt(self, spec: PackageSpec, *, force_install: bool) -> ModuleType:
        site = site_dir(slot_path(self._package_path, spec.identifier))

        async with self._locks.hold(spec.identifier):
            cached = False
            if not force_install:
                dist = await asyncio.to_thread(find_distribution, site, spec.identifier)
                cached = dist is not None

            if cached:
                logger.info("Hit cached package '%s'.", spec.identifier)
            else:
                if force_install:
                    logger.info("Forcing reinstall of package '%s'.", spec.identifier)
                else:
                    logger.info("Package '%s' is not cached.", spec.identifier)
                await self._installer.install(spec)

            # A module imported before this install would shadow the new files
            return await asyncio.to_thread(
                self._loader.load, site, spec.identifier, fresh=not cached
            )
