"""Public operations over the package cache.

Composes:
- RegistryResolver: lazily fills in the package index URL and persists it
- Installer: pip into a cache slot
- Importer: check, install, load and retry
- CacheAdmin: list and remove slots
"""

from types import ModuleType

from ondemand.context import OnDemandContext
from ondemand.integrations.config_store.abc import OnDemandConfig
from ondemand.models.package import CacheEntry, PackageSpec, RetryPolicy
from ondemand.services.cache_admin import CacheAdmin
from ondemand.services.importer import Importer
from ondemand.services.installer import Installer
from ondemand.services.registry_resolver import RegistryResolver
from ondemand.services.slot_lock import SlotLocks


class PackageService:
    """Entry point used by the host application and the CLI.

    Every operation returns a value or raises an OnDemandError subclass;
    rendering messages is left to the caller.
    """

    def __init__(self, ctx: OnDemandContext) -> None:
        """Create PackageService with context.

        Args:
            ctx: Context with injected dependencies
        """
        self._ctx = ctx
        package_path = ctx.config.package_path

        self._resolver = RegistryResolver(
            ctx.config,
            ctx.registry_discovery,
            on_update=ctx.config_store.save,
        )
        self._locks = SlotLocks(package_path)
        self._installer = Installer(
            package_path,
            ctx.executor,
            self._resolver.resolve,
            python=ctx.python,
        )
        self._importer = Importer(package_path, self._installer, ctx.module_loader, self._locks)
        self._admin = CacheAdmin(package_path)

    @property
    def config(self) -> OnDemandConfig:
        """Current configuration, including a lazily resolved index URL."""
        return self._resolver.config

    @property
    def admin(self) -> CacheAdmin:
        return self._admin

    async def resolve_registry(self) -> str:
        return await self._resolver.resolve()

    async def list_packages(self) -> list[CacheEntry]:
        return await self._admin.list_packages()

    async def install(self, spec: PackageSpec) -> None:
        """Install (or reinstall) spec into its slot."""
        async with self._locks.hold(spec.identifier):
            await self._installer.install(spec)

    async def remove(self, identifier: str) -> bool:
        return await self._admin.remove(identifier)

    async def safe_import(self, spec: PackageSpec, policy: RetryPolicy | None = None) -> ModuleType:
        return await self._importer.safe_import(spec, policy)
