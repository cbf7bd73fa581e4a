"""Application context with dependency injection."""

import sys
from dataclasses import dataclass
from pathlib import Path

from ondemand.integrations.config_store.abc import ConfigStore, OnDemandConfig
from ondemand.integrations.config_store.fake import InMemoryConfigStore
from ondemand.integrations.config_store.real import RealConfigStore
from ondemand.integrations.executor.abc import Executor
from ondemand.integrations.executor.fake import FakeExecutor
from ondemand.integrations.executor.logged import LoggingExecutor
from ondemand.integrations.executor.real import RealExecutor
from ondemand.integrations.module_loader.abc import ModuleLoader
from ondemand.integrations.module_loader.fake import FakeModuleLoader
from ondemand.integrations.module_loader.real import RealModuleLoader
from ondemand.integrations.registry_discovery.abc import RegistryDiscovery
from ondemand.integrations.registry_discovery.fake import FakeRegistryDiscovery
from ondemand.integrations.registry_discovery.real import RealRegistryDiscovery


@dataclass(frozen=True)
class OnDemandContext:
    """Immutable context holding all dependencies for ondemand operations.

    Created at the entry point and threaded through the application. Use
    for_test() for testing scenarios.
    """

    executor: Executor
    registry_discovery: RegistryDiscovery
    module_loader: ModuleLoader
    config_store: ConfigStore
    config: OnDemandConfig
    python: str

    @classmethod
    def for_test(
        cls,
        *,
        package_path: Path,
        registry: str = "",
        executor: Executor | None = None,
        registry_discovery: RegistryDiscovery | None = None,
        module_loader: ModuleLoader | None = None,
        config_store: ConfigStore | None = None,
        python: str = "python",
    ) -> "OnDemandContext":
        """Create a test context with fake implementations.

        Args:
            package_path: Cache root, usually a pytest tmp_path
            registry: Configured index URL ("" leaves it to discovery)
            executor: Defaults to FakeExecutor()
            registry_discovery: Defaults to FakeRegistryDiscovery()
            module_loader: Defaults to FakeModuleLoader()
            config_store: Defaults to an InMemoryConfigStore seeded with the config
            python: Interpreter name recorded in install commands

        Returns:
            OnDemandContext with fake implementations
        """
        config = OnDemandConfig(package_path=package_path, registry=registry)
        return cls(
            executor=executor or FakeExecutor(),
            registry_discovery=registry_discovery or FakeRegistryDiscovery(),
            module_loader=module_loader or FakeModuleLoader(),
            config_store=config_store or InMemoryConfigStore(config),
            config=config,
            python=python,
        )


def create_context(config_path: Path | None = None) -> OnDemandContext:
    """Create production context with real implementations.

    Args:
        config_path: Explicit config file, defaults to RealConfigStore's lookup

    Returns:
        OnDemandContext whose executor logs every command and its output

    Raises:
        ValueError: If the config file is malformed
    """
    config_store = RealConfigStore(config_path)
    config = config_store.load()
    executor: Executor = LoggingExecutor(RealExecutor())

    return OnDemandContext(
        executor=executor,
        registry_discovery=RealRegistryDiscovery(executor),
        module_loader=RealModuleLoader(),
        config_store=config_store,
        config=config,
        python=sys.executable,
    )
