"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from ondemand.context import OnDemandContext
from ondemand.integrations.config_store.fake import InMemoryConfigStore
from ondemand.integrations.executor.fake import FakeExecutor
from ondemand.integrations.module_loader.fake import FakeModuleLoader
from ondemand.integrations.registry_discovery.fake import FakeRegistryDiscovery
from ondemand.services.package_service import PackageService
from tests.test_utils.site_builders import simulate_pip_install


@pytest.fixture
def package_path(tmp_path: Path) -> Path:
    """Cache root inside the test's temporary directory."""
    return tmp_path / "cache"


@pytest.fixture
def fake_executor() -> FakeExecutor:
    """FakeExecutor that writes an installed distribution like pip would."""
    return FakeExecutor(on_execute=simulate_pip_install())


@pytest.fixture
def fake_discovery() -> FakeRegistryDiscovery:
    return FakeRegistryDiscovery(url="https://index.example/simple")


@pytest.fixture
def fake_loader() -> FakeModuleLoader:
    return FakeModuleLoader()


@pytest.fixture
def config_store() -> InMemoryConfigStore:
    return InMemoryConfigStore()


@pytest.fixture
def ctx(
    package_path: Path,
    fake_executor: FakeExecutor,
    fake_discovery: FakeRegistryDiscovery,
    fake_loader: FakeModuleLoader,
    config_store: InMemoryConfigStore,
) -> OnDemandContext:
    """Context with fakes and an unresolved registry."""
    return OnDemandContext.for_test(
        package_path=package_path,
        executor=fake_executor,
        registry_discovery=fake_discovery,
        module_loader=fake_loader,
        config_store=config_store,
    )


@pytest.fixture
def service(ctx: OnDemandContext) -> PackageService:
    return PackageService(ctx)
