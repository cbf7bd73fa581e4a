"""Tests for the retrying import loop."""

import asyncio
import logging
from pathlib import Path

import pytest

from ondemand.context import OnDemandContext
from ondemand.errors import InstallError, LoadError
from ondemand.integrations.executor.fake import FakeExecutor
from ondemand.integrations.module_loader.fake import FakeModuleLoader
from ondemand.models.package import PackageSpec, RetryPolicy
from ondemand.models.process import ProcessResult
from ondemand.services.package_service import PackageService
from ondemand.slots import site_dir, slot_path
from tests.test_utils.site_builders import simulate_pip_install, write_distribution


def install_calls(executor: FakeExecutor) -> int:
    return sum(1 for call in executor.calls if "install" in call.command)


def make_service(
    package_path: Path,
    executor: FakeExecutor,
    loader: FakeModuleLoader,
) -> PackageService:
    return PackageService(
        OnDemandContext.for_test(
            package_path=package_path,
            registry="https://index.example/simple",
            executor=executor,
            module_loader=loader,
        )
    )


async def test_cache_hit_spawns_no_process(package_path: Path) -> None:
    write_distribution(site_dir(slot_path(package_path, "left-pad")), "left-pad", "1.3.0")
    executor = FakeExecutor(on_execute=simulate_pip_install())
    loader = FakeModuleLoader()

    module = await make_service(package_path, executor, loader).safe_import(
        PackageSpec("left-pad", "1.3.0")
    )

    assert module.__name__ == "left_pad"
    assert executor.calls == []
    assert len(loader.load_calls) == 1


async def test_cache_hit_ignores_requested_version(package_path: Path) -> None:
    write_distribution(site_dir(slot_path(package_path, "left-pad")), "left-pad", "1.0.0")
    executor = FakeExecutor(on_execute=simulate_pip_install())

    await make_service(package_path, executor, FakeModuleLoader()).safe_import(
        PackageSpec("left-pad", "2.0.0")
    )

    assert executor.calls == []


async def test_cache_miss_installs_then_loads(package_path: Path) -> None:
    executor = FakeExecutor(on_execute=simulate_pip_install())
    loader = FakeModuleLoader()

    await make_service(package_path, executor, loader).safe_import(PackageSpec("left-pad"))

    assert install_calls(executor) == 1
    assert loader.load_calls == [(site_dir(slot_path(package_path, "left-pad")), "left-pad", True)]


async def test_repeated_cache_hits_reuse_loaded_module(package_path: Path) -> None:
    write_distribution(site_dir(slot_path(package_path, "left-pad")), "left-pad", "1.3.0")
    loader = FakeModuleLoader()
    service = make_service(package_path, FakeExecutor(), loader)

    first = await service.safe_import(PackageSpec("left-pad"))
    second = await service.safe_import(PackageSpec("left-pad"))

    assert second is first
    assert [fresh for _, _, fresh in loader.load_calls] == [False, False]


async def test_reinstall_requests_fresh_import(package_path: Path) -> None:
    write_distribution(site_dir(slot_path(package_path, "left-pad")), "left-pad", "1.0.0")
    loader = FakeModuleLoader()
    service = make_service(package_path, FakeExecutor(on_execute=simulate_pip_install()), loader)

    before = await service.safe_import(PackageSpec("left-pad"))
    after = await service.safe_import(PackageSpec("left-pad"), RetryPolicy(force_install=True))

    assert after is not before
    assert [fresh for _, _, fresh in loader.load_calls] == [False, True]


async def test_force_install_reinstalls_cached_package(package_path: Path) -> None:
    write_distribution(site_dir(slot_path(package_path, "left-pad")), "left-pad", "1.0.0")
    executor = FakeExecutor(on_execute=simulate_pip_install())

    await make_service(package_path, executor, FakeModuleLoader()).safe_import(
        PackageSpec("left-pad", "1.3.0"), RetryPolicy(force_install=True)
    )

    assert install_calls(executor) == 1


async def test_persistent_load_failure_exhausts_retries(
    package_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    executor = FakeExecutor(on_execute=simulate_pip_install())
    loader = FakeModuleLoader(always_fail=True, failure_reason="broken wheel")
    service = make_service(package_path, executor, loader)

    with caplog.at_level(logging.WARNING, logger="ondemand.services.importer"):
        with pytest.raises(LoadError, match="broken wheel"):
            await service.safe_import(PackageSpec("left-pad"), RetryPolicy(max_retries=3))

    # One initial miss install, then a forced reinstall per retry
    assert len(loader.load_calls) == 4
    assert install_calls(executor) == 4
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(warnings) == 3
    assert len(errors) == 1


async def test_retries_force_reinstall_even_when_cached(package_path: Path) -> None:
    write_distribution(site_dir(slot_path(package_path, "left-pad")), "left-pad", "1.0.0")
    executor = FakeExecutor(on_execute=simulate_pip_install())
    loader = FakeModuleLoader(always_fail=True)

    with pytest.raises(LoadError):
        await make_service(package_path, executor, loader).safe_import(
            PackageSpec("left-pad"), RetryPolicy(max_retries=2)
        )

    assert len(loader.load_calls) == 3
    assert install_calls(executor) == 2


async def test_zero_retries_raises_first_load_error(package_path: Path) -> None:
    write_distribution(site_dir(slot_path(package_path, "left-pad")), "left-pad", "1.0.0")
    executor = FakeExecutor(on_execute=simulate_pip_install())
    loader = FakeModuleLoader(always_fail=True)

    with pytest.raises(LoadError):
        await make_service(package_path, executor, loader).safe_import(
            PackageSpec("left-pad"), RetryPolicy(max_retries=0)
        )

    assert len(loader.load_calls) == 1
    assert executor.calls == []


async def test_recovers_after_transient_load_failures(package_path: Path) -> None:
    executor = FakeExecutor(on_execute=simulate_pip_install())
    loader = FakeModuleLoader(failures=2)

    module = await make_service(package_path, executor, loader).safe_import(
        PackageSpec("left-pad")
    )

    assert module.__name__ == "left_pad"
    assert len(loader.load_calls) == 3
    assert install_calls(executor) == 3


async def test_install_failure_is_not_retried(package_path: Path) -> None:
    executor = FakeExecutor(
        default_result=ProcessResult(exit_code=1, stdout="", stderr="No matching distribution")
    )
    loader = FakeModuleLoader()

    with pytest.raises(InstallError):
        await make_service(package_path, executor, loader).safe_import(
            PackageSpec("does-not-exist"), RetryPolicy(max_retries=3)
        )

    assert install_calls(executor) == 1
    assert loader.load_calls == []


async def test_concurrent_imports_install_once(package_path: Path) -> None:
    executor = FakeExecutor(on_execute=simulate_pip_install(), delay_seconds=0.05)
    loader = FakeModuleLoader()
    service = make_service(package_path, executor, loader)

    modules = await asyncio.gather(
        *(service.safe_import(PackageSpec("left-pad")) for _ in range(3))
    )

    assert [m.__name__ for m in modules] == ["left_pad"] * 3
    assert install_calls(executor) == 1
    assert len(loader.load_calls) == 3


async def test_different_identifiers_use_separate_slots(package_path: Path) -> None:
    executor = FakeExecutor(on_execute=simulate_pip_install())
    service = make_service(package_path, executor, FakeModuleLoader())

    await asyncio.gather(
        service.safe_import(PackageSpec("left-pad")),
        service.safe_import(PackageSpec("is-odd")),
    )

    assert install_calls(executor) == 2
    assert slot_path(package_path, "left-pad").is_dir()
    assert slot_path(package_path, "is-odd").is_dir()
