"""Integration tests for RealModuleLoader importing from slot site directories."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from ondemand.errors import LoadError
from ondemand.integrations.module_loader.real import RealModuleLoader, import_name_for
from ondemand.slots import find_distribution
from tests.test_utils.site_builders import module_name, write_distribution


@pytest.fixture
def site(tmp_path: Path) -> Iterator[Path]:
    """Site directory removed from sys.path and sys.modules after the test."""
    site = tmp_path / "site-packages"
    before = set(sys.modules)
    yield site
    while str(site) in sys.path:
        sys.path.remove(str(site))
    for name in set(sys.modules) - before:
        module = sys.modules[name]
        if str(site) in str(getattr(module, "__file__", "") or ""):
            del sys.modules[name]


def test_loads_package_from_site(site: Path) -> None:
    write_distribution(site, "ondemand-fixture-alpha", "2.1.0")

    module = RealModuleLoader().load(site, "ondemand-fixture-alpha")

    assert module.__name__ == module_name("ondemand-fixture-alpha")
    assert module.__version__ == "2.1.0"
    assert sys.path[0] == str(site)


def test_repeated_load_returns_same_module(site: Path) -> None:
    write_distribution(site, "ondemand-fixture-eta", "1.0.0", source="TOKEN = object()\n")
    loader = RealModuleLoader()

    first = loader.load(site, "ondemand-fixture-eta")
    second = loader.load(site, "ondemand-fixture-eta")

    assert second is first


def test_fresh_load_picks_up_reinstalled_code(site: Path) -> None:
    write_distribution(site, "ondemand-fixture-beta", "1.0.0", source="VALUE = 1\n")
    loader = RealModuleLoader()
    first = loader.load(site, "ondemand-fixture-beta")
    assert first.VALUE == 1

    write_distribution(site, "ondemand-fixture-beta", "1.0.0", source="VALUE = 22\n")

    assert loader.load(site, "ondemand-fixture-beta").VALUE == 1
    reloaded = loader.load(site, "ondemand-fixture-beta", fresh=True)
    assert reloaded.VALUE == 22
    assert reloaded is not first


def test_import_error_becomes_load_error(site: Path) -> None:
    write_distribution(
        site, "ondemand-fixture-gamma", "1.0.0", source="raise RuntimeError('corrupted')\n"
    )

    with pytest.raises(LoadError, match="corrupted") as exc_info:
        RealModuleLoader().load(site, "ondemand-fixture-gamma")

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_missing_metadata_is_load_error(site: Path) -> None:
    site.mkdir(parents=True)

    with pytest.raises(LoadError, match="no installed distribution metadata"):
        RealModuleLoader().load(site, "ondemand-fixture-delta")


def test_module_resolving_outside_site_is_load_error(site: Path) -> None:
    # Metadata without files: the name only resolves to the stdlib module
    write_distribution(site, "colorsys", "1.0.0", write_package=False)

    with pytest.raises(LoadError, match="did not resolve inside"):
        RealModuleLoader().load(site, "colorsys")


def test_import_name_prefers_top_level_txt(site: Path) -> None:
    write_distribution(site, "ondemand-fixture-epsilon", "1.0.0", import_name="fixture_eps")
    dist = find_distribution(site, "ondemand-fixture-epsilon")
    assert dist is not None

    assert import_name_for(dist, "ondemand-fixture-epsilon") == "fixture_eps"


def test_import_name_falls_back_to_record(site: Path) -> None:
    dist_info = write_distribution(
        site, "ondemand-fixture-zeta", "1.0.0", import_name="zeta_impl"
    )
    (dist_info / "top_level.txt").unlink()
    dist = find_distribution(site, "ondemand-fixture-zeta")
    assert dist is not None

    assert import_name_for(dist, "ondemand-fixture-zeta") == "zeta_impl"
