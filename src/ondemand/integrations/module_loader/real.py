"""Real module loader using importlib."""

import importlib
import importlib.metadata
import sys
from pathlib import Path, PurePosixPath
from types import ModuleType

from packaging.utils import canonicalize_name

from ondemand.errors import LoadError
from ondemand.integrations.module_loader.abc import ModuleLoader
from ondemand.slots import find_distribution


def _record_top_level_names(dist: importlib.metadata.Distribution) -> list[str]:
    names: list[str] = []
    for file in dist.files or []:
        parts = PurePosixPath(str(file)).parts
        if not parts or parts[0] in ("..", "__pycache__"):
            continue
        head = parts[0]
        if len(parts) == 1:
            if head.endswith(".py"):
                candidate = head[: -len(".py")]
            else:
                continue
        elif head.endswith((".dist-info", ".data", ".egg-info")):
            continue
        else:
            candidate = head
        if candidate.isidentifier() and candidate not in names:
            names.append(candidate)
    return names


def import_name_for(dist: importlib.metadata.Distribution, identifier: str) -> str:
    """Choose the top-level module name a distribution provides.

    Order: top_level.txt, then the top-level entries listed in RECORD (the one
    matching the distribution name wins), then the normalized distribution name.
    """
    normalized = canonicalize_name(identifier).replace("-", "_")

    top_level = dist.read_text("top_level.txt")
    if top_level:
        declared = [line.strip() for line in top_level.splitlines() if line.strip()]
        if normalized in declared:
            return normalized
        if declared:
            return declared[0]

    recorded = _record_top_level_names(dist)
    if normalized in recorded:
        return normalized
    if recorded:
        return recorded[0]

    return normalized


def _is_inside(module: ModuleType, site: Path) -> bool:
    locations: list[str] = []
    module_file = getattr(module, "__file__", None)
    if module_file:
        locations.append(module_file)
    locations.extend(getattr(module, "__path__", []) or [])
    resolved_site = site.resolve()
    return any(Path(location).resolve().is_relative_to(resolved_site) for location in locations)


class RealModuleLoader(ModuleLoader):
    """Production implementation importing from the slot's site directory.

    Implementation details:
    - The site directory is put first on sys.path so the cached copy shadows
      any copy installed in the host environment
    - A module already imported from the same site directory is returned as
      is, so repeated loads keep module identity. With fresh=True, or when
      the cached entry came from elsewhere, the package and its submodules are
      dropped from sys.modules and imported again
    - A module that resolves outside the site directory counts as a failure,
      since it means the cached copy is missing
    """

    def load(self, site: Path, identifier: str, *, fresh: bool = False) -> ModuleType:
        dist = find_distribution(site, identifier)
        if dist is None:
            raise LoadError(identifier, f"no installed distribution metadata in {site}")

        name = import_name_for(dist, identifier)

        site_str = str(site)
        if site_str in sys.path:
            sys.path.remove(site_str)
        sys.path.insert(0, site_str)

        existing = sys.modules.get(name)
        if not fresh and existing is not None and _is_inside(existing, site):
            return existing

        for loaded in [m for m in sys.modules if m == name or m.startswith(f"{name}.")]:
            del sys.modules[loaded]
        importlib.invalidate_caches()

        # Arbitrary package code runs here, so any exception means a broken install
        try:
            module = importlib.import_module(name)
        except Exception as e:
            raise LoadError(identifier, f"import of '{name}' failed: {e!r}") from e

        if not _is_inside(module, site):
            raise LoadError(identifier, f"module '{name}' did not resolve inside {site}")

        return module
