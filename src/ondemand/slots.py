"""Cache slot layout.

A slot is the directory dedicated to one identifier:

    <package_path>/<encoded>/ondemand-slot.json
    <package_path>/<encoded>/site-packages/...
    <package_path>/<encoded>.lock

The slot manifest only marks that an install was attempted. Whether the slot
holds a usable package is decided by the installed distribution metadata and,
ultimately, by a successful import.
"""

import importlib.metadata
from pathlib import Path

from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version

from ondemand.naming import encode_identifier

SLOT_MANIFEST_NAME = "ondemand-slot.json"
SITE_DIR_NAME = "site-packages"
LOCK_SUFFIX = ".lock"


def slot_path(package_path: Path, identifier: str) -> Path:
    return package_path / encode_identifier(identifier)


def manifest_path(slot: Path) -> Path:
    return slot / SLOT_MANIFEST_NAME


def site_dir(slot: Path) -> Path:
    return slot / SITE_DIR_NAME


def lock_path(package_path: Path, identifier: str) -> Path:
    return package_path / f"{encode_identifier(identifier)}{LOCK_SUFFIX}"


def read_metadata_field(dist: importlib.metadata.Distribution, field: str) -> str | None:
    """Read one core metadata field, None when METADATA is missing or unreadable."""
    # A dist-info without METADATA makes .metadata raise on some interpreters
    # and return None on others.
    try:
        metadata = dist.metadata
    except (OSError, TypeError, ValueError):
        return None
    if metadata is None:
        return None
    value = metadata.get(field)
    return str(value) if value else None


def _version_key(dist: importlib.metadata.Distribution) -> tuple[int, Version]:
    raw = read_metadata_field(dist, "Version")
    if raw is None:
        return (0, Version("0"))
    try:
        return (1, Version(raw))
    except InvalidVersion:
        return (0, Version("0"))


def find_distribution(site: Path, identifier: str) -> importlib.metadata.Distribution | None:
    """Find the installed distribution for identifier inside one site directory.

    Matching uses PEP 503 normalized names, so "Foo_Bar" finds "foo-bar".
    Only `site` is searched, never the host interpreter's sys.path. When a
    site holds metadata for several versions the newest wins, independent of
    directory listing order.

    Returns:
        The Distribution, or None if the site directory holds no metadata for it
    """
    if not site.is_dir():
        return None
    wanted = canonicalize_name(identifier)
    matches: list[importlib.metadata.Distribution] = []
    for dist in importlib.metadata.distributions(path=[str(site)]):
        name = read_metadata_field(dist, "Name")
        if name and canonicalize_name(name) == wanted:
            matches.append(dist)
    if not matches:
        return None
    return max(matches, key=_version_key)
