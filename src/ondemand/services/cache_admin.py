"""Listing and removal of cache slots."""

import asyncio
import logging
import shutil
from pathlib import Path

from ondemand.errors import FilesystemError
from ondemand.models.package import CacheEntry
from ondemand.naming import decode_slot_name
from ondemand.slots import find_distribution, read_metadata_field, site_dir, slot_path

logger = logging.getLogger(__name__)


def _describe_slot(slot: Path) -> CacheEntry:
    identifier = decode_slot_name(slot.name)
    dist = find_distribution(site_dir(slot), identifier)
    if dist is None:
        return CacheEntry(
            identifier=identifier,
            version=None,
            slot_path=slot,
            problem="no installed distribution metadata",
        )

    # The installed metadata is authoritative, the slot name is only a cache key
    name = read_metadata_field(dist, "Name")
    version = read_metadata_field(dist, "Version")
    if name is None or version is None:
        return CacheEntry(
            identifier=identifier,
            version=None,
            slot_path=slot,
            problem="installed metadata is missing Name or Version",
        )
    return CacheEntry(identifier=name, version=version, slot_path=slot)


def _scan(package_path: Path) -> list[CacheEntry]:
    if not package_path.is_dir():
        return []
    try:
        slots = sorted(child for child in package_path.iterdir() if child.is_dir())
    except OSError as e:
        raise FilesystemError(package_path, "read directory", str(e)) from e

    entries = [_describe_slot(slot) for slot in slots]
    for entry in entries:
        if entry.problem is not None:
            logger.warning(
                "Cache slot '%s' is inconsistent: %s", entry.slot_path, entry.problem
            )
    return entries


def _remove(slot: Path) -> bool:
    if not slot.exists():
        return False
    try:
        shutil.rmtree(slot)
    except OSError as e:
        raise FilesystemError(slot, "remove directory", str(e)) from e
    return True


class CacheAdmin:
    """List and remove operations over the cache root.

    Removing a slot does not coordinate with in-flight imports of the same
    identifier.
    """

    def __init__(self, package_path: Path) -> None:
        self._package_path = package_path

    @property
    def package_path(self) -> Path:
        return self._package_path

    def exists(self) -> bool:
        return self._package_path.is_dir()

    async def list_packages(self) -> list[CacheEntry]:
        """Report every slot directory with the version actually installed.

        Slots whose installed metadata cannot be read are included with
        version None and a problem description. A missing cache root yields
        an empty list.

        Raises:
            FilesystemError: If the cache root cannot be read
        """
        return await asyncio.to_thread(_scan, self._package_path)

    async def remove(self, identifier: str) -> bool:
        """Delete the slot of identifier recursively.

        Returns:
            True if a slot was removed, False if none existed

        Raises:
            FilesystemError: If the slot cannot be deleted
        """
        slot = slot_path(self._package_path, identifier)
        removed = await asyncio.to_thread(_remove, slot)
        if removed:
            logger.info("Removed cache slot '%s'.", slot)
        return removed
