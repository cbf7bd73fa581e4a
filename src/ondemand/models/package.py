"""Package, retry and cache listing data models."""

from dataclasses import dataclass
from pathlib import Path

LATEST_VERSION = "latest"


@dataclass(frozen=True)
class PackageSpec:
    """A package to acquire.

    The identifier is the registry-facing distribution name. It is treated as
    opaque apart from slot-name encoding, and may carry a scope prefix
    (``scope/name``).
    """

    identifier: str
    version: str | None = None

    @property
    def requested_version(self) -> str:
        """Version string used for logging and the slot manifest."""
        return self.version or LATEST_VERSION

    @property
    def requirement(self) -> str:
        """Requirement string handed to pip.

        An absent version (or the literal "latest") installs the newest
        release the index offers.
        """
        if self.version is None or self.version == LATEST_VERSION:
            return self.identifier
        return f"{self.identifier}=={self.version}"


@dataclass(frozen=True)
class RetryPolicy:
    """Per-call load retry policy for safe_import."""

    max_retries: int = 3
    force_install: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")


@dataclass(frozen=True)
class CacheEntry:
    """One cache slot as reported by CacheAdmin.list_packages().

    Attributes:
        identifier: Distribution name from the installed metadata, or the
            identifier decoded from the slot directory name when unreadable
        version: Version reported by the installed distribution, None when
            the installed metadata could not be read
        slot_path: Absolute path of the slot directory
        problem: Description of the inconsistency when version is None
    """

    identifier: str
    version: str | None
    slot_path: Path
    problem: str | None = None
