"""Data models for ondemand."""

from ondemand.models.package import CacheEntry, PackageSpec, RetryPolicy
from ondemand.models.process import OutputLine, ProcessExit, ProcessResult

__all__ = [
    "CacheEntry",
    "OutputLine",
    "PackageSpec",
    "ProcessExit",
    "ProcessResult",
    "RetryPolicy",
]
