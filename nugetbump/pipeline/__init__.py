"""Upgrade pipeline: data contracts, console UI and the manifest loop.

The runner is imported from nugetbump.pipeline.runner directly; it is not
re-exported here to keep package_managers -> structures imports acyclic.
"""

from .structures import (
    ManifestResult,
    ManifestStatus,
    OutdatedReport,
    PackageResult,
    PackageVersionMap,
    QueryMode,
    RunSummary,
    UpdateOutcome,
)

__all__ = [
    "ManifestResult",
    "ManifestStatus",
    "OutdatedReport",
    "PackageResult",
    "PackageVersionMap",
    "QueryMode",
    "RunSummary",
    "UpdateOutcome",
]
