"""Data contracts for the upgrade pipeline."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from nugetbump.errors import ReportSchemaError
from nugetbump.utils.constants import NOT_FOUND_MARKER
from nugetbump.utils.process import ToolResult

PackageVersionMap = dict[str, str]


class QueryMode(Enum):
    """Which version dotnet should report as the upgrade target."""
    LATEST = "latest"
    HIGHEST_MINOR = "highestMinor"


class UpdateOutcome(Enum):
    """Result of trying to upgrade one package."""
    UPDATED_LATEST = "Updated-Latest"
    UPDATED_MINOR = "Updated-Minor"
    FAILED_NO_FALLBACK = "FailedNoFallback"
    FAILED_FALLBACK_REJECTED = "FailedFallbackRejected"

    @property
    def succeeded(self) -> bool:
        return self in (UpdateOutcome.UPDATED_LATEST, UpdateOutcome.UPDATED_MINOR)


class ManifestStatus(Enum):
    """Final state of one manifest after the run."""
    UPDATED = "updated"
    UP_TO_DATE = "up-to-date"
    NOTHING_UPDATED = "nothing-updated"
    CHECKED = "checked"
    SKIPPED = "skipped"
    ERROR = "error"


# ---------------------------------------------------------------------------
# dotnet list package --outdated --format json
# ---------------------------------------------------------------------------

def _require_list(data: dict, key: str, owner: str) -> list:
    value = data.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise ReportSchemaError(f"{owner}.{key} must be a list, got {type(value).__name__}")
    return value


def _require_dict(value: Any, owner: str) -> dict:
    if not isinstance(value, dict):
        raise ReportSchemaError(f"{owner} must be an object, got {type(value).__name__}")
    return value


def _optional_str(data: dict, key: str, owner: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ReportSchemaError(f"{owner}.{key} must be a string, got {type(value).__name__}")


@dataclass(frozen=True)
class TopLevelPackage:
    """A package referenced directly by the project."""
    id: str
    requested_version: str | None = None
    resolved_version: str | None = None
    latest_version: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "TopLevelPackage":
        data = _require_dict(data, "topLevelPackage")
        package_id = data.get("id")
        if not isinstance(package_id, str) or not package_id:
            raise ReportSchemaError("topLevelPackage.id must be a non-empty string")
        return cls(
            id=package_id,
            requested_version=_optional_str(data, "requestedVersion", package_id),
            resolved_version=_optional_str(data, "resolvedVersion", package_id),
            latest_version=_optional_str(data, "latestVersion", package_id),
        )

    @property
    def upgrade_target(self) -> str | None:
        """Version to move to, or None when dotnet reported nothing usable."""
        version = (self.latest_version or "").strip()
        if not version or version == NOT_FOUND_MARKER:
            return None
        return version


@dataclass(frozen=True)
class FrameworkEntry:
    framework: str
    top_level_packages: tuple[TopLevelPackage, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "FrameworkEntry":
        data = _require_dict(data, "framework")
        return cls(
            framework=_optional_str(data, "framework", "framework") or "",
            top_level_packages=tuple(
                TopLevelPackage.from_dict(p)
                for p in _require_list(data, "topLevelPackages", "framework")
            ),
        )


@dataclass(frozen=True)
class ProjectEntry:
    path: str
    frameworks: tuple[FrameworkEntry, ...] = ()
    problems: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "ProjectEntry":
        data = _require_dict(data, "project")
        problems = []
        for problem in _require_list(data, "problems", "project"):
            # {"level": "error", "text": "..."}; keep only the text
            if isinstance(problem, dict):
                problems.append(str(problem.get("text", problem)))
            else:
                problems.append(str(problem))
        return cls(
            path=_optional_str(data, "path", "project") or "",
            frameworks=tuple(
                FrameworkEntry.from_dict(f) for f in _require_list(data, "frameworks", "project")
            ),
            problems=tuple(problems),
        )


@dataclass(frozen=True)
class OutdatedReport:
    """Typed view of the dotnet outdated-package JSON report."""
    projects: tuple[ProjectEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "OutdatedReport":
        data = _require_dict(data, "report")
        if "projects" not in data:
            raise ReportSchemaError("report has no 'projects' key")
        return cls(
            projects=tuple(
                ProjectEntry.from_dict(p) for p in _require_list(data, "projects", "report")
            )
        )

    def to_version_map(self) -> PackageVersionMap:
        """Flatten to package id -> upgrade target, dropping packages without one."""
        versions: PackageVersionMap = {}
        for project in self.projects:
            for framework in project.frameworks:
                for package in framework.top_level_packages:
                    target = package.upgrade_target
                    if target is not None:
                        versions[package.id] = target
        return versions


# ---------------------------------------------------------------------------
# Run results
# ---------------------------------------------------------------------------

@dataclass
class PackageResult:
    """What happened to one outdated package.

    Provides strongly-typed return value instead of loose counters.
    """
    package: str
    latest_version: str
    outcome: UpdateOutcome
    fallback_version: str | None = None
    failure: ToolResult | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome.succeeded

    @property
    def applied_version(self) -> str | None:
        """Version now referenced by the manifest, if the update went through."""
        if self.outcome is UpdateOutcome.UPDATED_LATEST:
            return self.latest_version
        if self.outcome is UpdateOutcome.UPDATED_MINOR:
            return self.fallback_version
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "package": self.package,
            "latest_version": self.latest_version,
            "fallback_version": self.fallback_version,
            "outcome": self.outcome.value,
            "applied_version": self.applied_version,
            "failure": self.failure.describe_failure() if self.failure else None,
        }


@dataclass
class ManifestResult:
    """Per-manifest summary: updated packages versus outdated packages found."""
    path: Path
    status: ManifestStatus
    target_framework: str | None = None
    outdated_count: int = 0
    packages: list[PackageResult] = field(default_factory=list)
    message: str = ""

    @property
    def updated_count(self) -> int:
        return sum(1 for p in self.packages if p.succeeded)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "status": self.status.value,
            "target_framework": self.target_framework,
            "outdated_count": self.outdated_count,
            "updated_count": self.updated_count,
            "packages": [p.to_dict() for p in self.packages],
            "message": self.message,
        }


@dataclass
class RunSummary:
    """Everything one invocation did. Exists only for the duration of the run."""
    root: Path
    manifests: list[ManifestResult] = field(default_factory=list)

    @property
    def manifests_processed(self) -> int:
        return sum(
            1 for m in self.manifests
            if m.status not in (ManifestStatus.SKIPPED, ManifestStatus.ERROR)
        )

    @property
    def manifests_skipped(self) -> int:
        return sum(
            1 for m in self.manifests
            if m.status in (ManifestStatus.SKIPPED, ManifestStatus.ERROR)
        )

    @property
    def packages_outdated(self) -> int:
        return sum(m.outdated_count for m in self.manifests)

    @property
    def packages_updated(self) -> int:
        return sum(m.updated_count for m in self.manifests)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "root": str(self.root),
            "manifests_processed": self.manifests_processed,
            "manifests_skipped": self.manifests_skipped,
            "packages_outdated": self.packages_outdated,
            "packages_updated": self.packages_updated,
            "manifests": [m.to_dict() for m in self.manifests],
        }
