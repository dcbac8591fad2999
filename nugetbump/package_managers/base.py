"""Abstract base class for package manager implementations.

All package managers must inherit from BasePackageManager and implement
the two external operations the upgrade workflow relies on: listing
outdated packages and applying a version.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from nugetbump.pipeline.structures import PackageVersionMap, QueryMode
from nugetbump.utils.process import ToolResult


class BasePackageManager(ABC):
    """Abstract base class for all package manager implementations.

    Implementations must provide:
    - manager_name: Identifier for this manager (e.g., 'dotnet')
    - file_patterns: Glob patterns for manifest files this manager handles
    - list_outdated(): Ask the tool which top-level packages are outdated
    - apply_update(): Pin one package to a version in the manifest
    """

    @property
    @abstractmethod
    def manager_name(self) -> str:
        """Return manager identifier (e.g., 'dotnet')."""
        ...

    @property
    @abstractmethod
    def file_patterns(self) -> list[str]:
        """Return glob patterns for manifest files (e.g., ['*.csproj'])."""
        ...

    @abstractmethod
    def list_outdated(
        self,
        manifest: Path,
        framework: str,
        mode: QueryMode = QueryMode.LATEST,
    ) -> PackageVersionMap:
        """Return outdated top-level packages mapped to their upgrade target.

        Args:
            manifest: Path to the project manifest
            framework: Target framework moniker to query for
            mode: LATEST for the newest version, HIGHEST_MINOR for the
                  newest version in the currently referenced minor line

        Returns:
            Mapping of package id to version. Empty when nothing is outdated
            or when the query tool failed; implementations must not raise
            for tool failures.
        """
        ...

    @abstractmethod
    def apply_update(self, manifest: Path, package: str, version: str) -> ToolResult:
        """Reference ``package`` at ``version`` in ``manifest``.

        Returns:
            ToolResult; ``ok`` is the only success signal
        """
        ...

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<{self.__class__.__name__} manager_name={self.manager_name!r}>"
