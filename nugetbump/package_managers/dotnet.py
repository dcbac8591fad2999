"""dotnet CLI package manager implementation for NuGet references.

Handles *.csproj files for:
- Listing outdated top-level packages (dotnet list package --outdated)
- Pinning a package version (dotnet add package --version)
"""

from __future__ import annotations

import json
from pathlib import Path

from nugetbump.errors import ReportSchemaError
from nugetbump.pipeline.structures import OutdatedReport, PackageVersionMap, QueryMode
from nugetbump.utils.logging import logger
from nugetbump.utils.process import ToolResult, run_tool

from .base import BasePackageManager


class DotnetPackageManager(BasePackageManager):
    """Package manager backed by the dotnet CLI."""

    def __init__(
        self,
        executable: str = "dotnet",
        query_timeout: float | None = 300,
        apply_timeout: float | None = 300,
        include_prerelease: bool = False,
        patterns: list[str] | None = None,
    ):
        self.executable = executable
        self.query_timeout = query_timeout
        self.apply_timeout = apply_timeout
        self.include_prerelease = include_prerelease
        self._patterns = list(patterns) if patterns else ["*.csproj"]

    @property
    def manager_name(self) -> str:
        return "dotnet"

    @property
    def file_patterns(self) -> list[str]:
        return list(self._patterns)

    def build_list_command(self, manifest: Path, framework: str, mode: QueryMode) -> list[str]:
        cmd = [
            self.executable,
            "list",
            str(manifest),
            "package",
            "--outdated",
            "--format",
            "json",
            "--framework",
            framework,
        ]
        if mode is QueryMode.HIGHEST_MINOR:
            cmd.append("--highest-minor")
        if self.include_prerelease:
            cmd.append("--include-prerelease")
        return cmd

    def build_add_command(self, manifest: Path, package: str, version: str) -> list[str]:
        return [self.executable, "add", str(manifest), "package", package, "--version", version]

    def list_outdated(
        self,
        manifest: Path,
        framework: str,
        mode: QueryMode = QueryMode.LATEST,
    ) -> PackageVersionMap:
        """Query dotnet for outdated packages; any failure yields an empty map."""
        manifest = Path(manifest).resolve()
        result = run_tool(
            self.build_list_command(manifest, framework, mode),
            timeout=self.query_timeout,
            cwd=manifest.parent,
        )
        if not result.ok:
            logger.warning(
                "Outdated query ({mode}) failed for {path}: {why}",
                mode=mode.value,
                path=manifest,
                why=result.describe_failure(),
            )
            return {}

        return parse_outdated_output(result.stdout, source=f"{manifest} ({mode.value})")

    def apply_update(self, manifest: Path, package: str, version: str) -> ToolResult:
        manifest = Path(manifest).resolve()
        return run_tool(
            self.build_add_command(manifest, package, version),
            timeout=self.apply_timeout,
            cwd=manifest.parent,
        )


def parse_outdated_output(stdout: str, source: str = "dotnet") -> PackageVersionMap:
    """Deserialize dotnet's JSON report and flatten it to a version map.

    Fails closed: unparseable or unexpected output yields an empty map.
    """
    try:
        data = json.loads(stdout)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Could not parse outdated report for {src}: {err}", src=source, err=e)
        return {}

    try:
        report = OutdatedReport.from_dict(data)
    except ReportSchemaError as e:
        logger.warning("Unexpected outdated report shape for {src}: {err}", src=source, err=e)
        return {}

    for project in report.projects:
        for problem in project.problems:
            logger.debug("dotnet reported a problem for {path}: {text}", path=project.path, text=problem)

    return report.to_version_map()
