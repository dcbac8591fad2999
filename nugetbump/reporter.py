"""Human-readable run transcript.

RunReporter only prints; it never decides anything. Severity is carried by
the theme styles: info (cyan), warning (yellow), error (red).
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nugetbump.pipeline.structures import (
    ManifestResult,
    PackageResult,
    PackageVersionMap,
    RunSummary,
    UpdateOutcome,
)
from nugetbump.pipeline.ui import console as default_console
from nugetbump.pipeline.ui import print_error, print_header, print_success, print_warning


class RunReporter:
    """Narrates each decision of an upgrade run to a rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or default_console

    def _print(self, text: str) -> None:
        self.console.print(text, highlight=False)

    # -- run level -----------------------------------------------------------

    def run_started(self, root: Path, manifest_count: int, check_only: bool = False) -> None:
        mode = "Checking" if check_only else "Upgrading"
        print_header(f"nugetbump: {mode} {manifest_count} project(s)", self.console)
        self._print(f"[info]Root:[/info] [path]{escape(str(root))}[/path]")

    def no_manifests(self, root: Path) -> None:
        print_warning(f"No project manifests found under {escape(str(root))}", self.console)

    def root_not_found(self, root: Path) -> None:
        print_error(f"Root path not found: {escape(str(root))}", self.console)

    def run_completed(self, summary: RunSummary) -> None:
        self.console.rule()
        line = (
            f"Done: {summary.packages_updated}/{summary.packages_outdated} package(s) updated "
            f"across {summary.manifests_processed} project(s)"
        )
        if summary.manifests_skipped:
            line += f", {summary.manifests_skipped} skipped"
        print_success(line, self.console)

    # -- manifest level ------------------------------------------------------

    def manifest_started(self, path: Path) -> None:
        self._print(f"\n[info]Processing[/info] [path]{escape(str(path))}[/path]")

    def target_framework(self, framework: str) -> None:
        self._print(f"  Target framework: [info]{escape(framework)}[/info]")

    def outdated_found(self, count: int) -> None:
        self._print(f"  Found {count} outdated package(s)")

    def up_to_date(self, path: Path) -> None:
        self._print(f"  [success]Up to date[/success] - no outdated packages in {escape(path.name)}")

    def nothing_updated(self, path: Path) -> None:
        print_warning(f"No packages were updated in {escape(str(path))}", self.console)

    def manifest_summary(self, result: ManifestResult) -> None:
        self._print(
            f"  [dim]{result.updated_count}/{result.outdated_count} package(s) updated[/dim]"
        )

    def manifest_skipped(self, path: Path, reason: str) -> None:
        print_warning(f"Skipping {escape(str(path))}: {escape(reason)}", self.console)

    def manifest_failed(self, path: Path, exc: BaseException) -> None:
        print_error(
            f"Could not process {escape(str(path))}: {type(exc).__name__}: {escape(str(exc))}",
            self.console,
        )

    def outdated_table(self, latest: PackageVersionMap, highest_minor: PackageVersionMap) -> None:
        """Show latest and highest-minor targets side by side (check-only mode)."""
        table = Table(show_header=True, box=None, padding=(0, 2, 0, 4))
        table.add_column("Package", style="package")
        table.add_column("Latest", style="version")
        table.add_column("Highest minor", style="dim")
        for package in sorted(latest):
            table.add_row(escape(package), escape(latest[package]), escape(highest_minor.get(package, "-")))
        self.console.print(table)

    # -- package level -------------------------------------------------------

    def attempt(self, package: str, version: str, fallback: bool = False) -> None:
        label = "Falling back to" if fallback else "Updating"
        self._print(
            f"  {label} [package]{escape(package)}[/package] -> [version]{escape(version)}[/version]"
        )

    def package_result(self, result: PackageResult) -> None:
        name = escape(result.package)
        outcome = result.outcome
        applied = escape(result.applied_version or "")
        if outcome is UpdateOutcome.UPDATED_LATEST:
            self._print(f"    [success]{outcome.value}[/success] {name} {applied}")
        elif outcome is UpdateOutcome.UPDATED_MINOR:
            self._print(
                f"    [warning]{outcome.value}[/warning] {name} {applied} "
                f"(latest {escape(result.latest_version)} was rejected)"
            )
        elif outcome is UpdateOutcome.FAILED_NO_FALLBACK:
            self._print(
                f"    [error]{outcome.value}[/error] {name} {escape(result.latest_version)}: "
                f"{escape(self._why(result))}; no compatible minor version available"
            )
        else:
            self._print(
                f"    [error]{outcome.value}[/error] {name}: latest {escape(result.latest_version)} "
                f"and fallback {escape(result.fallback_version or '')} both rejected "
                f"({escape(self._why(result))})"
            )

    @staticmethod
    def _why(result: PackageResult) -> str:
        if result.failure is None:
            return "rejected"
        return result.failure.describe_failure() or "rejected"
