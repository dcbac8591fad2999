"""Sequential upgrade run over every manifest under a root.

Errors are contained at the narrowest scope: a package failure stays inside
the resolver, a manifest failure is reported here and the loop moves on.
Only RootPathNotFound escapes.
"""

from pathlib import Path
from typing import Any

from nugetbump.config_runtime import DEFAULTS
from nugetbump.errors import ManifestError
from nugetbump.manifests import find_manifests, read_target_framework
from nugetbump.package_managers.base import BasePackageManager
from nugetbump.pipeline.structures import (
    ManifestResult,
    ManifestStatus,
    QueryMode,
    RunSummary,
)
from nugetbump.reporter import RunReporter
from nugetbump.resolver import resolve_updates
from nugetbump.utils.logging import logger


def process_manifest(
    manifest: Path,
    manager: BasePackageManager,
    reporter: RunReporter,
    check_only: bool = False,
    result: ManifestResult | None = None,
) -> ManifestResult:
    """Query and upgrade one manifest, filling ``result`` in place.

    Raises:
        ManifestError: manifest cannot be read or has no target framework
    """
    if result is None:
        result = ManifestResult(manifest, ManifestStatus.UP_TO_DATE)
    reporter.manifest_started(manifest)

    framework = read_target_framework(manifest)
    result.target_framework = framework
    reporter.target_framework(framework)

    latest = manager.list_outdated(manifest, framework, QueryMode.LATEST)
    highest_minor = manager.list_outdated(manifest, framework, QueryMode.HIGHEST_MINOR)

    if check_only:
        if not latest:
            result.status = ManifestStatus.UP_TO_DATE
            reporter.up_to_date(manifest)
            return result
        reporter.outdated_found(len(latest))
        reporter.outdated_table(latest, highest_minor)
        result.status = ManifestStatus.CHECKED
        result.outdated_count = len(latest)
        return result

    return resolve_updates(
        manifest, framework, latest, highest_minor, manager, reporter, result=result
    )


def run_upgrade(
    root: str | Path,
    manager: BasePackageManager,
    reporter: RunReporter,
    settings: dict[str, Any] | None = None,
    check_only: bool = False,
) -> RunSummary:
    """Find every manifest under root and upgrade its outdated packages.

    Args:
        root: Directory to scan
        manager: Package manager that queries and applies versions
        reporter: Transcript writer
        settings: load_runtime_config() output (defaults when None)
        check_only: Report outdated packages without applying anything

    Returns:
        RunSummary with one ManifestResult per manifest found

    Raises:
        RootPathNotFound: root does not exist
    """
    settings = settings or DEFAULTS
    root = Path(root)

    manifests = find_manifests(
        root,
        patterns=manager.file_patterns,
        exclude=settings["discovery"]["exclude"],
    )
    summary = RunSummary(root=root)

    if not manifests:
        reporter.no_manifests(root)
        return summary

    reporter.run_started(root, len(manifests), check_only=check_only)

    for manifest in manifests:
        result = ManifestResult(manifest, ManifestStatus.UP_TO_DATE)
        try:
            process_manifest(manifest, manager, reporter, check_only=check_only, result=result)
        except ManifestError as e:
            reporter.manifest_skipped(manifest, e.reason)
            result.status = ManifestStatus.SKIPPED
            result.message = e.reason
        except Exception as e:
            # Packages already applied before the failure stay in the totals
            logger.opt(exception=True).debug("Unexpected failure processing {path}", path=manifest)
            reporter.manifest_failed(manifest, e)
            result.status = ManifestStatus.ERROR
            result.message = str(e)
        summary.manifests.append(result)

    reporter.run_completed(summary)
    logger.info(
        "Run finished: {updated}/{outdated} package(s) updated",
        updated=summary.packages_updated,
        outdated=summary.packages_outdated,
        summary=summary.to_dict(),
    )
    return summary
