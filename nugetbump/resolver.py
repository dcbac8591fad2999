"""Update resolution: latest version first, highest compatible minor second.

The fallback result is taken from the fallback's own exit status. A
package only counts as Updated-Minor when ``dotnet add`` accepted the
highest-minor version; otherwise it is FailedFallbackRejected.
"""

from pathlib import Path

from nugetbump.package_managers.base import BasePackageManager
from nugetbump.pipeline.structures import (
    ManifestResult,
    ManifestStatus,
    PackageResult,
    PackageVersionMap,
    UpdateOutcome,
)
from nugetbump.reporter import RunReporter


def resolve_package(
    manifest: Path,
    package: str,
    latest_version: str,
    highest_minor: PackageVersionMap,
    manager: BasePackageManager,
    reporter: RunReporter,
) -> PackageResult:
    """Try one package at its latest version, then at its highest minor."""
    reporter.attempt(package, latest_version)
    first = manager.apply_update(manifest, package, latest_version)
    if first.ok:
        return PackageResult(package, latest_version, UpdateOutcome.UPDATED_LATEST)

    fallback_version = highest_minor.get(package)
    if fallback_version is None:
        return PackageResult(
            package, latest_version, UpdateOutcome.FAILED_NO_FALLBACK, failure=first
        )

    reporter.attempt(package, fallback_version, fallback=True)
    second = manager.apply_update(manifest, package, fallback_version)
    if second.ok:
        return PackageResult(
            package, latest_version, UpdateOutcome.UPDATED_MINOR, fallback_version=fallback_version
        )
    return PackageResult(
        package,
        latest_version,
        UpdateOutcome.FAILED_FALLBACK_REJECTED,
        fallback_version=fallback_version,
        failure=second,
    )


def resolve_updates(
    manifest: Path,
    framework: str,
    latest: PackageVersionMap,
    highest_minor: PackageVersionMap,
    manager: BasePackageManager,
    reporter: RunReporter,
    result: ManifestResult | None = None,
) -> ManifestResult:
    """Upgrade every outdated package of one manifest, in package id order.

    A failed package never stops the ones after it. Package results are
    appended to ``result`` as they complete, so a caller that passes its own
    record keeps them even if a later package raises.
    """
    if result is None:
        result = ManifestResult(manifest, ManifestStatus.UP_TO_DATE)
    result.target_framework = framework

    if not latest:
        result.status = ManifestStatus.UP_TO_DATE
        reporter.up_to_date(manifest)
        return result

    reporter.outdated_found(len(latest))
    result.status = ManifestStatus.UPDATED
    result.outdated_count = len(latest)

    for package in sorted(latest):
        package_result = resolve_package(
            manifest, package, latest[package], highest_minor, manager, reporter
        )
        reporter.package_result(package_result)
        result.packages.append(package_result)

    if result.updated_count == 0:
        result.status = ManifestStatus.NOTHING_UPDATED
        reporter.nothing_updated(manifest)

    reporter.manifest_summary(result)
    return result
