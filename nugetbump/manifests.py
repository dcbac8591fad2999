"""Manifest discovery and target framework extraction for .NET projects."""

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path

from nugetbump.errors import (
    ManifestMalformed,
    ManifestUnreadable,
    RootPathNotFound,
    TargetFrameworkMissing,
)
from nugetbump.utils.constants import MULTI_TARGET_FRAMEWORK_TAG, TARGET_FRAMEWORK_TAG

DEFAULT_PATTERNS = ("*.csproj",)
DEFAULT_EXCLUDE = ("bin", "obj")


def find_manifests(
    root: str | Path,
    patterns: Iterable[str] = DEFAULT_PATTERNS,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> list[Path]:
    """Find project manifests anywhere under root.

    Any manifest whose path relative to root contains one of the exclude
    strings is dropped. The match is a case-insensitive substring test, so
    "bin" also drops "binaries/App.csproj" and "Bin/Debug/App.csproj".

    Args:
        root: Directory to scan recursively
        patterns: Glob patterns for manifest file names
        exclude: Substrings that disqualify a path

    Returns:
        Sorted list of manifest paths (empty if none found)

    Raises:
        RootPathNotFound: root does not exist or is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise RootPathNotFound(root)

    exclude = [e.lower() for e in exclude if e]
    manifests = set()

    for pattern in patterns:
        for path in root.rglob(pattern):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix().lower()
            if any(skip in relative for skip in exclude):
                continue
            manifests.add(path)

    return sorted(manifests)


def _local_name(tag: str) -> str:
    # Legacy csproj files use the msbuild/2003 namespace: "{ns}TargetFramework"
    return tag.rsplit("}", 1)[-1]


def read_target_framework(path: Path) -> str:
    """Read the single target framework moniker declared by a manifest.

    Raises:
        ManifestUnreadable: file cannot be read
        ManifestMalformed: file is not well-formed XML
        TargetFrameworkMissing: no non-empty TargetFramework element
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ManifestUnreadable(path, f"cannot read file ({e.strerror or e})") from e

    try:
        tree = ET.fromstring(content)
    except ET.ParseError as e:
        raise ManifestMalformed(path, f"malformed XML ({e})") from e

    multi_target = False
    for element in tree.iter():
        if not isinstance(element.tag, str):
            continue
        name = _local_name(element.tag)
        if name == TARGET_FRAMEWORK_TAG:
            framework = (element.text or "").strip()
            if framework:
                return framework
        elif name == MULTI_TARGET_FRAMEWORK_TAG:
            multi_target = True

    if multi_target:
        raise TargetFrameworkMissing(
            path,
            f"multi-targeted project ({MULTI_TARGET_FRAMEWORK_TAG}) - "
            f"a single {TARGET_FRAMEWORK_TAG} is required",
        )
    raise TargetFrameworkMissing(path, f"no {TARGET_FRAMEWORK_TAG} element")
