"""Exception hierarchy for nugetbump.

Only RootPathNotFound ends a run. ManifestError subclasses skip one
manifest; ReportSchemaError never leaves the query adapter.
"""

from pathlib import Path


class NugetBumpError(Exception):
    """Base class for all nugetbump errors."""


class RootPathNotFound(NugetBumpError):
    """The directory to scan does not exist."""

    def __init__(self, root: Path | str):
        self.root = Path(root)
        super().__init__(f"Root path not found: {self.root}")


class ManifestError(NugetBumpError):
    """A single manifest cannot be processed and must be skipped."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ManifestUnreadable(ManifestError):
    """The manifest file could not be read from disk."""


class ManifestMalformed(ManifestError):
    """The manifest is not well-formed XML."""


class TargetFrameworkMissing(ManifestError):
    """The manifest declares no single TargetFramework."""


class ReportSchemaError(NugetBumpError):
    """dotnet JSON output does not match the expected report shape."""
