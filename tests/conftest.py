"""Pytest configuration and fixtures."""
import io
from pathlib import Path

import pytest

from nugetbump.package_managers.base import BasePackageManager
from nugetbump.pipeline.structures import QueryMode
from nugetbump.pipeline.ui import make_console
from nugetbump.reporter import RunReporter
from nugetbump.utils.process import ToolResult

CSPROJ_TEMPLATE = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <OutputType>Exe</OutputType>
    {framework_element}
  </PropertyGroup>
  <ItemGroup>
    <PackageReference Include="Newtonsoft.Json" Version="12.0.1" />
  </ItemGroup>
</Project>
"""


def csproj_content(framework: str | None = "net8.0") -> str:
    """Render a minimal SDK-style project file."""
    element = f"<TargetFramework>{framework}</TargetFramework>" if framework else ""
    return CSPROJ_TEMPLATE.format(framework_element=element)


@pytest.fixture
def write_project(tmp_path):
    """Factory: write_project("src/App/App.csproj", framework="net8.0") -> Path."""

    def _write(relative: str, framework: str | None = "net8.0", content: str | None = None) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if content is not None else csproj_content(framework), encoding="utf-8")
        return path

    return _write


class FakePackageManager(BasePackageManager):
    """Scripted package manager that records every call.

    latest / highest_minor map manifest file name -> {package: version}.
    rejected holds (package, version) pairs that apply_update refuses.
    explode_on names manifests whose query raises; explode_on_apply names
    packages whose apply_update raises.
    """

    def __init__(self, latest=None, highest_minor=None, rejected=(), explode_on=(), explode_on_apply=()):
        self.latest = latest or {}
        self.highest_minor = highest_minor or {}
        self.rejected = set(rejected)
        self.explode_on = set(explode_on)
        self.explode_on_apply = set(explode_on_apply)
        self.queries: list[tuple[str, str, QueryMode]] = []
        self.applied: list[tuple[str, str, str]] = []

    @property
    def manager_name(self) -> str:
        return "fake"

    @property
    def file_patterns(self) -> list[str]:
        return ["*.csproj"]

    def list_outdated(self, manifest, framework, mode=QueryMode.LATEST):
        self.queries.append((manifest.name, framework, mode))
        if manifest.name in self.explode_on:
            raise RuntimeError("query tool crashed")
        source = self.latest if mode is QueryMode.LATEST else self.highest_minor
        return dict(source.get(manifest.name, {}))

    def apply_update(self, manifest, package, version):
        self.applied.append((manifest.name, package, version))
        if package in self.explode_on_apply:
            raise RuntimeError("add tool crashed")
        command = ["dotnet", "add", str(manifest), "package", package, "--version", version]
        if (package, version) in self.rejected:
            return ToolResult.Err(command, 1, stderr=f"error: NU1202: {package} {version} is not compatible")
        return ToolResult.Ok(command)


@pytest.fixture
def fake_manager():
    """Factory for FakePackageManager instances."""
    return FakePackageManager


class RecordingReporter(RunReporter):
    """RunReporter writing to an in-memory console."""

    def __init__(self):
        self.buffer = io.StringIO()
        super().__init__(make_console(file=self.buffer, width=200, force_terminal=False, color_system=None))

    @property
    def text(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture
def reporter():
    """Reporter whose transcript is available as reporter.text."""
    return RecordingReporter()
