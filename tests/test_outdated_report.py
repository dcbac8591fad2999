"""Tests for typed deserialization of the dotnet outdated-package report."""

import json

import pytest

from nugetbump.errors import ReportSchemaError
from nugetbump.package_managers.dotnet import parse_outdated_output
from nugetbump.pipeline.structures import OutdatedReport, TopLevelPackage

SAMPLE_REPORT = {
    "version": 1,
    "parameters": "--outdated",
    "sources": ["https://api.nuget.org/v3/index.json"],
    "projects": [
        {
            "path": "/repo/App/App.csproj",
            "frameworks": [
                {
                    "framework": "net8.0",
                    "topLevelPackages": [
                        {
                            "id": "Newtonsoft.Json",
                            "requestedVersion": "12.0.1",
                            "resolvedVersion": "12.0.1",
                            "latestVersion": "13.0.3",
                        },
                        {
                            "id": "Serilog",
                            "requestedVersion": "2.10.0",
                            "resolvedVersion": "2.10.0",
                            "latestVersion": "3.1.1",
                        },
                    ],
                }
            ],
        }
    ],
}


class TestOutdatedReport:
    """Test OutdatedReport.from_dict and flattening."""

    def test_flattens_to_version_map(self):
        """Test each top-level package maps to its latest version."""
        report = OutdatedReport.from_dict(SAMPLE_REPORT)
        assert report.to_version_map() == {"Newtonsoft.Json": "13.0.3", "Serilog": "3.1.1"}

    def test_typed_records(self):
        """Test nested records carry the reported fields."""
        report = OutdatedReport.from_dict(SAMPLE_REPORT)
        package = report.projects[0].frameworks[0].top_level_packages[0]
        assert package == TopLevelPackage(
            id="Newtonsoft.Json",
            requested_version="12.0.1",
            resolved_version="12.0.1",
            latest_version="13.0.3",
        )
        assert report.projects[0].frameworks[0].framework == "net8.0"

    def test_project_without_frameworks(self):
        """Test an up-to-date project (no frameworks key) yields an empty map."""
        report = OutdatedReport.from_dict({"projects": [{"path": "/repo/App.csproj"}]})
        assert report.to_version_map() == {}

    def test_packages_without_latest_are_ignored(self):
        """Test missing, empty and not-found latest versions are dropped."""
        data = {
            "projects": [
                {
                    "path": "x",
                    "frameworks": [
                        {
                            "framework": "net8.0",
                            "topLevelPackages": [
                                {"id": "NoLatest", "resolvedVersion": "1.0.0"},
                                {"id": "Empty", "latestVersion": ""},
                                {"id": "Gone", "latestVersion": "Not found at the sources"},
                                {"id": "Kept", "latestVersion": "2.0.0"},
                            ],
                        }
                    ],
                }
            ]
        }
        assert OutdatedReport.from_dict(data).to_version_map() == {"Kept": "2.0.0"}

    def test_problems_are_collected(self):
        """Test project problems are kept as plain text."""
        data = {
            "projects": [
                {"path": "x", "problems": [{"level": "error", "text": "restore required"}]}
            ]
        }
        assert OutdatedReport.from_dict(data).projects[0].problems == ("restore required",)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"version": 1},
            {"projects": {"path": "x"}},
            {"projects": ["not-an-object"]},
            {"projects": [{"frameworks": [{"topLevelPackages": [{"latestVersion": "1.0"}]}]}]},
            {"projects": [{"frameworks": [{"topLevelPackages": [{"id": "A", "latestVersion": 2}]}]}]},
        ],
    )
    def test_schema_mismatch_raises(self, data):
        """Test shapes that do not match the report schema are rejected."""
        with pytest.raises(ReportSchemaError):
            OutdatedReport.from_dict(data)


class TestParseOutdatedOutput:
    """Test the fail-closed JSON entry point."""

    def test_parses_json_text(self):
        """Test dotnet stdout is parsed into a map."""
        assert parse_outdated_output(json.dumps(SAMPLE_REPORT)) == {
            "Newtonsoft.Json": "13.0.3",
            "Serilog": "3.1.1",
        }

    def test_non_json_output_gives_empty_map(self):
        """Test plain-text output (older SDKs) fails closed."""
        assert parse_outdated_output("Project `App` has the following updates") == {}

    def test_empty_output_gives_empty_map(self):
        """Test an empty stdout fails closed."""
        assert parse_outdated_output("") == {}

    def test_schema_mismatch_gives_empty_map(self):
        """Test a well-formed but unexpected document fails closed."""
        assert parse_outdated_output(json.dumps({"projects": "oops"})) == {}
