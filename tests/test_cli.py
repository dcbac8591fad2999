"""Integration tests for the nugetbump command."""

import pytest
from click.testing import CliRunner

from nugetbump.cli import cli
from nugetbump.package_managers.dotnet import DotnetPackageManager
from nugetbump.utils.exit_codes import ExitCodes


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def captured_manager(monkeypatch, fake_manager):
    """Route the CLI to a scripted manager and remember the options it was built with."""
    state = {}

    def install(**scripted):
        mgr = fake_manager(**scripted)

        def fake_get_manager(name, **options):
            state["name"] = name
            state["options"] = options
            return mgr

        monkeypatch.setattr("nugetbump.cli.get_manager", fake_get_manager)
        state["manager"] = mgr
        return state

    return install


def test_help_lists_exit_codes(runner):
    """Test --help documents options and exit codes."""
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "--check-only" in result.output
    assert "Exit Codes" in result.output
    assert str(ExitCodes.ROOT_NOT_FOUND) in result.output


def test_help_is_ascii(runner):
    """Test help output stays ASCII for CP1252 consoles."""
    result = runner.invoke(cli, ["-h"])
    result.output.encode("ascii")


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "nugetbump" in result.output


def test_missing_root_exits_non_zero(runner, tmp_path, captured_manager):
    """Test a nonexistent root aborts with ROOT_NOT_FOUND."""
    state = captured_manager()
    result = runner.invoke(cli, [str(tmp_path / "missing")])

    assert result.exit_code == ExitCodes.ROOT_NOT_FOUND
    assert "Root path not found" in result.output
    assert state["manager"].queries == []


def test_no_manifests_exits_zero_with_warning(runner, tmp_path, write_project, captured_manager):
    """Test manifests only under bin/ give a warning and success."""
    write_project("bin/Release/App.csproj")
    captured_manager()

    result = runner.invoke(cli, [str(tmp_path)])

    assert result.exit_code == ExitCodes.SUCCESS
    assert "No project manifests found" in result.output


def test_upgrade_run(runner, tmp_path, write_project, captured_manager):
    """Test a full run prints each outcome and exits 0 even with failures."""
    write_project("App/App.csproj")
    state = captured_manager(
        latest={"App.csproj": {"PkgA": "2.0.0", "PkgB": "5.0.0"}},
        highest_minor={"App.csproj": {"PkgA": "1.9.0"}},
        rejected={("PkgA", "2.0.0"), ("PkgB", "5.0.0")},
    )

    result = runner.invoke(cli, [str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Updated-Minor" in result.output
    assert "FailedNoFallback" in result.output
    assert state["manager"].applied == [
        ("App.csproj", "PkgA", "2.0.0"),
        ("App.csproj", "PkgA", "1.9.0"),
        ("App.csproj", "PkgB", "5.0.0"),
    ]


def test_check_only_flag(runner, tmp_path, write_project, captured_manager):
    """Test --check-only never applies updates."""
    write_project("App/App.csproj")
    state = captured_manager(latest={"App.csproj": {"PkgA": "2.0.0"}})

    result = runner.invoke(cli, [str(tmp_path), "--check-only"])

    assert result.exit_code == 0
    assert state["manager"].applied == []
    assert "Checking 1 project(s)" in result.output


def test_options_reach_the_manager(runner, tmp_path, write_project, captured_manager):
    """Test CLI flags override configuration when building the manager."""
    write_project("App/App.csproj")
    state = captured_manager()

    result = runner.invoke(
        cli,
        [str(tmp_path), "--timeout", "30", "--include-prerelease", "--dotnet", "/opt/dotnet/dotnet"],
    )

    assert result.exit_code == 0
    assert state["name"] == "dotnet"
    assert state["options"] == {
        "executable": "/opt/dotnet/dotnet",
        "query_timeout": 30,
        "apply_timeout": 30,
        "include_prerelease": True,
        "patterns": ["*.csproj"],
    }


def test_zero_timeout_means_no_limit(runner, tmp_path, write_project, captured_manager):
    write_project("App/App.csproj")
    state = captured_manager()

    runner.invoke(cli, [str(tmp_path), "--timeout", "0"])

    assert state["options"]["query_timeout"] is None
    assert state["options"]["apply_timeout"] is None


def test_unexpected_crash_becomes_click_error(runner, tmp_path, write_project, monkeypatch):
    """Test crashes outside the manifest loop surface as a clean error."""
    write_project("App/App.csproj")

    def broken_run_upgrade(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr("nugetbump.cli.run_upgrade", broken_run_upgrade)
    result = runner.invoke(cli, [str(tmp_path)])

    assert result.exit_code == ExitCodes.UNEXPECTED_ERROR
    assert "RuntimeError: kaboom" in result.output


def test_real_manager_is_dotnet(runner, tmp_path, monkeypatch):
    """Test the default wiring builds the dotnet manager from config."""
    built = {}

    def fake_run_upgrade(root, manager, reporter, settings=None, check_only=False):
        built["manager"] = manager

    monkeypatch.setattr("nugetbump.cli.run_upgrade", fake_run_upgrade)
    result = runner.invoke(cli, [str(tmp_path)])

    assert result.exit_code == 0
    assert isinstance(built["manager"], DotnetPackageManager)
    assert built["manager"].query_timeout == 300
