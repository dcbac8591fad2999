"""nugetbump CLI - main entry point."""

import sys
from pathlib import Path

import click

from nugetbump import __version__
from nugetbump.config_runtime import load_runtime_config
from nugetbump.errors import RootPathNotFound
from nugetbump.package_managers import get_manager
from nugetbump.pipeline.runner import run_upgrade
from nugetbump.pipeline.ui import console
from nugetbump.reporter import RunReporter
from nugetbump.utils.error_handler import handle_exceptions
from nugetbump.utils.exit_codes import ExitCodes


class ExitCodeCommand(click.Command):
    """Click command whose help ends with the exit code table."""

    EXIT_CODES = (ExitCodes.SUCCESS, ExitCodes.UNEXPECTED_ERROR, ExitCodes.ROOT_NOT_FOUND)

    def format_epilog(self, ctx, formatter):
        with formatter.section("Exit Codes"):
            formatter.write_dl([(str(code), ExitCodes.get_description(code)) for code in self.EXIT_CODES])
        super().format_epilog(ctx, formatter)


@click.command(cls=ExitCodeCommand, context_settings={"help_option_names": ["-h", "--help"]})
@handle_exceptions
@click.argument(
    "root",
    default=".",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("--check-only", is_flag=True, help="Report outdated packages without changing any project")
@click.option(
    "--include-prerelease", is_flag=True, help="Consider alpha/beta/rc versions"
)
@click.option(
    "--timeout",
    type=click.IntRange(min=0),
    default=None,
    help="Seconds allowed per dotnet invocation (0 = no limit)",
)
@click.option("--dotnet", "dotnet_exe", default=None, help="Path to the dotnet executable")
@click.version_option(version=__version__, prog_name="nugetbump")
def cli(root, check_only, include_prerelease, timeout, dotnet_exe):
    """Upgrade outdated NuGet packages in every .NET project under ROOT.

    Scans ROOT (default: current directory) for *.csproj files, skipping any
    path containing "bin" or "obj". For each project, the outdated top-level
    packages for its TargetFramework are upgraded to the latest version. When
    dotnet rejects the latest version, the highest version in the same minor
    line is tried instead. A package only counts as updated when dotnet
    accepted the version that was applied, including the fallback.

    \b
    Outcomes per package:
      Updated-Latest          latest version applied
      Updated-Minor           latest rejected, highest minor applied
      FailedNoFallback        latest rejected, no highest-minor version known
      FailedFallbackRejected  latest and highest minor both rejected

    \b
    Configuration:
      <ROOT>/.nugetbump.json   discovery / timeouts / dotnet sections
      NUGETBUMP_<SECTION>_<KEY> environment overrides
      NUGETBUMP_LOG_LEVEL      diagnostics on stderr (default WARNING)

    \b
    Examples:
      nugetbump                    # Upgrade projects under the current directory
      nugetbump src/               # Upgrade projects under src/
      nugetbump --check-only       # Show what is outdated, change nothing
    """
    settings = load_runtime_config(root)
    if include_prerelease:
        settings["dotnet"]["include_prerelease"] = True
    if timeout is not None:
        settings["timeouts"]["query"] = timeout
        settings["timeouts"]["apply"] = timeout
    if dotnet_exe:
        settings["dotnet"]["executable"] = dotnet_exe

    manager = get_manager(
        "dotnet",
        executable=settings["dotnet"]["executable"],
        query_timeout=settings["timeouts"]["query"] or None,
        apply_timeout=settings["timeouts"]["apply"] or None,
        include_prerelease=settings["dotnet"]["include_prerelease"],
        patterns=settings["discovery"]["patterns"],
    )
    reporter = RunReporter(console)

    try:
        run_upgrade(root, manager, reporter, settings=settings, check_only=check_only)
    except RootPathNotFound as e:
        reporter.root_not_found(e.root)
        sys.exit(ExitCodes.ROOT_NOT_FOUND)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
