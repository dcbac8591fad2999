"""Central UI handler for nugetbump.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every module.

Usage:
    from nugetbump.pipeline.ui import console, print_header, print_error

    console.print("[success]Updated[/success]")
    print_header("nugetbump")
    print_error("Root path not found")
"""

import sys

from rich.console import Console
from rich.theme import Theme

NUGETBUMP_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "package": "bold magenta",
    "version": "green",
    "path": "bold cyan",
    "dim": "dim white",
})


def make_console(**kwargs) -> Console:
    """Build a themed console; tests pass file=StringIO() to capture output."""
    kwargs.setdefault("theme", NUGETBUMP_THEME)
    return Console(**kwargs)


# Single console instance - import this, don't create your own
console = make_console(force_terminal=sys.stdout.isatty())


def print_header(title: str, target: Console | None = None) -> None:
    """Print a styled section header with horizontal rules."""
    (target or console).rule(f"[bold]{title}[/bold]")


def print_error(msg: str, target: Console | None = None) -> None:
    """Print an error message in red."""
    (target or console).print(f"[error]ERROR:[/error] {msg}", highlight=False)


def print_warning(msg: str, target: Console | None = None) -> None:
    """Print a warning message in yellow."""
    (target or console).print(f"[warning]WARNING:[/warning] {msg}", highlight=False)


def print_success(msg: str, target: Console | None = None) -> None:
    """Print a success message in green."""
    (target or console).print(f"[success]OK:[/success] {msg}", highlight=False)
