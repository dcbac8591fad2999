"""External tool runner - executes dotnet subprocesses.

Every invocation returns a ToolResult instead of raising, so callers branch
on ``result.ok`` explicitly. A missing executable or a timeout is an Err
result like any other non-zero exit.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from nugetbump.utils.logging import get_subprocess_env, logger

# Exit code reported when the executable itself cannot be started (shell convention)
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one external command.

    exit_code is None when the process was killed by the timeout.
    """

    command: tuple[str, ...]
    exit_code: int | None
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @classmethod
    def Ok(cls, command, stdout: str = "", stderr: str = "") -> "ToolResult":  # noqa: N802
        return cls(tuple(command), 0, stdout, stderr)

    @classmethod
    def Err(  # noqa: N802
        cls,
        command,
        exit_code: int | None,
        stderr: str = "",
        stdout: str = "",
        timed_out: bool = False,
    ) -> "ToolResult":
        return cls(tuple(command), exit_code, stdout, stderr, timed_out)

    @property
    def ok(self) -> bool:
        """True if the command ran to completion with exit status 0."""
        return self.exit_code == 0 and not self.timed_out

    def describe_failure(self) -> str:
        """One-line reason for a failed command, for the transcript."""
        if self.ok:
            return ""
        if self.timed_out:
            return "timed out"
        detail = _last_line(self.stderr) or _last_line(self.stdout)
        if detail:
            return f"exit code {self.exit_code}: {detail}"
        return f"exit code {self.exit_code}"


def _last_line(text: str) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else ""


def run_tool(command: list[str], timeout: float | None, cwd: Path | None = None) -> ToolResult:
    """Run a command without a shell and capture its output.

    Args:
        command: Argument vector, executable first
        timeout: Seconds before the process is killed (None = wait forever)
        cwd: Working directory for the process

    Returns:
        ToolResult; never raises for process-level failures
    """
    logger.debug("Running: {cmd}", cmd=" ".join(command))

    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            shell=False,
            env=get_subprocess_env(),
        )
    except subprocess.TimeoutExpired as e:
        logger.warning("Command timed out after {t}s: {cmd}", t=timeout, cmd=" ".join(command))
        stderr = e.stderr.decode("utf-8", "replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
        return ToolResult.Err(command, None, stderr=stderr, timed_out=True)
    except FileNotFoundError as e:
        logger.warning("Executable not found: {exe}", exe=command[0])
        return ToolResult.Err(command, EXIT_NOT_FOUND, stderr=str(e))
    except OSError as e:
        logger.warning("Could not start {exe}: {err}", exe=command[0], err=e)
        return ToolResult.Err(command, EXIT_NOT_FOUND, stderr=str(e))

    logger.debug("Exit code {code} from {exe}", code=completed.returncode, exe=command[0])

    if completed.returncode == 0:
        return ToolResult.Ok(command, completed.stdout, completed.stderr)
    return ToolResult.Err(
        command, completed.returncode, stderr=completed.stderr, stdout=completed.stdout
    )
