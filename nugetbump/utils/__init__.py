"""nugetbump utilities package."""

from .constants import CONFIG_FILE_NAME, ENV_PREFIX, NOT_FOUND_MARKER
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger
from .process import ToolResult, run_tool

__all__ = [
    "CONFIG_FILE_NAME",
    "ENV_PREFIX",
    "NOT_FOUND_MARKER",
    "handle_exceptions",
    "ExitCodes",
    "logger",
    "ToolResult",
    "run_tool",
]
