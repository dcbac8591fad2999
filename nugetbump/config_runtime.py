"""Runtime configuration for nugetbump - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from nugetbump.utils.constants import CONFIG_FILE_NAME, ENV_PREFIX
from nugetbump.utils.logging import logger

DEFAULTS = {
    "discovery": {
        "patterns": ["*.csproj"],
        # Substring match anywhere in the relative path, so "binaries/" is skipped too
        "exclude": ["bin", "obj"],
    },
    "timeouts": {
        "query": 300,
        "apply": 300,
    },
    "dotnet": {
        "executable": "dotnet",
        "include_prerelease": False,
    },
}


def load_runtime_config(root: str | Path = ".") -> dict[str, Any]:
    """
    Load runtime configuration from <root>/.nugetbump.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (NUGETBUMP_<SECTION>_<KEY>)
    2. .nugetbump.json in the scan root
    3. Built-in defaults

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE_NAME
    try:
        if path.is_file():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if (
                                key in cfg[section]
                                and _same_type(value, cfg[section][key])
                                and _in_range(section, value)
                            ):
                                cfg[section][key] = value
                            else:
                                logger.warning(
                                    "Ignoring config key {section}.{key} in {path}",
                                    section=section,
                                    key=key,
                                    path=path,
                                )
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config file from {path}: {err}", path=path, err=e)

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    coerced = _coerce(value, cfg[section][key])
                    if not _in_range(section, coerced):
                        raise ValueError("must not be negative")
                    cfg[section][key] = coerced
                except ValueError as e:
                    logger.warning(
                        "Invalid value for environment variable {var}: {value!r} - {err}",
                        var=env_var,
                        value=value,
                        err=e,
                    )

    return cfg


def _same_type(value: Any, default: Any) -> bool:
    # bool is an int subclass; keep them apart so "timeouts.query": true is rejected
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    if isinstance(default, (int, float)):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))


def _in_range(section: str, value: Any) -> bool:
    # subprocess treats a negative timeout as already expired
    if section == "timeouts":
        return value >= 0
    return True


def _coerce(value: str, default: Any) -> Any:
    """Convert an environment string to the type of its default."""
    if isinstance(default, bool):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError("expected a boolean")
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    if isinstance(default, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value
