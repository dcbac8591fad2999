"""Centralized constants for nugetbump.

Single source of truth for file names, environment variable names,
and markers emitted by the dotnet CLI.
"""

# ============================================================================
# CONFIGURATION
# ============================================================================

# Per-project config file, looked up in the scan root
CONFIG_FILE_NAME = ".nugetbump.json"

# Prefix for NUGETBUMP_<SECTION>_<KEY> overrides
ENV_PREFIX = "NUGETBUMP"

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_LOG_LEVEL = "NUGETBUMP_LOG_LEVEL"
ENV_LOG_JSON = "NUGETBUMP_LOG_JSON"
ENV_LOG_FILE = "NUGETBUMP_LOG_FILE"
ENV_REQUEST_ID = "NUGETBUMP_REQUEST_ID"

# ============================================================================
# DOTNET CLI
# ============================================================================

# latestVersion value dotnet reports when a package cannot be resolved
NOT_FOUND_MARKER = "Not found at the sources"

# Manifest element holding the target framework moniker
TARGET_FRAMEWORK_TAG = "TargetFramework"
MULTI_TARGET_FRAMEWORK_TAG = "TargetFrameworks"
