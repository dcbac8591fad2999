"""Centralized exit codes for the nugetbump CLI."""


class ExitCodes:
    """Standard exit codes for the nugetbump CLI."""

    SUCCESS = 0

    UNEXPECTED_ERROR = 1

    ROOT_NOT_FOUND = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - run completed (including nothing to do)",
            cls.UNEXPECTED_ERROR: "Unexpected error - see log output for the traceback",
            cls.ROOT_NOT_FOUND: "Root path does not exist - no manifests were processed",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")
