"""Centralized error handler for nugetbump commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from nugetbump.utils.logging import get_request_id, logger


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns unexpected crashes into a logged ClickException.

    click's own exceptions (usage errors, explicit exits) pass through
    untouched so exit codes chosen by the command survive.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Inner wrapper that implements the try-except logic."""
        try:
            return func(*args, **kwargs)
        except (click.exceptions.ClickException, click.exceptions.Exit, click.exceptions.Abort):
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            user_message = (
                f"{error_type}: {error_msg}\n\n"
                f"Full traceback logged to stderr (request id {get_request_id()})"
            )

            raise click.ClickException(user_message) from e

    return wrapper
