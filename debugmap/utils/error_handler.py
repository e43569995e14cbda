"""Centralized error handler for dmap commands."""

import traceback
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from typing import Any

import click

from debugmap.utils.logging import logger

from .constants import DMAP_DIR, ERROR_LOG_FILE


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that logs unexpected command failures and re-raises them for click."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            DMAP_DIR.mkdir(parents=True, exist_ok=True)

            error_type = type(e).__name__
            error_msg = str(e)
            tb = traceback.format_exc()

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
                f.write("\n" + "=" * 80 + "\n")
                f.write(f"[{datetime.now().isoformat()}] Error in command: {func.__name__}\n")
                f.write("=" * 80 + "\n")
                f.write(f"{error_type}: {error_msg}\n\n")
                f.write(tb)
                f.write("=" * 80 + "\n\n")

            user_message = (
                f"{error_type}: {error_msg}\n\n"
                f"Full traceback logged to: {ERROR_LOG_FILE}"
            )

            raise click.ClickException(user_message) from e

    return wrapper
