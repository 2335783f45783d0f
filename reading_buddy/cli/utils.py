"""Helpers shared by the CLI commands: config loading, error reporting
and colored output.
"""

import functools
from pathlib import Path
from typing import Callable, Optional, TypeVar

import structlog
import typer

from reading_buddy.models.config import ReadingBuddyConfig
from reading_buddy.observability.logging import configure_from_settings, configure_logging
from reading_buddy.services.config_manager import ConfigManager, ConfigValidationError
from reading_buddy.utils.exceptions import ReadingBuddyError

configure_logging()
logger = structlog.get_logger()

F = TypeVar("F", bound=Callable)


def load_config(config_path: Optional[Path]) -> ReadingBuddyConfig:
    """Load the config file, or defaults when no path is given.

    Logging is reconfigured from the file's ``logging`` section.

    Raises:
        typer.Exit: The file is missing or invalid (exit code 1)
    """
    if config_path is None:
        return ReadingBuddyConfig()

    try:
        config = ConfigManager(config_path=str(config_path)).load_config()
    except (FileNotFoundError, ConfigValidationError) as e:
        display_error(f"Configuration Error: {e}")
        raise typer.Exit(code=1)

    configure_from_settings(config.logging)
    return config


def handle_errors(func: F) -> F:
    """Turn command failures into a red message and exit code 1.

    Reading core errors are expected outcomes (bad range, missing book) and
    are logged as warnings; anything else is logged with its traceback.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except ReadingBuddyError as e:
            logger.warning(
                "command_failed",
                command=func.__name__,
                error_type=type(e).__name__,
                error=str(e),
            )
            display_error(f"Error: {e}")
            raise typer.Exit(code=1)
        except Exception as e:
            logger.exception("command_crashed", command=func.__name__)
            display_error(f"Error: {e}")
            raise typer.Exit(code=1)

    return wrapper  # type: ignore[return-value]


def display_success(message: str) -> None:
    typer.secho(message, fg=typer.colors.GREEN)


def display_warning(message: str) -> None:
    typer.secho(message, fg=typer.colors.YELLOW)


def display_error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)


def display_info(message: str) -> None:
    typer.secho(message, fg=typer.colors.CYAN)
