"""
Error handling for the CLI.

Commands run their body through run_with_error_handling(), which turns
library exceptions into one stderr line and a process exit code.
"""

import sys
from collections.abc import Callable

import click

from makeimage import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    MakeImageError,
    NetworkError,
    ResponseError,
    UrlError,
)
from makeimage.cli import progress
from makeimage.cli.utils import EXIT_API_OR_NETWORK, EXIT_CONFIGURATION

# (exception type, exit code, message when the exception has none); first match wins
_EXIT_CODES: tuple[tuple[type[BaseException], int, str], ...] = (
    (ConfigurationError, EXIT_CONFIGURATION, "Invalid configuration."),
    (UrlError, EXIT_CONFIGURATION, "Invalid endpoint URL."),
    (EncodeError, EXIT_CONFIGURATION, "Could not encode the request body."),
    (ResponseError, EXIT_API_OR_NETWORK, "The image API rejected the request."),
    (DecodeError, EXIT_API_OR_NETWORK, "The image API returned an unreadable response."),
    (NetworkError, EXIT_API_OR_NETWORK, "Could not reach the image API."),
    (MakeImageError, EXIT_API_OR_NETWORK, "An error occurred."),
)


def map_exception_to_exit(exc: BaseException) -> tuple[int, str]:
    """Return (exit_code, user_message) for exc."""
    for exc_type, code, fallback in _EXIT_CODES:
        if isinstance(exc, exc_type):
            return code, str(exc) or fallback
    return EXIT_API_OR_NETWORK, str(exc) or "An unexpected error occurred."


def report_error(message: str, *, quiet: bool = False) -> None:
    """Print an error on stderr: plain text when quiet, Rich markup otherwise."""
    if quiet:
        click.echo(message, err=True)
    else:
        progress.print_error(message)


def run_with_error_handling(
    fn: Callable[[], None],
    *,
    quiet: bool = False,
    debug: bool = False,
) -> None:
    """
    Call fn() and exit with the mapped code if it raises.

    With debug set, exceptions from outside the library propagate with their
    traceback instead of being reduced to one line.
    """
    try:
        fn()
    except MakeImageError as e:
        code, message = map_exception_to_exit(e)
        report_error(message, quiet=quiet)
        sys.exit(code)
    except Exception as e:
        if debug:
            raise
        code, message = map_exception_to_exit(e)
        report_error(message, quiet=quiet)
        sys.exit(code)


__all__ = [
    "map_exception_to_exit",
    "report_error",
    "run_with_error_handling",
]
