"""
Logging setup for makeimage.

Everything logs under the ``makeimage`` logger. Nothing is attached to it
until set_verbosity() or configure_logging() runs, so applications embedding
the library keep full control of their own logging.

Verbosity:
    0  INFO, request activity and timings
    1  as 0, plus prompt text
    2  DEBUG, plus URLs, status codes and coordinator rounds

The API key and base64 image payloads are never logged.
"""

import logging
import os

ROOT_LOGGER_NAME = "makeimage"
VERBOSITY_ENV = "MAKEIMAGE_VERBOSITY"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

# verbosity -> (logger level, log prompt text)
_VERBOSITY_LEVELS = {
    0: (logging.INFO, False),
    1: (logging.INFO, True),
    2: (logging.DEBUG, True),
}

_prompt_logging = False
_handler: logging.Handler | None = None


def _package_logger() -> logging.Logger:
    """Return the makeimage logger, attaching a stderr handler on first use."""
    global _handler
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is None:
        if root.handlers:
            _handler = root.handlers[0]
        else:
            _handler = logging.StreamHandler()
            _handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            root.addHandler(_handler)
    return root


def _apply(level: int, prompts: bool) -> None:
    global _prompt_logging
    _package_logger().setLevel(level)
    _prompt_logging = prompts


def set_verbosity(level: int) -> None:
    """Set verbosity 0, 1 or 2. Values outside that range are clamped."""
    _apply(*_VERBOSITY_LEVELS[min(max(level, 0), 2)])


def configure_logging(verbose_level: int = 0, quiet: bool = False) -> None:
    """Apply CLI logging flags; quiet keeps warnings and errors only."""
    if quiet:
        _apply(logging.WARNING, False)
    else:
        set_verbosity(verbose_level)


def log_prompts() -> bool:
    return _prompt_logging


def get_verbosity_from_env() -> int:
    """Read MAKEIMAGE_VERBOSITY; anything but 1 or 2 counts as 0."""
    raw = os.environ.get(VERBOSITY_ENV, "").strip()
    return int(raw) if raw in ("1", "2") else 0


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, parented under makeimage."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


__all__ = [
    "ROOT_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "get_verbosity_from_env",
    "log_prompts",
    "set_verbosity",
]
