"""Centralized logging configuration for ghtree.

Every ghtree logger hangs below the ``ghtree`` logger, which owns one
handler. The handler writes to stdout unless told otherwise; the CLI moves it
to stderr while printing JSON so that stdout carries nothing but the payload.
"""

import logging
import sys
from contextlib import contextmanager
from typing import IO, Iterator, Optional

_ROOT_LOGGER_NAME = "ghtree"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler owned by the ghtree logger, None until setup_root_logger runs
_handler: Optional[logging.Handler] = None


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Install the single handler of the ``ghtree`` logger.

    Repeated calls return the installed handler unchanged until
    ``reset_logging`` is called.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string (default: ``DEFAULT_FORMAT``).
        handler: Custom handler. Takes precedence over ``stream``.
        stream: Stream for the default StreamHandler (default: stdout).

    Returns:
        The handler now attached to the ``ghtree`` logger.
    """
    global _handler

    if _handler is not None:
        return _handler

    if handler is None:
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    # Let records propagate so pytest's caplog sees them
    root_logger.propagate = True

    _handler = handler
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits the ghtree configuration.

    Args:
        name: Logger name (typically __name__ from calling module).
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``ghtree`` logger and its handler."""
    handler = setup_root_logger()
    logging.getLogger(_ROOT_LOGGER_NAME).setLevel(level)
    handler.setLevel(level)


def set_log_stream(stream: IO[str]) -> Optional[IO[str]]:
    """Point the ghtree handler at ``stream``.

    Args:
        stream: The new destination, e.g. ``sys.stderr``.

    Returns:
        The stream written to before the call, or None if the installed
        handler is not a StreamHandler (it is then left untouched).
    """
    handler = setup_root_logger()
    if not isinstance(handler, logging.StreamHandler):
        return None
    previous = handler.stream
    handler.setStream(stream)
    return previous


@contextmanager
def log_stream(stream: IO[str]) -> Iterator[None]:
    """Send ghtree log records to ``stream`` for the duration of the block."""
    previous = set_log_stream(stream)
    try:
        yield
    finally:
        if previous is not None:
            set_log_stream(previous)


def reset_logging() -> None:
    """Drop the installed handler (mainly for testing)."""
    global _handler
    _handler = None

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
