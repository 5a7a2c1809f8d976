"""
Structured logging utilities for the tilawa library.

Provides a configured logger and helper functions for consistent logging.
"""

import logging
import sys
from typing import Optional

from tilawa.config import get_settings


# Default format for tilawa logs
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "tilawa") -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (default: "tilawa")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def configure_logging(
    level: int | str | None = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure logging for the tilawa library.

    Args:
        level: Logging level (default: settings.log_level)
        format_string: Log format string (default: DEFAULT_FORMAT)
        date_format: Date format string (default: DEFAULT_DATE_FORMAT)
        stream: Output stream (default: sys.stderr)

    Returns:
        Configured root logger for tilawa
    """
    if level is None:
        level = get_settings().log_level

    logger = logging.getLogger("tilawa")
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def enable_debug_logging() -> None:
    """Enable debug-level logging for the tilawa library."""
    configure_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Disable all tilawa logging."""
    logger = logging.getLogger("tilawa")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())


_logger = get_logger()


def log_corpus_loaded(path: str, chapter_count: int, verse_count: int) -> None:
    """Log corpus load event."""
    _logger.info(f"Loaded Quran corpus: {path} ({chapter_count} chapters, {verse_count} verses)")


def log_chapter_appended(chapter_id: int, verse_count: int, direction: str) -> None:
    """Log a chapter block added to a reading window."""
    _logger.debug(
        f"Reading window extended {direction}: chapter {chapter_id} ({verse_count} verses)"
    )


def log_audio_downloaded(verse_key: str, path: str) -> None:
    """Log a recitation file fetched into the cache."""
    _logger.info(f"Downloaded audio for {verse_key}: {path}")


def log_warning(message: str, **context) -> None:
    """Log a warning with optional context."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.warning(f"{message} ({ctx_str})")
    else:
        _logger.warning(message)


def log_error(message: str, exc_info: bool = False, **context) -> None:
    """Log an error with optional context and exception info."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.error(f"{message} ({ctx_str})", exc_info=exc_info)
    else:
        _logger.error(message, exc_info=exc_info)
