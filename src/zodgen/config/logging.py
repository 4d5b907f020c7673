"""Logging configuration for zodgen.

Log records go to stderr (and optionally a file) so that generated source
written to stdout or piped elsewhere is never interleaved with diagnostics.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from .settings import get_settings

LOGGER_NAMESPACE = "zodgen"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    """Translate a level name such as ``"warning"`` to its numeric value."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the ``zodgen`` logger.

    Replaces any handlers installed by an earlier call, so commands can
    reconfigure logging freely.

    Args:
        level: Level name; defaults to the ``log_level`` setting
        log_file: Optional file receiving the same records as stderr
        format_string: Optional custom format string

    Returns:
        The configured ``zodgen`` logger

    Raises:
        ValueError: If the level name is not a logging level
    """
    settings = get_settings()
    numeric_level = _resolve_level(level or settings.log_level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(_handler(logging.StreamHandler(sys.stderr), numeric_level, formatter))

    log_path = log_file or settings.log_file
    if log_path:
        logger.addHandler(
            _handler(logging.FileHandler(log_path, encoding="utf-8"), numeric_level, formatter)
        )

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``zodgen`` namespace, configuring logging on first use."""
    if not logging.getLogger(LOGGER_NAMESPACE).handlers:
        setup_logging()

    if name == LOGGER_NAMESPACE or name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
