"""Structured logging utilities."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from concierge.utils.config import get_settings


ROOT_LOGGER_NAME = "concierge"

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure process-wide logging once.

    The stdout handler sits on the root logger at WARNING; the configured
    level applies to the `concierge` tree only, so server and HTTP client
    loggers keep their own verbosity.
    """

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    settings = get_settings()
    resolved_level = (level or settings.log_level).upper()

    logging.basicConfig(
        level=logging.WARNING,
        format=(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        ),
        stream=sys.stdout,
    )
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(resolved_level)
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger under the `concierge` tree.

    Names outside the package (`app`, `__main__`) are prefixed so every
    project log line shares one level switch.
    """
    configure_logging()
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
