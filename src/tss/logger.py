"""Logging configuration for tss with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels between the standard logging levels
CHANGES_LEVEL = 25  # Between INFO (20) and WARNING (30) - verbosity level 1
CHECKS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - verbosity level 2

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0  # Only errors
VERBOSITY_CHANGES = 1  # Stylesheet loads, swaps and cache invalidation
VERBOSITY_CHECKS = 2  # Rule counts, missing highlight groups
VERBOSITY_DEBUG = 3  # Every rule match

_LEVEL_MAP = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class TssLogger(logging.Logger):
    """Logger with semantic verbosity methods.

    - changes(): verbosity level 1 - a stylesheet file was loaded, a
      StyleCache swapped its stylesheet or dropped its cached styles
    - checks(): verbosity level 2 - rule and selector counts after each
      parse, and highlight declarations skipped because the base theme
      has no entry for the group
    - debug(): verbosity level 3 - every rule that applies to a node
      during resolution, with its position in the stylesheet
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a state change: stylesheet loads, swaps, cache invalidation."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a validation result: parse summaries, skipped declarations."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> TssLogger:
    """Get the tss logger instance (singleton).

    Returns:
        The tss logger singleton instance
    """
    logging.setLoggerClass(TssLogger)
    logger = logging.getLogger("tss")
    assert isinstance(logger, TssLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the tss logger with a verbosity level.

    Can be called multiple times to reconfigure the logger.

    Args:
        verbosity: 0=silent (errors only), 1=changes, 2=checks, 3=debug
        stream: Optional output stream (defaults to sys.stderr)
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVEL_MAP.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to a clean state (used between tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def debug_enabled() -> bool:
    """Check if debug-level logging is enabled (verbosity >= 3)."""
    return get_logger().isEnabledFor(logging.DEBUG)
