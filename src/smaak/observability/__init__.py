"""
Smaak - Logging setup.

Modules log through `logging.getLogger(__name__)`; entry points (CLI, web)
call setup_logging() once.
"""

import logging
import sys


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging with a compact stderr format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
