"""Logging setup for the command line driver. Library modules only create their own `logging.getLogger(__name__)`."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Single stream handler on stderr, so log records never mix with the board printed on stdout."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("chess_rules")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
