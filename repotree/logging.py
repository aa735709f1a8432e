"""Logger setup shared by the analyze command, the service and the GitHub client.

Every module logs through a child of the ``repotree`` logger so a single call to
:func:`configure_logging` controls pipeline steps, tree collisions and request
traces together.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "repotree"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``repotree.<name>``, e.g. ``get_logger("github")``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send repotree logs to stderr, and to ``log_file`` when given.

    ``verbose`` lowers the threshold to DEBUG, which adds the per-request lines
    from the GitHub client and the branch/tree steps of each analysis.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Replace rather than stack handlers when main() runs more than once in a process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[repotree] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    # httpx reports each GitHub request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger


__all__ = ["configure_logging", "get_logger"]
