from __future__ import annotations

import logging

LOG_FORMAT = "%(message)s"
DEBUG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> int:
    """Set the root log level, adding a stderr handler if none is installed.

    Returns the numeric level that was applied. Unknown level names raise
    ``ValueError``.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
    else:
        numeric = level
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=DEBUG_FORMAT if numeric <= logging.DEBUG else LOG_FORMAT)
    root.setLevel(numeric)
    return numeric
