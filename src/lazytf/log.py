"""Logging configuration.

The terminal belongs to the TUI, so log records go to a file only.
"""

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_dir() -> Path:
    base = os.environ.get("XDG_CACHE_HOME") or os.path.expanduser("~/.cache")
    return Path(base) / "lazytf"


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> Path:
    """Send ``lazytf.*`` records to ``<log_dir>/lazytf.log``.

    Returns the path of the log file.  Calling this again replaces the
    previously installed handler.
    """
    directory = log_dir or get_log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / "lazytf.log"

    logger = logging.getLogger("lazytf")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return log_path
