"""
Root logger setup for the club points service.

Console output is always on.  When ``LOG_FILE`` is set the same records
also go to a size-rotated file, so a long-running club server does not
grow one log forever.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"
DATE_FORMAT = "%d.%m.%Y %H:%M:%S"


def _file_handler(logfile: str, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    path = Path(logfile).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> None:
    """Attach console and optional rotating file handlers to the root logger.

    Does nothing if the root logger already has handlers, so building
    several apps in one process (as the tests do) logs each line once.
    Unknown level names fall back to ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(_file_handler(logfile, max_bytes, backup_count))

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
