"""
Root logger setup shared by the web server and the console menu.

Both interfaces run in one process and write to the same stderr, so
log lines carry the logger name to tell the menu, the routes and the
store apart.  pymongo emits a record for every command it sends at
DEBUG level; those loggers are held at WARNING so that
``LOG_LEVEL=DEBUG`` shows the application's own debug output (request
bodies, listing sizes) without the driver traffic.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DRIVER_LOGGERS = ("pymongo", "motor")


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    quiet: Iterable[str] = DRIVER_LOGGERS,
) -> None:
    """Attach handlers to the root logger unless it already has some.

    ``level`` is a level name such as ``"debug"``; unknown names mean
    ``INFO``.  ``logfile``, when given, receives the same records as
    stderr.  Loggers named in ``quiet`` are raised to WARNING.

    Calling this again (a second ``create_app``, or under pytest which
    installs its own handlers) changes nothing.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
