"""
Logging configuration for the User Records API.

``create_app`` calls ``setup_logging`` with ``Settings.log_level`` and
``Settings.log_file`` (``LOG_LEVEL`` / ``LOG_FILE`` in the environment).
What ends up in the log:

* ``services.user_service`` reports each created, updated and deleted
  user at INFO;
* ``core.errors`` reports every rejected request (kind and details) at
  WARNING and unhandled exceptions with their traceback at ERROR;
* ``services.record_store`` notes where the SQLite store lives.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Does nothing when the root logger already has handlers, so building
    several apps in one process (as the test suite does) does not
    duplicate output.  Unknown level names fall back to ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
