"""Logging setup for the game: rotating file log plus console output."""

import logging
import os
from logging.handlers import RotatingFileHandler

from core.settings import get_app_dir

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_MAX_BYTES = 200_000
LOG_BACKUPS = 3


def default_log_path():
    return os.path.join(get_app_dir(), "logs", "app.log")


def setup_logging(level="INFO", log_path=None):
    """Configure the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level)
    # Fresh handlers each launch; closed handlers can block writes
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    log_path = log_path or default_log_path()
    try:
        os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
    except OSError as e:
        root.warning("Log folder unavailable (%s); logging to console only", e)
        return root

    handler = RotatingFileHandler(
        log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8", delay=True
    )
    handler.setFormatter(fmt)
    root.addHandler(handler)
    return root


def shutdown_logging():
    for h in list(logging.getLogger().handlers):
        h.flush()
        h.close()
