# payplan/core/logs.py

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "payplan"
LOG_PATH = os.path.join("logs", "payplan.log")


def debug_enabled() -> bool:
    return os.getenv("PAYPLAN_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _has_debug_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def _attach_debug_handler(logger: logging.Logger) -> None:
    logger.setLevel(logging.DEBUG)
    try:
        os.makedirs(os.path.dirname(LOG_PATH), exist_ok=True)
        handler = RotatingFileHandler(LOG_PATH, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                datefmt="(%Y-%m-%d %H:%M:%S)",
            )
        )
        logger.addHandler(handler)
    except OSError:
        # logging must never break a calculation
        pass


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return the package logger or one of its children.

    Child loggers (e.g. "payplan.core.finance") propagate to the root "payplan"
    logger. PAYPLAN_DEBUG is checked on every call, so modules may grab their
    logger at import time: the rotating file handler under logs/ is attached to
    the root once, by the first call made while the flag is set (the CLI calls
    get_logger() at startup).
    """
    root = logging.getLogger(LOGGER_NAME)
    if debug_enabled() and not _has_debug_handler(root):
        _attach_debug_handler(root)

    if name is None or name == LOGGER_NAME:
        return root
    return root.getChild(name.removeprefix(f"{LOGGER_NAME}."))
