"""Structured logging helpers."""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any

ROOT_LOGGER = 'ovr_text_classifier'

_level_override: int | None = None


def json_log(message: str, **extra: Any) -> str:
    """Return a JSON-formatted log string."""
    payload = {'ts': time.time(), 'msg': message, **extra}
    return json.dumps(payload, ensure_ascii=False, default=str)


def _default_level() -> int:
    if _level_override is not None:
        return _level_override
    return logging.DEBUG if os.getenv('OTC_DEBUG') else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger following project conventions."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.setLevel(_default_level())
    return logger


def set_level(level: int) -> None:
    """Apply ``level`` to every project logger created so far and to new ones."""
    global _level_override

    _level_override = level
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if isinstance(logger, logging.Logger) and name.startswith(ROOT_LOGGER):
            logger.setLevel(level)
