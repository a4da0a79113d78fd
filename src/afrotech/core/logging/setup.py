from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .json_formatter import JSONFormatter

_LOGGER_NAME = "afrotech"
_CONFIGURED_ATTR = "_afrotech_json_logging"


def _parse_level(raw: str) -> int:
    normalized = raw.strip().upper()
    return getattr(logging, normalized, logging.INFO)


def _is_on(name: str, default: str = "on") -> bool:
    return os.getenv(name, default).strip().casefold() == "on"


def _has_configured(logger: logging.Logger, kind: type[logging.Handler]) -> bool:
    return any(isinstance(handler, kind) and getattr(handler, _CONFIGURED_ATTR, False) for handler in logger.handlers)


def configure_logging(state_dir: Path) -> logging.Logger:
    """Attach JSON handlers to the ``afrotech`` logger tree.

    Safe to call more than once: handlers carry a marker attribute and are
    only added when missing. Child loggers (``afrotech.gateway``,
    ``afrotech.chat`` ...) inherit the handlers.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_parse_level(os.getenv("AFROTECH_LOG_LEVEL", "INFO")))
    logger.propagate = False

    formatter = JSONFormatter()

    if not any(getattr(handler, _CONFIGURED_ATTR, False) and not isinstance(handler, RotatingFileHandler) for handler in logger.handlers):
        stdout_handler = logging.StreamHandler(stream=sys.stdout)
        stdout_handler.setFormatter(formatter)
        setattr(stdout_handler, _CONFIGURED_ATTR, True)
        logger.addHandler(stdout_handler)

    if _is_on("AFROTECH_LOG_TO_FILE", "on") and not _has_configured(logger, RotatingFileHandler):
        log_dir = Path(os.getenv("AFROTECH_LOG_DIR") or (state_dir / "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_dir / "afrotech.log",
            maxBytes=int(os.getenv("AFROTECH_LOG_MAX_BYTES", "5000000")),
            backupCount=int(os.getenv("AFROTECH_LOG_BACKUP_COUNT", "5")),
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        setattr(file_handler, _CONFIGURED_ATTR, True)
        logger.addHandler(file_handler)

    return logger
