from __future__ import annotations

import logging
import os
import sys

from loguru import logger

_VALID_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
_configured = False


class InterceptHandler(logging.Handler):
    """Route stdlib logging (uvicorn, fastapi) through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def resolve_level(raw: str | None) -> str:
    level = (raw or "INFO").strip().upper()
    return level if level in _VALID_LEVELS else "INFO"


def setup_logging(level: str | None = None) -> None:
    """Configure the loguru stderr sink. Level comes from LOG_LEVEL unless given."""
    global _configured
    raw = level if level is not None else os.getenv("LOG_LEVEL", "INFO")
    resolved = resolve_level(raw)

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,
    )
    if resolved != raw.strip().upper():
        logger.warning("Invalid LOG_LEVEL '{}', using {}", raw, resolved)

    if not _configured:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
        _configured = True
    logger.debug("Logging initialized with level: {}", resolved)
