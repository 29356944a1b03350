"""
Loguru logging setup.

Environment variables:
- LOG_LEVEL: default INFO
- LOG_JSON: true → one JSON record per line on stdout, false → colored lines on stderr

uvicorn and pymongo log through the stdlib; InterceptHandler forwards those
records to loguru so everything shares one sink.
"""

from __future__ import annotations

import logging
import os
import sys

from loguru import logger


def _log_json() -> bool:
    return os.getenv("LOG_JSON", "false").strip().lower() in {"1", "true", "yes", "on"}


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the stdlib caller, not this handler
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


PRETTY_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(app_name: str, *, service: str = "api", env: str = "prod") -> None:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger().setLevel(logging.INFO)

    if _log_json():
        handler = {"sink": sys.stdout, "serialize": True, "level": level}
    else:
        handler = {"sink": sys.stderr, "level": level, "colorize": True, "format": PRETTY_FORMAT}

    logger.configure(
        handlers=[handler],
        extra={"app": app_name, "env": env, "service": service},
    )

    # Request logging is done by RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    logger.debug("Logging configured")
