from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

from app.config.settings import settings

# Libraries whose chatter is not useful at our log levels
SILENCED_LIBRARIES = ("asyncpg", "sqlalchemy.pool", "httpx", "httpcore")

# Track if logging has been configured to prevent re-initialization
_configured = False


def _get_log_filename() -> str:
    """Generate a log filename with current date and time."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return f"{timestamp}.log"


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level_name = logger.level(record.levelname).name
        except ValueError:
            level_name = record.levelno

        # Find caller from where the logging call originated
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level_name, record.getMessage()
        )


def configure_logging(level: str | None = None) -> None:
    """
    Configure logging with loguru, redirect standard logging to loguru,
    and silence noisy third-party libraries.
    - level: optional override for the minimum log level; if None the level
      comes from settings.LOG_LEVEL, then from settings.ENV
      ("development" -> DEBUG; else INFO).
    """
    global _configured
    if _configured:
        return

    env = settings.ENV.lower()
    is_production = env == "production"

    if level is None:
        level = settings.LOG_LEVEL or ("DEBUG" if env == "development" else "INFO")
    level = level.upper()

    # Remove default loguru handlers
    logger.remove()

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = log_dir / _get_log_filename()

    # File format (always human-readable, no colors)
    file_fmt = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "{message}"
    )

    logger.add(
        log_file_path,
        level=level,
        format=file_fmt,
        enqueue=True,
        backtrace=True,
        diagnose=not is_production,
        encoding="utf-8",
    )

    if is_production:
        # JSON structured logs to stdout
        logger.add(
            sys.stdout,
            level=level,
            serialize=True,
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )
    else:
        fmt = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stdout,
            level=level,
            format=fmt,
            enqueue=True,
            backtrace=True,
            diagnose=True,
            colorize=True,
        )

    stdlib_level = logging.getLevelName(level)

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(stdlib_level)

    # Ensure uvicorn loggers also funnel through loguru
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [InterceptHandler()]
        uvicorn_logger.setLevel(stdlib_level)
        uvicorn_logger.propagate = False

    for lib_name in SILENCED_LIBRARIES:
        noisy_logger = logging.getLogger(lib_name)
        noisy_logger.setLevel(logging.WARNING)
        noisy_logger.propagate = False
        noisy_logger.handlers = [InterceptHandler()]

    _configured = True
    logger.info(f"Logging configured: level={level}, environment={env}, log_file={log_file_path}")
