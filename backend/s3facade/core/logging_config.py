"""
Logging Configuration
=====================
Centralized logging setup using loguru for structured logging.

Features:
- Structured JSON logging for production
- Human-readable logs for development
- Optional log file with rotation and retention
- botocore / aiobotocore logs routed through loguru
"""

import sys
import logging
from pathlib import Path
from typing import Optional

from loguru import logger

from s3facade.core.config import Settings, get_settings


# SDK loggers that would otherwise bypass loguru
SDK_LOGGERS = ("boto3", "botocore", "aioboto3", "aiobotocore")


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages and redirect to loguru.

    boto3 and botocore log through the standard library; this keeps their
    output in the same format as ours.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record through loguru

        Args:
            record: Standard library log record
        """
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure application-wide logging

    Sets up:
    - Console logging (stdout)
    - File logging with rotation when LOG_DIR is set
    - JSON formatting outside development
    - Intercepts SDK standard library logging

    Args:
        settings: Settings to use (defaults to the cached instance)
    """
    settings = settings or get_settings()

    # Remove default loguru handler
    logger.remove()

    # ========================================================================
    # CONSOLE LOGGING (stdout)
    # ========================================================================

    if settings.is_development:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stdout,
            format=log_format,
            level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )
    else:
        # Production: JSON format for log aggregation
        logger.add(
            sys.stdout,
            format="{message}",
            level=settings.LOG_LEVEL,
            serialize=True,
            backtrace=False,
            diagnose=False,
        )

    # ========================================================================
    # FILE LOGGING (optional)
    # ========================================================================

    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "s3facade_{time:YYYY-MM-DD}.log",
            rotation="00:00",  # Rotate at midnight
            retention="7 days",
            compression="zip",
            level="DEBUG",
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{name}:{function}:{line} | "
                "{message}"
            ),
        )

    # ========================================================================
    # INTERCEPT STANDARD LIBRARY LOGGING
    # ========================================================================

    sdk_level = logging.DEBUG if settings.DEBUG else logging.WARNING
    for name in SDK_LOGGERS:
        sdk_logger = logging.getLogger(name)
        sdk_logger.handlers = [InterceptHandler()]
        sdk_logger.setLevel(sdk_level)
        sdk_logger.propagate = False

    logger.info(f"Logging configured for {settings.ENVIRONMENT} environment")


def get_logger(name: Optional[str] = None) -> logger:
    """
    Get a logger instance

    Args:
        name: Optional logger name for context

    Returns:
        logger: Configured loguru logger
    """
    if name:
        return logger.bind(logger_name=name)
    return logger
