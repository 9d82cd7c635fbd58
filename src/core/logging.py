"""Logging configuration for hosts embedding the rules engines."""

import sys
from typing import Optional

from loguru import logger

from src.core.config import EngineSettings, load_settings


def setup_logging(settings: Optional[EngineSettings] = None) -> None:
    """Configure loguru.

    Args:
        settings: Log level / log file to use. Read from the environment when not given.
    """
    settings = settings or load_settings()

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.log_file,
            level=settings.log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
        )

    logger.debug(f"Logging configured at level: {settings.log_level}")
