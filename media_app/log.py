import sys

from loguru import logger

from media_app.config import settings


def init_logger():
    """Route all service logs to a single stderr sink at the configured level"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        backtrace=settings.debug,
        diagnose=False,
    )
