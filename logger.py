# logger.py

"""
Logging setup using Loguru.

Loguru does not do printf-style formatting, use f-strings or "{}" placeholders:
    logger.info(f"Added category {title}")
"""

import sys

from loguru import logger

from config import get_settings

_configured = False


def setup_logger() -> None:
    """Install the console sink. Safe to call more than once."""
    global _configured
    if _configured:
        return

    level = get_settings().log_level.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = "INFO"

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        backtrace=True,
        diagnose=False,
    )
    _configured = True


__all__ = ["logger", "setup_logger"]
