"""
Configuration - Environment-driven settings and logging setup.

Environment variables:
    NASHMINES_ENV               development | production (default development)
    NASHMINES_LOG_LEVEL         Logging level name (default INFO)
    NASHMINES_STARTING_BALANCE  Balance for new and reset wallets (default 1000)
    NASHMINES_HISTORY_LIMIT     Default number of history rows returned (default 50)
    ALLOWED_ORIGINS             Comma-separated CORS origins (default *)
"""

from __future__ import annotations
import logging
import os

NASHMINES_ENV = os.getenv("NASHMINES_ENV", "development")
LOG_LEVEL = os.getenv("NASHMINES_LOG_LEVEL", "INFO").upper()
STARTING_BALANCE = float(os.getenv("NASHMINES_STARTING_BALANCE", "1000"))
HISTORY_LIMIT = int(os.getenv("NASHMINES_HISTORY_LIMIT", "50"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

LOGGER_NAME = "nashmines"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the package logger once.

    Library code only calls logging.getLogger("nashmines.<area>");
    entry points (CLI, API app) call this.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S")
        )
        logger.addHandler(handler)
    logger.setLevel(level or LOG_LEVEL)
    return logger
