"""Logging configuration for the application."""
import logging
import sys
from typing import Optional

from devboard.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Default level per environment when LOG_LEVEL is not set
ENVIRONMENT_LEVELS = {
    "development": logging.DEBUG,
    "test": logging.WARNING,
}


def resolve_level(environment: str, override: Optional[str] = None) -> int:
    """Pick the log level from an explicit name, falling back to the environment."""
    if override:
        level = logging.getLevelName(override.upper())
        if isinstance(level, int):
            return level
    return ENVIRONMENT_LEVELS.get(environment, logging.INFO)


def configure_logging(environment: str, override: Optional[str] = None) -> logging.Logger:
    """
    Configure the "devboard" logger and the SQLAlchemy engine logger.

    The application logger writes to stdout. Safe to call more than once;
    the handler is only attached the first time.

    Args:
        environment: Deployment environment name
        override: Optional level name that wins over the environment default

    Returns:
        The application logger
    """
    level = resolve_level(environment, override)

    app_logger = logging.getLogger("devboard")
    app_logger.setLevel(level)

    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        app_logger.addHandler(handler)

    # Prevent duplicate logs
    app_logger.propagate = False

    # SQL echo stays in development; elsewhere only engine warnings surface
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if environment == "development" else logging.WARNING
    )

    return app_logger


logger = configure_logging(settings.environment, settings.log_level)

__all__ = ["configure_logging", "logger", "resolve_level"]
