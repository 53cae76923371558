"""
Nepal Guide Connect - trekking destinations, local guides and booking management.

This module initializes the application with proper logging configuration.
"""

import logging
import logging.config

from guideconnect.config import settings
from guideconnect.utils.logging_config import get_logging_config

__version__ = "0.1.0"
__app_name__ = "Nepal Guide Connect"


def setup_logging() -> None:
    """Configure logging for the application."""
    config = get_logging_config(
        level=settings.log_level,
        json_console=settings.environment == "production",
        log_dir="logs" if settings.log_to_file else None,
        sql_echo=settings.debug,
    )
    logging.config.dictConfig(config)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized for {__app_name__} v{__version__}")
    logger.info(f"Environment: {settings.environment}")
    logger.debug(f"Log level: {settings.log_level}, debug mode: {settings.debug}")


# Initialize logging when the package is imported
setup_logging()
