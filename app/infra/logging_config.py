"""
Logging setup shared by the API and the report actions engine.

``LoggingConfig`` configures the root logger once per process, using the
level from settings. ``get_logger`` hands out loggers under the application
namespace so engine modules never touch handlers themselves.
"""

import logging
import sys
from typing import Optional

from app.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER_NAME = "report_actions"


class LoggingConfig:
    """Configure process-wide logging from application settings."""

    _configured = False

    def __init__(self, level: Optional[str] = None) -> None:
        settings = get_settings()
        level_name = (level or settings.log_level).upper()
        self.level = getattr(logging, level_name, logging.INFO)
        self.configure()

    def configure(self) -> None:
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            logging.basicConfig(
                level=self.level,
                format=LOG_FORMAT,
                datefmt=DATE_FORMAT,
                stream=sys.stdout,
            )
        else:
            # Already configured by the server (uvicorn, pytest), only align the level
            root_logger.setLevel(self.level)
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(self.level)
        LoggingConfig._configured = True

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the application namespace.

    Args:
        name: Short component name, e.g. ``"visibility"``.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
