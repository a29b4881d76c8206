"""Structured logging configuration."""

import logging
import sys
from pythonjsonlogger import jsonlogger
from agent_tools.infra.config import config

LOGGER_NAME = "agent_tools"


def setup_logging() -> logging.Logger:
    """Setup structured JSON logging for the agent_tools package."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Remove existing handlers so repeated setup does not duplicate output
    logger.handlers = []

    if config.LOG_JSON:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Third-party noise
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return logger


# Initialize logging
app_logger = setup_logging()
