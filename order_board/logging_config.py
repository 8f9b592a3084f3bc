"""
Logging configuration for the Order Board

All modules log through loggers obtained with get_logger(); setup_logging()
is called once by each entry point (HTTP service, console board).
"""
import logging
import sys

from order_board.config import settings

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def setup_logging(level: str = None):
    """
    Configure the root logger.

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )

    # Reduce verbosity from external libraries
    logging.getLogger("pika").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name):
    """Return a logger that follows the global configuration"""
    return logging.getLogger(name)
