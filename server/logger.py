# server/logger.py

import logging


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configures the console handler shared by every server module."""
    logger = logging.getLogger("server")
    logger.setLevel(level)

    # Prevent adding multiple handlers if called more than once
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger
