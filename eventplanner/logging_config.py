"""Logging configuration for the application."""

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_HANDLER_NAME = "eventplanner"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if not any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(_FORMAT))
        console_handler.set_name(_HANDLER_NAME)
        root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    for noisy in ("httpx", "httpcore", "dateparser", "tzlocal"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
