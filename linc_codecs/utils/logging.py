"""Logging utility for the linc_codecs command line."""

import logging
from os import PathLike

logger = logging.getLogger()

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = logging.INFO) -> None:
    """Set up the logging configuration for the application."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=FORMAT)
    logging.captureWarnings(True)


def add_file_handler(log_file_path: str | PathLike[str]) -> None:
    """Add a file handler to the logger to log messages to a file."""
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(file_handler)
