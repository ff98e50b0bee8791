"""
Logging setup for the rootdigits command line.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional


def setup_logging(log_file: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """
    Configure the "rootdigits" logger.

    Args:
        log_file: optional log file path, rotated at 10MB
        level: logging level name

    Returns:
        The configured logger

    Raises:
        ValueError: level is not a logging level name
    """
    numeric_level = logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown logging level: {level!r}")

    logger = logging.getLogger("rootdigits")
    logger.setLevel(numeric_level)

    # Drop existing handlers so repeated calls do not duplicate output
    logger.handlers = []

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
