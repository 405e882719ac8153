"""
Centralized logging configuration for the photo-to-level pipeline.

Log levels:
    DEBUG: Raw model responses, extraction details
    INFO: Pipeline stages, provenance, timings
    WARNING: Validation failures, repair attempts, fallback substitution
    ERROR: Model transport failures

Usage:
    from logging_config import setup_logging

    logger = setup_logging(__name__)
    logger.info("Analyzing photo")
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Attach stderr and/or file handlers to a logger and return it.

    The CLI calls this with name="" so that every scenes.* module logger
    propagates to the same handlers.

    Args:
        name: Logger name, or "" for the root logger
        level: Level applied to the logger and each handler
        log_file: Optional log file (parent directories are created)
        console_output: Whether to log to stderr
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Re-running the CLI setup in one process must not stack handlers
    logger.handlers.clear()

    handlers: List[logging.Handler] = []
    if console_output:
        # stdout is reserved for Scene JSON
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
