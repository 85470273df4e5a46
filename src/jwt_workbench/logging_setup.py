"""
Shared logging configuration for the jwt-workbench commands.

Provides a file handler (always DEBUG) and a console handler (WARNING
by default, DEBUG when verbose).
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

from .config import PROJECT_ROOT

# Log directory — logs/ under the project root unless configured otherwise
LOG_DIR = os.path.join(PROJECT_ROOT, "logs")


def setup_logging(
    verbose: bool = False,
    log_prefix: str = "jwt_workbench",
    log_dir: str | None = None,
    log_to_file: bool = True,
) -> str | None:
    """Configure logging with an optional file handler and a console handler.

    - File handler: always DEBUG level, writes to <log_dir>/<prefix>_<timestamp>.log
    - Console handler: WARNING+ by default (errors/warnings always visible).
      When *verbose* is True, console level drops to DEBUG so all detail is
      printed to the terminal as well.

    Returns the path to the log file, or None when *log_to_file* is False.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers (e.g. from basicConfig)
    root_logger.handlers.clear()

    log_path = None
    if log_to_file:
        log_dir = log_dir or LOG_DIR
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d-%H%M%S")
        log_path = os.path.join(log_dir, f"{log_prefix}_{timestamp}.log")

        # File handler — always captures everything
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_fmt = logging.Formatter(
            "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_fmt)
        root_logger.addHandler(file_handler)

    # Console handler — minimal unless verbose
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_fmt = logging.Formatter(
        "%(levelname)-8s  %(message)s" if not verbose
        else "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_fmt)
    root_logger.addHandler(console_handler)

    return log_path
