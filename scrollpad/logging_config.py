"""Logging setup for the scrollpad application.

The editor owns the terminal while it runs, so log records go to a
rotating file rather than the screen. Console output to stderr is
optional and meant for non-interactive use.
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Optional

logger = logging.getLogger("scrollpad")

LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"


def setup_logging(log_file: Optional[str] = None, level: str = "INFO", console: bool = False) -> None:
    """Configure the ``scrollpad`` logger.

    Existing handlers are removed first so the function can be called
    more than once (e.g. from tests). Never raises: if the log directory
    cannot be created the file goes to the temp directory, and a handler
    that cannot be opened is reported on stderr and skipped.

    Args:
        log_file: Path of the rotating log file; None disables file logging.
        level: Level name such as ``"DEBUG"`` or ``"WARNING"``.
        console: Also log to stderr.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(log_level)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            try:
                os.makedirs(log_dir)
            except OSError as e_mkdir:
                print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
                log_file = os.path.join(tempfile.gettempdir(), "scrollpad.log")
                print(f"Logging to temporary file: '{log_file}'", file=sys.stderr)
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
        except OSError as e_fh:
            print(f"Error setting up file logger for '{log_file}': {e_fh}", file=sys.stderr)
        else:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            file_handler.setLevel(log_level)
            logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

    if not logger.handlers:
        # Keep records away from the terminal the editor draws on
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
