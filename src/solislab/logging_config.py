"""
Logging Setup
Attaches console and optional file output to the 'solislab' logger tree.
Library modules only call logging.getLogger(__name__); the CLI calls
setup_logging once per invocation.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route 'solislab.*' records to stdout and, optionally, a log file.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a log file, truncated on every call.
    """
    pkg_logger = logging.getLogger("solislab")
    pkg_logger.setLevel(level)
    # main() may run several times in one process (tests, notebooks)
    pkg_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        pkg_logger.addHandler(handler)

    pkg_logger.debug(f"Logging set up at level {logging.getLevelName(level)}")
