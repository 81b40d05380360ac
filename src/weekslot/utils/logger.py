# File: src/weekslot/utils/logger.py
"""
Logging setup shared by every weekslot module.

Each module calls setup_logger(__name__) once at import time. Console
output follows Config.LOG_LEVEL; the daily file under Config.LOGS_DIR
always receives DEBUG records so a failed run can be replayed.
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Union

from weekslot.core.config_manager import Config

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s'


def resolve_level(level: Union[int, str, None]) -> int:
    """Numeric level for an int, a level name, or None (Config.LOG_LEVEL)."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level or Config.LOG_LEVEL).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def log_file_path(log_dir: Optional[Path] = None) -> Path:
    """Today's log file, e.g. logs/weekslot_20260120.log."""
    log_dir = Path(log_dir or Config.LOGS_DIR)
    return log_dir / f"weekslot_{date.today().strftime('%Y%m%d')}.log"


def setup_logger(name: str = "weekslot", level: Union[int, str, None] = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name, normally the module's __name__
        level: Console level (default: Config.LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    console_level = resolve_level(level)
    logger.setLevel(min(console_level, logging.DEBUG))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    log_file = log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(file_handler)

    return logger
