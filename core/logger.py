"""
=========================================
Centralized logging for bulk INSERT tools.
=========================================

Provides consistent logging setup across all modules with:
- Console output on stderr, optionally colored with level emojis
- Optional file output under a log directory
- Level and log file defaults taken from core.config (LOG_LEVEL, LOG_FILE)

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> # Reconfigure logging at application start
    >>> setup_logging(log_level='DEBUG', log_file='bulk_insert.log')
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Loading batch")
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import config

LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
COLORED_FORMAT = '%(emoji)s %(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Console formatter adding ANSI colors and emoji level indicators.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
        EMOJI: Dict mapping log levels to emoji indicators
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    EMOJI = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️ ',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🔥'
    }

    def format(self, record):
        # Work on a copy so other handlers still see the plain level name
        record = copy.copy(record)
        levelname = record.levelname
        record.emoji = self.EMOJI.get(levelname, '')
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True
) -> None:
    """Configure the root logger with console and/or file handlers.

    Replaces any handlers already attached to the root logger, so it can be
    called again to reconfigure logging.

    Args:
        log_level: Logging level name (defaults to config LOG_LEVEL)
        log_file: Optional log file name (e.g., 'bulk_insert.log')
        log_dir: Directory for the log file (defaults to 'logs/')
        console_output: If True, log to stderr
        use_colors: If True, use the colored formatter on the console

    Example:
        >>> setup_logging(log_level='DEBUG', console_output=True, use_colors=False)
    """
    level = getattr(logging, (log_level or config.log_level).upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        if use_colors:
            console_handler.setFormatter(ColoredFormatter(COLORED_FORMAT, datefmt=LOG_DATE_FORMAT))
        else:
            console_handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=LOG_DATE_FORMAT))
        root_logger.addHandler(file_handler)


def _init_default_logging():
    """Configure logging from core.config unless the application already did."""
    if not logging.getLogger().handlers:
        setup_logging(log_file=config.logging.log_file)


# Auto-initialize on import
_init_default_logging()
