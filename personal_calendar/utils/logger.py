# File: personal_calendar/utils/logger.py
"""
Centralized logging configuration for the personal calendar.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from personal_calendar.core.config_manager import Config


class DelayedFileHandler(logging.FileHandler):
    """File handler that creates its directory only when the file is opened."""
    
    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


def setup_logger(name: str = "personal_calendar", level: Optional[int] = None) -> logging.Logger:
    """
    Configure and return a logger instance.
    
    Args:
        name: Logger name
        level: Logging level (default: Config.LOG_LEVEL)
    
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    
    # Prevent duplicate handlers
    if logger.handlers:
        return logger
    
    if level is None:
        level = logging.getLevelName(Config.LOG_LEVEL)
        if not isinstance(level, int):
            level = logging.INFO
    
    logger.setLevel(level)
    
    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    
    console_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)
    
    # File handler for persistent logs, opened on the first record
    if Config.LOG_TO_FILE:
        log_file = Config.LOGS_DIR / f"personal_calendar_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = DelayedFileHandler(log_file, encoding='utf-8', delay=True)
        file_handler.setLevel(logging.DEBUG)
        
        # More detailed format for file
        file_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)
    
    return logger


class LoggerMixin:
    """Mixin to add logging capability to any class."""
    
    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        if not hasattr(self, '_logger'):
            self._logger = setup_logger(f"personal_calendar.{self.__class__.__name__}")
        return self._logger
