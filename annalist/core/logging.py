"""
Logging configuration for annalist.
"""

import logging
import sys
from typing import Optional
from pathlib import Path


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""
    
    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[94m',      # Blue
        'WARNING': '\033[93m',   # Yellow
        'ERROR': '\033[91m',     # Red
        'CRITICAL': '\033[95m',  # Magenta
        'RESET': '\033[0m',      # Reset
        'BOLD': '\033[1m',       # Bold
    }
    
    def format(self, record):
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        
        if levelname in ['ERROR', 'CRITICAL']:
            record.msg = f"{self.COLORS['BOLD']}{record.msg}{self.COLORS['RESET']}"
        
        return super().format(record)


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity <= 2:
        return logging.INFO
    return logging.DEBUG


def setup_logger(
    name: str = "annalist",
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    verbosity: int = 0
) -> logging.Logger:
    """
    Set up the annalist logger.
    
    Args:
        name: Logger name
        level: Logging level (overrides verbosity if provided)
        log_file: Optional log file path
        verbosity: Verbosity level (0=warnings only, 1=progress, 2=paths, 3=debug)
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()
    
    if level is None:
        level = _level_for_verbosity(verbosity)
    logger.setLevel(level)
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logger.level)
    console_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console_handler.setFormatter(ColoredFormatter(console_format))
    logger.addHandler(console_handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        
        # No colors in files
        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        
        logger.addHandler(file_handler)
    
    return logger


def get_logger(name: str = "annalist") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
