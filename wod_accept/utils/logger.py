"""Logging configuration"""
import logging
import os
import sys
from typing import Optional


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Set up and return a logger instance"""
    logger = logging.getLogger(name)
    
    if level is None:
        level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)
    
    return logger
