"""
Logging Configuration
"""

import sys
from typing import Optional
from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure loguru sinks
    
    Logs go to stderr so stdout only carries the deployed address.
    
    Args:
        level: Console log level
        log_file: Optional file sink (rotated daily)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )
    
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )
