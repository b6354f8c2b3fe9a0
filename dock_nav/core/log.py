"""
Logging Setup
=============

Applies a LoggingConfig to the root logger: level, console output and an
optional size-rotated log file.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import LoggingConfig

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

logger = logging.getLogger(__name__)


def setup_logging(log_config: Optional[LoggingConfig] = None) -> logging.Logger:
    """Configure the root logger from a LoggingConfig.

    Existing handlers are replaced so repeated calls do not duplicate output.

    Returns:
        The configured root logger.
    """
    log_config = log_config or LoggingConfig()
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_config.level.upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    if log_config.console_enabled:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    if log_config.file_enabled:
        try:
            file_handler = RotatingFileHandler(
                log_config.file_path,
                maxBytes=log_config.max_file_size,
                backupCount=log_config.backup_count,
            )
        except OSError as e:
            logger.warning(f"Cannot open log file {log_config.file_path}: {e}")
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    return root
