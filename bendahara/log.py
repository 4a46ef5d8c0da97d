"""Root logger setup: console plus a rotating log file."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or os.getenv("LOG_FILE", "logs/bot.log")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    formatter = logging.Formatter(FORMAT)

    if not any(type(h) is logging.StreamHandler for h in root_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)

    log_path = Path(log_file).expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    if not any(isinstance(h, RotatingFileHandler) and getattr(h, 'baseFilename', None) == str(log_path) for h in root_logger.handlers):
        file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # httpx logs every polling request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root_logger


__all__ = ["setup_logging"]
