"""Centralized logging configuration for the application."""
import logging
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime
import pytz

from cryptory.core.config import get_settings

# Get Korea timezone
KST = pytz.timezone('Asia/Seoul')


class KSTFormatter(logging.Formatter):
    """Formatter that renders record times in Korea Standard Time."""

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=KST)
        if datefmt:
            return dt.strftime(datefmt)
        else:
            return dt.strftime('%Y-%m-%d %H:%M:%S %Z')


def setup_logging(log_dir: str = None, level: str = None):
    """Configure application-wide logging with file and console handlers.

    Args:
        log_dir: Directory for the rotating log files (defaults to settings)
        level: Root log level name (defaults to settings)
    """
    settings = get_settings()
    logs_dir = log_dir or settings.log_dir
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    # Ensure logs directory exists
    os.makedirs(logs_dir, exist_ok=True)

    kst_formatter = KSTFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(kst_formatter)
    root_logger.addHandler(console_handler)

    # Main application log file (rotating)
    app_file_handler = RotatingFileHandler(
        os.path.join(logs_dir, "app.log"),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=10,
        encoding='utf-8'
    )
    app_file_handler.setLevel(log_level)
    app_file_handler.setFormatter(kst_formatter)
    root_logger.addHandler(app_file_handler)

    # Error log file (ERROR level only, rotating)
    error_file_handler = RotatingFileHandler(
        os.path.join(logs_dir, "error.log"),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(kst_formatter)
    root_logger.addHandler(error_file_handler)

    # API log file (for Upbit / Naver calls)
    api_logger = logging.getLogger('api')
    api_logger.handlers.clear()
    api_file_handler = RotatingFileHandler(
        os.path.join(logs_dir, "api.log"),
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=10,
        encoding='utf-8'
    )
    api_file_handler.setLevel(logging.DEBUG)
    api_file_handler.setFormatter(kst_formatter)
    api_logger.addHandler(api_file_handler)

    logging.info(f"Logging system initialized - logs saved to '{logs_dir}/' directory")
