"""
Logging Configuration Module
Handles application-wide logging with structured JSON logging, rotation, and performance tracking
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
import json
import traceback
from datetime import datetime, timezone
from typing import Optional


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    EXTRA_FIELDS = (
        "request_id",
        "processing_time",
        "endpoint",
        "status_code",
        "operation",
        "bytes_copied",
        "exception_type",
    )

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add exception information if present
        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """Colored formatter for better console readability"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        formatted_msg = super().format(record)
        formatted_msg = formatted_msg.replace(
            record.levelname,
            f"{color}{record.levelname}{reset}"
        )

        return formatted_msg


def setup_logging(
    log_level: str = "INFO",
    log_dir: str = "logs",
    enable_json: bool = True,
    enable_colors: bool = True
):
    """
    Configure structured logging with console and rotating file handlers

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory to store log files
        enable_json: Enable JSON formatting for file logs
        enable_colors: Enable colored output for console logs
    """

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove handlers from a previous call
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)

    if enable_colors and sys.stdout.isatty():
        console_formatter = ColoredConsoleFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    file_formatter = JSONFormatter() if enable_json else logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    app_handler = RotatingFileHandler(
        log_path / "app.log",
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    app_handler.setLevel(logging.INFO)
    app_handler.setFormatter(file_formatter)
    root_logger.addHandler(app_handler)

    # Errors and critical only
    error_handler = RotatingFileHandler(
        log_path / "error.log",
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(file_formatter)
    root_logger.addHandler(error_handler)

    perf_handler = RotatingFileHandler(
        log_path / "performance.log",
        maxBytes=10*1024*1024,  # 10MB
        backupCount=3,
        encoding='utf-8'
    )
    perf_handler.setLevel(logging.INFO)
    perf_handler.setFormatter(file_formatter)

    perf_logger = logging.getLogger("performance")
    for handler in perf_logger.handlers[:]:
        perf_logger.removeHandler(handler)
    perf_logger.addHandler(perf_handler)
    perf_logger.setLevel(logging.INFO)
    perf_logger.propagate = False

    # Suppress noisy third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    root_logger.info(
        f"Logging initialized - Level: {log_level}, Directory: {log_dir}, "
        f"JSON: {enable_json}, Colors: {enable_colors}"
    )

    return root_logger


def log_performance(
    operation: str,
    duration: float,
    request_id: Optional[str] = None,
    **kwargs
):
    """
    Log performance metrics

    Args:
        operation: Operation being logged
        duration: Duration in seconds
        request_id: Optional request identifier
        **kwargs: Additional metadata
    """
    perf_logger = logging.getLogger("performance")

    extra = {
        "operation": operation,
        "processing_time": duration,
    }

    if request_id:
        extra["request_id"] = request_id

    extra.update(kwargs)

    perf_logger.info(
        f"{operation} completed in {duration:.3f}s",
        extra=extra
    )
