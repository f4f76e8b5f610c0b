"""
Centralized logging configuration for the reservations client.

This module configures loguru for console and file logging and provides the
helper used to record every backend call.
"""
import sys
from pathlib import Path
from typing import Optional
from loguru import logger


def configure_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "logs",
    rotation: str = "100 MB",
    retention: str = "30 days",
    format_type: str = "detailed"
) -> None:
    """
    Configure loguru logging for the application.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        log_dir: Directory for log files
        rotation: When to rotate log files (e.g., "100 MB", "1 day")
        retention: How long to keep old log files
        format_type: Format style ("simple", "detailed", "json")
    """
    # Remove default logger
    logger.remove()

    serialize = format_type == "json"
    if format_type == "simple":
        format_string = "<level>{level: <8}</level> | <level>{message}</level>"
    elif serialize:
        format_string = "{message}"
    else:  # detailed
        format_string = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

    logger.add(
        sys.stderr,
        format=format_string,
        level=log_level,
        colorize=not serialize,
        serialize=serialize,
        backtrace=True,
        diagnose=False
    )

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "reservations_client_{time:YYYY-MM-DD}.log",
            format=format_string,
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize,
            backtrace=True,
            diagnose=False
        )

        # Backend calls only, for auditing traffic against the API
        logger.add(
            log_path / "api_calls_{time:YYYY-MM-DD}.log",
            format=format_string,
            level="DEBUG",
            rotation="1 day",
            retention=retention,
            compression="zip",
            filter=lambda record: record["extra"].get("category") == "API"
        )

    logger.info(
        f"Logging configured: level={log_level}, "
        f"file_logging={log_to_file}, "
        f"format={format_type}"
    )


def log_api_call(
    operation: str,
    method: str,
    url: str,
    success: bool,
    duration: float,
    details: Optional[dict] = None
) -> None:
    """
    Log a call to the reservations backend.

    Args:
        operation: Client operation (e.g., "create_reservation")
        method: HTTP method
        url: Requested URL
        success: Whether the call succeeded
        duration: Duration in seconds
        details: Additional call details (status code, outcome)
    """
    details = details or {}
    level = "INFO" if success else "WARNING"

    logger.bind(category="API").log(
        level,
        f"API {operation} {method} {url} | "
        f"success={success} | "
        f"duration={duration:.3f}s | "
        f"details={details}"
    )
