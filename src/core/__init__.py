"""Core utilities for the bundle stock service.

This package contains the shared building blocks:
- logging: Structured logging configuration
- http_retry: Retry with exponential backoff for platform calls
"""

from src.core.logging import get_logger, log_event, setup_logging


__all__ = [
    "get_logger",
    "log_event",
    "setup_logging",
]
