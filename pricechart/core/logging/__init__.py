"""Logging utilities for monitoring and debugging."""

from pricechart.core.logging.config import LogConfig
from pricechart.core.logging.logger import (
    configure_logging,
    log_context,
    logger,
)

__all__ = [
    "LogConfig",
    "configure_logging",
    "log_context",
    "logger",
]
