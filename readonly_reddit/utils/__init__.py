"""Shared utilities (structured logging)."""

from readonly_reddit.utils.logger import get_logger, log_api_call, setup_logging

__all__ = ["get_logger", "log_api_call", "setup_logging"]
