"""Common utilities and shared functionality."""

from .logging_utils import (
    setup_logging,
    log_server_message,
)

__all__ = [
    "setup_logging",
    "log_server_message",
]
