"""
Observability module.

Logging configuration, request logging and correlation ID propagation.
"""

from discuss_board.observability.correlation import get_correlation_id, set_correlation_id
from discuss_board.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "set_correlation_id",
]
