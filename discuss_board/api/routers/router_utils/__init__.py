"""Shared router helpers."""

from .error_handling import handle_service_errors
from .request_context import client_info

__all__ = ["client_info", "handle_service_errors"]
