"""
Helpers for passing request and payload context to ``logger.extra``.

Credentials never reach the log stream: keys that look like secrets are
masked and collections are reduced to their size.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any
from uuid import UUID

REDACTED = "***"
SENSITIVE_KEY_PARTS = ("password", "token", "secret", "authorization")


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in SENSITIVE_KEY_PARTS)


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Render a value for ``extra=`` context.

    Args:
        value: Value to render
        max_length: Longest string kept before truncation

    Returns:
        str: Short representation; lists and dicts become size summaries
    """
    if value is None:
        return "None"
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (list, tuple, set)):
        rendered = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        rendered = f"dict({len(value)} keys)"
    else:
        rendered = str(value)

    if len(rendered) > max_length:
        return rendered[:max_length] + f"... (truncated, {len(rendered)} total)"
    return rendered


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log ``message`` with every context value rendered by ``safe_log_value``.

    Values under sensitive keys (``refresh_token``, ``password`` ...) are
    replaced by a mask.
    """
    safe_context = {
        key: REDACTED if is_sensitive_key(key) else safe_log_value(value)
        for key, value in context.items()
    }
    logger.log(level, message, extra=safe_context)
