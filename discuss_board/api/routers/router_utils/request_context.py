"""
Request metadata helpers.

Dependencies: fastapi
System role: Extract client details recorded with sessions
"""

from fastapi import Request


def client_info(request: Request) -> tuple[str | None, str | None]:
    """
    Read the user agent and client IP of a request.

    ``X-Forwarded-For`` wins over the socket peer when present; only its
    first hop is used.

    Returns:
        tuple: (user_agent, ip_address)
    """
    user_agent = request.headers.get("user-agent")
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip() or None
    else:
        ip_address = request.client.host if request.client else None
    return user_agent, ip_address
