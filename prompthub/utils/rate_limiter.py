from __future__ import annotations

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from prompthub.utils.jwtutils import extract_bearer_token


def get_client_identifier(request: Request) -> str:
    """
    Get a unique identifier for the client.

    Uses the bearer token if present, otherwise falls back to IP address.
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    if token:
        return f"token:{token[-32:]}"
    return get_remote_address(request)


# Create the limiter instance
limiter = Limiter(key_func=get_client_identifier)
