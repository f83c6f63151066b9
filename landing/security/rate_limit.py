"""Client identity and the coarse request limiter for system endpoints."""

from __future__ import annotations

from slowapi import Limiter
from starlette.requests import Request

UNKNOWN_CLIENT = "unknown"


def client_identifier(request: Request) -> str:
    """Return the address used to key rate limits.

    First entry of ``X-Forwarded-For``, then the direct peer address.
    ``"unknown"`` is a last resort and puts every such client in one bucket.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


limiter = Limiter(key_func=client_identifier, headers_enabled=False)
