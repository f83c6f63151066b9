"""Security façade for client identity, rate limiting, and headers middleware."""

from landing.middleware.security import SecurityHeadersMiddleware  # noqa: F401

from .rate_limit import UNKNOWN_CLIENT, client_identifier, limiter  # noqa: F401

__all__ = [
    "UNKNOWN_CLIENT",
    "client_identifier",
    "limiter",
    "SecurityHeadersMiddleware",
]
