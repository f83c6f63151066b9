"""Logging and metrics wiring."""

from __future__ import annotations

from landing.observability.logging import configure_logging
from landing.observability.metrics import (
    MetricsMiddleware,
    metrics_response,
    record_submission,
)

__all__ = [
    "MetricsMiddleware",
    "configure_logging",
    "metrics_response",
    "record_submission",
]
