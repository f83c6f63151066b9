"""Client-facing errors raised by the contact submission flow."""

from __future__ import annotations

from fastapi import status


class SubmissionError(Exception):
    """Base error carrying an HTTP status and a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RateLimited(SubmissionError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(
        self,
        message: str = "Too many requests. Please try again later.",
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class InvalidInput(SubmissionError):
    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(SubmissionError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self, message: str = "Failed to process your request. Please try again later."
    ) -> None:
        super().__init__(message)
