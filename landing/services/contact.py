"""Contact form submission handling.

``ContactService.submit`` runs a fixed sequence: rate check, presence
check, sanitize, email format, message length, persist, notify admin,
notify submitter. The first failing step raises and later steps never run.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime
from typing import NoReturn

from sqlalchemy.orm import Session

from landing.config import settings
from landing.errors import InternalError, InvalidInput, RateLimited
from landing.observability.metrics import record_submission
from landing.services.mailer import Mailer
from landing.services.mailer import mailer as default_mailer
from landing.services.notifications import (
    ADMIN_SUBJECT,
    CONFIRMATION_SUBJECT,
    render_admin_notification,
    render_confirmation,
)
from landing.services.rate_window import (
    InMemoryRateLimitStore,
    SubmissionRateLimiter,
    utcnow,
)
from landing.services.sanitize import (
    MAX_MESSAGE_LENGTH,
    MIN_MESSAGE_LENGTH,
    is_valid_email,
    is_valid_message,
    sanitize_input,
)
from landing.services.submissions import SubmissionRepository

logger = logging.getLogger(__name__)

CONFIRMATION_MESSAGE = "Thank you for your message. We will get back to you soon!"
MISSING_FIELDS = "All fields are required"
INVALID_EMAIL = "Invalid email format"
INVALID_MESSAGE_LENGTH = (
    f"Message must be between {MIN_MESSAGE_LENGTH} and "
    f"{MAX_MESSAGE_LENGTH} characters"
)


class ContactService:
    def __init__(
        self,
        limiter: SubmissionRateLimiter,
        repository: SubmissionRepository,
        mailer: Mailer,
        *,
        admin_addr: str,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.limiter = limiter
        self.repository = repository
        self.mailer = mailer
        self.admin_addr = admin_addr
        self.clock = clock

    def submit(
        self,
        db: Session,
        name: str | None,
        email: str | None,
        message: str | None,
        client_key: str,
    ) -> str:
        """Process one submission and return the confirmation message.

        Raises:
            RateLimited: ``client_key`` has used its allowance for the window.
            InvalidInput: a field is missing or fails validation.
            InternalError: storing the record or sending either email failed.
        """
        decision = self.limiter.hit(client_key)
        if not decision.allowed:
            record_submission("rate_limited")
            logger.warning(
                "Contact submission rate limited",
                extra={
                    "client_key": client_key,
                    "outcome": "rate_limited",
                    "request_count": decision.entry.count,
                },
            )
            raise RateLimited(
                retry_after=max(1, math.ceil(decision.retry_after.total_seconds()))
            )

        if not name or not email or not message:
            self._reject(MISSING_FIELDS, client_key)

        name = sanitize_input(name)
        email = sanitize_input(email)
        message = sanitize_input(message)

        if not is_valid_email(email):
            self._reject(INVALID_EMAIL, client_key)
        if not is_valid_message(message):
            self._reject(INVALID_MESSAGE_LENGTH, client_key)

        try:
            submission = self.repository.create(
                db,
                name=name,
                email=email,
                message=message,
                created_at=self.clock(),
            )
            self.mailer.send(
                subject=ADMIN_SUBJECT,
                html=render_admin_notification(submission),
                to_addr=self.admin_addr,
                reply_to=submission.email,
            )
            self.mailer.send(
                subject=CONFIRMATION_SUBJECT,
                html=render_confirmation(submission),
                to_addr=submission.email,
            )
        except Exception as exc:
            record_submission("failed")
            logger.exception(
                "Contact form submission failed",
                extra={"client_key": client_key, "outcome": "failed"},
            )
            raise InternalError() from exc

        record_submission("accepted")
        logger.info(
            "Contact submission accepted",
            extra={
                "client_key": client_key,
                "outcome": "accepted",
                "submission_id": submission.id,
            },
        )
        return CONFIRMATION_MESSAGE

    @staticmethod
    def _reject(reason: str, client_key: str) -> NoReturn:
        record_submission("invalid")
        logger.info(
            "Contact submission rejected: %s",
            reason,
            extra={"client_key": client_key, "outcome": "invalid"},
        )
        raise InvalidInput(reason)


def build_contact_service() -> ContactService:
    limiter = SubmissionRateLimiter(
        InMemoryRateLimitStore(),
        max_requests=settings.contact_rate_limit_max_requests,
        window=settings.contact_rate_limit_window,
    )
    return ContactService(
        limiter,
        SubmissionRepository(),
        default_mailer,
        admin_addr=settings.email_admin_addr,
    )


contact_service = build_contact_service()


def get_contact_service() -> ContactService:
    return contact_service
