"""Persistence for contact submissions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from landing.models.submission import Submission


class SubmissionRepository:
    """Write-only access to ``contact_submissions``."""

    def create(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        message: str,
        created_at: datetime,
    ) -> Submission:
        """Insert and commit a submission.

        The session is rolled back on failure and the error re-raised, so no
        row exists when this raises.
        """
        submission = Submission(
            name=name, email=email, message=message, created_at=created_at
        )
        db.add(submission)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(submission)
        return submission
