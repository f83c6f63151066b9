"""HTML email bodies for contact submissions."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from landing.config import settings
from landing.models.submission import Submission

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

ADMIN_SUBJECT = "New Contact Form Submission"
CONFIRMATION_SUBJECT = "Thank you for contacting us"


def nl2br(value: str) -> Markup:
    """Escape ``value`` and turn newlines into ``<br>`` tags."""
    return Markup("<br>").join(escape(value).split("\n"))


env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)
env.filters["nl2br"] = nl2br


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC; naive values (SQLite) are already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def render_admin_notification(submission: Submission) -> str:
    return env.get_template("admin_notification.html").render(
        submission=submission, submitted_at=as_utc(submission.created_at)
    )


def render_confirmation(submission: Submission) -> str:
    return env.get_template("submission_confirmation.html").render(
        submission=submission, site_name=settings.site_name
    )
