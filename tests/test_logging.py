"""Tests for JSON logging with correlation IDs."""

from __future__ import annotations

import io
import json
import logging
from contextlib import contextmanager
from uuid import uuid4

from asgi_correlation_id.context import correlation_id
from pythonjsonlogger.json import JsonFormatter

from landing.observability.logging import (
    CorrelationIdFilter,
    SubmissionFieldsFilter,
    configure_logging,
)

CONTACT_BODY = {
    "name": "Jo",
    "email": "jo@x.com",
    "message": "Hello there, testing.",
}


def _record(name: str = "landing.test", msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, msg, (), None)


@contextmanager
def json_lines():
    """Configure logging and collect each emitted line as a parsed dict."""
    configure_logging("INFO")
    handler = next(
        h
        for h in logging.getLogger().handlers
        if isinstance(h.formatter, JsonFormatter)
    )
    stream = io.StringIO()
    previous = handler.setStream(stream)
    lines: list[dict] = []
    try:
        yield lines
    finally:
        handler.setStream(previous)
        lines.extend(
            json.loads(line) for line in stream.getvalue().splitlines() if line
        )


class TestCorrelationIdFilter:
    def test_uses_current_correlation_id(self):
        token = correlation_id.set("req-123")
        try:
            record = _record()
            assert CorrelationIdFilter().filter(record) is True
            assert record.correlation_id == "req-123"
        finally:
            correlation_id.reset(token)

    def test_placeholder_outside_requests(self):
        record = _record()
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"


class TestSubmissionFieldsFilter:
    def test_defaults_missing_fields_on_contact_records(self):
        record = _record("landing.services.contact")
        record.client_key = "198.51.100.1"
        SubmissionFieldsFilter().filter(record)
        assert record.client_key == "198.51.100.1"
        assert record.outcome is None
        assert record.submission_id is None

    def test_leaves_other_loggers_alone(self):
        record = _record("landing.services.mailer")
        SubmissionFieldsFilter().filter(record)
        assert not hasattr(record, "outcome")


def test_configure_logging_emits_json():
    with json_lines() as lines:
        logging.getLogger("landing.test").info("submission stored")
    payload = lines[-1]
    assert payload["message"] == "submission stored"
    assert payload["level"] == "INFO"
    assert payload["name"] == "landing.test"
    assert "correlation_id" in payload
    assert "outcome" not in payload


def test_contact_outcomes_logged_as_fields(contact_client):
    headers = {"X-Forwarded-For": "198.51.100.9"}
    with json_lines() as lines:
        for _ in range(5):
            contact_client.post("/api/contact", json=CONTACT_BODY, headers=headers)
        response = contact_client.post(
            "/api/contact", json=CONTACT_BODY, headers=headers
        )
    assert response.status_code == 429

    contact = [line for line in lines if line["name"] == "landing.services.contact"]
    accepted = [line for line in contact if line["outcome"] == "accepted"]
    limited = [line for line in contact if line["outcome"] == "rate_limited"]

    assert len(accepted) == 5
    assert all(line["client_key"] == "198.51.100.9" for line in accepted)
    assert all(isinstance(line["submission_id"], int) for line in accepted)

    assert len(limited) == 1
    assert limited[0]["client_key"] == "198.51.100.9"
    assert limited[0]["submission_id"] is None
    assert limited[0]["level"] == "WARNING"
    assert limited[0]["correlation_id"] != "-"


def test_invalid_submission_logged_with_outcome(contact_client):
    with json_lines() as lines:
        contact_client.post(
            "/api/contact",
            json={"name": "Jo"},
            headers={"X-Forwarded-For": "198.51.100.10"},
        )
    [line] = [line for line in lines if line.get("outcome") == "invalid"]
    assert line["client_key"] == "198.51.100.10"
    assert line["submission_id"] is None


def test_correlation_header_echoed(client):
    request_id = uuid4().hex
    response = client.get("/healthz", headers={"X-Request-ID": request_id})
    assert response.headers["X-Request-ID"] == request_id
