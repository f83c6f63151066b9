"""Denylist sanitizer and field checks for contact form input.

The sanitizer strips literal substrings only. It is not an HTML parser and
gives no guarantee against every injection vector; output is still escaped
wherever it is rendered.
"""

from __future__ import annotations

import re

MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 1000

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _strip_once(value: str) -> str:
    value = value.strip()
    value = _ANGLE_BRACKETS.sub("", value)
    value = _JS_PROTOCOL.sub("", value)
    return _EVENT_HANDLER.sub("", value)


def sanitize_input(value: str) -> str:
    """Trim and strip ``<``/``>``, ``javascript:`` and ``on<word>=``.

    Passes repeat until nothing changes, so removing one pattern cannot
    leave behind a new match (``javajavascript:script:``) and the result is
    stable under re-sanitization.
    """
    while True:
        cleaned = _strip_once(value)
        if cleaned == value:
            return cleaned
        value = cleaned


def is_valid_email(email: str) -> bool:
    return _EMAIL.fullmatch(email) is not None


def is_valid_message(message: str) -> bool:
    return MIN_MESSAGE_LENGTH <= len(message) <= MAX_MESSAGE_LENGTH
