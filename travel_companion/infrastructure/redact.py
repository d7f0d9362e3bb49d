"""Helpers for redacting personal data and credentials in log lines."""

from __future__ import annotations

import re

_REDACTED = "***REDACTED***"

_EMAIL_RE = re.compile(r"(?P<local>[A-Za-z0-9._%+-]+)@(?P<domain>[A-Za-z0-9.-]+\.[A-Za-z]{2,})")
_BEARER_RE = re.compile(r"(?i)(?P<prefix>\bbearer\s+)(?P<value>[A-Za-z0-9._~+/=-]+)")
_PASSWORD_RE = re.compile(
    r"(?i)(?P<prefix>[\"']?(?:password|password_hash|passwd|token|secret)[\"']?\s*[:=]\s*[\"']?)(?P<value>[^\"',\s}]+)"
)
_JWT_RE = re.compile(r"\beyJ[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}\b")


def _mask_email(match: re.Match[str]) -> str:
    local = match.group("local")
    return f"{local[0]}***@{match.group('domain')}"


def redact_sensitive(text: str) -> str:
    """Mask email local parts and credential values while keeping the surrounding text."""
    if not text:
        return text

    redacted = str(text)
    redacted = _JWT_RE.sub(_REDACTED, redacted)
    for pattern in (_BEARER_RE, _PASSWORD_RE):
        redacted = pattern.sub(lambda m: f"{m.group('prefix')}{_REDACTED}", redacted)
    return _EMAIL_RE.sub(_mask_email, redacted)


__all__ = ["redact_sensitive"]
