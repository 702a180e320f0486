"""Failure classification for upstream generation calls.

Every retry/failover decision hinges on which bucket a failure lands in, so the
status and substring rules live here and nowhere else. A known HTTP status wins
over the message text; text is only matched when the SDK gave no status.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    NOT_FOUND = "not_found"
    CREDENTIAL = "credential"
    FATAL = "fatal"


_CREDENTIAL_MARKERS = (
    "api key not valid",
    "api_key_invalid",
    "invalid api key",
    "incorrect api key",
    "api key expired",
    "unauthenticated",
)
# 400/403 replies that name the key itself (leaked, blocked, disabled, wrong project).
_KEY_REJECTED_MARKERS = _CREDENTIAL_MARKERS + (
    "api key",
    "api_key",
    "leaked",
    "service_blocked",
)
_RATE_LIMIT_MARKERS = (
    "429",
    "quota",
    "rate limit",
    "rate_limit",
    "resource_exhausted",
    "too many requests",
)
_NOT_FOUND_MARKERS = (
    "404",
    "not found",
    "not_found",
)


def _mentions(text: str, markers: tuple[str, ...]) -> bool:
    return any(marker in text for marker in markers)


def classify_failure(message: str | None, status_code: int | None = None) -> FailureKind:
    text = (message or "").lower()

    if status_code is not None:
        if status_code == 401:
            return FailureKind.CREDENTIAL
        if status_code in {400, 403} and _mentions(text, _KEY_REJECTED_MARKERS):
            return FailureKind.CREDENTIAL
        if status_code == 429:
            return FailureKind.RATE_LIMITED
        # 403 without a key complaint means the key works but this model is off limits.
        if status_code in {403, 404}:
            return FailureKind.NOT_FOUND
        return FailureKind.FATAL

    if _mentions(text, _CREDENTIAL_MARKERS):
        return FailureKind.CREDENTIAL
    if _mentions(text, _RATE_LIMIT_MARKERS):
        return FailureKind.RATE_LIMITED
    if _mentions(text, _NOT_FOUND_MARKERS):
        return FailureKind.NOT_FOUND
    return FailureKind.FATAL
