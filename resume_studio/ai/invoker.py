from __future__ import annotations

import logging

from resume_studio.ai.classify import FailureKind, classify_failure
from resume_studio.ai.errors import (
    UpstreamCallError,
    UpstreamFatal,
    UpstreamModelUnavailable,
    UpstreamRateLimited,
)
from resume_studio.ai.types import (
    Fatal,
    GenerationBackend,
    GenerationOutcome,
    GenerationRequest,
    ModelCandidate,
    NotFound,
    RateLimited,
    Success,
)

logger = logging.getLogger(__name__)


def _first_line(value: str) -> str:
    return value.strip().split("\n", 1)[0]


def outcome_from_exception(candidate: ModelCandidate, exc: Exception) -> RateLimited | NotFound | Fatal:
    status_code = exc.status_code if isinstance(exc, UpstreamCallError) else None
    message = _first_line(str(exc)) or exc.__class__.__name__
    kind = classify_failure(message, status_code)

    if kind is FailureKind.RATE_LIMITED:
        return RateLimited(UpstreamRateLimited(message, model=candidate, cause=exc))
    if kind is FailureKind.NOT_FOUND:
        return NotFound(UpstreamModelUnavailable(message, model=candidate, cause=exc))
    return Fatal(
        UpstreamFatal(
            message,
            model=candidate,
            cause=exc,
            credential=kind is FailureKind.CREDENTIAL,
        )
    )


async def invoke(
    backend: GenerationBackend,
    candidate: ModelCandidate,
    request: GenerationRequest,
) -> GenerationOutcome:
    try:
        text = await backend.generate(candidate, request.prompt, request.attachment)
    except Exception as exc:  # noqa: BLE001 - every failure becomes an outcome
        outcome = outcome_from_exception(candidate, exc)
        logger.debug(
            "ai_invoke_failed backend=%s model=%s task=%s outcome=%s",
            backend.name,
            candidate,
            request.task,
            type(outcome).__name__,
        )
        return outcome
    return Success(text or "")
