"""Retry and failover across model candidates.

For each candidate in order, rate-limited calls are retried with a growing
backoff; a missing model or a model-specific failure moves on to the next
candidate; a rejected credential aborts the whole run. The first success wins
and is remembered as the active model.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from resume_studio.ai.errors import (
    AllCandidatesExhausted,
    ConfigurationError,
    GenerationDeadlineExceeded,
    UpstreamError,
)
from resume_studio.ai.extract import extract_json
from resume_studio.ai.invoker import invoke
from resume_studio.ai.selector import ActiveModel, build_candidate_order
from resume_studio.ai.types import (
    Fatal,
    GenerationBackend,
    GenerationRequest,
    ModelCandidate,
    NotFound,
    RateLimited,
    Success,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS_PER_CANDIDATE = 2
DEFAULT_BACKOFF_UNIT_S = 1.0
DEFAULT_BACKOFF_MAX_S = 8.0


def backoff_delay(attempt: int, unit_s: float, max_s: float) -> float:
    """Delay before retrying a call that was rate limited at ``attempt`` (0-based)."""
    return min((attempt + 1) * unit_s, max_s)


class ModelOrchestrator:
    """Drives a backend across ordered candidates.

    ``max_attempts_per_candidate`` counts the rate-limit retries a candidate gets
    after its first call; ``sleep`` must be non-blocking.
    """

    def __init__(
        self,
        backend: GenerationBackend,
        candidates: Sequence[ModelCandidate],
        active: ActiveModel,
        *,
        max_attempts_per_candidate: int = DEFAULT_MAX_ATTEMPTS_PER_CANDIDATE,
        backoff_unit_s: float = DEFAULT_BACKOFF_UNIT_S,
        backoff_max_s: float = DEFAULT_BACKOFF_MAX_S,
        default_deadline_s: float | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not candidates:
            raise ValueError("At least one model candidate must be configured.")
        if max_attempts_per_candidate < 0:
            raise ValueError("max_attempts_per_candidate must be >= 0")
        self._backend = backend
        self._candidates = tuple(candidates)
        self._active = active
        self._max_attempts = max_attempts_per_candidate
        self._backoff_unit_s = backoff_unit_s
        self._backoff_max_s = backoff_max_s
        self._default_deadline_s = default_deadline_s
        self._sleep = sleep
        self._clock = clock

    @property
    def backend(self) -> GenerationBackend:
        return self._backend

    @property
    def active(self) -> ActiveModel:
        return self._active

    def candidate_order(self) -> list[ModelCandidate]:
        return build_candidate_order(self._candidates, self._active)

    async def generate(self, request: GenerationRequest, *, deadline_s: float | None = None) -> str:
        budget = deadline_s if deadline_s is not None else self._default_deadline_s
        deadline_at = self._clock() + budget if budget is not None else None

        order = self.candidate_order()
        tried: list[ModelCandidate] = []
        last_error: UpstreamError | None = None

        for candidate in order:
            tried.append(candidate)
            attempt = 0
            while True:
                if deadline_at is not None and self._clock() >= deadline_at:
                    raise GenerationDeadlineExceeded(
                        "The AI service did not answer in time. Please try again later.",
                        last_error=last_error,
                        tried=tried,
                    )

                outcome = await invoke(self._backend, candidate, request)

                if isinstance(outcome, Success):
                    self._active.record_success(candidate)
                    logger.info(
                        "ai_generate_success model=%s task=%s retries=%s",
                        candidate,
                        request.task,
                        attempt,
                    )
                    return outcome.text

                last_error = outcome.error

                if isinstance(outcome, Fatal) and outcome.credential:
                    logger.error("ai_credential_rejected model=%s: %s", candidate, outcome.error)
                    raise ConfigurationError(
                        "The AI provider rejected the configured API key.",
                        hint=f"Check the {self._backend.name.upper()}_API_KEY environment variable.",
                        code="invalid_credentials",
                    ) from outcome.error

                if isinstance(outcome, RateLimited) and attempt < self._max_attempts:
                    delay = backoff_delay(attempt, self._backoff_unit_s, self._backoff_max_s)
                    if deadline_at is not None:
                        delay = max(0.0, min(delay, deadline_at - self._clock()))
                    logger.warning(
                        "ai_rate_limited model=%s attempt=%s retry_in=%.2fs",
                        candidate,
                        attempt,
                        delay,
                    )
                    await self._sleep(delay)
                    attempt += 1
                    continue

                if isinstance(outcome, NotFound):
                    logger.warning("ai_model_unavailable model=%s: %s", candidate, outcome.error)
                elif isinstance(outcome, RateLimited):
                    logger.warning("ai_rate_limit_exhausted model=%s retries=%s", candidate, attempt)
                else:
                    logger.warning("ai_model_failed model=%s: %s", candidate, outcome.error)
                break

        logger.error("ai_all_models_failed tried=%s last_error=%s", tried, last_error)
        raise AllCandidatesExhausted(
            "All AI models are currently unavailable. Please try again later.",
            last_error=last_error,
            tried=tried,
        ) from last_error

    async def generate_json(self, request: GenerationRequest, *, deadline_s: float | None = None) -> dict[str, Any]:
        text = await self.generate(request, deadline_s=deadline_s)
        return extract_json(text)
