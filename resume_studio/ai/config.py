from __future__ import annotations

import os
from dataclasses import dataclass

from resume_studio.core.config import _get_env_float, _get_env_int

DEFAULT_MODELS = {
    "gemini": (
        "gemini-2.0-flash",
        "gemini-2.0-flash-exp",
        "gemini-1.5-flash",
        "gemini-1.5-flash-latest",
        "gemini-pro",
        "gemini-1.0-pro",
    ),
    "openai": ("gpt-4o-mini", "gpt-4o", "gpt-4.1-mini"),
}
DEFAULT_ACTIVE_MODEL = {
    "gemini": "gemini-1.5-flash",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    candidates: tuple[str, ...]
    default_model: str
    max_attempts_per_model: int
    backoff_unit_s: float
    backoff_max_s: float
    request_deadline_s: float | None
    timeout_s: float


def _split_models(raw: str | None) -> tuple[str, ...]:
    values = [item.strip() for item in (raw or "").split(",")]
    return tuple(item for item in values if item)


def load_ai_config() -> AIConfig:
    """Read the AI settings from the environment.

    Malformed numbers fall back to their defaults and negative retry numbers are
    clamped to zero.
    """
    provider = os.getenv("AI_PROVIDER", "gemini").strip().lower()
    candidates = _split_models(os.getenv("AI_MODEL_CANDIDATES")) or DEFAULT_MODELS.get(provider, ())
    default_model = (
        os.getenv("AI_DEFAULT_MODEL") or DEFAULT_ACTIVE_MODEL.get(provider) or (candidates[0] if candidates else "")
    ).strip()
    deadline_s = _get_env_float("AI_REQUEST_DEADLINE_S", 90.0)
    timeout_s = _get_env_float("AI_TIMEOUT_S", 60.0)
    return AIConfig(
        provider=provider,
        candidates=candidates,
        default_model=default_model,
        max_attempts_per_model=max(0, _get_env_int("AI_MAX_ATTEMPTS_PER_MODEL", 2)),
        backoff_unit_s=max(0.0, _get_env_float("AI_BACKOFF_UNIT_S", 1.0)),
        backoff_max_s=max(0.0, _get_env_float("AI_BACKOFF_MAX_S", 8.0)),
        request_deadline_s=deadline_s if deadline_s > 0 else None,
        timeout_s=timeout_s if timeout_s > 0 else 60.0,
    )
