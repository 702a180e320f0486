from __future__ import annotations

from functools import lru_cache

from resume_studio.ai.config import AIConfig, load_ai_config
from resume_studio.ai.errors import ConfigurationError
from resume_studio.ai.orchestrator import ModelOrchestrator
from resume_studio.ai.providers.gemini_provider import GeminiProvider
from resume_studio.ai.providers.openai_provider import OpenAIProvider
from resume_studio.ai.selector import ActiveModel
from resume_studio.ai.types import GenerationBackend


def get_backend(cfg: AIConfig) -> GenerationBackend:
    if cfg.provider == "gemini":
        return GeminiProvider(timeout_s=cfg.timeout_s)

    if cfg.provider == "openai":
        return OpenAIProvider(timeout_s=cfg.timeout_s)

    raise ConfigurationError(
        f"Unsupported AI_PROVIDER='{cfg.provider}'",
        hint="Set AI_PROVIDER to 'gemini' or 'openai'.",
    )


@lru_cache(maxsize=1)
def get_active_model() -> ActiveModel:
    return ActiveModel(load_ai_config().default_model)


@lru_cache(maxsize=1)
def _cached_orchestrator() -> ModelOrchestrator:
    cfg = load_ai_config()
    if not cfg.candidates:
        raise ConfigurationError(
            "No AI model candidates are configured.",
            hint="Set AI_MODEL_CANDIDATES to a comma-separated list of model names.",
        )
    return ModelOrchestrator(
        get_backend(cfg),
        cfg.candidates,
        get_active_model(),
        max_attempts_per_candidate=cfg.max_attempts_per_model,
        backoff_unit_s=cfg.backoff_unit_s,
        backoff_max_s=cfg.backoff_max_s,
        default_deadline_s=cfg.request_deadline_s,
    )


def get_orchestrator() -> ModelOrchestrator:
    """FastAPI dependency. Raises ``ConfigurationError`` before any network call
    when the provider credential is missing."""
    return _cached_orchestrator()
