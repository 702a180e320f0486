from __future__ import annotations

import argparse
import asyncio

from resume_studio.ai.config import load_ai_config
from resume_studio.ai.errors import ConfigurationError
from resume_studio.ai.factory import get_backend
from resume_studio.ai.invoker import invoke
from resume_studio.ai.types import (
    Fatal,
    GenerationBackend,
    GenerationOutcome,
    GenerationRequest,
    NotFound,
    RateLimited,
    Success,
)


def describe(outcome: GenerationOutcome) -> str:
    if isinstance(outcome, Success):
        return "ONLINE" if outcome.text.strip() else "ONLINE (empty reply)"
    if isinstance(outcome, RateLimited):
        return "RATE LIMITED"
    if isinstance(outcome, NotFound):
        return "NOT FOUND"
    if isinstance(outcome, Fatal) and outcome.credential:
        return f"BAD CREDENTIAL ({outcome.error})"
    return f"FAILED ({outcome.error})"


async def probe(backend: GenerationBackend, models: list[str], prompt: str) -> dict[str, GenerationOutcome]:
    request = GenerationRequest(prompt=prompt, task="probe")
    results: dict[str, GenerationOutcome] = {}
    for model in models:
        print(f"Testing {model:<28} ... ", end="", flush=True)
        outcome = await invoke(backend, model, request)
        results[model] = outcome
        print(describe(outcome))
        if isinstance(outcome, Fatal) and outcome.credential:
            break
    return results


def main() -> None:
    cfg = load_ai_config()
    parser = argparse.ArgumentParser(description="Ping every configured model candidate and report which ones answer.")
    parser.add_argument(
        "--models",
        default=",".join(cfg.candidates),
        help="Comma-separated model names (default: AI_MODEL_CANDIDATES or the provider defaults).",
    )
    parser.add_argument("--prompt", default="Ping", help="Prompt sent to each model.")
    args = parser.parse_args()

    models = [item.strip() for item in args.models.split(",") if item.strip()]
    try:
        backend = get_backend(cfg)
    except ConfigurationError as exc:
        raise SystemExit(f"{exc} ({exc.hint})")

    print(f"Scanning {len(models)} {cfg.provider} models")
    results = asyncio.run(probe(backend, models, args.prompt))
    online = [name for name, outcome in results.items() if isinstance(outcome, Success)]
    print(f"Working models: {', '.join(online) if online else 'none'}")


if __name__ == "__main__":
    main()
