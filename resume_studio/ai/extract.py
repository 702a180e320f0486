from __future__ import annotations

import json
import re
from typing import Any

from resume_studio.ai.errors import MalformedModelOutput

_LEADING_FENCE = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")


def _outermost_brace_span(text: str) -> str | None:
    # Greedy: first "{" to last "}". Not a balanced-brace scan.
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def strip_code_fences(text: str) -> str:
    stripped = _LEADING_FENCE.sub("", text, count=1)
    stripped = _TRAILING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json(raw_text: str | None) -> dict[str, Any]:
    text = raw_text or ""

    span = _outermost_brace_span(text)
    if span is not None:
        parsed = _loads_object(span)
        if parsed is not None:
            return parsed

    parsed = _loads_object(strip_code_fences(text))
    if parsed is not None:
        return parsed

    raise MalformedModelOutput("The AI response did not contain a valid JSON object.", raw_text=text)
