from __future__ import annotations

import base64
import os
from typing import Any, Optional

from openai import APIError, APIStatusError, AsyncOpenAI

from resume_studio.ai.errors import ConfigurationError, UpstreamCallError
from resume_studio.ai.types import (
    Attachment,
    InlineAttachment,
    ModelCandidate,
    RemoteFileAttachment,
)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


class OpenAIProvider:
    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        temperature: float = 0.2,
    ):
        self._temperature = temperature
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key or _looks_like_placeholder(key):
            raise ConfigurationError(
                "OPENAI_API_KEY is missing",
                hint="Set OPENAI_API_KEY in the environment or the .env file and restart the server.",
            )

        # Retries are driven by the orchestrator, not the SDK.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=timeout_s,
            max_retries=0,
        )

    @staticmethod
    def _user_content(prompt: str, attachment: Attachment) -> str | list[dict[str, Any]]:
        if isinstance(attachment, InlineAttachment):
            encoded = base64.b64encode(attachment.data).decode("utf-8")
            data_url = f"data:{attachment.mime_type};base64,{encoded}"
            if attachment.mime_type.startswith("image/"):
                part = {"type": "image_url", "image_url": {"url": data_url}}
            else:
                part = {"type": "file", "file": {"filename": "resume", "file_data": data_url}}
            return [{"type": "text", "text": prompt}, part]
        if isinstance(attachment, RemoteFileAttachment):
            return [
                {"type": "text", "text": prompt},
                {"type": "file", "file": {"file_id": attachment.uri}},
            ]
        return prompt

    async def generate(self, model: ModelCandidate, prompt: str, attachment: Attachment) -> str | None:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": self._user_content(prompt, attachment)}],
                temperature=self._temperature,
            )
        except APIStatusError as exc:
            raise UpstreamCallError(str(exc), status_code=exc.status_code) from exc
        except APIError as exc:
            raise UpstreamCallError(str(exc)) from exc
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def upload_file(self, data: bytes, mime_type: str, display_name: str) -> RemoteFileAttachment:
        try:
            uploaded = await self._client.files.create(
                file=(display_name, data, mime_type),
                purpose="user_data",
            )
        except APIStatusError as exc:
            raise UpstreamCallError(str(exc), status_code=exc.status_code) from exc
        except APIError as exc:
            raise UpstreamCallError(str(exc)) from exc
        return RemoteFileAttachment(uri=uploaded.id, mime_type=mime_type)
