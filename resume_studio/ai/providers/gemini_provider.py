from __future__ import annotations

import io
import os
from typing import Optional

from google import genai
from google.genai import errors, types

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


class GeminiProvider:
    name = "gemini"

    def __init__(self, api_key: Optional[str] = None, timeout_s: float = 60.0):
        key = (api_key or os.getenv("GEMINI_API_KEY") or "").strip()
        if not key or _looks_like_placeholder(key):
            raise ConfigurationError(
                "GEMINI_API_KEY is missing",
                hint="Set GEMINI_API_KEY in the environment or the .env file and restart the server.",
            )
        self._client = genai.Client(
            api_key=key,
            http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
        )

    @staticmethod
    def _contents(prompt: str, attachment: Attachment) -> list:
        contents: list = [prompt]
        if isinstance(attachment, InlineAttachment):
            contents.append(types.Part.from_bytes(data=attachment.data, mime_type=attachment.mime_type))
        elif isinstance(attachment, RemoteFileAttachment):
            contents.append(types.Part.from_uri(file_uri=attachment.uri, mime_type=attachment.mime_type))
        return contents

    async def generate(self, model: ModelCandidate, prompt: str, attachment: Attachment) -> str | None:
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=self._contents(prompt, attachment),
            )
        except errors.APIError as exc:
            raise UpstreamCallError(f"{exc.status or ''} {exc.message or exc}".strip(), status_code=exc.code) from exc
        return response.text

    async def upload_file(self, data: bytes, mime_type: str, display_name: str) -> RemoteFileAttachment:
        try:
            uploaded = await self._client.aio.files.upload(
                file=io.BytesIO(data),
                config=types.UploadFileConfig(mime_type=mime_type, display_name=display_name),
            )
        except errors.APIError as exc:
            raise UpstreamCallError(f"{exc.status or ''} {exc.message or exc}".strip(), status_code=exc.code) from exc
        return RemoteFileAttachment(uri=uploaded.uri or "", mime_type=uploaded.mime_type or mime_type)
