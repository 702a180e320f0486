from __future__ import annotations

import os
import tempfile

# Settings are read once at import time; keep test runs isolated and unthrottled.
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("APPLICATIONS_DB_PATH", os.path.join(tempfile.mkdtemp(prefix="resume-studio-"), "applications.db"))

from resume_studio.ai.types import Attachment, RemoteFileAttachment  # noqa: E402


class ScriptedBackend:
    """Backend double that replays a per-model script of replies or exceptions.

    The last entry of a script repeats once the script is used up.
    """

    name = "gemini"

    def __init__(self, script: dict[str, list], upload_error: Exception | None = None):
        self._script = {model: list(items) for model, items in script.items()}
        self.calls: list[tuple[str, str, Attachment]] = []
        self.uploads: list[tuple[bytes, str, str]] = []
        self._upload_error = upload_error

    def calls_for(self, model: str) -> int:
        return sum(1 for called, _, _ in self.calls if called == model)

    @property
    def called_models(self) -> list[str]:
        return [model for model, _, _ in self.calls]

    async def generate(self, model: str, prompt: str, attachment: Attachment) -> str | None:
        self.calls.append((model, prompt, attachment))
        items = self._script.get(model)
        if not items:
            raise RuntimeError(f"unexpected model {model}")
        item = items.pop(0) if len(items) > 1 else items[0]
        if isinstance(item, BaseException):
            raise item
        return item

    async def upload_file(self, data: bytes, mime_type: str, display_name: str) -> RemoteFileAttachment:
        self.uploads.append((data, mime_type, display_name))
        if self._upload_error is not None:
            raise self._upload_error
        return RemoteFileAttachment(uri=f"files/{len(self.uploads)}", mime_type=mime_type)


class RecordingSleep:
    def __init__(self, clock: "FakeClock | None" = None):
        self.delays: list[float] = []
        self._clock = clock

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self._clock is not None:
            self._clock.now += delay


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def blank_pdf(pages: int = 1) -> bytes:
    from io import BytesIO

    from pypdf import PdfWriter

    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()
