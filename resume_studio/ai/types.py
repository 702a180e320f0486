from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Union

from resume_studio.ai.errors import UpstreamFatal, UpstreamModelUnavailable, UpstreamRateLimited

ModelCandidate = str


@dataclass(frozen=True)
class NoAttachment:
    pass


@dataclass(frozen=True)
class InlineAttachment:
    data: bytes = field(repr=False)
    mime_type: str


@dataclass(frozen=True)
class RemoteFileAttachment:
    uri: str
    mime_type: str


Attachment = Union[NoAttachment, InlineAttachment, RemoteFileAttachment]
NO_ATTACHMENT = NoAttachment()


@dataclass(frozen=True)
class ExpectedOutput:
    """What the caller does with the generated text: keep it raw or parse a JSON shape."""

    shape: str | None = None

    @property
    def is_json(self) -> bool:
        return self.shape is not None


RAW_TEXT = ExpectedOutput()


def json_shape(tag: str) -> ExpectedOutput:
    return ExpectedOutput(shape=tag)


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    attachment: Attachment = NO_ATTACHMENT
    expects: ExpectedOutput = RAW_TEXT
    task: str = "generic"


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class RateLimited:
    error: UpstreamRateLimited


@dataclass(frozen=True)
class NotFound:
    error: UpstreamModelUnavailable


@dataclass(frozen=True)
class Fatal:
    error: UpstreamFatal

    @property
    def credential(self) -> bool:
        return self.error.credential


GenerationOutcome = Union[Success, RateLimited, NotFound, Fatal]


class GenerationBackend(Protocol):
    name: str

    async def generate(
        self, model: ModelCandidate, prompt: str, attachment: Attachment
    ) -> str | None: ...

    async def upload_file(
        self, data: bytes, mime_type: str, display_name: str
    ) -> RemoteFileAttachment: ...
