from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResumeAnalyzeResponse(CamelModel):
    message: str
    file_name: str
    extracted_text: str
    used_attachment: bool = False
    analysis: dict[str, Any]


class AutofillRequest(CamelModel):
    raw_text: str = Field(min_length=1, max_length=50000)


class LinkedInRequest(CamelModel):
    resume_text: str = Field(min_length=1, max_length=50000)


class JobMatchRequest(CamelModel):
    resume_text: str = Field(min_length=1, max_length=50000)
    job_description: str = Field(min_length=1, max_length=50000)


class JobMatchResponse(CamelModel):
    message: str
    analysis: dict[str, Any]


class CoverLetterResponse(CamelModel):
    cover_letter: str


class InterviewQuestionsRequest(CamelModel):
    job_description: str = Field(min_length=1, max_length=50000)
    resume_text: str | None = Field(default=None, max_length=50000)


class AnswerEvaluationRequest(CamelModel):
    question: str = Field(min_length=1, max_length=5000)
    answer: str = Field(min_length=1, max_length=20000)
    job_description: str | None = Field(default=None, max_length=50000)


class AnswerEvaluationResponse(CamelModel):
    evaluation: dict[str, Any]
