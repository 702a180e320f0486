from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from resume_studio.schemas.career import CamelModel

ApplicationStatus = Literal["Saved", "Applied", "Interviewing", "Offered", "Rejected"]


class ApplicationCreate(CamelModel):
    company: str = Field(min_length=1, max_length=200)
    role: str = Field(min_length=1, max_length=200)
    status: ApplicationStatus = "Saved"
    date_applied: datetime | None = None
    notes: str | None = Field(default=None, max_length=5000)
    job_url: str | None = Field(default=None, max_length=2000)
    match_score: float | None = Field(default=None, ge=0, le=100)


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationOut(CamelModel):
    id: str
    company: str
    role: str
    status: ApplicationStatus
    date_applied: datetime
    notes: str | None = None
    job_url: str | None = None
    match_score: float | None = None


class MessageResponse(CamelModel):
    message: str
