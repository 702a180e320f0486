from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from resume_studio.ai.factory import get_orchestrator
from resume_studio.ai.orchestrator import ModelOrchestrator
from resume_studio.core.rate_limit import rate_limit
from resume_studio.schemas.career import CoverLetterResponse, JobMatchRequest, JobMatchResponse
from resume_studio.services import career_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/job/match", response_model=JobMatchResponse)
@rate_limit()
async def analyze_job_match(
    request: Request,
    payload: JobMatchRequest,
    orchestrator: ModelOrchestrator = Depends(get_orchestrator),
):
    _ = request
    logger.info("job_match resume_len=%s jd_len=%s", len(payload.resume_text), len(payload.job_description))
    analysis = await career_service.match_job(orchestrator, payload.resume_text, payload.job_description)
    return JobMatchResponse(message="Job analysis complete", analysis=analysis)


@router.post("/job/cover-letter", response_model=CoverLetterResponse)
@rate_limit()
async def cover_letter(
    request: Request,
    payload: JobMatchRequest,
    orchestrator: ModelOrchestrator = Depends(get_orchestrator),
):
    _ = request
    letter = await career_service.write_cover_letter(orchestrator, payload.resume_text, payload.job_description)
    return CoverLetterResponse(cover_letter=letter)
