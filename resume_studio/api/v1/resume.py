from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from resume_studio.ai.factory import get_orchestrator
from resume_studio.ai.orchestrator import ModelOrchestrator
from resume_studio.core.config import settings
from resume_studio.core.rate_limit import rate_limit
from resume_studio.schemas.career import AutofillRequest, LinkedInRequest, ResumeAnalyzeResponse
from resume_studio.services import career_service

router = APIRouter()
logger = logging.getLogger(__name__)

PREVIEW_CHARS = 500


@router.post("/resume/analyze", response_model=ResumeAnalyzeResponse)
@router.post("/resume/upload", response_model=ResumeAnalyzeResponse, include_in_schema=False)
@rate_limit()
async def analyze_resume(
    request: Request,
    resume: UploadFile = File(...),
    orchestrator: ModelOrchestrator = Depends(get_orchestrator),
):
    _ = request
    data = await resume.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File is too large.",
        )

    filename = resume.filename or "resume.pdf"
    logger.info("resume_analyze file=%s size=%s", filename, len(data))
    result = await career_service.analyze_resume_document(
        orchestrator,
        data,
        filename=filename,
        content_type=resume.content_type or "",
    )
    preview = result.extracted_text[:PREVIEW_CHARS]
    if len(result.extracted_text) > PREVIEW_CHARS:
        preview += "..."
    return ResumeAnalyzeResponse(
        message="Resume analyzed successfully",
        file_name=filename,
        extracted_text=preview,
        used_attachment=result.used_attachment,
        analysis=result.analysis,
    )


@router.post("/resume/autofill")
@rate_limit()
async def autofill_resume(
    request: Request,
    payload: AutofillRequest,
    orchestrator: ModelOrchestrator = Depends(get_orchestrator),
):
    _ = request
    return await career_service.autofill_resume(orchestrator, payload.raw_text)


@router.post("/resume/linkedin")
@rate_limit()
async def optimize_linkedin(
    request: Request,
    payload: LinkedInRequest,
    orchestrator: ModelOrchestrator = Depends(get_orchestrator),
):
    _ = request
    return await career_service.optimize_linkedin(orchestrator, payload.resume_text)
