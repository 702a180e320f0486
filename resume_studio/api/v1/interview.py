from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from resume_studio.ai.factory import get_orchestrator
from resume_studio.ai.orchestrator import ModelOrchestrator
from resume_studio.core.rate_limit import rate_limit
from resume_studio.schemas.career import (
    AnswerEvaluationRequest,
    AnswerEvaluationResponse,
    InterviewQuestionsRequest,
)
from resume_studio.services import career_service

router = APIRouter()


@router.post("/interview/generate")
@rate_limit()
async def generate_interview_questions(
    request: Request,
    payload: InterviewQuestionsRequest,
    orchestrator: ModelOrchestrator = Depends(get_orchestrator),
):
    _ = request
    return await career_service.generate_interview_questions(
        orchestrator,
        payload.job_description,
        payload.resume_text,
    )


@router.post("/interview/evaluate", response_model=AnswerEvaluationResponse)
@rate_limit()
async def evaluate_answer(
    request: Request,
    payload: AnswerEvaluationRequest,
    orchestrator: ModelOrchestrator = Depends(get_orchestrator),
):
    _ = request
    evaluation = await career_service.evaluate_answer(
        orchestrator,
        payload.question,
        payload.answer,
        payload.job_description,
    )
    return AnswerEvaluationResponse(evaluation=evaluation)
