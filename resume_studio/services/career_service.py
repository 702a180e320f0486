from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from resume_studio.ai.errors import AllCandidatesExhausted, ConfigurationError, UpstreamCallError
from resume_studio.ai.invoker import outcome_from_exception
from resume_studio.ai.orchestrator import ModelOrchestrator
from resume_studio.ai.types import Attachment, Fatal, InlineAttachment
from resume_studio.core.config import settings
from resume_studio.parsing import DocumentReadError, extract_pdf_text
from resume_studio.services import prompts

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
IMAGE_MIMES = {"image/png", "image/jpeg", "image/webp"}


@dataclass(frozen=True)
class ResumeAnalysis:
    extracted_text: str
    analysis: dict[str, Any]
    used_attachment: bool


async def _attachment_for(
    orchestrator: ModelOrchestrator, data: bytes, mime_type: str, filename: str
) -> Attachment:
    if len(data) <= settings.inline_attachment_max_bytes:
        return InlineAttachment(data=data, mime_type=mime_type)

    logger.info("resume_upload_remote file=%s size=%s", filename, len(data))
    backend = orchestrator.backend
    try:
        return await backend.upload_file(data, mime_type, filename or "Resume File")
    except UpstreamCallError as exc:
        outcome = outcome_from_exception(backend.name, exc)
        if isinstance(outcome, Fatal) and outcome.credential:
            raise ConfigurationError(
                "The AI provider rejected the configured API key.",
                hint=f"Check the {backend.name.upper()}_API_KEY environment variable.",
                code="invalid_credentials",
            ) from exc
        raise AllCandidatesExhausted(
            "The document could not be uploaded to the AI service. Please try again later.",
            last_error=outcome.error,
            tried=[],
        ) from exc


async def analyze_resume_document(
    orchestrator: ModelOrchestrator,
    data: bytes,
    *,
    filename: str,
    content_type: str,
) -> ResumeAnalysis:
    mime_type = (content_type or "").split(";", 1)[0].strip().lower()
    if filename.lower().endswith(".pdf"):
        mime_type = PDF_MIME

    text = ""
    if mime_type == PDF_MIME:
        text = extract_pdf_text(data).text.strip()
    elif mime_type not in IMAGE_MIMES:
        raise DocumentReadError("Only PDF, PNG, JPEG or WEBP resumes are supported.")

    if len(text) >= settings.resume_min_text_chars:
        request = prompts.build_resume_analysis_request(text)
        used_attachment = False
    else:
        # Scanned or image-only resume: let the model read the file itself.
        logger.info("resume_text_too_short file=%s chars=%s", filename, len(text))
        attachment = await _attachment_for(orchestrator, data, mime_type, filename)
        request = prompts.build_resume_file_analysis_request(attachment)
        used_attachment = True

    analysis = await orchestrator.generate_json(request)
    return ResumeAnalysis(extracted_text=text, analysis=analysis, used_attachment=used_attachment)


async def match_job(orchestrator: ModelOrchestrator, resume_text: str, job_description: str) -> dict[str, Any]:
    return await orchestrator.generate_json(prompts.build_job_match_request(resume_text, job_description))


async def write_cover_letter(orchestrator: ModelOrchestrator, resume_text: str, job_description: str) -> str:
    text = await orchestrator.generate(prompts.build_cover_letter_request(resume_text, job_description))
    return text.strip()


async def optimize_linkedin(orchestrator: ModelOrchestrator, resume_text: str) -> dict[str, Any]:
    return await orchestrator.generate_json(prompts.build_linkedin_request(resume_text))


async def generate_interview_questions(
    orchestrator: ModelOrchestrator, job_description: str, resume_text: str | None = None
) -> dict[str, Any]:
    return await orchestrator.generate_json(prompts.build_interview_questions_request(job_description, resume_text))


async def evaluate_answer(
    orchestrator: ModelOrchestrator, question: str, answer: str, job_description: str | None = None
) -> dict[str, Any]:
    return await orchestrator.generate_json(prompts.build_answer_evaluation_request(question, answer, job_description))


async def autofill_resume(orchestrator: ModelOrchestrator, raw_text: str) -> dict[str, Any]:
    return await orchestrator.generate_json(prompts.build_structured_resume_request(raw_text))
