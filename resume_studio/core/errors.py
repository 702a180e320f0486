from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from resume_studio.ai.errors import AllCandidatesExhausted, ConfigurationError, MalformedModelOutput
from resume_studio.parsing import DocumentReadError

logger = logging.getLogger(__name__)


async def _configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("ai_configuration_error path=%s code=%s: %s", request.url.path, exc.code, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "AI service is not configured.", "error": str(exc), "hint": exc.hint, "code": exc.code},
    )


async def _exhausted_handler(request: Request, exc: AllCandidatesExhausted) -> JSONResponse:
    last = exc.last_error
    logger.warning(
        "ai_unavailable path=%s tried=%s last_error=%s",
        request.url.path,
        exc.tried,
        last,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        headers={"Retry-After": "30"},
        content={
            "message": str(exc),
            "error": str(last) if last else None,
            "code": exc.code,
        },
    )


async def _malformed_output_handler(request: Request, exc: MalformedModelOutput) -> JSONResponse:
    logger.warning("ai_malformed_output path=%s raw=%r", request.url.path, exc.raw_text[:500])
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"message": "The AI response could not be understood. Please try again.", "code": exc.code},
    )


async def _document_error_handler(request: Request, exc: DocumentReadError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": str(exc), "code": "document_unreadable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConfigurationError, _configuration_error_handler)
    app.add_exception_handler(AllCandidatesExhausted, _exhausted_handler)
    app.add_exception_handler(MalformedModelOutput, _malformed_output_handler)
    app.add_exception_handler(DocumentReadError, _document_error_handler)
