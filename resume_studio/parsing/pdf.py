from __future__ import annotations

import logging
from io import BytesIO

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PyPdfError

logger = logging.getLogger(__name__)


class DocumentReadError(ValueError):
    pass


class ParsedDocument(BaseModel):
    text: str
    page_count: int = 0
    parsing_warnings: list[str] = Field(default_factory=list)


def extract_pdf_text(data: bytes) -> ParsedDocument:
    if not data:
        raise DocumentReadError("The uploaded file is empty.")

    warnings: list[str] = []
    try:
        reader = PdfReader(BytesIO(data))
        text_parts: list[str] = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
        page_count = len(reader.pages)
    except (PyPdfError, ValueError, KeyError, OSError) as exc:
        logger.warning("pdf_parse_failed size=%s: %s", len(data), exc)
        raise DocumentReadError("The document could not be read as a PDF.") from exc

    if not text_parts:
        warnings.append("No extractable text found in PDF.")

    text = "\n".join(text_parts)
    return ParsedDocument(
        text=text,
        page_count=page_count,
        parsing_warnings=warnings,
    )
