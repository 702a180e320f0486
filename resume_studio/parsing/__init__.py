from resume_studio.parsing.pdf import DocumentReadError, ParsedDocument, extract_pdf_text

__all__ = ["DocumentReadError", "ParsedDocument", "extract_pdf_text"]
