"""Plain-text extraction from uploaded resumes.

PDF goes through pdfplumber and DOCX through python-docx. Legacy `.doc`
files (and anything the parsers cannot open) fall back to a lenient
UTF-8 decode of the raw bytes, which is good enough for keyword-based
skill detection.
"""

import io
import logging
from typing import List

import docx
import pdfplumber

MAX_RESUME_TEXT = 5000

PDF_TYPE = 'application/pdf'
DOC_TYPE = 'application/msword'
DOCX_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
ALLOWED_TYPES = (PDF_TYPE, DOC_TYPE, DOCX_TYPE)

_LOGGER = logging.getLogger("careerhub.resume")


def extract_pdf_text(b: bytes) -> str:
    """Concatenate the text of every PDF page."""
    parts: List[str] = []
    with pdfplumber.open(io.BytesIO(b)) as pdf:
        for page in pdf.pages:
            parts.append(page.extract_text() or '')
    return '\n'.join(parts)


def extract_docx_text(b: bytes) -> str:
    """Join non-empty DOCX paragraphs with newlines."""
    doc = docx.Document(io.BytesIO(b))
    return '\n'.join(p.text.strip() for p in doc.paragraphs if p.text and p.text.strip())


def extract_resume_text(file_bytes: bytes, filename: str, content_type: str = '') -> str:
    """Return up to `MAX_RESUME_TEXT` characters of text from a resume."""
    name = (filename or '').lower()
    text = ''
    try:
        if content_type == PDF_TYPE or name.endswith('.pdf'):
            text = extract_pdf_text(file_bytes)
        elif content_type == DOCX_TYPE or name.endswith('.docx'):
            text = extract_docx_text(file_bytes)
    except Exception as exc:
        # malformed documents still get the raw-bytes fallback below
        _LOGGER.warning("resume_parse_failed file=%s error=%s", filename, exc)
        text = ''
    if not text.strip():
        text = file_bytes[:MAX_RESUME_TEXT * 4].decode('utf-8', errors='ignore')
    return text[:MAX_RESUME_TEXT]
