import logging
import os
import tempfile
from pdfminer.high_level import extract_text as pdf_extract_text
import docx

log = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.pdf', '.docx', '.txt')


def extract_text_from_pdf(path: str) -> str:
    try:
        return pdf_extract_text(path)
    except Exception as e:
        log.warning("PDF extraction failed for %s: %s", os.path.basename(path), e)
        return ''


def extract_text_from_docx(path: str) -> str:
    try:
        doc = docx.Document(path)
        return '\n'.join(p.text for p in doc.paragraphs)
    except Exception as e:
        log.warning("DOCX extraction failed for %s: %s", os.path.basename(path), e)
        return ''


def extract_text_from_txt(path: str) -> str:
    with open(path, 'rb') as f:
        return f.read().decode('utf-8', errors='replace')


def parse_resume(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext == '.pdf':
        return extract_text_from_pdf(path)
    elif ext == '.docx':
        return extract_text_from_docx(path)
    elif ext == '.txt':
        return extract_text_from_txt(path)
    return ''


def parse_resume_bytes(filename: str, content: bytes) -> str:
    """Extract text from an uploaded résumé held in memory."""
    ext = os.path.splitext(filename or '')[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        return ''
    fd, path = tempfile.mkstemp(suffix=ext)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(content)
        return parse_resume(path)
    finally:
        os.remove(path)
