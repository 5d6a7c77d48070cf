# ============================================
# onboarding/services/pdf_extract.py
# ============================================
"""
Pitch-deck text extraction.

The upload is read in memory with PyPDF2 and never stored. One entry per
page, in page order.
"""
import io
import logging
from typing import Dict, List

import PyPDF2
from PyPDF2.errors import PdfReadError

from execution.exceptions import ValidationError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPES = ('application/pdf', 'application/x-pdf')


def is_pdf(upload) -> bool:
    content_type = (getattr(upload, 'content_type', '') or '').lower()
    name = (getattr(upload, 'name', '') or '').lower()
    return 'pdf' in content_type or name.endswith('.pdf')


def extract_slides(upload) -> List[Dict]:
    """Return [{'slide_index': n, 'text': ...}] for every page of the PDF"""
    if upload is None:
        raise ValidationError("Missing file. Upload a PDF.")
    if not is_pdf(upload):
        raise ValidationError("Only PDF is supported. Please export your deck as PDF.")

    try:
        reader = PyPDF2.PdfReader(io.BytesIO(upload.read()))
        slides = [
            {'slide_index': index, 'text': (page.extract_text() or '').strip()}
            for index, page in enumerate(reader.pages)
        ]
    except (PdfReadError, ValueError, KeyError, TypeError) as e:
        logger.warning("[onboarding] PDF extraction failed for %s: %s", getattr(upload, 'name', '?'), e)
        raise ValidationError("Failed to extract text from file. Try a different PDF.")

    logger.info("[onboarding] extracted %s slides", len(slides))
    return slides
