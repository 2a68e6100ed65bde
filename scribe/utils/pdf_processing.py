"""PDF inspection helpers for compiled resume bytes."""

import io
from typing import Optional

from PyPDF2 import PdfReader


def page_count(pdf_bytes: bytes) -> Optional[int]:
    """Get page count from PDF bytes, or None if unreadable."""
    if not pdf_bytes:
        return None
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        return len(reader.pages)
    except Exception:
        return None


def looks_like_pdf(data: bytes) -> bool:
    """Check for the %PDF- magic header."""
    return data[:5] == b"%PDF-"
