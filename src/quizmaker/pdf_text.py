"""
pdf_text.py — PDF text extraction
=================================
Thin wrapper over ``pypdf``: every page's text is concatenated, each page
followed by a blank line, into one string for the generation gateway.

Scanned (image-only) PDFs produce little or no text; ``require_text`` turns
that into an ``ExtractionError`` before any AI call is made.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from quizmaker.errors import ExtractionError

logger = logging.getLogger(__name__)

# Fewer stripped characters than this is treated as "no usable text".
MIN_SOURCE_CHARS = 100

PdfSource = Union[bytes, BinaryIO, str, Path]

# Malformed files surface from pypdf as its own errors or as generic ones
# raised deep inside stream decoding (unsupported filters, broken objects).
_READ_ERRORS = (
    PyPdfError, ValueError, TypeError, KeyError, IndexError,
    AttributeError, NotImplementedError, RecursionError, OSError,
)


def extract_text(source: PdfSource) -> str:
    """Return the text of every page, each followed by a blank line."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        reader = PdfReader(source)
        pages = [page.extract_text() or "" for page in reader.pages]
    except _READ_ERRORS as exc:
        logger.warning("PDF could not be read: %s", exc)
        raise ExtractionError(
            "The PDF could not be read. Please check the file and try again."
        ) from exc

    text = "".join(" ".join(p.split()) + "\n\n" for p in pages)
    logger.info("Extracted %d characters from %d page(s)", len(text), len(pages))
    return text


def require_text(text: str, minimum: int = MIN_SOURCE_CHARS) -> str:
    """Raise ``ExtractionError`` when *text* is too short to generate from."""
    if len(text.strip()) < minimum:
        raise ExtractionError(
            "Not enough text could be extracted from the PDF. "
            "Please try a text-based (not scanned) PDF."
        )
    return text
