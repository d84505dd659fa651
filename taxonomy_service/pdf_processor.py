"""
pdf_processor.py - PDF processing utilities

This module provides data URI encoding, PDF validation, page range checks
and page text extraction for providers that cannot read PDFs directly.
"""

import base64
import binascii
import logging
import re
from typing import Optional, Tuple

import pymupdf
import pymupdf4llm

from .exceptions import (
    FileTooLargeError,
    InvalidDataURIError,
    InvalidPageRangeError,
    InvalidPDFError,
)

_LOG = logging.getLogger("pdf_processor")

PDF_MIME_TYPE = "application/pdf"

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w.+-]+=[^;,]*)*;base64,(?P<data>.*)$",
    re.DOTALL,
)


def encode_data_uri(pdf_bytes: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(pdf_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Split a base64 data URI into its mime type and decoded bytes."""
    if not uri:
        raise InvalidDataURIError("Empty data URI.")

    match = _DATA_URI_RE.match(uri.strip())
    if not match:
        raise InvalidDataURIError(
            "Expected a data URI of the form 'data:<mimetype>;base64,<encoded_data>'."
        )

    data = re.sub(r"\s+", "", match.group("data"))
    try:
        payload = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDataURIError(f"Data URI payload is not valid base64: {e}")

    return match.group("mime").lower(), payload


def check_pdf_size(size_bytes: int, max_size_mb: Optional[int]) -> None:
    """Raise FileTooLargeError when the PDF exceeds the size limit."""
    if max_size_mb and size_bytes > max_size_mb * 1024 * 1024:
        raise FileTooLargeError(size_bytes, max_size_mb)


def verify_pdf_bytes(pdf_bytes: bytes) -> int:
    """Verify that the bytes hold a readable PDF and return its page count."""
    if not pdf_bytes or not pdf_bytes.startswith(b"%PDF-"):
        _LOG.debug("PDF validation failed (no magic number)")
        raise InvalidPDFError()

    try:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
            page_count = doc.page_count
    except Exception as e:
        _LOG.debug("PDF validation failed with PyMuPDF: %s", e)
        raise InvalidPDFError(details={"reason": str(e)})

    if page_count == 0:
        _LOG.debug("PDF has no pages")
        raise InvalidPDFError("The PDF has no pages.")

    _LOG.debug("PDF validation successful (%d pages)", page_count)
    return page_count


def validate_page_range(
    page_start: Optional[int],
    page_end: Optional[int],
    page_count: Optional[int] = None,
) -> None:
    """Check optional 1-based page bounds against each other and the page count."""
    for label, value in (("Start page", page_start), ("End page", page_end)):
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidPageRangeError(
                f"{label} must be a positive whole number.", page_start, page_end
            )
        if page_count is not None and value > page_count:
            raise InvalidPageRangeError(
                f"{label} ({value}) is beyond the last page of the document ({page_count}).",
                page_start,
                page_end,
            )

    if page_start is not None and page_end is not None and page_start > page_end:
        raise InvalidPageRangeError(
            f"Start page ({page_start}) must not be after end page ({page_end}).",
            page_start,
            page_end,
        )


def describe_page_range(page_start: Optional[int], page_end: Optional[int]) -> str:
    """Human readable page range, e.g. 'page 3 to the final page'."""
    start = page_start if page_start else 1
    end = page_end if page_end else "the final page"
    return f"page {start} to {end}"


def extract_page_text(
    pdf_bytes: bytes,
    page_start: Optional[int] = None,
    page_end: Optional[int] = None,
) -> str:
    """Extract markdown text for the requested 1-based inclusive page range."""
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        first = (page_start or 1) - 1
        last = min(page_end or doc.page_count, doc.page_count)
        pages = list(range(first, last))

        # Method 1: Primary - pymupdf4llm
        try:
            md_text = pymupdf4llm.to_markdown(doc, pages=pages)
            if md_text and md_text.strip():
                return md_text
        except Exception as e:
            _LOG.error("Markdown extraction failed, falling back to plain text: %s", e)

        # Method 2: Fallback - plain page text
        md_text = ""
        for page_num in pages:
            page = doc.load_page(page_num)
            md_text += f"## Page {page_num + 1}\n\n{page.get_text()}\n\n"
        return md_text
