"""
PDF analysis services: validate uploads and run taxonomy generation.
"""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from taxonomy_service.content_filter import ContentFilter
from taxonomy_service.error_messages import classify_error
from taxonomy_service.exceptions import (
    InvalidPageRangeError,
    InvalidPDFError,
    TaxonomyInputError,
)
from taxonomy_service.models import TaxonomyRequest
from taxonomy_service.pdf_processor import PDF_MIME_TYPE, check_pdf_size
from taxonomy_service.taxonomy_generator import TaxonomyGenerator

from .models import AnalysisOutcome, FilterOutcome

logger = logging.getLogger(__name__)


def parse_page_bound(raw: Any, label: str) -> Optional[int]:
    """Parse an optional page bound from form or JSON input."""
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    if isinstance(raw, bool):
        raise InvalidPageRangeError(f"{label} must be a positive whole number.")
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise InvalidPageRangeError(f"{label} must be a positive whole number.")
    if isinstance(raw, float) and raw != value:
        raise InvalidPageRangeError(f"{label} must be a positive whole number.")
    return value


class PdfAnalysisService:
    """Main service for handling taxonomy requests."""

    def __init__(
        self,
        generator: TaxonomyGenerator,
        content_filter: ContentFilter,
        taxonomy_config,
    ):
        self.generator = generator
        self.content_filter = content_filter
        self.taxonomy_config = taxonomy_config

    def _default_bounds(self, page_start: Optional[int], page_end: Optional[int]):
        if page_start is None and page_end is None:
            return self.taxonomy_config.default_page_start, self.taxonomy_config.default_page_end
        return page_start, page_end

    def analyze_upload(
        self,
        upload: Optional[FileStorage],
        page_start_raw: Any = None,
        page_end_raw: Any = None,
    ) -> AnalysisOutcome:
        """Generate a taxonomy for an uploaded PDF file."""
        try:
            if upload is None or not upload.filename:
                raise TaxonomyInputError("Please select a file first.")

            filename = secure_filename(upload.filename) or "document.pdf"
            if upload.mimetype != PDF_MIME_TYPE and not filename.lower().endswith(".pdf"):
                raise InvalidPDFError()

            page_start, page_end = self._default_bounds(
                parse_page_bound(page_start_raw, "Start page"),
                parse_page_bound(page_end_raw, "End page"),
            )

            pdf_bytes = upload.read()
            check_pdf_size(len(pdf_bytes), self.taxonomy_config.max_pdf_size_mb)

            result = self.generator.generate_from_bytes(
                pdf_bytes, page_start, page_end, filename=filename
            )
            return AnalysisOutcome(success=True, result=result)
        except Exception as e:
            return self._failure(e)

    def analyze_data_uri(self, payload: Optional[Dict[str, Any]]) -> AnalysisOutcome:
        """Generate a taxonomy for a JSON payload carrying a PDF data URI."""
        try:
            if not isinstance(payload, dict):
                raise TaxonomyInputError("Request body must be a JSON object.")
            if not payload.get("pdfDataUri"):
                raise TaxonomyInputError("Missing pdfDataUri.")

            page_start, page_end = self._default_bounds(
                parse_page_bound(payload.get("pageStart"), "Start page"),
                parse_page_bound(payload.get("pageEnd"), "End page"),
            )
            try:
                request = TaxonomyRequest(
                    pdf_data_uri=payload["pdfDataUri"],
                    page_start=page_start,
                    page_end=page_end,
                )
            except ValidationError as e:
                raise TaxonomyInputError(f"Invalid request: {e}")

            filename = secure_filename(str(payload.get("filename") or "")) or "document.pdf"
            result = self.generator.generate(request, filename=filename)
            return AnalysisOutcome(success=True, result=result)
        except Exception as e:
            return self._failure(e)

    def filter_text(self, payload: Optional[Dict[str, Any]]) -> FilterOutcome:
        """Filter headers, footers and boilerplate out of a document text."""
        try:
            if not isinstance(payload, dict):
                raise TaxonomyInputError("Request body must be a JSON object.")
            document_text = payload.get("documentText")
            if not isinstance(document_text, str):
                raise TaxonomyInputError("Missing documentText.")
            filtered = self.content_filter.filter(document_text)
            return FilterOutcome(success=True, filtered=filtered)
        except Exception as e:
            category = self._classify(e)
            return FilterOutcome(
                success=False,
                error=category.code,
                message=category.message,
                status=category.status,
            )

    def _classify(self, exc: Exception):
        category = classify_error(exc)
        if isinstance(exc, TaxonomyInputError):
            logger.info("Rejected request: %s", exc)
        else:
            logger.exception("Taxonomy request failed: %s", exc)
        return category

    def _failure(self, exc: Exception) -> AnalysisOutcome:
        category = self._classify(exc)
        return AnalysisOutcome(
            success=False,
            error=category.code,
            message=category.message,
            status=category.status,
        )
