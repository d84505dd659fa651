"""
taxonomy_generator.py - Core taxonomy generation service
"""

import base64
import logging
import time
from typing import Optional

from langchain_core.messages import HumanMessage

from .exceptions import EmptyModelOutputError, InvalidPDFError
from .llm_utils import LLMProvider, pdf_content_block, response_text
from .models import TaxonomyRequest, TaxonomyResult, parse_generated_taxonomy
from .pdf_processor import (
    PDF_MIME_TYPE,
    check_pdf_size,
    decode_data_uri,
    encode_data_uri,
    extract_page_text,
    validate_page_range,
    verify_pdf_bytes,
)
from .prompt_builder import build_taxonomy_prompt

_LOG = logging.getLogger("taxonomy_generator")

DEFAULT_MAX_INPUT_CHAR = 100000
DEFAULT_MAX_PDF_SIZE_MB = 20


class TaxonomyGenerator:
    """Generates a taxonomy for a PDF with a single model call."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        max_input_char: int = DEFAULT_MAX_INPUT_CHAR,
        max_pdf_size_mb: Optional[int] = DEFAULT_MAX_PDF_SIZE_MB,
    ):
        self.llm_provider = llm_provider
        self.max_input_char = max_input_char
        self.max_pdf_size_mb = max_pdf_size_mb

    def generate(self, request: TaxonomyRequest, filename: str = "document.pdf") -> TaxonomyResult:
        """Generate a taxonomy for the PDF carried by *request*.

        Raises:
            TaxonomyInputError: The data URI, PDF or page range is invalid
            EmptyModelOutputError: The model returned nothing
            TaxonomyParseError: The model output does not match the schema
        """
        start_time = time.perf_counter()

        mime_type, pdf_bytes = decode_data_uri(request.pdf_data_uri)
        if mime_type != PDF_MIME_TYPE:
            raise InvalidPDFError(details={"mime_type": mime_type})
        check_pdf_size(len(pdf_bytes), self.max_pdf_size_mb)

        page_count = verify_pdf_bytes(pdf_bytes)
        validate_page_range(request.page_start, request.page_end, page_count)

        _LOG.info(
            "Generating taxonomy for %s (%d pages, range %s-%s) with %s/%s",
            filename,
            page_count,
            request.page_start or 1,
            request.page_end or page_count,
            self.llm_provider.provider,
            self.llm_provider.model,
        )

        message = self._build_message(pdf_bytes, request.page_start, request.page_end, filename)
        response = self.llm_provider.invoke([message])
        content = response_text(response)
        if not content.strip():
            raise EmptyModelOutputError()

        generated = parse_generated_taxonomy(content)

        processing_time = f"{time.perf_counter() - start_time:.2f}s"
        result = TaxonomyResult.from_generated(generated, processing_time)

        topic_count = result.count_topics()
        _LOG.info(
            "Taxonomy for %s ready in %s: %d topics, depth %d, %d images/tables",
            filename,
            processing_time,
            topic_count,
            result.max_depth(),
            result.count_images_tables(),
        )
        if topic_count != result.metadata.number_of_topics:
            _LOG.debug(
                "Model reported %d topics but the tree holds %d",
                result.metadata.number_of_topics,
                topic_count,
            )
        return result

    def generate_from_bytes(
        self,
        pdf_bytes: bytes,
        page_start: Optional[int] = None,
        page_end: Optional[int] = None,
        filename: str = "document.pdf",
    ) -> TaxonomyResult:
        """Generate a taxonomy for raw PDF bytes."""
        request = TaxonomyRequest(
            pdf_data_uri=encode_data_uri(pdf_bytes),
            page_start=page_start,
            page_end=page_end,
        )
        return self.generate(request, filename=filename)

    def _build_message(
        self,
        pdf_bytes: bytes,
        page_start: Optional[int],
        page_end: Optional[int],
        filename: str,
    ) -> HumanMessage:
        if self.llm_provider.supports_pdf_input:
            prompt = build_taxonomy_prompt(page_start, page_end)
            pdf_base64 = base64.b64encode(pdf_bytes).decode("ascii")
            return HumanMessage(
                content=[
                    {"type": "text", "text": prompt},
                    pdf_content_block(pdf_base64, filename),
                ]
            )

        document_text = extract_page_text(pdf_bytes, page_start, page_end)
        if len(document_text) > self.max_input_char:
            _LOG.warning(
                "Document text truncated from %d to %d characters",
                len(document_text),
                self.max_input_char,
            )
            document_text = document_text[: self.max_input_char]
        return HumanMessage(content=build_taxonomy_prompt(page_start, page_end, document_text))


def generate_pdf_taxonomy(
    request: TaxonomyRequest,
    llm_provider: LLMProvider,
    max_input_char: int = DEFAULT_MAX_INPUT_CHAR,
    max_pdf_size_mb: Optional[int] = DEFAULT_MAX_PDF_SIZE_MB,
) -> TaxonomyResult:
    """Generate a taxonomy for a PDF data URI with the given provider."""
    generator = TaxonomyGenerator(
        llm_provider,
        max_input_char=max_input_char,
        max_pdf_size_mb=max_pdf_size_mb,
    )
    return generator.generate(request)
