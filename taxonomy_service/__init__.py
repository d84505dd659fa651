# Taxonomy service package for PDF taxonomy generation

from .taxonomy_generator import TaxonomyGenerator, generate_pdf_taxonomy
from .content_filter import ContentFilter, filter_content
from .prompt_builder import build_taxonomy_prompt, build_filter_prompt
from .llm_utils import (
    LLMProvider,
    clean_ollama_response,
    pdf_content_block,
    response_text,
)
from .pdf_processor import (
    encode_data_uri,
    decode_data_uri,
    check_pdf_size,
    verify_pdf_bytes,
    validate_page_range,
    describe_page_range,
    extract_page_text,
)
from .exceptions import (
    TaxonomyError,
    TaxonomyInputError,
    InvalidDataURIError,
    InvalidPDFError,
    InvalidPageRangeError,
    FileTooLargeError,
    EmptyModelOutputError,
    TaxonomyParseError,
)
from .error_messages import classify_error, describe_generation_error
from .logging_config import (
    setup_logging,
    stop_logging,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "TaxonomyGenerator",
    "generate_pdf_taxonomy",
    "ContentFilter",
    "filter_content",
    "build_taxonomy_prompt",
    "build_filter_prompt",
    "LLMProvider",
    "clean_ollama_response",
    "pdf_content_block",
    "response_text",
    "encode_data_uri",
    "decode_data_uri",
    "check_pdf_size",
    "verify_pdf_bytes",
    "validate_page_range",
    "describe_page_range",
    "extract_page_text",
    "TaxonomyError",
    "TaxonomyInputError",
    "InvalidDataURIError",
    "InvalidPDFError",
    "InvalidPageRangeError",
    "FileTooLargeError",
    "EmptyModelOutputError",
    "TaxonomyParseError",
    "classify_error",
    "describe_generation_error",
    "setup_logging",
    "stop_logging",
    "ThreadSafeLoggingConfig",
]
