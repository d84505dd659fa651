"""
exceptions.py - Error types raised by the taxonomy service

Input problems (bad uploads, bad page ranges) derive from TaxonomyInputError
so the web layer can answer them with a 4xx status. Everything else is a
failure on the model side.
"""

from typing import Any, Dict, Optional


class TaxonomyError(Exception):
    """Base exception for taxonomy generation errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
        }


class TaxonomyInputError(TaxonomyError):
    """The request itself is invalid."""
    pass


class InvalidDataURIError(TaxonomyInputError):
    """Raised when a data URI is malformed or not base64 encoded."""
    pass


class InvalidPDFError(TaxonomyInputError):
    """Raised when the uploaded bytes are not a readable PDF."""

    def __init__(self, message: str = "Please upload a valid PDF file.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidPageRangeError(TaxonomyInputError):
    """Raised when page bounds are not positive, inverted, or out of range."""

    def __init__(self, message: str, page_start: Optional[int] = None, page_end: Optional[int] = None):
        super().__init__(message, {"page_start": page_start, "page_end": page_end})
        self.page_start = page_start
        self.page_end = page_end


class FileTooLargeError(TaxonomyInputError):
    """Raised when the PDF exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_size_mb: int):
        message = f"PDF is too large ({size_bytes / (1024 * 1024):.1f}MB). Maximum size is {max_size_mb}MB."
        super().__init__(message, {"size_bytes": size_bytes, "max_size_mb": max_size_mb})
        self.size_bytes = size_bytes
        self.max_size_mb = max_size_mb


class EmptyModelOutputError(TaxonomyError):
    """Raised when the model answers with nothing usable."""

    def __init__(self, message: str = "Failed to generate taxonomy. The AI returned no output."):
        super().__init__(message)


class TaxonomyParseError(TaxonomyError):
    """Raised when the model output is not JSON matching the taxonomy schema."""

    def __init__(self, message: str, raw_output: Optional[str] = None):
        super().__init__(message, {"raw_output": raw_output[:500] if raw_output else None})
        self.raw_output = raw_output
