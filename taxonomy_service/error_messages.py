"""
error_messages.py - User-facing triage of generation failures

Provider SDKs raise a zoo of exception types, so failures are classified by
looking at the error text rather than the class.
"""

from dataclasses import dataclass
from typing import Tuple

from .exceptions import (
    EmptyModelOutputError,
    FileTooLargeError,
    TaxonomyInputError,
    TaxonomyParseError,
)

GENERIC_ERROR_MESSAGE = "An error occurred during taxonomy generation. Please try again."


@dataclass
class ErrorCategory:
    """A class of failure with its user message and HTTP status."""
    code: str
    message: str
    status: int
    markers: Tuple[str, ...] = ()


OVERLOADED = ErrorCategory(
    code="Model overloaded",
    message="The AI model is currently overloaded. Please try again in a few moments.",
    status=503,
    markers=("503", "overloaded", "unavailable"),
)

TIMEOUT = ErrorCategory(
    code="Timeout",
    message="The request took too long to process. Try a smaller document or a narrower page range.",
    status=504,
    markers=("deadline exceeded", "deadline_exceeded", "timed out", "timeout"),
)

RATE_LIMITED = ErrorCategory(
    code="Rate limited",
    message="The AI service rate limit was reached. Please wait a minute and try again.",
    status=429,
    markers=("429", "quota", "rate limit", "resource exhausted", "resource_exhausted"),
)

MISCONFIGURED = ErrorCategory(
    code="Configuration error",
    message="The AI service is not configured correctly. Please check the API key.",
    status=500,
    markers=("api key", "api_key", "permission denied", "401", "403"),
)

# Checked in order; the first category with a matching marker wins
_MESSAGE_CATEGORIES = (OVERLOADED, TIMEOUT, RATE_LIMITED, MISCONFIGURED)


def classify_error(exc: Exception) -> ErrorCategory:
    """Map an exception to an error category."""
    if isinstance(exc, FileTooLargeError):
        return ErrorCategory(code="File too large", message=exc.message, status=413)
    if isinstance(exc, TaxonomyInputError):
        return ErrorCategory(code="Invalid request", message=exc.message, status=400)
    if isinstance(exc, EmptyModelOutputError):
        return ErrorCategory(code="Empty model output", message=exc.message, status=502)
    if isinstance(exc, TaxonomyParseError):
        return ErrorCategory(
            code="Invalid model output",
            message="The AI returned a taxonomy in an unexpected format. Please try again.",
            status=502,
        )

    text = str(exc).lower()
    for category in _MESSAGE_CATEGORIES:
        if any(marker in text for marker in category.markers):
            return category

    return ErrorCategory(code="Server error", message=GENERIC_ERROR_MESSAGE, status=500)


def describe_generation_error(exc: Exception) -> str:
    """Return the message to show the user for a failed generation."""
    return classify_error(exc).message
