"""
content_filter.py - Removes headers, footers and boilerplate from document text
"""

import logging

from langchain_core.messages import HumanMessage

from .exceptions import EmptyModelOutputError, TaxonomyInputError
from .llm_utils import LLMProvider, response_text
from .models import FilteredContent, parse_filtered_content
from .prompt_builder import build_filter_prompt

_LOG = logging.getLogger("content_filter")


class ContentFilter:
    """Asks the model to keep only the meaningful content of a text."""

    def __init__(self, llm_provider: LLMProvider, max_input_char: int = 100000):
        self.llm_provider = llm_provider
        self.max_input_char = max_input_char

    def filter(self, document_text: str) -> FilteredContent:
        if not document_text or not document_text.strip():
            raise TaxonomyInputError("Document text is empty.")

        if len(document_text) > self.max_input_char:
            raise TaxonomyInputError(
                f"Document text is too long ({len(document_text)} characters, "
                f"maximum is {self.max_input_char})."
            )

        _LOG.info("Filtering %d characters of document text", len(document_text))
        response = self.llm_provider.invoke(
            [HumanMessage(content=build_filter_prompt(document_text))]
        )
        content = response_text(response)
        if not content.strip():
            raise EmptyModelOutputError("Failed to filter content. The AI returned no output.")

        filtered = parse_filtered_content(content)
        _LOG.info(
            "Filtered text from %d to %d characters",
            len(document_text),
            len(filtered.filtered_text),
        )
        return filtered


def filter_content(document_text: str, llm_provider: LLMProvider) -> FilteredContent:
    """Filter irrelevant content from a document text."""
    return ContentFilter(llm_provider).filter(document_text)
