"""
Tests for prompt rendering.
"""
import json

from taxonomy_service.models import TAXONOMY_OUTPUT_SCHEMA
from taxonomy_service.prompt_builder import (
    ATTACHED_PDF_SECTION,
    build_filter_prompt,
    build_taxonomy_prompt,
)


class TestTaxonomyPrompt:
    """Test the taxonomy prompt."""

    def test_attached_pdf_prompt(self):
        prompt = build_taxonomy_prompt(3, 8)

        assert ATTACHED_PDF_SECTION in prompt
        assert "page 3 to 8" in prompt
        assert "<document>" not in prompt

    def test_default_range(self):
        prompt = build_taxonomy_prompt()
        assert "page 1 to the final page" in prompt

    def test_embeds_output_schema(self):
        prompt = build_taxonomy_prompt()

        assert json.dumps(TAXONOMY_OUTPUT_SCHEMA, indent=2) in prompt
        assert "confidenceScore" in prompt
        assert "numberOfTopics" in prompt

    def test_text_prompt_embeds_document(self):
        prompt = build_taxonomy_prompt(1, 2, document_text="Chapter one {with braces}")

        assert ATTACHED_PDF_SECTION not in prompt
        assert "<document>\nChapter one {with braces}\n</document>" in prompt

    def test_no_unfilled_placeholders(self):
        prompt = build_taxonomy_prompt(1, 2)
        for name in ("{document_section}", "{page_range}", "{output_schema}"):
            assert name not in prompt


class TestFilterPrompt:
    def test_filter_prompt(self):
        prompt = build_filter_prompt("Page 1 of 10\nActual body text")

        assert "Actual body text" in prompt
        assert "filteredText" in prompt
        assert "{document_text}" not in prompt
