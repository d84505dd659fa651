"""
prompt_builder.py - Prompt rendering for taxonomy and content filtering
"""

import json
from pathlib import Path
from typing import Optional

from langchain_core.prompts import PromptTemplate

from .models import FILTERED_CONTENT_SCHEMA, TAXONOMY_OUTPUT_SCHEMA
from .pdf_processor import describe_page_range

PROMPTS_DIR = Path(__file__).parent / "prompts"

ATTACHED_PDF_SECTION = "**PDF for Analysis:** The PDF document is attached to this message."


def _load_template(name: str) -> PromptTemplate:
    return PromptTemplate.from_file(PROMPTS_DIR / name, encoding="utf-8")


def build_taxonomy_prompt(
    page_start: Optional[int] = None,
    page_end: Optional[int] = None,
    document_text: Optional[str] = None,
) -> str:
    """Render the taxonomy prompt.

    Args:
        page_start: First page to analyze (1-based), or None for the first page
        page_end: Last page to analyze, or None for the final page
        document_text: Extracted document text for providers that cannot
            read the attached PDF; None when the PDF is attached

    Returns:
        The prompt text
    """
    if document_text is None:
        document_section = ATTACHED_PDF_SECTION
    else:
        document_section = (
            "**Document Text for Analysis** (extracted from the PDF):\n"
            f"<document>\n{document_text}\n</document>"
        )

    return _load_template("pdf_taxonomy.md").format(
        document_section=document_section,
        page_range=describe_page_range(page_start, page_end),
        output_schema=json.dumps(TAXONOMY_OUTPUT_SCHEMA, indent=2),
    )


def build_filter_prompt(document_text: str) -> str:
    """Render the content filtering prompt."""
    return _load_template("content_filter.md").format(
        document_text=document_text,
        output_schema=json.dumps(FILTERED_CONTENT_SCHEMA, indent=2),
    )
