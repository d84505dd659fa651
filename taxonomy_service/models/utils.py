"""
Utility functions for parsing model output.

This module contains functions for cleaning and validating the JSON the
model returns.
"""

import json
import re

from pydantic import ValidationError

from ..exceptions import TaxonomyParseError
from .taxonomy_models import FilteredContent, GeneratedTaxonomy


def clean_json_response(response: str) -> str:
    """Clean up LLM response to extract JSON content."""
    response = response.strip()
    # Reasoning models may prepend <think> blocks
    response = re.sub(r"<think>.*?</think>", "", response, flags=re.DOTALL).strip()

    # Only a fence wrapping the whole answer; summaries may hold their own fences
    fenced_match = re.match(r"^```(?:json|\w+)?\s*([\s\S]*?)\s*```$", response, re.IGNORECASE)
    if fenced_match:
        return fenced_match.group(1).strip()

    # Fall back to the outermost JSON object if the model wrapped it in prose
    if not response.startswith(("{", "[")):
        json_match = re.search(r"\{.*\}", response, re.DOTALL)
        if json_match:
            return json_match.group(0)

    return response

def parse_generated_taxonomy(json_str: str) -> GeneratedTaxonomy:
    """Parse a taxonomy from the model's JSON answer."""
    cleaned_json = clean_json_response(json_str)
    try:
        data = json.loads(cleaned_json)
    except json.JSONDecodeError as e:
        raise TaxonomyParseError(f"Model output is not valid JSON: {e}", raw_output=json_str)

    # A bare list of topics carries no metadata
    if isinstance(data, list):
        raise TaxonomyParseError("Model output is missing the metadata section", raw_output=json_str)

    try:
        return GeneratedTaxonomy.model_validate(data)
    except ValidationError as e:
        raise TaxonomyParseError(
            f"Model output does not match the taxonomy schema ({e.error_count()} errors): {e}",
            raw_output=json_str,
        )

def parse_filtered_content(json_str: str) -> FilteredContent:
    """Parse filtered content from JSON string using Pydantic model validation."""
    try:
        return FilteredContent.model_validate_json(clean_json_response(json_str))
    except ValidationError as e:
        raise TaxonomyParseError(f"Failed to parse filtered content: {e}", raw_output=json_str)
