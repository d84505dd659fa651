"""
JSON Schema definitions handed to the model.

The schemas are derived from the Pydantic models so that the prompt and the
parser can never disagree about field names.
"""

from .taxonomy_models import FilteredContent, GeneratedTaxonomy

TAXONOMY_OUTPUT_SCHEMA = GeneratedTaxonomy.model_json_schema(by_alias=True)

FILTERED_CONTENT_SCHEMA = FilteredContent.model_json_schema(by_alias=True)
