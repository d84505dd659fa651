"""
Models package for taxonomy data.

This package contains the Pydantic model definitions, the derived JSON
schemas and the parsing helpers for the taxonomy service.
"""

from .taxonomy_models import (
    ImageTableInfo,
    TaxonomyNode,
    TaxonomyMetadata,
    ResultMetadata,
    GeneratedTaxonomy,
    TaxonomyResult,
    TaxonomyRequest,
    FilteredContent,
)

from .schemas import (
    TAXONOMY_OUTPUT_SCHEMA,
    FILTERED_CONTENT_SCHEMA,
)

from .utils import (
    clean_json_response,
    parse_generated_taxonomy,
    parse_filtered_content,
)

__all__ = [
    # Taxonomy models
    "ImageTableInfo",
    "TaxonomyNode",
    "TaxonomyMetadata",
    "ResultMetadata",
    "GeneratedTaxonomy",
    "TaxonomyResult",
    "TaxonomyRequest",
    "FilteredContent",

    # Schemas
    "TAXONOMY_OUTPUT_SCHEMA",
    "FILTERED_CONTENT_SCHEMA",

    # Utilities
    "clean_json_response",
    "parse_generated_taxonomy",
    "parse_filtered_content",
]
