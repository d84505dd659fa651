from typing import Any, Dict

from taxonomy_service.content_filter import ContentFilter
from taxonomy_service.taxonomy_generator import TaxonomyGenerator

from .renderer import TaxonomyRenderer
from .routes import create_pdf_analysis_routes
from .services import PdfAnalysisService


def create_pdf_analysis_module(
    llm_provider,
    llm_config,
    taxonomy_config,
    index_template: str,
) -> Dict[str, Any]:
    """Create and configure all PDF analysis components."""

    generator = TaxonomyGenerator(
        llm_provider,
        max_input_char=llm_config.max_input_char,
        max_pdf_size_mb=taxonomy_config.max_pdf_size_mb,
    )
    content_filter = ContentFilter(llm_provider, max_input_char=llm_config.max_input_char)
    renderer = TaxonomyRenderer()

    analysis_service = PdfAnalysisService(
        generator=generator,
        content_filter=content_filter,
        taxonomy_config=taxonomy_config,
    )

    blueprint = create_pdf_analysis_routes(
        analysis_service,
        renderer,
        index_template,
        max_pdf_size_mb=taxonomy_config.max_pdf_size_mb,
    )

    return {
        "blueprint": blueprint,
        "service": analysis_service,
        "generator": generator,
        "content_filter": content_filter,
        "renderer": renderer,
    }
