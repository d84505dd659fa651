"""
pdf_taxonomy.py – Command line taxonomy generation for a local PDF

Reads a PDF from disk, asks the configured model for its taxonomy and writes
the result as JSON (default) or as a markdown outline.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from config_manager import ConfigManager, create_llm_provider
from taxonomy_service import TaxonomyGenerator, describe_generation_error
from taxonomy_service.llm_utils import SUPPORTED_PROVIDERS
from taxonomy_service.logging_config import setup_logging, stop_logging
from taxonomy_service.models import TaxonomyResult

__version__ = "0.1.0"

_LOG = logging.getLogger("pdf_taxonomy")


def generate_taxonomy_for_file(
    pdf_path: Path,
    page_start: Optional[int] = None,
    page_end: Optional[int] = None,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    config_manager: Optional[ConfigManager] = None,
) -> TaxonomyResult:
    """Generate a taxonomy for a PDF on disk.

    Provider, model and API key fall back to the application configuration.
    """
    config_manager = config_manager or ConfigManager()
    llm_config = config_manager.get_llm_config()
    taxonomy_config = config_manager.get_taxonomy_config()

    if provider and provider != llm_config.provider:
        # Keys and URLs in the config belong to the configured provider
        llm_config.api_key = ""
        llm_config.base_url = ""
        llm_config.model = ""
        llm_config.provider = provider
    if model:
        llm_config.model = model
    if api_key:
        llm_config.api_key = api_key

    generator = TaxonomyGenerator(
        create_llm_provider(llm_config),
        max_input_char=llm_config.max_input_char,
        max_pdf_size_mb=taxonomy_config.max_pdf_size_mb,
    )
    return generator.generate_from_bytes(
        pdf_path.read_bytes(), page_start, page_end, filename=pdf_path.name
    )


def render_result(result: TaxonomyResult, output_format: str) -> str:
    """Serialize a result for output."""
    if output_format == "markdown":
        return result.to_markdown()
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a hierarchical topic taxonomy for a PDF via LLM"
    )
    parser.add_argument("pdf", type=Path, help="Path to the PDF file")
    parser.add_argument("--page-start", type=int, help="First page to analyze (1-based)")
    parser.add_argument("--page-end", type=int, help="Last page to analyze (inclusive)")
    parser.add_argument(
        "--provider",
        choices=SUPPORTED_PROVIDERS,
        help="LLM provider to use (default: from configuration)",
    )
    parser.add_argument("--model", help="Model name (default: provider default)")
    parser.add_argument("--api-key", help="API key for the provider")
    parser.add_argument(
        "--format",
        choices=["json", "markdown"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("-o", "--output", type=Path, help="Write the result to this file instead of stdout")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)
    try:
        if not args.pdf.is_file():
            _LOG.error("File not found: %s", args.pdf)
            return 1

        try:
            result = generate_taxonomy_for_file(
                args.pdf,
                page_start=args.page_start,
                page_end=args.page_end,
                provider=args.provider,
                model=args.model,
                api_key=args.api_key,
            )
        except Exception as e:
            _LOG.debug("Taxonomy generation failed", exc_info=True)
            _LOG.error("Error: %s (%s)", describe_generation_error(e), e)
            return 1

        output = render_result(result, args.format)
        if args.output:
            args.output.write_text(output, encoding="utf-8")
            _LOG.info("Taxonomy saved to %s", args.output)
        else:
            sys.stdout.write(output)
        return 0
    finally:
        stop_logging()


if __name__ == "__main__":
    sys.exit(main())
