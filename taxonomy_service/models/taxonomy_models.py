"""
Taxonomy data models.

This module contains Pydantic models for the hierarchical taxonomy returned
by the model, the metadata wrapped around it, and the request that produces
it. Field aliases carry the wire names (``confidenceScore``, ``pageNumber``,
...); Python code uses the snake_case attribute names.
"""

import math
from typing import Iterator, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _round_number(value):
    """Models sometimes answer 85.0 where an integer is expected."""
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("must be a finite number")
        return int(round(value))
    return value


class ImageTableInfo(BaseModel):
    """An image or table attached to a topic."""
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image", "table"] = Field(description="The type of content, either 'image' or 'table'.")
    description: str = Field(
        description="A detailed description of the image or a summary of the table's data."
    )
    page_number: int = Field(
        alias="pageNumber", description="The page number where the image or table is located."
    )
    caption: Optional[str] = Field(
        default=None, description="The caption of the image or table, if available."
    )

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            if value in ("figure", "chart", "diagram", "photo"):
                return "image"
        return value

    @field_validator("page_number", mode="before")
    @classmethod
    def _round_page_number(cls, value):
        return _round_number(value)


class TaxonomyNode(BaseModel):
    """A topic or subtopic in the taxonomy tree."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(description="The title of the topic or subtopic. MUST be extracted from the document.")
    summary: str = Field(
        description="A concise 2-3 sentence summary of the topic, rich with keywords for searchability."
    )
    confidence_score: int = Field(
        alias="confidenceScore",
        ge=0,
        le=100,
        description=(
            "A confidence score (0-100) representing the relevance and clarity of the "
            "extracted topic. MUST be an integer."
        ),
    )
    subtopics: Optional[List["TaxonomyNode"]] = Field(
        default=None,
        description="A list of nested subtopics. Create a deep hierarchy (5-6 levels or more) if the document supports it.",
    )
    image_table_info: Optional[List[ImageTableInfo]] = Field(
        default=None,
        description="A list of important images or tables found within this topic. Extract their captions and describe them.",
    )

    @field_validator("confidence_score", mode="before")
    @classmethod
    def _round_confidence(cls, value):
        return _round_number(value)

    def iter_nodes(self, depth: int = 1) -> Iterator[Tuple["TaxonomyNode", int]]:
        """Yield this node and all descendants depth-first with their depth."""
        yield self, depth
        for child in self.subtopics or []:
            yield from child.iter_nodes(depth + 1)


TaxonomyNode.model_rebuild()


class TaxonomyMetadata(BaseModel):
    """Metadata the model computes about its own taxonomy."""
    model_config = ConfigDict(populate_by_name=True)

    number_of_topics: int = Field(
        alias="numberOfTopics",
        description="The TOTAL number of topics and subtopics identified in the entire taxonomy.",
    )
    page_range_analyzed: str = Field(
        alias="pageRangeAnalyzed",
        description='The page range that was analyzed (e.g., "1-10" or "all pages").',
    )
    images_tables_analyzed: int = Field(
        alias="imagesTablesAnalyzed",
        description="The total number of images and tables analyzed in the document.",
    )

    @field_validator("number_of_topics", "images_tables_analyzed", mode="before")
    @classmethod
    def _round_counts(cls, value):
        return _round_number(value)

    @field_validator("page_range_analyzed", mode="before")
    @classmethod
    def _stringify_range(cls, value):
        if isinstance(value, (int, float)):
            return str(value)
        return value


class ResultMetadata(TaxonomyMetadata):
    """Model metadata enriched with the measured processing time."""
    processing_time: str = Field(
        alias="processingTime",
        description="The total time taken to process the request, in seconds.",
    )


class GeneratedTaxonomy(BaseModel):
    """The taxonomy exactly as the model is asked to produce it."""
    model_config = ConfigDict(populate_by_name=True)

    taxonomy: List[TaxonomyNode] = Field(
        description="The complete, hierarchical taxonomy of the PDF. MUST be an array of top-level topics."
    )
    metadata: TaxonomyMetadata

    @field_validator("taxonomy", mode="before")
    @classmethod
    def _wrap_single_node(cls, value):
        # The model occasionally returns one root object instead of a list
        if isinstance(value, dict):
            return [value]
        return value

    def iter_nodes(self) -> Iterator[Tuple[TaxonomyNode, int]]:
        """Yield every node of the tree depth-first with its depth (roots are 1)."""
        for root in self.taxonomy:
            yield from root.iter_nodes()

    def count_topics(self) -> int:
        """Count all topics and subtopics."""
        return sum(1 for _ in self.iter_nodes())

    def count_images_tables(self) -> int:
        """Count image/table annotations across the tree."""
        return sum(len(node.image_table_info or []) for node, _ in self.iter_nodes())

    def max_depth(self) -> int:
        """Depth of the deepest node, 0 for an empty taxonomy."""
        return max((depth for _, depth in self.iter_nodes()), default=0)

    def to_dict(self) -> dict:
        """Serialize with wire names, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TaxonomyResult(GeneratedTaxonomy):
    """Final taxonomy returned to callers."""
    metadata: ResultMetadata

    @classmethod
    def from_generated(cls, generated: GeneratedTaxonomy, processing_time: str) -> "TaxonomyResult":
        """Attach the processing time to a model-produced taxonomy."""
        metadata = ResultMetadata(
            **generated.metadata.model_dump(),
            processing_time=processing_time,
        )
        return cls(taxonomy=generated.taxonomy, metadata=metadata)

    def to_markdown(self) -> str:
        """Render the taxonomy as a nested markdown outline."""
        md_lines = []
        meta = self.metadata

        md_lines.append("# Taxonomy")
        md_lines.append("")
        md_lines.append(f"* **Topics**: {meta.number_of_topics}")
        md_lines.append(f"* **Pages analyzed**: {meta.page_range_analyzed}")
        md_lines.append(f"* **Images/tables analyzed**: {meta.images_tables_analyzed}")
        md_lines.append(f"* **Processing time**: {meta.processing_time}")
        md_lines.append("\n---\n")

        for node, depth in self.iter_nodes():
            indent = "  " * (depth - 1)
            md_lines.append(f"{indent}- **{node.title}** ({node.confidence_score}%)")
            md_lines.append(f"{indent}  {node.summary.strip()}")
            for item in node.image_table_info or []:
                caption = f" \"{item.caption}\"" if item.caption else ""
                md_lines.append(
                    f"{indent}  - _{item.type.capitalize()}{caption}, page {item.page_number}_: {item.description}"
                )

        return "\n".join(md_lines).strip() + "\n"


class TaxonomyRequest(BaseModel):
    """A PDF submitted for analysis."""
    model_config = ConfigDict(populate_by_name=True)

    pdf_data_uri: str = Field(
        alias="pdfDataUri",
        description="A PDF document as a data URI: 'data:<mimetype>;base64,<encoded_data>'.",
    )
    page_start: Optional[int] = Field(default=None, alias="pageStart", description="The starting page for analysis.")
    page_end: Optional[int] = Field(default=None, alias="pageEnd", description="The ending page for analysis.")


class FilteredContent(BaseModel):
    """Document text with headers, footers and boilerplate removed."""
    model_config = ConfigDict(populate_by_name=True)

    filtered_text: str = Field(alias="filteredText", description="The filtered text content of the document.")
