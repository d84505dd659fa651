"""
Tests for the taxonomy data models and output parsing.
"""
import pytest
from pydantic import ValidationError

from taxonomy_service.exceptions import TaxonomyParseError
from taxonomy_service.models import (
    GeneratedTaxonomy,
    ImageTableInfo,
    TaxonomyNode,
    TaxonomyResult,
    TaxonomyRequest,
    clean_json_response,
    parse_filtered_content,
    parse_generated_taxonomy,
)


class TestTaxonomyNode:
    """Test node validation and normalization."""

    def test_wire_names_and_python_names(self):
        """Nodes accept both camelCase aliases and snake_case names."""
        by_alias = TaxonomyNode.model_validate(
            {"title": "A", "summary": "S", "confidenceScore": 50}
        )
        by_name = TaxonomyNode(title="A", summary="S", confidence_score=50)

        assert by_alias.confidence_score == 50
        assert by_alias == by_name

    def test_integral_float_confidence_coerced(self):
        node = TaxonomyNode.model_validate({"title": "A", "summary": "S", "confidenceScore": 85.0})
        assert node.confidence_score == 85
        assert isinstance(node.confidence_score, int)

    def test_fractional_confidence_rounded(self):
        node = TaxonomyNode.model_validate({"title": "A", "summary": "S", "confidenceScore": 85.6})
        assert node.confidence_score == 86

    @pytest.mark.parametrize("score", [-1, 101, 150])
    def test_confidence_out_of_range_rejected(self, score):
        with pytest.raises(ValidationError):
            TaxonomyNode.model_validate({"title": "A", "summary": "S", "confidenceScore": score})

    @pytest.mark.parametrize("score", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_confidence_rejected(self, score):
        with pytest.raises(ValidationError):
            TaxonomyNode.model_validate({"title": "A", "summary": "S", "confidenceScore": score})

    def test_optional_lists_default_to_none(self):
        node = TaxonomyNode(title="A", summary="S", confidence_score=10)
        assert node.subtopics is None
        assert node.image_table_info is None

    def test_image_type_normalized(self):
        info = ImageTableInfo.model_validate(
            {"type": "Figure", "description": "A plot", "pageNumber": 3.0}
        )
        assert info.type == "image"
        assert info.page_number == 3
        assert info.caption is None

    def test_unknown_media_type_rejected(self):
        with pytest.raises(ValidationError):
            ImageTableInfo.model_validate({"type": "video", "description": "x", "pageNumber": 1})


class TestGeneratedTaxonomy:
    """Test the tree container and its helpers."""

    def test_tree_helpers(self, sample_output):
        taxonomy = GeneratedTaxonomy.model_validate(sample_output)

        assert taxonomy.count_topics() == 4
        assert taxonomy.count_images_tables() == 1
        assert taxonomy.max_depth() == 3

        titles = [(node.title, depth) for node, depth in taxonomy.iter_nodes()]
        assert titles == [
            ("Introduction", 1),
            ("Background", 2),
            ("Recurrent Networks", 3),
            ("Methods", 1),
        ]

    def test_empty_taxonomy(self):
        taxonomy = GeneratedTaxonomy.model_validate({
            "taxonomy": [],
            "metadata": {"numberOfTopics": 0, "pageRangeAnalyzed": "all pages", "imagesTablesAnalyzed": 0},
        })
        assert taxonomy.count_topics() == 0
        assert taxonomy.max_depth() == 0

    def test_single_root_object_wrapped_in_list(self, sample_output):
        sample_output["taxonomy"] = sample_output["taxonomy"][0]
        taxonomy = GeneratedTaxonomy.model_validate(sample_output)

        assert len(taxonomy.taxonomy) == 1
        assert taxonomy.taxonomy[0].title == "Introduction"

    def test_numeric_page_range_stringified(self, sample_output):
        sample_output["metadata"]["pageRangeAnalyzed"] = 5
        taxonomy = GeneratedTaxonomy.model_validate(sample_output)
        assert taxonomy.metadata.page_range_analyzed == "5"

    def test_to_dict_uses_wire_names_and_omits_none(self, sample_output):
        data = GeneratedTaxonomy.model_validate(sample_output).to_dict()

        intro = data["taxonomy"][0]
        assert intro["confidenceScore"] == 92
        assert intro["image_table_info"][0]["pageNumber"] == 2
        assert "image_table_info" not in data["taxonomy"][1]
        assert "subtopics" not in data["taxonomy"][1]
        assert data["metadata"]["numberOfTopics"] == 4


class TestTaxonomyResult:
    """Test the enriched result."""

    def test_from_generated_adds_processing_time(self, sample_output):
        generated = GeneratedTaxonomy.model_validate(sample_output)
        result = TaxonomyResult.from_generated(generated, "3.21s")

        assert result.metadata.processing_time == "3.21s"
        assert result.metadata.number_of_topics == 4
        assert result.to_dict()["metadata"]["processingTime"] == "3.21s"

    def test_to_markdown_outline(self, sample_output):
        result = TaxonomyResult.from_generated(
            GeneratedTaxonomy.model_validate(sample_output), "1.00s"
        )
        md = result.to_markdown()

        assert "- **Introduction** (92%)" in md
        assert "  - **Background** (85%)" in md
        assert "    - **Recurrent Networks** (70%)" in md
        assert 'Table "Table 1: Results", page 2' in md
        assert "**Processing time**: 1.00s" in md


class TestTaxonomyRequest:
    def test_aliases(self):
        request = TaxonomyRequest.model_validate(
            {"pdfDataUri": "data:application/pdf;base64,AAAA", "pageStart": 2}
        )
        assert request.pdf_data_uri.startswith("data:")
        assert request.page_start == 2
        assert request.page_end is None


class TestParsing:
    """Test parsing of raw model answers."""

    def test_clean_json_response_strips_fences(self):
        assert clean_json_response('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert clean_json_response('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_clean_json_response_strips_think_blocks(self):
        raw = '<think>planning the answer</think>\n{"a": 1}'
        assert clean_json_response(raw) == '{"a": 1}'

    def test_clean_json_response_extracts_object_from_prose(self):
        raw = 'Here is the taxonomy: {"a": {"b": 2}} Hope this helps.'
        assert clean_json_response(raw) == '{"a": {"b": 2}}'

    def test_parse_generated_taxonomy(self, sample_output_json):
        taxonomy = parse_generated_taxonomy(f"```json\n{sample_output_json}\n```")
        assert taxonomy.taxonomy[0].title == "Introduction"

    def test_parse_invalid_json(self):
        with pytest.raises(TaxonomyParseError) as exc_info:
            parse_generated_taxonomy("not json at all")
        assert exc_info.value.raw_output == "not json at all"

    def test_parse_missing_metadata(self, sample_output):
        import json
        with pytest.raises(TaxonomyParseError):
            parse_generated_taxonomy(json.dumps({"taxonomy": sample_output["taxonomy"]}))

    def test_parse_bare_list_rejected(self, sample_output):
        import json
        with pytest.raises(TaxonomyParseError):
            parse_generated_taxonomy(json.dumps(sample_output["taxonomy"]))

    def test_parse_keeps_fences_inside_summaries(self, sample_output):
        import json
        sample_output["taxonomy"][1]["summary"] = "Uses ```python\nprint(1)\n``` as example."
        raw = json.dumps(sample_output)

        assert clean_json_response(raw) == raw
        taxonomy = parse_generated_taxonomy(raw)
        assert taxonomy.taxonomy[1].summary.startswith("Uses ```python")

        fenced = parse_generated_taxonomy(f"```json\n{raw}\n```")
        assert fenced.taxonomy[1].summary == sample_output["taxonomy"][1]["summary"]

    def test_parse_infinite_score_is_parse_error(self, sample_output_json):
        raw = sample_output_json.replace('"confidenceScore": 80', '"confidenceScore": Infinity')
        assert raw != sample_output_json
        with pytest.raises(TaxonomyParseError):
            parse_generated_taxonomy(raw)

    def test_parse_filtered_content(self):
        filtered = parse_filtered_content('{"filteredText": "Body"}')
        assert filtered.filtered_text == "Body"

    def test_parse_filtered_content_invalid(self):
        with pytest.raises(TaxonomyParseError):
            parse_filtered_content('{"text": "Body"}')
