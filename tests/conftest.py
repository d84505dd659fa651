"""
Shared fixtures: a small generated PDF, a fake model provider and a sample
taxonomy answer.
"""
import json

import pymupdf
import pytest
from langchain_core.messages import AIMessage


SAMPLE_MODEL_OUTPUT = {
    "taxonomy": [
        {
            "title": "Introduction",
            "summary": "Overview of **attention** mechanisms for document understanding.",
            "confidenceScore": 92,
            "subtopics": [
                {
                    "title": "Background",
                    "summary": "Prior work on sequence models and transformers.",
                    "confidenceScore": 85.0,
                    "subtopics": [
                        {
                            "title": "Recurrent Networks",
                            "summary": "RNN and LSTM limitations on long documents.",
                            "confidenceScore": 70,
                        }
                    ],
                }
            ],
            "image_table_info": [
                {
                    "type": "table",
                    "description": "Comparison of model accuracy across datasets.",
                    "pageNumber": 2,
                    "caption": "Table 1: Results",
                }
            ],
        },
        {
            "title": "Methods",
            "summary": "Training setup, datasets and evaluation protocol.",
            "confidenceScore": 80,
        },
    ],
    "metadata": {
        "numberOfTopics": 4,
        "pageRangeAnalyzed": "1-2",
        "imagesTablesAnalyzed": 1,
    },
}


class FakeLLMProvider:
    """Stands in for LLMProvider; records the messages it receives."""

    def __init__(self, content="", supports_pdf_input=True, error=None,
                 provider="gemini", model="fake-model"):
        self.content = content
        self.supports_pdf_input = supports_pdf_input
        self.error = error
        self.provider = provider
        self.model = model
        self.calls = []

    def invoke(self, messages, **kwargs):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return AIMessage(content=self.content)


def build_pdf(pages=2, text="Hello Taxonomy"):
    """Create an in-memory PDF with one line of text per page."""
    doc = pymupdf.open()
    for number in range(1, pages + 1):
        page = doc.new_page()
        page.insert_text((72, 72), f"{text} page {number}")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture()
def sample_output():
    """Sample model output as a dict."""
    return json.loads(json.dumps(SAMPLE_MODEL_OUTPUT))


@pytest.fixture()
def sample_output_json(sample_output):
    """Sample model output as the JSON string a model would return."""
    return json.dumps(sample_output)


@pytest.fixture()
def pdf_bytes():
    """A valid two-page PDF."""
    return build_pdf(pages=2)


@pytest.fixture()
def make_provider():
    """Factory for fake providers."""
    return FakeLLMProvider
