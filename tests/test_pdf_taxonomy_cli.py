"""
Tests for the command line interface.
"""
import json

import pytest

import pdf_taxonomy
from config_manager import ConfigManager


@pytest.fixture()
def cli_env(monkeypatch, make_provider, sample_output_json):
    """Patch provider construction and logging for CLI runs."""
    provider = make_provider(content=sample_output_json)
    created = []

    def fake_create(llm_config):
        created.append(llm_config)
        return provider

    monkeypatch.setattr(pdf_taxonomy, "create_llm_provider", fake_create)
    monkeypatch.setattr(pdf_taxonomy, "setup_logging", lambda debug=False: None)
    monkeypatch.setattr(pdf_taxonomy, "stop_logging", lambda: None)
    return {"provider": provider, "created": created}


@pytest.fixture()
def pdf_file(tmp_path, pdf_bytes):
    path = tmp_path / "paper.pdf"
    path.write_bytes(pdf_bytes)
    return path


class TestMain:
    """Test the pdf-taxonomy entry point."""

    def test_json_to_stdout(self, cli_env, pdf_file, capsys):
        assert pdf_taxonomy.main([str(pdf_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["taxonomy"][0]["title"] == "Introduction"
        assert data["metadata"]["numberOfTopics"] == 4

    def test_markdown_to_file(self, cli_env, pdf_file, tmp_path):
        output = tmp_path / "out.md"

        code = pdf_taxonomy.main([str(pdf_file), "--format", "markdown", "-o", str(output)])

        assert code == 0
        text = output.read_text(encoding="utf-8")
        assert text.startswith("# Taxonomy")
        assert "- **Methods** (80%)" in text

    def test_page_range_passed_to_prompt(self, cli_env, pdf_file):
        pdf_taxonomy.main([str(pdf_file), "--page-start", "2", "--page-end", "2"])

        prompt = cli_env["provider"].calls[0][0].content[0]["text"]
        assert "page 2 to 2" in prompt

    def test_missing_file(self, cli_env, tmp_path):
        assert pdf_taxonomy.main([str(tmp_path / "nope.pdf")]) == 1
        assert cli_env["provider"].calls == []

    def test_generation_error(self, cli_env, pdf_file):
        assert pdf_taxonomy.main([str(pdf_file), "--page-start", "5"]) == 1

    def test_unknown_provider_rejected_by_parser(self, cli_env, pdf_file):
        with pytest.raises(SystemExit):
            pdf_taxonomy.main([str(pdf_file), "--provider", "nope"])


class TestGenerateForFile:
    def test_provider_override_resets_credentials(self, cli_env, pdf_file, tmp_path):
        config_file = tmp_path / "cfg.json"
        config_file.write_text(json.dumps({
            "llm": {"provider": "gemini", "api_key": "gem-key", "model": "gemini-x"}
        }), encoding="utf-8")

        pdf_taxonomy.generate_taxonomy_for_file(
            pdf_file,
            provider="ollama",
            model="llama3",
            config_manager=ConfigManager(str(config_file)),
        )

        llm_config = cli_env["created"][0]
        assert llm_config.provider == "ollama"
        assert llm_config.api_key == ""
        assert llm_config.model == "llama3"
