"""
Configuration management for the PDF Taxonomy Generator.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class LLMConfig:
    """LLM configuration settings."""
    provider: str
    api_key: str
    base_url: str
    model: str
    max_tokens: int
    temperature: float
    max_input_char: int
    timeout: int


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class TaxonomyConfig:
    """Taxonomy generation configuration settings."""
    max_pdf_size_mb: int
    default_page_start: Optional[int]
    default_page_end: Optional[int]


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "web_app_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "llm": {
                "provider": "gemini",
                "api_key": "",
                "base_url": "",
                "model": "",
                "max_tokens": 8192,
                "temperature": 0.1,
                "max_input_char": 200000,
                "timeout": 300
            },
            "app": {
                "host": "0.0.0.0",
                "port": 9002,
                "debug": False
            },
            "taxonomy": {
                "max_pdf_size_mb": 20,
                "default_page_start": None,
                "default_page_end": None
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # LLM settings
        if os.getenv("LLM_PROVIDER"):
            self._config["llm"]["provider"] = os.getenv("LLM_PROVIDER")

        if os.getenv("LLM_API_KEY"):
            self._config["llm"]["api_key"] = os.getenv("LLM_API_KEY")

        if os.getenv("LLM_BASE_URL"):
            self._config["llm"]["base_url"] = os.getenv("LLM_BASE_URL")

        if os.getenv("LLM_MODEL"):
            self._config["llm"]["model"] = os.getenv("LLM_MODEL")

        if os.getenv("LLM_MAX_INPUT_CHAR"):
            self._config["llm"]["max_input_char"] = int(os.getenv("LLM_MAX_INPUT_CHAR"))

        if os.getenv("LLM_TIMEOUT"):
            self._config["llm"]["timeout"] = int(os.getenv("LLM_TIMEOUT"))

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        # Taxonomy settings
        if os.getenv("MAX_PDF_SIZE_MB"):
            self._config["taxonomy"]["max_pdf_size_mb"] = int(os.getenv("MAX_PDF_SIZE_MB"))

    def get_llm_config(self) -> LLMConfig:
        """Get LLM configuration."""
        llm_config = self._config["llm"]
        return LLMConfig(
            provider=llm_config["provider"],
            api_key=llm_config["api_key"],
            base_url=llm_config["base_url"],
            model=llm_config["model"],
            max_tokens=llm_config["max_tokens"],
            temperature=llm_config["temperature"],
            max_input_char=llm_config["max_input_char"],
            timeout=llm_config["timeout"]
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_taxonomy_config(self) -> TaxonomyConfig:
        """Get taxonomy generation configuration."""
        taxonomy_config = self._config["taxonomy"]
        return TaxonomyConfig(
            max_pdf_size_mb=taxonomy_config["max_pdf_size_mb"],
            default_page_start=taxonomy_config["default_page_start"],
            default_page_end=taxonomy_config["default_page_end"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()


# Global configuration instance
config_manager = ConfigManager()


def get_llm_config() -> LLMConfig:
    """Get LLM configuration."""
    return config_manager.get_llm_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_taxonomy_config() -> TaxonomyConfig:
    """Get taxonomy generation configuration."""
    return config_manager.get_taxonomy_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def create_llm_provider(llm_config: LLMConfig):
    """
    Build an LLMProvider from configuration.

    Empty strings in the config mean "use the provider default".

    Args:
        llm_config: The LLM configuration section

    Returns:
        Configured LLMProvider instance
    """
    from taxonomy_service.llm_utils import LLMProvider

    return LLMProvider(
        api_key=llm_config.api_key or None,
        base_url=llm_config.base_url or None,
        provider=llm_config.provider,
        model=llm_config.model or None,
        temperature=llm_config.temperature,
        max_tokens=llm_config.max_tokens or None,
        timeout=llm_config.timeout,
    )
