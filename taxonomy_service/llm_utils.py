"""
llm_utils.py - LLM utilities and provider management

This module provides LLM invocation functionality with support for
Gemini, OpenAI-compatible, DeepSeek and Ollama providers. Gemini and
OpenAI-compatible models accept the PDF itself as a file block; the other
providers only see text extracted from it.
"""

import logging
import os
import re
from typing import List, Optional

from langchain_deepseek.chat_models import DEFAULT_API_BASE as DEEPSEEK_DEFAULT_API_BASE
from langchain_core.messages import HumanMessage, AIMessage, BaseMessage
from langchain_deepseek import ChatDeepSeek
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_ollama import OllamaLLM
from langchain_openai import ChatOpenAI

_LOG = logging.getLogger("llm_utils")

# Default configuration
DEFAULT_LLM_PROVIDER = "gemini"  # "gemini", "openai", "deepseek", or "ollama"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "qwen3:8b"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEEPSEEK_MODEL_NAME = "deepseek-chat"

SUPPORTED_PROVIDERS = ("gemini", "openai", "deepseek", "ollama")
PDF_CAPABLE_PROVIDERS = ("gemini", "openai")

class LLMProvider:
    """LLM provider configuration and management."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        provider: str = DEFAULT_LLM_PROVIDER,
        model: str = None,
        temperature: float = 0.1,
        max_tokens: Optional[int] = None,
        timeout: int = 300,
        max_retries: int = 2,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.provider = (provider or DEFAULT_LLM_PROVIDER).lower()
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries

        if self.provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported LLM provider '{provider}'. Choose one of: {', '.join(SUPPORTED_PROVIDERS)}"
            )

        # Set defaults based on provider
        self._configure_provider()

    def _configure_provider(self):
        """Configure provider-specific settings."""
        if self.provider == "ollama":
            if not self.base_url:
                self.base_url = os.getenv("OLLAMA_BASE_URL", DEFAULT_OLLAMA_BASE_URL)
            if not self.model:
                self.model = os.getenv("OLLAMA_MODEL", DEFAULT_OLLAMA_MODEL)
        elif self.provider == "openai":
            if not self.api_key:
                self.api_key = os.getenv("OPENAI_API_KEY")
            if not self.base_url:
                self.base_url = os.getenv(
                    "OPENAI_API_BASE", "https://api.openai.com/v1"
                )
            if not self.model:
                self.model = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
        elif self.provider == "deepseek":
            if not self.api_key:
                self.api_key = os.getenv("DEEPSEEK_API_KEY")
            if not self.model:
                self.model = DEEPSEEK_MODEL_NAME
        else:  # gemini
            if not self.api_key:
                self.api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
            if not self.model:
                self.model = os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)

    @property
    def supports_pdf_input(self) -> bool:
        """Whether the provider can read a PDF attached to the message."""
        return self.provider in PDF_CAPABLE_PROVIDERS

    def get_llm(self):
        """Get the configured LLM instance."""
        if self.provider == "ollama":
            _LOG.debug("Using Ollama provider: %s at %s", self.model, self.base_url)
            return OllamaLLM(
                model=self.model,
                base_url=self.base_url,
                temperature=self.temperature,
                num_predict=self.max_tokens,
            )
        elif self.provider == "openai":
            if not self.api_key:
                raise ValueError(
                    "OpenAI API key required. Set OPENAI_API_KEY environment variable or pass api_key"
                )
            _LOG.debug(
                "Using OpenAI-compatible provider: %s at %s", self.model, self.base_url
            )
            return ChatOpenAI(
                model=self.model,
                api_key=self.api_key,
                base_url=self.base_url,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        elif self.provider == "deepseek":
            if not self.api_key:
                raise ValueError(
                    "DeepSeek API key required. Set DEEPSEEK_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using DeepSeek provider: %s", self.model)
            return ChatDeepSeek(
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=self.timeout,
                max_retries=self.max_retries,
                api_key=self.api_key,
                api_base=self.base_url if self.base_url else DEEPSEEK_DEFAULT_API_BASE,
            )
        else:  # gemini
            if not self.api_key:
                raise ValueError(
                    "Google API key required. Set GOOGLE_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using Gemini provider: %s", self.model)
            return ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=self.api_key,
                temperature=self.temperature,
                max_output_tokens=self.max_tokens,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )

    def invoke(self, messages: List[BaseMessage], **kwargs) -> AIMessage:
        """Invoke LLM with the configured provider."""
        llm = self.get_llm()

        if self.provider == "ollama":
            # Convert messages to text for Ollama (simpler interface)
            if len(messages) == 1:
                prompt = _message_text(messages[0])
            else:
                # Handle conversation format
                prompt = "\n\n".join(
                    [
                        f"{'User' if isinstance(m, HumanMessage) else 'Assistant'}: {_message_text(m)}"
                        for m in messages
                    ]
                )

            response = llm.invoke(prompt)
            cleaned_content = response
            if isinstance(cleaned_content, str):
                cleaned_content = clean_ollama_response(cleaned_content)

            return AIMessage(content=cleaned_content)
        else:
            return llm.invoke(messages)

def _message_text(message: BaseMessage) -> str:
    """Return the text parts of a message, dropping file blocks."""
    content = message.content
    if isinstance(content, str):
        return content
    return "\n".join(
        part["text"] for part in content
        if isinstance(part, dict) and part.get("type") == "text"
    )

def pdf_content_block(pdf_base64: str, filename: str = "document.pdf") -> dict:
    """Build a langchain file content block carrying a base64 encoded PDF."""
    return {
        "type": "file",
        "source_type": "base64",
        "mime_type": "application/pdf",
        "data": pdf_base64,
        "filename": filename,
    }

def response_text(response: AIMessage) -> str:
    """Flatten a model response into plain text."""
    content = response.content if response is not None else ""
    if isinstance(content, list):
        content = "".join(
            part if isinstance(part, str) else part.get("text", "")
            for part in content
        )
    return content or ""

def clean_ollama_response(content: str) -> str:
    """Clean Ollama response by removing <think> tags."""
    return re.sub(r"<think>.*?</think>", "", content, flags=re.DOTALL)

