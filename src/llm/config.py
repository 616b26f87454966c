"""LLM provider configuration using LangChain abstractions."""

from typing import Callable

from langchain_core.language_models.chat_models import BaseChatModel

from src.errors import ConfigurationError
from src.models.enums import ChatProviderType
from src.models.settings import AISettings

OPENAI_CHAT_MODEL = "gpt-4o-mini"
ANTHROPIC_CHAT_MODEL = "claude-3-5-sonnet-20241022"
XAI_CHAT_MODEL = "grok-beta"
XAI_BASE_URL = "https://api.x.ai/v1"
TEMPERATURE = 0.7


def _openai(settings: AISettings) -> BaseChatModel:
    if not settings.api_keys.openai:
        raise ConfigurationError("OpenAI API key is required")
    from langchain_openai import ChatOpenAI

    return ChatOpenAI(
        model=OPENAI_CHAT_MODEL,
        temperature=TEMPERATURE,
        api_key=settings.api_keys.openai,
    )


def _anthropic(settings: AISettings) -> BaseChatModel:
    if not settings.api_keys.anthropic:
        raise ConfigurationError("Anthropic API key is required")
    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(
        model=ANTHROPIC_CHAT_MODEL,
        temperature=TEMPERATURE,
        api_key=settings.api_keys.anthropic,
    )


def _xai(settings: AISettings) -> BaseChatModel:
    if not settings.api_keys.xai:
        raise ConfigurationError("xAI API key is required")
    from langchain_openai import ChatOpenAI

    # xAI serves an OpenAI-compatible API
    return ChatOpenAI(
        model=XAI_CHAT_MODEL,
        temperature=TEMPERATURE,
        api_key=settings.api_keys.xai,
        base_url=XAI_BASE_URL,
    )


def _ollama(settings: AISettings) -> BaseChatModel:
    if not settings.ollama_base_url or not settings.ollama_model:
        raise ConfigurationError("Ollama base URL and model are required")
    from langchain_ollama import ChatOllama

    return ChatOllama(
        model=settings.ollama_model,
        temperature=TEMPERATURE,
        base_url=settings.ollama_base_url,
    )


CHAT_BACKENDS: dict[ChatProviderType, Callable[[AISettings], BaseChatModel]] = {
    ChatProviderType.OPENAI: _openai,
    ChatProviderType.ANTHROPIC: _anthropic,
    ChatProviderType.XAI: _xai,
    ChatProviderType.OLLAMA: _ollama,
}


def get_llm(settings: AISettings) -> BaseChatModel:
    """Create and return the chat model selected by settings.chat_provider.

    Uses LangChain's BaseChatModel abstraction for LLM-agnostic access.
    Raises ConfigurationError, before any network call, when the provider
    is unsupported or its credential/endpoint is missing.
    """
    builder = CHAT_BACKENDS.get(settings.chat_provider)
    if builder is None:
        supported = ", ".join(p.value for p in CHAT_BACKENDS)
        raise ConfigurationError(
            f"Unsupported AI provider: {settings.chat_provider}. Supported: {supported}"
        )
    return builder(settings)


def is_configured(settings: AISettings) -> bool:
    """Whether the selected chat provider has its required configuration."""
    provider = settings.chat_provider
    if provider == ChatProviderType.OPENAI:
        return bool(settings.api_keys.openai)
    if provider == ChatProviderType.ANTHROPIC:
        return bool(settings.api_keys.anthropic)
    if provider == ChatProviderType.XAI:
        return bool(settings.api_keys.xai)
    if provider == ChatProviderType.OLLAMA:
        return bool(settings.ollama_base_url and settings.ollama_model)
    return False


def provider_display_name(settings: AISettings) -> str:
    names = {
        ChatProviderType.OPENAI: "OpenAI GPT",
        ChatProviderType.ANTHROPIC: "Anthropic Claude",
        ChatProviderType.XAI: "xAI Grok",
        ChatProviderType.OLLAMA: f"Ollama ({settings.ollama_model})",
    }
    return names.get(settings.chat_provider, "Unknown")
