"""Embedding backend selection keyed on the configured provider."""

from typing import Callable

from src.embedding.provider import EmbeddingBackend
from src.errors import ConfigurationError
from src.models.enums import EmbeddingProviderType
from src.models.settings import AISettings


def _openai(settings: AISettings) -> EmbeddingBackend:
    from src.embedding.langchain_backends import OpenAIEmbeddingBackend

    return OpenAIEmbeddingBackend(api_key=settings.api_keys.openai)


def _ollama(settings: AISettings) -> EmbeddingBackend:
    from src.embedding.langchain_backends import OllamaEmbeddingBackend

    return OllamaEmbeddingBackend(
        base_url=settings.ollama_base_url,
        model_name=settings.ollama_embedding_model,
    )


def _sentence_transformers(settings: AISettings) -> EmbeddingBackend:
    from src.embedding.sentence_transformer import SentenceTransformerEmbeddingBackend

    return SentenceTransformerEmbeddingBackend(settings.sentence_transformer_model)


EMBEDDING_BACKENDS: dict[EmbeddingProviderType, Callable[[AISettings], EmbeddingBackend]] = {
    EmbeddingProviderType.OPENAI: _openai,
    EmbeddingProviderType.OLLAMA: _ollama,
    EmbeddingProviderType.SENTENCE_TRANSFORMERS: _sentence_transformers,
}


def get_embedding_backend(settings: AISettings) -> EmbeddingBackend:
    """Create the embedding backend selected by settings.embedding_provider.

    Raises ConfigurationError if the provider is unknown or its credential
    or endpoint is missing.
    """
    builder = EMBEDDING_BACKENDS.get(settings.embedding_provider)
    if builder is None:
        supported = ", ".join(p.value for p in EMBEDDING_BACKENDS)
        raise ConfigurationError(
            f"Unsupported embedding provider: {settings.embedding_provider}. "
            f"Supported: {supported}"
        )
    return builder(settings)


def embedding_identity(settings: AISettings) -> tuple[str, str, str]:
    """The settings that determine which backend get_embedding_backend() builds.

    (provider, model, endpoint or credential). Chat-side settings are not
    part of it, so switching the chat provider keeps the same backend.
    """
    provider = settings.embedding_provider
    if provider == EmbeddingProviderType.OPENAI:
        target = settings.api_keys.openai
    elif provider == EmbeddingProviderType.OLLAMA:
        target = settings.ollama_base_url
    else:
        target = ""
    return provider.value, settings.embedding_model, target


def is_embedding_configured(settings: AISettings) -> bool:
    """Whether the selected embedding provider has what it needs to run."""
    if settings.embedding_provider == EmbeddingProviderType.OPENAI:
        return bool(settings.api_keys.openai)
    if settings.embedding_provider == EmbeddingProviderType.OLLAMA:
        return bool(settings.ollama_base_url and settings.ollama_embedding_model)
    return settings.embedding_provider in EMBEDDING_BACKENDS
