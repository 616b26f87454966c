"""Immutable AI provider settings."""

from dataclasses import dataclass, field, replace

from src.models.enums import ChatProviderType, EmbeddingProviderType

OPENAI_EMBEDDING_MODEL = "text-embedding-3-small"


@dataclass(frozen=True)
class ApiKeys:
    """Credentials for the hosted providers. Empty string means unset."""

    openai: str = ""
    anthropic: str = ""
    xai: str = ""


@dataclass(frozen=True)
class AISettings:
    """Provider selection and configuration for chat and embeddings.

    Instances never change. Use with_updates() to derive a new value, so a
    component holding a reference always sees one consistent configuration.
    """

    chat_provider: ChatProviderType = ChatProviderType.OPENAI
    api_keys: ApiKeys = field(default_factory=ApiKeys)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama2"
    embedding_provider: EmbeddingProviderType = EmbeddingProviderType.OPENAI
    ollama_embedding_model: str = "nomic-embed-text"
    sentence_transformer_model: str = "all-MiniLM-L6-v2"
    congress_number: int = 119

    def __post_init__(self):
        if not isinstance(self.chat_provider, ChatProviderType):
            object.__setattr__(self, "chat_provider", ChatProviderType(self.chat_provider))
        if not isinstance(self.embedding_provider, EmbeddingProviderType):
            object.__setattr__(
                self, "embedding_provider", EmbeddingProviderType(self.embedding_provider)
            )
        if self.congress_number <= 0:
            raise ValueError("congress_number must be > 0")

    @property
    def embedding_model(self) -> str:
        """Name of the model behind the active embedding provider."""
        if self.embedding_provider == EmbeddingProviderType.OLLAMA:
            return self.ollama_embedding_model
        if self.embedding_provider == EmbeddingProviderType.SENTENCE_TRANSFORMERS:
            return self.sentence_transformer_model
        return OPENAI_EMBEDDING_MODEL

    def with_updates(self, **changes) -> "AISettings":
        """Return a copy with the given fields replaced.

        An api_keys mapping is merged into the existing keys instead of
        replacing them wholesale.
        """
        keys = changes.get("api_keys")
        if isinstance(keys, dict):
            changes["api_keys"] = replace(self.api_keys, **keys)
        return replace(self, **changes)
