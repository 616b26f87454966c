"""Application configuration management."""

from pydantic_settings import BaseSettings

from src.models.enums import ChatProviderType, EmbeddingProviderType
from src.models.settings import AISettings, ApiKeys


class Settings(BaseSettings):
    """BillChat application settings loaded from environment variables."""

    # Provider credentials
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    xai_api_key: str = ""
    congress_api_key: str = ""

    # Providers
    billchat_chat_provider: ChatProviderType = ChatProviderType.OPENAI
    billchat_embedding_provider: EmbeddingProviderType = EmbeddingProviderType.OPENAI

    # Ollama
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama2"
    ollama_embedding_model: str = "nomic-embed-text"

    # In-process embedding
    billchat_sentence_transformer_model: str = "all-MiniLM-L6-v2"

    # Congress
    billchat_congress_number: int = 119

    # Chunking
    billchat_chunk_size: int = 1000
    billchat_chunk_overlap: int = 200

    # Retrieval
    billchat_cache_ttl_seconds: float = 3600.0
    billchat_top_k: int = 3
    billchat_query_cache_size: int = 500

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def to_ai_settings(self) -> AISettings:
        """Snapshot the provider-related fields as an immutable AISettings."""
        return AISettings(
            chat_provider=self.billchat_chat_provider,
            api_keys=ApiKeys(
                openai=self.openai_api_key,
                anthropic=self.anthropic_api_key,
                xai=self.xai_api_key,
            ),
            ollama_base_url=self.ollama_base_url,
            ollama_model=self.ollama_model,
            embedding_provider=self.billchat_embedding_provider,
            ollama_embedding_model=self.ollama_embedding_model,
            sentence_transformer_model=self.billchat_sentence_transformer_model,
            congress_number=self.billchat_congress_number,
        )


def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
