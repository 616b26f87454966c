"""Embedding backends wrapping LangChain embedding clients."""

import logging

from langchain_core.embeddings import Embeddings

from src.embedding.provider import EmbeddingBackend
from src.errors import ConfigurationError
from src.models.enums import EmbeddingProviderType
from src.models.settings import OPENAI_EMBEDDING_MODEL

logger = logging.getLogger(__name__)


class LangChainEmbeddingBackend(EmbeddingBackend):
    """Adapts a LangChain Embeddings client to the EmbeddingBackend interface."""

    def __init__(self, client: Embeddings, model_name: str):
        self._client = client
        self._model_name = model_name

    @property
    def model_name(self) -> str:
        return self._model_name

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        return await self._client.aembed_documents(texts)

    async def embed_one(self, text: str) -> list[float]:
        return await self._client.aembed_query(text)


class OpenAIEmbeddingBackend(LangChainEmbeddingBackend):
    """Hosted OpenAI embeddings (text-embedding-3-small)."""

    batch_size = 10
    batch_delay = 0.1

    def __init__(self, api_key: str, model_name: str = OPENAI_EMBEDDING_MODEL):
        if not api_key:
            raise ConfigurationError("OpenAI API key is required for embeddings")

        from langchain_openai import OpenAIEmbeddings

        super().__init__(OpenAIEmbeddings(api_key=api_key, model=model_name), model_name)

    @property
    def provider(self) -> EmbeddingProviderType:
        return EmbeddingProviderType.OPENAI


class OllamaEmbeddingBackend(LangChainEmbeddingBackend):
    """Embeddings from a local Ollama server.

    Smaller batches and a longer pause keep memory pressure on the local
    inference server down.
    """

    batch_size = 5
    batch_delay = 0.2

    def __init__(self, base_url: str, model_name: str):
        if not base_url:
            raise ConfigurationError("Ollama base URL is required for embeddings")
        if not model_name:
            raise ConfigurationError("Ollama embedding model is required for embeddings")

        from langchain_ollama import OllamaEmbeddings

        logger.info("Using Ollama embeddings %s at %s", model_name, base_url)
        super().__init__(OllamaEmbeddings(base_url=base_url, model=model_name), model_name)

    @property
    def provider(self) -> EmbeddingProviderType:
        return EmbeddingProviderType.OLLAMA
