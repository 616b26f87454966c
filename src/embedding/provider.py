"""Abstract embedding backend interface."""

from abc import ABC, abstractmethod

from src.models.enums import EmbeddingProviderType


class EmbeddingBackend(ABC):
    """Interface for text embedding generation.

    Implementations wrap a specific embedding service or model. Swap
    backends by changing the embedding provider in AISettings.

    batch_size and batch_delay tell callers how to pace bulk embedding:
    how many texts to send per call and how long to wait (seconds)
    between calls.
    """

    batch_size: int = 10
    batch_delay: float = 0.1

    @property
    @abstractmethod
    def provider(self) -> EmbeddingProviderType:
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        ...

    @abstractmethod
    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a batch of text strings.

        Args:
            texts: List of text strings to embed.

        Returns:
            One embedding vector per input text, in input order.
        """
        ...

    async def embed_one(self, text: str) -> list[float]:
        """Generate the embedding for a single query text.

        Default delegates to embed_many(). Override when the model treats
        queries differently from documents.
        """
        vectors = await self.embed_many([text])
        return vectors[0]
