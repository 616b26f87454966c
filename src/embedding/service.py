"""Bill embedding and query search on top of an embedding backend.

Embeds a bill's chunks in paced, strictly sequential batches and answers
similarity queries against the result. Query vectors are memoized in a
bounded LRU cache keyed by (provider, model, query text), so the same
question asked against several bills is embedded once.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Callable

from src.embedding.factory import embedding_identity, get_embedding_backend
from src.embedding.provider import EmbeddingBackend
from src.errors import EmbeddingError, EmptyIndexError
from src.models.chunk import BillContent, SearchResult
from src.models.settings import AISettings
from src.retrieval.similarity import search

logger = logging.getLogger(__name__)

DEFAULT_QUERY_CACHE_SIZE = 500
DEFAULT_MAX_SERVICES = 8


class QueryEmbeddingCache:
    """Least-recently-used cache of query embeddings."""

    def __init__(self, max_size: int = DEFAULT_QUERY_CACHE_SIZE):
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._max_size = max_size
        self._entries: OrderedDict[tuple[str, str, str], list[float]] = OrderedDict()

    def get(self, key: tuple[str, str, str]) -> list[float] | None:
        vector = self._entries.get(key)
        if vector is not None:
            self._entries.move_to_end(key)
        return vector

    def put(self, key: tuple[str, str, str], vector: list[float]) -> None:
        self._entries[key] = vector
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries


class EmbeddingService:
    """Embeds bill content and searches it with one embedding backend."""

    def __init__(
        self,
        backend: EmbeddingBackend,
        query_cache_size: int = DEFAULT_QUERY_CACHE_SIZE,
    ):
        self._backend = backend
        self._query_cache = QueryEmbeddingCache(query_cache_size)

    @property
    def backend(self) -> EmbeddingBackend:
        return self._backend

    @property
    def query_cache(self) -> QueryEmbeddingCache:
        return self._query_cache

    async def create_embeddings(self, content: BillContent) -> BillContent:
        """Embed every chunk of the content.

        Batches run one after another with the backend's pacing delay
        between them. The first failing batch aborts the run with an
        EmbeddingError; nothing partial is returned. The input content is
        left untouched and a new BillContent is returned.
        """
        backend = self._backend
        texts = [chunk.text for chunk in content.chunks]
        batch_size = max(backend.batch_size, 1)
        start_time = time.monotonic()

        logger.info(
            "Creating embeddings for %s using %s model %s (%d chunks)",
            content.bill_id,
            backend.provider.value,
            backend.model_name,
            len(texts),
        )

        embeddings: list[list[float]] = []
        for batch_index, offset in enumerate(range(0, len(texts), batch_size)):
            batch = texts[offset:offset + batch_size]
            batch_start = time.monotonic()
            try:
                vectors = await backend.embed_many(batch)
            except Exception as e:
                logger.error(
                    "Embedding batch %d failed for %s (%s): %s",
                    batch_index, content.bill_id, backend.provider.value, e,
                )
                raise EmbeddingError(content.bill_id, batch_index, e) from e

            if len(vectors) != len(batch):
                raise EmbeddingError(
                    content.bill_id,
                    batch_index,
                    ValueError(f"expected {len(batch)} vectors, got {len(vectors)}"),
                )
            embeddings.extend(vectors)
            logger.debug(
                "Batch %d for %s: %d chunks in %.2fs (%d/%d)",
                batch_index, content.bill_id, len(batch),
                time.monotonic() - batch_start, len(embeddings), len(texts),
            )

            if offset + batch_size < len(texts) and backend.batch_delay > 0:
                await asyncio.sleep(backend.batch_delay)

        logger.info(
            "Embedded %d chunks for %s in %.2fs",
            len(embeddings), content.bill_id, time.monotonic() - start_time,
        )
        return replace(content, embeddings=embeddings)

    async def embed_query(self, query: str) -> list[float]:
        """Embed a query, reusing a cached vector for a repeated question."""
        backend = self._backend
        key = (backend.provider.value, backend.model_name, query)
        cached = self._query_cache.get(key)
        if cached is not None:
            logger.debug("Query embedding cache hit")
            return cached

        vector = await backend.embed_one(query)
        self._query_cache.put(key, vector)
        return vector

    async def search_similar_chunks(
        self,
        query: str,
        content: BillContent,
        top_k: int = 3,
    ) -> list[SearchResult]:
        """Return the top_k chunks of content most similar to the query.

        Raises EmptyIndexError before embedding the query when the content
        has no embeddings.
        """
        if not content.embeddings:
            raise EmptyIndexError(f"Bill content {content.bill_id} has no embeddings")

        query_vector = await self.embed_query(query)
        return search(query_vector, content, top_k)

    def clear_cache(self) -> None:
        self._query_cache.clear()


class EmbeddingServiceRegistry:
    """Hands out one EmbeddingService per embedding configuration.

    Services are keyed by embedding_identity(): provider, model and the
    provider's credential or endpoint. Settings that only differ on the chat
    side share a service, so the backend client (and, for in-process models,
    the loaded weights) and its query cache stay alive. A change to any
    embedding field yields a fresh service; vectors from the old embedding
    space are never mixed in. At most max_services are kept, least recently
    used first out.
    """

    def __init__(
        self,
        backend_factory: Callable[[AISettings], EmbeddingBackend] = get_embedding_backend,
        query_cache_size: int = DEFAULT_QUERY_CACHE_SIZE,
        max_services: int = DEFAULT_MAX_SERVICES,
    ):
        if max_services < 1:
            raise ValueError("max_services must be >= 1")
        self._backend_factory = backend_factory
        self._query_cache_size = query_cache_size
        self._max_services = max_services
        self._services: OrderedDict[tuple[str, str, str], EmbeddingService] = OrderedDict()

    def get(self, settings: AISettings) -> EmbeddingService:
        key = embedding_identity(settings)
        service = self._services.get(key)
        if service is None:
            service = EmbeddingService(self._backend_factory(settings), self._query_cache_size)
            self._services[key] = service
            logger.info("Created embedding service for %s model %s", key[0], key[1])
        self._services.move_to_end(key)
        while len(self._services) > self._max_services:
            self._services.popitem(last=False)
        return service

    def clear(self) -> None:
        self._services.clear()

    def __len__(self) -> int:
        return len(self._services)
