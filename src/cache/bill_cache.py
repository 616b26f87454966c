"""In-memory cache of chunked and embedded bill content.

Entries are keyed by bill plus embedding provider and model, so content
embedded in one vector space is never served for another. Concurrent
requests for the same key share a single in-flight load.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable, NamedTuple

from src.ingestion.chunker import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, chunk_text
from src.models.bill import Bill
from src.models.chunk import BillContent
from src.models.settings import AISettings

if TYPE_CHECKING:
    from src.embedding.service import EmbeddingServiceRegistry
    from src.ingestion.congress import CongressTextSource

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=1)


class CacheKey(NamedTuple):
    bill_id: str
    embedding_provider: str
    embedding_model: str

    @classmethod
    def for_bill(cls, bill: Bill, settings: AISettings) -> "CacheKey":
        return cls(bill.bill_id, settings.embedding_provider.value, settings.embedding_model)


class BillContentCache:
    """Caches BillContent per (bill, embedding provider, embedding model).

    Fresh entries (younger than ttl) are returned without any network call.
    Stale or missing entries are rebuilt: fetch text, chunk, embed, store.
    A failed rebuild propagates and leaves nothing cached for the key.
    """

    def __init__(
        self,
        text_source: CongressTextSource,
        embedding_services: EmbeddingServiceRegistry,
        ttl: timedelta = DEFAULT_TTL,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._text_source = text_source
        self._embedding_services = embedding_services
        self._ttl = ttl
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._clock = clock
        self._entries: dict[CacheKey, BillContent] = {}
        self._pending: dict[CacheKey, asyncio.Task] = {}
        # Bumped by clear() and invalidate(); a load that started before
        # either does not store its result
        self._generation = 0
        self._key_generations: dict[CacheKey, int] = {}

    def peek(self, key: CacheKey) -> BillContent | None:
        """Return the cached entry for key, fresh or not, without loading."""
        return self._entries.get(key)

    async def get_bill_content(self, bill: Bill, settings: AISettings) -> BillContent:
        """Return embedded content for the bill under the given settings."""
        key = CacheKey.for_bill(bill, settings)

        cached = self._entries.get(key)
        if cached is not None:
            age = self._clock() - cached.last_updated
            if age < self._ttl:
                logger.info(
                    "Using cached content for %s (age %dm, %d chunks)",
                    bill.bill_id, age.total_seconds() // 60, len(cached.chunks),
                )
                return cached
            logger.info("Cached content for %s expired, reloading", bill.bill_id)

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, bill, settings))
            self._pending[key] = task
            task.add_done_callback(lambda t, k=key: self._forget_pending(k, t))
        else:
            logger.info("Joining in-flight load for %s", bill.bill_id)

        # One waiter being cancelled must not cancel the shared load
        return await asyncio.shield(task)

    def _forget_pending(self, key: CacheKey, task: asyncio.Task) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]

    async def _load(self, key: CacheKey, bill: Bill, settings: AISettings) -> BillContent:
        generation = (self._generation, self._key_generations.get(key, 0))
        service = self._embedding_services.get(settings)

        full_text = await self._text_source.fetch_text(bill)
        chunks = chunk_text(full_text, self._chunk_size, self._chunk_overlap)
        logger.info(
            "Chunked %s: %d chars into %d chunks", bill.bill_id, len(full_text), len(chunks)
        )

        content = BillContent(
            bill_id=bill.bill_id,
            full_text=full_text,
            chunks=chunks,
            last_updated=self._clock(),
        )
        content = await service.create_embeddings(content)

        if generation == (self._generation, self._key_generations.get(key, 0)):
            self._entries[key] = content
            logger.info("Cached content for %s", bill.bill_id)
        return content

    def invalidate(self, key: CacheKey) -> None:
        """Drop one entry; the next request for it reloads.

        A load for the key that is already in flight still answers its
        waiters but is not stored.
        """
        self._key_generations[key] = self._key_generations.get(key, 0) + 1
        self._entries.pop(key, None)
        self._pending.pop(key, None)

    def clear(self) -> None:
        """Drop every entry, e.g. after the user changes provider settings."""
        self._generation += 1
        self._entries.clear()
        self._pending.clear()
        self._key_generations.clear()
        logger.info("Bill content cache cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries
