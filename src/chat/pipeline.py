"""Builds the chat pipeline components from application settings.

Wires together: Congress.gov text source → chunker → embedding service →
content cache → chat session.
"""

from datetime import timedelta

from config.settings import Settings
from src.cache.bill_cache import BillContentCache
from src.chat.assistant import ChatAssistant
from src.chat.session import ChatSession
from src.embedding.service import EmbeddingServiceRegistry
from src.ingestion.congress import CongressClient, CongressTextSource
from src.models.bill import Bill
from src.models.settings import AISettings


class ChatPipeline:
    """Process-wide caches plus a factory for per-bill chat sessions."""

    def __init__(
        self,
        settings: Settings,
        client: CongressClient | None = None,
        embedding_services: EmbeddingServiceRegistry | None = None,
    ):
        self.settings = settings
        self.client = client or CongressClient(api_key=settings.congress_api_key)
        self.embedding_services = embedding_services or EmbeddingServiceRegistry(
            query_cache_size=settings.billchat_query_cache_size,
        )
        self.cache = BillContentCache(
            text_source=CongressTextSource(self.client),
            embedding_services=self.embedding_services,
            ttl=timedelta(seconds=settings.billchat_cache_ttl_seconds),
            chunk_size=settings.billchat_chunk_size,
            chunk_overlap=settings.billchat_chunk_overlap,
        )

    def open_session(self, bill: Bill, ai_settings: AISettings | None = None) -> ChatSession:
        ai_settings = ai_settings or self.settings.to_ai_settings()
        return ChatSession(
            bill=bill,
            settings=ai_settings,
            cache=self.cache,
            embedding_services=self.embedding_services,
            assistant=ChatAssistant(ai_settings),
            top_k=self.settings.billchat_top_k,
        )

    def reset(self) -> None:
        """Forget all cached content and embedding services."""
        self.cache.clear()
        self.embedding_services.clear()
