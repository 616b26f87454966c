"""A conversation about one bill, wiring the cache, search and assistant together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.chat.assistant import ChatAssistant
from src.chat.prompt import generate_bill_context
from src.models.bill import Bill
from src.models.chunk import BillContent
from src.models.enums import MessageSender
from src.models.message import ChatMessage
from src.models.settings import AISettings

if TYPE_CHECKING:
    from src.cache.bill_cache import BillContentCache
    from src.embedding.service import EmbeddingServiceRegistry

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3


class ChatSession:
    """Holds the loaded content and message history for one bill.

    The session reads the settings it was created with; switching
    providers means starting a new session.
    """

    def __init__(
        self,
        bill: Bill,
        settings: AISettings,
        cache: BillContentCache,
        embedding_services: EmbeddingServiceRegistry,
        assistant: ChatAssistant | None = None,
        top_k: int = DEFAULT_TOP_K,
    ):
        self.bill = bill
        self.settings = settings
        self._cache = cache
        self._embedding_services = embedding_services
        self._assistant = assistant or ChatAssistant(settings)
        self._top_k = top_k
        self.content: BillContent | None = None
        self.load_error: str | None = None
        self.history: list[ChatMessage] = []

    def _add(self, sender: MessageSender, text: str) -> ChatMessage:
        message = ChatMessage(sender=sender, text=text)
        self.history.append(message)
        return message

    async def load(self) -> ChatMessage:
        """Load and embed the bill's text, then greet the user.

        A failed load is reported as the greeting; the session keeps
        working on metadata alone.
        """
        bill = self.bill
        try:
            self.content = await self._cache.get_bill_content(bill, self.settings)
        except Exception as e:
            logger.error("Failed to load bill content for %s: %s", bill.bill_id, e)
            self.load_error = str(e)
            return self._add(
                MessageSender.AI,
                f"I encountered an error loading the full text of this bill: {e}. "
                "I can still provide general information about the bill based on its metadata.",
            )

        return self._add(
            MessageSender.AI,
            f"Hello! I've loaded the full text of {bill.type} {bill.number}: \"{bill.title}\". "
            "I can now answer specific questions about the bill's content, search through its "
            "sections, and provide detailed analysis. What would you like to know about this "
            "legislation?",
        )

    async def send(self, text: str) -> ChatMessage:
        """Answer a user message, grounding it in the most relevant chunks."""
        self._add(MessageSender.USER, text)

        relevant_chunks = None
        content = self.content
        if content is not None and content.is_embedded:
            service = self._embedding_services.get(self.settings)
            try:
                relevant_chunks = await service.search_similar_chunks(text, content, self._top_k)
            except Exception as e:
                logger.warning(
                    "Search failed for %s, answering without bill text: %s", content.bill_id, e
                )

        answer = await self._assistant.generate_response(
            text,
            generate_bill_context(self.bill),
            relevant_chunks,
            content.bill_id if content is not None else self.bill.bill_id,
        )
        return self._add(MessageSender.AI, answer)
