"""Chat orchestration: prompt assembly, model dispatch and error-to-text conversion."""

import logging
import re
import time

import httpx
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from src.chat.prompt import build_prompt
from src.errors import ChatProviderError, ConfigurationError
from src.llm.config import get_llm
from src.models.chunk import SearchResult
from src.models.settings import AISettings

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = (
    "Error: Unable to connect to the AI service. "
    "Please check your connection and try again."
)
FALLBACK_MESSAGE = "Sorry, I encountered an error. Please try again or check your settings."
CONNECTIVITY_PATTERN = re.compile(r"ECONNREFUSED|connection refused|network", re.IGNORECASE)


def is_connectivity_error(error: BaseException) -> bool:
    """Whether the error, or anything in its cause chain, is a connection failure."""
    seen = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (ConnectionError, httpx.TransportError)):
            return True
        if CONNECTIVITY_PATTERN.search(str(current)):
            return True
        current = current.__cause__ or current.__context__
    return False


def _response_text(content) -> str:
    """Extract text from a chat model message content.

    Plain strings pass through unchanged. Content block lists (as some
    providers return) are joined from their text blocks.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    raise ChatProviderError(f"Malformed response content: {type(content).__name__}")


class ChatAssistant:
    """Answers user messages about a bill with the configured chat model.

    generate_response() always returns text. Configuration problems,
    connection failures and provider errors come back as readable error
    strings instead of exceptions.
    """

    def __init__(self, settings: AISettings):
        self._settings = settings

    @property
    def settings(self) -> AISettings:
        return self._settings

    async def _invoke(self, model: BaseChatModel, prompt: str) -> str:
        try:
            response = await model.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise ChatProviderError(str(e) or type(e).__name__) from e
        return _response_text(response.content)

    async def generate_response(
        self,
        user_message: str,
        bill_context: str | None = None,
        relevant_chunks: list[SearchResult] | None = None,
        bill_id: str | None = None,
    ) -> str:
        """Ask the chat model about the bill and return its raw answer text."""
        provider = self._settings.chat_provider.value
        start_time = time.monotonic()

        if bill_id:
            logger.info(
                "Chat request for %s via %s (context chunks: %d, message length: %d)",
                bill_id, provider, len(relevant_chunks or []), len(user_message),
            )

        try:
            model = get_llm(self._settings)
            prompt = build_prompt(user_message, bill_context, relevant_chunks)
            text = await self._invoke(model, prompt)
        except ConfigurationError as e:
            logger.warning("Chat provider %s is not configured: %s", provider, e)
            return f"Error: {e}. Please check your API key in settings."
        except ChatProviderError as e:
            logger.error("Chat request via %s failed: %s", provider, e)
            if is_connectivity_error(e):
                return CONNECTIVITY_MESSAGE
            return f"Error: {e}"
        except Exception as e:
            logger.exception("Unexpected error preparing chat request via %s", provider)
            if not str(e):
                return FALLBACK_MESSAGE
            return f"Error: {e}"

        if bill_id:
            logger.info(
                "Chat response for %s via %s: %d chars in %.2fs",
                bill_id, provider, len(text), time.monotonic() - start_time,
            )
        return text
