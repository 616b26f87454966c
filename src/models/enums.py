"""Enumeration types for BillChat data models."""

from enum import Enum


class ChatProviderType(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    XAI = "xai"
    OLLAMA = "ollama"


class EmbeddingProviderType(str, Enum):
    OPENAI = "openai"
    OLLAMA = "ollama"
    SENTENCE_TRANSFORMERS = "sentence_transformers"


class MessageSender(str, Enum):
    USER = "user"
    AI = "ai"
