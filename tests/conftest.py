"""Shared fixtures: fake embedding backends, sample bills and bill text."""

import asyncio
import hashlib

import pytest

from src.embedding.provider import EmbeddingBackend
from src.embedding.service import EmbeddingService
from src.models.bill import Bill, LatestAction, Sponsor
from src.models.enums import EmbeddingProviderType
from src.models.settings import AISettings, ApiKeys

DIMENSION = 256
SLOTS_PER_WORD = 4


def hash_vector(text: str, dimension: int = DIMENSION) -> list[float]:
    """Deterministic bag-of-words vector: each word bumps a few hashed slots."""
    vector = [0.0] * dimension
    for word in text.lower().split():
        digest = hashlib.md5(word.encode("utf-8")).digest()
        for i in range(SLOTS_PER_WORD):
            slot = int.from_bytes(digest[2 * i:2 * i + 2], "big") % dimension
            vector[slot] += 1.0 + i
    return vector


class FakeEmbeddingBackend(EmbeddingBackend):
    """In-memory backend that records every call and can fail on demand."""

    def __init__(
        self,
        provider: EmbeddingProviderType = EmbeddingProviderType.OPENAI,
        model_name: str = "fake-model",
        batch_size: int = 10,
        batch_delay: float = 0.0,
        fail_on_call: int | None = None,
    ):
        self._provider = provider
        self._model_name = model_name
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.fail_on_call = fail_on_call
        self.many_calls: list[list[str]] = []
        self.one_calls: list[str] = []

    @property
    def provider(self) -> EmbeddingProviderType:
        return self._provider

    @property
    def model_name(self) -> str:
        return self._model_name

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        self.many_calls.append(list(texts))
        if self.fail_on_call is not None and len(self.many_calls) - 1 == self.fail_on_call:
            raise RuntimeError("embedding service unavailable")
        return [hash_vector(t) for t in texts]

    async def embed_one(self, text: str) -> list[float]:
        self.one_calls.append(text)
        return hash_vector(text)


class FakeTextSource:
    """Text source returning canned text and counting fetches."""

    def __init__(self, text: str, delay: float = 0.0):
        self.text = text
        self.delay = delay
        self.calls = 0

    async def fetch_text(self, bill: Bill) -> str:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.text


class FakeRegistry:
    """Registry stand-in handing out services built from FakeEmbeddingBackends."""

    def __init__(self, **backend_kwargs):
        self._backend_kwargs = backend_kwargs
        self.services = {}

    def get(self, settings: AISettings):
        if settings not in self.services:
            backend = FakeEmbeddingBackend(
                provider=settings.embedding_provider,
                model_name=settings.embedding_model,
                **self._backend_kwargs,
            )
            self.services[settings] = EmbeddingService(backend)
        return self.services[settings]

    def clear(self):
        self.services.clear()


def make_bill_text(sections: list[tuple[str, int]]) -> str:
    """Build bill text from (heading, filler word count) pairs.

    Headings are numbered from 1: "SECTION 1. SHORT TITLE." etc.
    """
    parts = []
    for number, (heading, filler) in enumerate(sections, 1):
        heading_text = f"SECTION {number}. {heading}."
        filler_words = " ".join(f"w{number}x{i}" for i in range(filler))
        parts.append(f"{heading_text} {filler_words}")
    return "\n\n".join(parts)


@pytest.fixture
def sample_bill():
    return Bill(
        congress=119,
        type="HR",
        number="1234",
        title="Clean Water Infrastructure Act",
        introduced_date="2025-02-03",
        url="https://api.congress.gov/v3/bill/119/hr/1234",
        latest_action=LatestAction(
            action_date="2025-03-01", text="Referred to the Committee on Transportation."
        ),
        sponsors=[Sponsor(first_name="Jane", last_name="Doe", party="D", state="CA", district=12)],
        summary="Funds upgrades to municipal water systems.",
    )


@pytest.fixture
def ai_settings():
    return AISettings(api_keys=ApiKeys(openai="sk-test"))


@pytest.fixture
def fake_backend():
    return FakeEmbeddingBackend()
