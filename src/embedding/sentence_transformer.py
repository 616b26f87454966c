"""In-process embedding backend backed by sentence-transformers."""

import asyncio
import os
from contextlib import contextmanager

from sentence_transformers import SentenceTransformer

from src.embedding.provider import EmbeddingBackend
from src.models.enums import EmbeddingProviderType


@contextmanager
def _silenced_output():
    """Send fds 1 and 2 to /dev/null while a model loads.

    The safetensors load report is written by C code straight to the file
    descriptors, so redirecting sys.stdout is not enough.
    """
    saved_verbosity = os.environ.get("TRANSFORMERS_VERBOSITY")
    os.environ["TRANSFORMERS_VERBOSITY"] = "error"
    saved_fds = [os.dup(1), os.dup(2)]
    devnull = os.open(os.devnull, os.O_WRONLY)
    for fd in (1, 2):
        os.dup2(devnull, fd)
    os.close(devnull)
    try:
        yield
    finally:
        for fd, saved in zip((1, 2), saved_fds):
            os.dup2(saved, fd)
            os.close(saved)
        if saved_verbosity is None:
            os.environ.pop("TRANSFORMERS_VERBOSITY", None)
        else:
            os.environ["TRANSFORMERS_VERBOSITY"] = saved_verbosity


def load_model(model_name: str) -> SentenceTransformer:
    """Load from the local cache, downloading only when it is missing."""
    with _silenced_output():
        try:
            return SentenceTransformer(model_name, local_files_only=True)
        except OSError:
            return SentenceTransformer(model_name)


class SentenceTransformerEmbeddingBackend(EmbeddingBackend):
    """Embeds bill chunks with a local model; no API key or server needed.

    Default model: all-MiniLM-L6-v2 (384 dimensions). encode() is CPU bound,
    so it runs in a worker thread. Local calls need no pacing.
    """

    batch_size = 32
    batch_delay = 0.0

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self._model = load_model(model_name)
        self._model_name = model_name

    @property
    def provider(self) -> EmbeddingProviderType:
        return EmbeddingProviderType.SENTENCE_TRANSFORMERS

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def dimension(self) -> int:
        return self._model.get_sentence_embedding_dimension()

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        vectors = await asyncio.to_thread(self._model.encode, texts, show_progress_bar=False)
        return vectors.tolist()
