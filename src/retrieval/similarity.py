"""Cosine similarity search over a bill's chunk embeddings."""

import logging

import numpy as np

from src.errors import EmptyIndexError
from src.models.chunk import BillContent, SearchResult

logger = logging.getLogger(__name__)


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two vectors, in [-1, 1].

    Returns 0.0 when either vector has zero norm. Vectors of different
    length come from different embedding spaces and raise ValueError.
    """
    if len(a) != len(b):
        raise ValueError(f"Vectors must have the same length ({len(a)} != {len(b)})")

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(va, vb) / (norm_a * norm_b))


def search(
    query_vector: list[float],
    content: BillContent,
    top_k: int = 3,
) -> list[SearchResult]:
    """Rank the content's chunks by similarity to the query vector.

    Returns at most top_k results, most similar first. Chunks with equal
    similarity keep their source order.

    Raises:
        EmptyIndexError: If the content has not been embedded.
    """
    if not content.embeddings:
        raise EmptyIndexError(f"Bill content {content.bill_id} has no embeddings")

    results = [
        SearchResult(chunk=chunk, similarity=cosine_similarity(query_vector, embedding))
        for chunk, embedding in zip(content.chunks, content.embeddings)
    ]
    # list.sort is stable, so ties stay in chunk order
    results.sort(key=lambda r: r.similarity, reverse=True)

    top = results[:max(top_k, 0)]
    logger.info(
        "Search on %s returned %d results (best similarity %.3f)",
        content.bill_id,
        len(top),
        top[0].similarity if top else 0.0,
    )
    return top
