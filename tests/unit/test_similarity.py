"""Unit tests for cosine similarity and top-K chunk search."""

import math

import pytest

from src.errors import EmptyIndexError, SearchError
from src.models.chunk import BillChunk, BillContent
from src.retrieval.similarity import cosine_similarity, search


def _content(embeddings: list[list[float]]) -> BillContent:
    chunks = [
        BillChunk(id=f"chunk-{i}", text=f"text {i}", start_index=i * 10, end_index=i * 10 + 10)
        for i in range(len(embeddings))
    ]
    return BillContent(bill_id="119-HR-1", full_text="", chunks=chunks, embeddings=embeddings)


class TestCosineSimilarity:
    def test_self_similarity_is_one(self):
        v = [0.3, -1.7, 2.2, 0.01]
        assert math.isclose(cosine_similarity(v, v), 1.0, abs_tol=1e-9)

    def test_opposite_vectors(self):
        assert math.isclose(cosine_similarity([1.0, 2.0], [-1.0, -2.0]), -1.0, abs_tol=1e-9)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 5.0]) == 0.0

    def test_scale_invariant(self):
        assert math.isclose(
            cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]), 1.0, abs_tol=1e-9
        )

    def test_zero_vector_returns_exactly_zero(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0
        assert cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0

    def test_returns_python_float(self):
        assert type(cosine_similarity([1.0, 1.0], [1.0, 0.0])) is float

    def test_dimension_mismatch_raises(self):
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


class TestSearch:
    def test_sorted_by_descending_similarity(self):
        content = _content([[0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
        results = search([1.0, 0.1], content, top_k=3)
        sims = [r.similarity for r in results]
        assert sims == sorted(sims, reverse=True)
        assert results[0].chunk.id == "chunk-1"
        assert results[-1].chunk.id == "chunk-0"

    def test_top_k_limits_results(self):
        content = _content([[float(i), 1.0] for i in range(10)])
        assert len(search([1.0, 1.0], content, top_k=3)) == 3

    def test_top_k_larger_than_chunk_count(self):
        content = _content([[1.0, 0.0], [0.0, 1.0]])
        assert len(search([1.0, 1.0], content, top_k=3)) == 2

    def test_ties_keep_chunk_order(self):
        content = _content([[1.0, 0.0], [2.0, 0.0], [0.0, 1.0], [3.0, 0.0]])
        results = search([1.0, 0.0], content, top_k=4)
        assert [r.chunk.id for r in results] == ["chunk-0", "chunk-1", "chunk-3", "chunk-2"]

    def test_deterministic(self):
        content = _content([[0.2, 0.9], [0.9, 0.2], [0.5, 0.5], [0.5, 0.5]])
        first = [(r.chunk.id, r.similarity) for r in search([0.6, 0.4], content, top_k=4)]
        second = [(r.chunk.id, r.similarity) for r in search([0.6, 0.4], content, top_k=4)]
        assert first == second

    def test_zero_embedding_ranks_as_dissimilar(self):
        content = _content([[0.0, 0.0], [1.0, 1.0]])
        results = search([1.0, 1.0], content, top_k=2)
        assert results[0].chunk.id == "chunk-1"
        assert results[1].similarity == 0

    def test_unembedded_content_raises(self):
        content = BillContent(
            bill_id="119-HR-1",
            full_text="text",
            chunks=[BillChunk(id="chunk-0", text="text", start_index=0, end_index=1)],
        )
        with pytest.raises(EmptyIndexError):
            search([1.0], content, top_k=3)

    def test_empty_index_error_is_search_error(self):
        assert issubclass(EmptyIndexError, SearchError)

    def test_similarity_in_range(self):
        content = _content([[0.3, -0.2, 0.9], [-1.0, 0.4, 0.1], [0.0, 0.0, 1.0]])
        for r in search([0.5, 0.5, -0.5], content, top_k=3):
            assert -1.0 <= r.similarity <= 1.0
