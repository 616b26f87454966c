"""Unit tests for word-window chunking with section metadata."""

import pytest

from conftest import make_bill_text
from src.ingestion.chunker import SECTION_PATTERN, chunk_text, detect_section
from src.models.chunk import BillChunk


def _words(n: int) -> str:
    return " ".join(f"word{i}" for i in range(n))


class TestDetectSection:
    """Test 'SECTION N. TITLE' heading detection."""

    def test_detects_section_and_title(self):
        assert detect_section("SECTION 2. FINDINGS. Congress finds") == ("Section 2", "FINDINGS")

    def test_case_insensitive(self):
        assert detect_section("section 12. definitions. In this Act") == ("Section 12", "definitions")

    def test_title_runs_until_period(self):
        section = detect_section("SECTION 3. AUTHORIZATION OF APPROPRIATIONS. There are")
        assert section == ("Section 3", "AUTHORIZATION OF APPROPRIATIONS")

    def test_first_heading_wins(self):
        section = detect_section("SECTION 4. MAIN PROVISIONS. text SECTION 5. FUNDING. more")
        assert section[0] == "Section 4"

    def test_returns_none_for_regular_text(self):
        assert detect_section("The Secretary shall submit annual reports.") is None

    def test_requires_number_and_period(self):
        assert detect_section("SECTION ONE SHORT TITLE") is None
        assert SECTION_PATTERN.search("SEC. 2. FINDINGS.") is None


class TestChunkText:
    """Test sliding-window chunking over whitespace-separated words."""

    def test_empty_text_produces_no_chunks(self):
        assert chunk_text("") == []

    def test_whitespace_only_produces_no_chunks(self):
        assert chunk_text("  \n\t  ") == []

    def test_short_text_produces_single_chunk(self):
        chunks = chunk_text("A short bill about water.", chunk_size=1000, overlap=200)
        assert len(chunks) == 1
        assert chunks[0].text == "A short bill about water."
        assert (chunks[0].start_index, chunks[0].end_index) == (0, 5)

    def test_chunks_are_bill_chunks_with_sequential_ids(self):
        chunks = chunk_text(_words(2500), chunk_size=1000, overlap=200)
        assert all(isinstance(c, BillChunk) for c in chunks)
        assert [c.id for c in chunks] == [f"chunk-{i}" for i in range(len(chunks))]

    def test_window_offsets(self):
        chunks = chunk_text(_words(2500), chunk_size=1000, overlap=200)
        spans = [(c.start_index, c.end_index) for c in chunks]
        assert spans == [(0, 1000), (800, 1800), (1600, 2500)]

    def test_text_is_words_joined_by_single_spaces(self):
        chunks = chunk_text("alpha   beta\n\ngamma\tdelta", chunk_size=3, overlap=1)
        assert chunks[0].text == "alpha beta gamma"
        assert chunks[1].text == "gamma delta"

    def test_chunk_text_matches_word_range(self):
        text = _words(350)
        words = text.split()
        for chunk in chunk_text(text, chunk_size=100, overlap=30):
            assert chunk.text == " ".join(words[chunk.start_index:chunk.end_index])

    @pytest.mark.parametrize(
        "n_words,chunk_size,overlap",
        [(1, 1000, 200), (999, 100, 10), (1000, 1000, 200), (1001, 1000, 200), (73, 7, 3), (50, 5, 0)],
    )
    def test_windows_cover_every_word_without_gaps(self, n_words, chunk_size, overlap):
        chunks = chunk_text(_words(n_words), chunk_size=chunk_size, overlap=overlap)
        starts = [c.start_index for c in chunks]
        assert starts == sorted(starts)
        assert chunks[0].start_index == 0
        assert chunks[-1].end_index == n_words
        for prev, nxt in zip(chunks, chunks[1:]):
            assert nxt.start_index <= prev.end_index

    def test_overlap_larger_than_chunk_size_terminates(self):
        chunks = chunk_text(_words(100), chunk_size=10, overlap=50)
        # Advance clamps to one word per window
        assert len(chunks) == 91
        assert [c.start_index for c in chunks[:3]] == [0, 1, 2]
        assert chunks[-1].end_index == 100

    def test_overlap_equal_to_chunk_size_terminates(self):
        chunks = chunk_text(_words(20), chunk_size=5, overlap=5)
        assert chunks[-1].end_index == 20

    def test_zero_chunk_size_rejected(self):
        with pytest.raises(ValueError):
            chunk_text("some words", chunk_size=0)

    def test_never_splits_words(self):
        text = "appropriations reconciliation notwithstanding " * 30
        source_words = set(text.split())
        for chunk in chunk_text(text, chunk_size=7, overlap=2):
            assert set(chunk.text.split()) <= source_words


class TestSectionTagging:
    """Test section annotations on chunks of bill-shaped text."""

    def test_two_sections_1500_words(self):
        # 4 + 896 words in section 1, 3 + 597 in section 2: 1500 words total
        text = make_bill_text([("SHORT TITLE", 896), ("FINDINGS", 597)])
        assert len(text.split()) == 1500

        chunks = chunk_text(text, chunk_size=1000, overlap=200)

        assert len(chunks) == 2
        assert (chunks[0].start_index, chunks[0].end_index) == (0, 1000)
        assert (chunks[1].start_index, chunks[1].end_index) == (800, 1500)
        assert chunks[0].section == "Section 1"
        assert chunks[0].subsection == "SHORT TITLE"
        # Section 2's heading starts at word 900, inside the second window
        assert chunks[1].section == "Section 2"
        assert chunks[1].subsection == "FINDINGS"

    def test_chunk_without_heading_has_no_section(self):
        text = make_bill_text([("SHORT TITLE", 40)])
        chunks = chunk_text(text, chunk_size=10, overlap=0)
        assert chunks[0].section == "Section 1"
        assert all(c.section is None and c.subsection is None for c in chunks[1:])
