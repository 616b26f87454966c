"""Sliding-window word chunker with bill section metadata."""

import logging
import re

from src.models.chunk import BillChunk

logger = logging.getLogger(__name__)

# "SECTION 2. FINDINGS." -> ("2", "FINDINGS")
SECTION_PATTERN = re.compile(r"SECTION\s+(\d+)\.\s+([^.]+)", re.IGNORECASE)

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


def detect_section(text: str) -> tuple[str, str] | None:
    """Find the first section heading in the text.

    Returns (section, subsection), e.g. ("Section 2", "FINDINGS"), or None.
    """
    match = SECTION_PATTERN.search(text)
    if not match:
        return None
    return f"Section {match.group(1)}", match.group(2).strip()


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[BillChunk]:
    """Split text into overlapping windows of whole words.

    Windows hold chunk_size words and start chunk_size - overlap words apart
    (at least one word, so an overlap >= chunk_size still terminates). The
    last window may be shorter. start_index/end_index are word offsets.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")

    words = text.split()
    step = max(chunk_size - overlap, 1)
    chunks = []
    start = 0

    while start < len(words):
        end = min(start + chunk_size, len(words))
        window = " ".join(words[start:end])
        section = detect_section(window)

        chunks.append(
            BillChunk(
                id=f"chunk-{len(chunks)}",
                text=window,
                start_index=start,
                end_index=end,
                section=section[0] if section else None,
                subsection=section[1] if section else None,
            )
        )

        if end >= len(words):
            break
        start += step

    logger.debug("Chunked %d words into %d chunks", len(words), len(chunks))
    return chunks
