"""Bill chunk, content and search result data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class BillChunk:
    """A contiguous word range of a bill's full text."""

    id: str
    text: str
    start_index: int
    end_index: int
    section: str | None = None
    subsection: str | None = None

    def __post_init__(self):
        if self.start_index < 0:
            raise ValueError("start_index must be >= 0")
        if self.end_index < self.start_index:
            raise ValueError(
                f"end_index ({self.end_index}) must be >= start_index ({self.start_index})"
            )


@dataclass
class BillContent:
    """A bill's full text with its chunks and their embeddings.

    embeddings is parallel to chunks once embedding has run, and empty
    before that.
    """

    bill_id: str
    full_text: str
    chunks: list[BillChunk] = field(default_factory=list)
    embeddings: list[list[float]] = field(default_factory=list)
    last_updated: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.embeddings and len(self.embeddings) != len(self.chunks):
            raise ValueError(
                f"embeddings ({len(self.embeddings)}) must match chunks ({len(self.chunks)})"
            )

    @property
    def is_embedded(self) -> bool:
        return bool(self.chunks) and len(self.embeddings) == len(self.chunks)


@dataclass
class SearchResult:
    """A chunk paired with its cosine similarity to a query."""

    chunk: BillChunk
    similarity: float
