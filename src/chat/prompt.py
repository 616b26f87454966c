"""Grounded prompt assembly for bill conversations."""

from src.models.bill import Bill
from src.models.chunk import SearchResult

PREAMBLE = (
    "You are an AI assistant helping users understand US legislation. "
    "You have access to both bill metadata and the full text content."
)

INSTRUCTIONS = (
    "Please provide a helpful, accurate response about this bill. Use the provided "
    "bill text sections to give specific, detailed answers. When referencing "
    "information from the bill, quote the relevant parts and explain them clearly. "
    "Focus on answering the user's specific question with evidence from the actual "
    "bill text."
)


def format_chunk(position: int, result: SearchResult) -> str:
    """Render one retrieved chunk as '[Section N - label - Similarity: x.xxx]:' plus text."""
    label = f" - {result.chunk.section}" if result.chunk.section else ""
    return (
        f"[Section {position}{label} - Similarity: {result.similarity:.3f}]:\n"
        f"{result.chunk.text}"
    )


def build_prompt(
    user_message: str,
    bill_context: str | None = None,
    relevant_chunks: list[SearchResult] | None = None,
) -> str:
    """Combine bill overview, retrieved chunks and the question into one prompt.

    With neither context nor chunks the user message is returned verbatim.
    Chunks are listed in the order given, numbered from 1.
    """
    if not bill_context and not relevant_chunks:
        return user_message

    parts = []
    if bill_context:
        parts.append(f"Bill Overview:\n{bill_context}")
    if relevant_chunks:
        sections = "\n\n".join(
            format_chunk(i, result) for i, result in enumerate(relevant_chunks, 1)
        )
        parts.append(f"Relevant sections from the bill text:\n{sections}")

    context = "\n\n".join(parts)
    return (
        f"{PREAMBLE}\n\n"
        f"{context}\n\n"
        f"User question: {user_message}\n\n"
        f"{INSTRUCTIONS}"
    )


def generate_bill_context(bill: Bill) -> str:
    """Summarize bill metadata as the prompt's overview block."""
    lines = [
        f"Bill: {bill.type} {bill.number} - {bill.title}",
        f"Introduced: {bill.introduced_date}" if bill.introduced_date else None,
        f"Congress: {bill.congress}",
        f"Sponsor: {bill.sponsors[0].format()}" if bill.sponsors else None,
        (
            f"Latest Action: {bill.latest_action.text} ({bill.latest_action.action_date})"
            if bill.latest_action
            else None
        ),
        f"Summary: {bill.summary}" if bill.summary else None,
    ]
    return "\n".join(line for line in lines if line)
