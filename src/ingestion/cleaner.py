"""Text cleaning for Congress.gov bill text documents."""

import re

from bs4 import BeautifulSoup

BLANK_RUN = re.compile(r"\n{3,}")

# GPO print markers that carry no bill content
PRINT_ARTIFACTS = [
    re.compile(r"^\s*<all>\s*$", re.MULTILINE),
    re.compile(r"^\s*\[Congressional Bills[^\]]*\]\s*$", re.MULTILINE),
    re.compile(r"^\s*\[From the U\.S\. Government (Publishing|Printing) Office\]\s*$", re.MULTILINE),
]


def clean_bill_html(html: str) -> str:
    """Extract plain text from a Congress.gov bill text page.

    "Formatted Text" versions wrap the bill in a <pre> block; other HTML
    versions fall back to the page body. Input without markup is returned
    with whitespace normalized.
    """
    if "<" not in html:
        return _normalize_whitespace(html).strip()

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(["script", "style", "nav", "footer", "header"]):
        tag.decompose()

    container = soup.find("pre") or soup.body or soup
    text = container.get_text(separator="\n", strip=False)

    text = _strip_print_artifacts(text)
    text = _normalize_whitespace(text)

    return text.strip()


def _strip_print_artifacts(text: str) -> str:
    for pattern in PRINT_ARTIFACTS:
        text = pattern.sub("", text)
    return text


def _normalize_whitespace(text: str) -> str:
    """Collapse runs of spaces, trim lines, keep at most one blank line between paragraphs."""
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.splitlines()]
    return BLANK_RUN.sub("\n\n", "\n".join(lines))
