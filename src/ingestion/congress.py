"""Congress.gov client and the bill text source used by the chat pipeline.

CongressClient does the blocking HTTP work. CongressTextSource runs it off
the event loop and substitutes a clearly labeled placeholder when no real
text can be downloaded, so the chat pipeline always has something to chunk.
"""

import asyncio
import logging
import re
from urllib.parse import quote, urlencode

import requests

from src.errors import BillTextError
from src.ingestion.cleaner import clean_bill_html
from src.models.bill import Bill, BillIdentity, LatestAction, Sponsor

logger = logging.getLogger(__name__)

BASE_URL = "https://api.congress.gov/v3"
REQUEST_TIMEOUT = 30
SEARCH_LIMIT = 20
RECENT_LIMIT = 5

API_KEY_PATTERN = re.compile(r"api_key=[^&]+")


def redact(url: str) -> str:
    """Hide the API key in a URL before it is logged."""
    return API_KEY_PATTERN.sub("api_key=[REDACTED]", url)


def parse_bill(data: dict) -> Bill:
    """Build a Bill from a Congress.gov bill JSON object."""
    latest = data.get("latestAction")
    summary = data.get("summary")
    if isinstance(summary, dict):
        summary = summary.get("text")

    return Bill(
        congress=int(data["congress"]),
        type=data["type"],
        number=str(data["number"]),
        title=data.get("title") or f"{data['type']} {data['number']}",
        introduced_date=data.get("introducedDate", ""),
        url=data.get("url", ""),
        latest_action=(
            LatestAction(action_date=latest.get("actionDate", ""), text=latest.get("text", ""))
            if latest
            else None
        ),
        sponsors=[
            Sponsor(
                first_name=s.get("firstName", ""),
                last_name=s.get("lastName", ""),
                party=s.get("party", ""),
                state=s.get("state", ""),
                district=s.get("district"),
            )
            for s in data.get("sponsors") or []
        ],
        summary=summary or None,
    )


def select_text_url(text_versions: list[dict]) -> str | None:
    """Pick the download URL of the most recent text version.

    Congress.gov lists the latest version first. "Formatted Text" is
    preferred; otherwise the first available format is used.
    """
    if not text_versions or not isinstance(text_versions[0], dict):
        return None
    formats = text_versions[0].get("formats")
    if not isinstance(formats, list):
        return None
    usable = [f for f in formats if isinstance(f, dict) and isinstance(f.get("url"), str) and f["url"]]
    for fmt in usable:
        if fmt.get("type") == "Formatted Text":
            return fmt["url"]
    return usable[0]["url"] if usable else None


class CongressClient:
    """Minimal blocking client for the Congress.gov v3 API."""

    def __init__(self, api_key: str = "", session: requests.Session | None = None):
        self._api_key = api_key
        self._session = session or requests.Session()

    def _with_key(self, url: str) -> str:
        if not self._api_key:
            return url
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}api_key={quote(self._api_key)}"

    def _get(self, url: str) -> requests.Response:
        full_url = self._with_key(url)
        logger.info("GET %s", redact(full_url))
        try:
            resp = self._session.get(full_url, timeout=REQUEST_TIMEOUT)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise BillTextError(f"Request to {redact(full_url)} failed: {e}") from e
        return resp

    def _get_json(self, url: str) -> dict:
        resp = self._get(url)
        try:
            data = resp.json()
        except ValueError as e:
            raise BillTextError(f"Invalid JSON from {url}: {e}") from e
        if not isinstance(data, dict):
            raise BillTextError(f"Unexpected JSON from {url}: {type(data).__name__}")
        return data

    def get_bill(self, identity: BillIdentity) -> Bill:
        """Fetch metadata for one bill."""
        url = f"{BASE_URL}/bill/{identity.congress}/{identity.type.lower()}/{identity.number}?format=json"
        data = self._get_json(url)
        if not isinstance(data.get("bill"), dict):
            raise BillTextError(f"No bill metadata returned for {identity.bill_id}")
        try:
            return parse_bill(data["bill"])
        except (KeyError, TypeError, ValueError) as e:
            raise BillTextError(f"Malformed bill metadata for {identity.bill_id}: {e}") from e

    def _list_bills(self, params: dict) -> list[Bill]:
        url = f"{BASE_URL}/bill?{urlencode({**params, 'format': 'json'})}"
        items = self._get_json(url).get("bills") or []
        if not isinstance(items, list):
            raise BillTextError(f"Unexpected bill listing from {url}")

        bills = []
        for item in items:
            try:
                bills.append(parse_bill(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed bill in listing: %s", e)
        return bills

    def search_bills(self, query: str, limit: int = SEARCH_LIMIT) -> list[Bill]:
        """Bills matching a free-text query."""
        if not query.strip():
            raise ValueError("query must not be empty")
        return self._list_bills({"q": query, "limit": limit})

    def recent_bills(self, limit: int = RECENT_LIMIT) -> list[Bill]:
        """Most recently updated bills."""
        return self._list_bills({"limit": limit, "sort": "updateDate desc"})

    def get_bill_text(self, bill: Bill) -> str:
        """Download and clean the latest text version of a bill.

        Raises BillTextError if no text version exists or a request fails.
        """
        url = f"{BASE_URL}/bill/{bill.congress}/{bill.type.lower()}/{bill.number}/text?format=json"
        versions = self._get_json(url).get("textVersions") or []
        if not isinstance(versions, list):
            raise BillTextError(f"Unexpected textVersions for {bill.bill_id}")
        logger.info("Found %d text versions for %s", len(versions), bill.bill_id)

        text_url = select_text_url(versions)
        if not text_url:
            raise BillTextError(f"No text versions available for {bill.bill_id}")

        text = clean_bill_html(self._get(text_url).text)
        if not text:
            raise BillTextError(f"Empty text after cleaning for {bill.bill_id}")
        return text


def placeholder_text(bill: Bill) -> str:
    """Stand-in text for a bill whose real text could not be downloaded."""
    lines = [
        f"[PLACEHOLDER: the full text of {bill.type} {bill.number} could not be "
        "downloaded. Answers are limited to the bill's metadata.]",
        "",
        f"{bill.type} {bill.number} - {bill.title}",
        f"{bill.congress}th Congress",
    ]
    if bill.introduced_date:
        lines.append(f"Introduced: {bill.introduced_date}")
    if bill.sponsors:
        lines.append(f"Sponsor: {bill.sponsors[0].format()}")
    if bill.latest_action:
        lines.append(
            f"Latest Action: {bill.latest_action.text} ({bill.latest_action.action_date})"
        )
    if bill.summary:
        lines.extend(["", f"Summary: {bill.summary}"])
    return "\n".join(lines)


class CongressTextSource:
    """Async bill text source backed by Congress.gov."""

    def __init__(self, client: CongressClient):
        self._client = client

    async def fetch_text(self, bill: Bill) -> str:
        """Return the bill's full text, or placeholder text if unavailable."""
        try:
            text = await asyncio.to_thread(self._client.get_bill_text, bill)
        except BillTextError as e:
            logger.warning("Falling back to placeholder text for %s: %s", bill.bill_id, e)
            return placeholder_text(bill)
        except Exception:
            logger.exception("Unexpected error downloading %s, using placeholder text", bill.bill_id)
            return placeholder_text(bill)

        logger.info("Downloaded %s (%d chars)", bill.bill_id, len(text))
        return text
