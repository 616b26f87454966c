"""Helpers shared by the CLI commands."""

import logging
import re

import typer
from rich.console import Console

from config.settings import Settings
from src.chat.pipeline import ChatPipeline
from src.embedding.factory import is_embedding_configured
from src.errors import BillTextError
from src.llm.config import is_configured, provider_display_name
from src.models.bill import Bill, BillIdentity

console = Console()

logger = logging.getLogger(__name__)

THINK_PATTERN = re.compile(r"<\s*think\s*>.*?<\s*/\s*think\s*>", re.IGNORECASE | re.DOTALL)


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)


def strip_think_tags(text: str) -> str:
    """Remove <think>...</think> reasoning blocks before display."""
    return THINK_PATTERN.sub("", text).strip()


def check_configuration(settings: Settings) -> None:
    """Exit with a hint when the selected providers are missing configuration."""
    ai_settings = settings.to_ai_settings()
    if not is_configured(ai_settings):
        console.print(
            f"[bold red]{provider_display_name(ai_settings)} is not configured.[/bold red]\n"
            "Set the provider's API key (e.g. export OPENAI_API_KEY='sk-...') "
            "or choose another provider with BILLCHAT_CHAT_PROVIDER."
        )
        raise typer.Exit(1)
    if not is_embedding_configured(ai_settings):
        console.print(
            f"[bold red]Embedding provider '{ai_settings.embedding_provider.value}' "
            "is not configured.[/bold red]\n"
            "Set OPENAI_API_KEY or choose BILLCHAT_EMBEDDING_PROVIDER=ollama."
        )
        raise typer.Exit(1)


def resolve_bill(pipeline: ChatPipeline, congress: int, bill_type: str, number: str) -> Bill:
    """Look up bill metadata, falling back to a bare record when unavailable."""
    identity = BillIdentity(congress=congress, type=bill_type.upper(), number=number)
    try:
        return pipeline.client.get_bill(identity)
    except BillTextError as e:
        logger.warning("Metadata lookup failed for %s: %s", identity, e)
        return Bill(
            congress=identity.congress,
            type=identity.type,
            number=identity.number,
            title=f"{identity.type} {identity.number}",
        )
