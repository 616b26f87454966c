"""CLI command for inspecting which bill sections match a query."""

import asyncio
from typing import Annotated

import typer
from rich.table import Table

from config.settings import get_settings
from src.chat.pipeline import ChatPipeline
from src.cli.common import configure_logging, console, resolve_bill
from src.embedding.factory import is_embedding_configured
from src.errors import BillChatError


def search(
    bill_type: Annotated[str, typer.Argument(help="Bill type, e.g. HR, S, HJRES")],
    number: Annotated[str, typer.Argument(help="Bill number")],
    query: Annotated[str, typer.Argument(help="Text to search for")],
    congress: Annotated[
        int | None,
        typer.Option("--congress", "-c", help="Congress number (defaults to settings)"),
    ] = None,
    top_k: Annotated[
        int,
        typer.Option("--top-k", "-k", help="Number of chunks to show"),
    ] = 3,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Show the bill chunks most similar to a query."""
    configure_logging(verbose)

    settings = get_settings()
    ai_settings = settings.to_ai_settings()
    if not is_embedding_configured(ai_settings):
        console.print("[bold red]Embedding provider is not configured.[/bold red]")
        raise typer.Exit(1)

    pipeline = ChatPipeline(settings)
    bill = resolve_bill(pipeline, congress or settings.billchat_congress_number, bill_type, number)

    async def _run():
        content = await pipeline.cache.get_bill_content(bill, ai_settings)
        service = pipeline.embedding_services.get(ai_settings)
        return await service.search_similar_chunks(query, content, top_k)

    try:
        with console.status("[bold green]Embedding bill text..."):
            results = asyncio.run(_run())
    except BillChatError as e:
        console.print(f"[bold red]Search failed:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"{bill.type} {bill.number}: {query}")
    table.add_column("#", justify="right")
    table.add_column("Similarity", justify="right")
    table.add_column("Section", style="bold")
    table.add_column("Words", justify="right")
    table.add_column("Excerpt")
    for i, result in enumerate(results, 1):
        chunk = result.chunk
        table.add_row(
            str(i),
            f"{result.similarity:.3f}",
            " - ".join(p for p in (chunk.section, chunk.subsection) if p) or "-",
            f"{chunk.start_index}-{chunk.end_index}",
            chunk.text[:120] + ("..." if len(chunk.text) > 120 else ""),
        )
    console.print(table)
