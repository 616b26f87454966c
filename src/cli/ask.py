"""CLI command for asking a single question about a bill."""

import asyncio
from typing import Annotated

import typer
from rich.panel import Panel
from rich.text import Text

from config.settings import get_settings
from src.chat.pipeline import ChatPipeline
from src.cli.common import (
    check_configuration,
    configure_logging,
    console,
    resolve_bill,
    strip_think_tags,
)


def ask(
    bill_type: Annotated[str, typer.Argument(help="Bill type, e.g. HR, S, HJRES")],
    number: Annotated[str, typer.Argument(help="Bill number")],
    question: Annotated[str, typer.Argument(help="Your question about the bill")],
    congress: Annotated[
        int | None,
        typer.Option("--congress", "-c", help="Congress number (defaults to settings)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Ask a question about a bill's full text."""
    configure_logging(verbose)

    settings = get_settings()
    check_configuration(settings)

    pipeline = ChatPipeline(settings)
    bill = resolve_bill(pipeline, congress or settings.billchat_congress_number, bill_type, number)
    session = pipeline.open_session(bill)

    async def _run() -> str:
        await session.load()
        reply = await session.send(question)
        return reply.text

    with console.status("[bold green]Reading the bill..."):
        answer = asyncio.run(_run())

    header = Text()
    header.append(f"{bill.type} {bill.number}", style="bold")
    header.append(f"  {bill.title}", style="dim")
    if session.load_error:
        console.print(f"[yellow]Bill text unavailable: {session.load_error}[/yellow]")

    console.print()
    console.print(Panel(strip_think_tags(answer), title=header, border_style="green", padding=(1, 2)))
