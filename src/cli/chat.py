"""CLI command for an interactive conversation about a bill."""

import asyncio
from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.panel import Panel

from config.settings import get_settings
from src.chat.pipeline import ChatPipeline
from src.chat.session import ChatSession
from src.cli.common import (
    check_configuration,
    configure_logging,
    console,
    resolve_bill,
    strip_think_tags,
)

EXIT_COMMANDS = {"exit", "quit", ":q"}


def _print_ai(text: str) -> None:
    console.print(Panel(Markdown(strip_think_tags(text)), border_style="cyan", padding=(1, 2)))


async def _conversation(session: ChatSession) -> None:
    with console.status("[bold green]Loading and embedding bill text..."):
        welcome = await session.load()
    _print_ai(welcome.text)

    while True:
        question = (await asyncio.to_thread(console.input, "[bold]You:[/bold] ")).strip()
        if not question:
            continue
        if question.lower() in EXIT_COMMANDS:
            break
        with console.status("[bold green]Thinking..."):
            reply = await session.send(question)
        _print_ai(reply.text)


def chat(
    bill_type: Annotated[str, typer.Argument(help="Bill type, e.g. HR, S, HJRES")],
    number: Annotated[str, typer.Argument(help="Bill number")],
    congress: Annotated[
        int | None,
        typer.Option("--congress", "-c", help="Congress number (defaults to settings)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Chat interactively about a bill. Type 'exit' to quit."""
    configure_logging(verbose)

    settings = get_settings()
    check_configuration(settings)

    pipeline = ChatPipeline(settings)
    bill = resolve_bill(pipeline, congress or settings.billchat_congress_number, bill_type, number)
    console.print(f"[bold]{bill.type} {bill.number}[/bold] {bill.title}")

    try:
        asyncio.run(_conversation(pipeline.open_session(bill)))
    except (KeyboardInterrupt, EOFError):
        console.print()
