"""CLI commands for finding bills on Congress.gov."""

from typing import Annotated

import typer
from rich.table import Table

from config.settings import get_settings
from src.cli.common import configure_logging, console
from src.errors import BillTextError
from src.ingestion.congress import RECENT_LIMIT, SEARCH_LIMIT, CongressClient
from src.models.bill import Bill

app = typer.Typer(help="Find bills to ask about.")


def _print_bills(title: str, bills: list[Bill]) -> None:
    if not bills:
        console.print("[yellow]No bills found.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Congress", justify="right")
    table.add_column("Bill", style="bold", no_wrap=True)
    table.add_column("Title")
    table.add_column("Latest action", style="dim")
    for bill in bills:
        table.add_row(
            str(bill.congress),
            f"{bill.type} {bill.number}",
            bill.title,
            bill.latest_action.action_date if bill.latest_action else "-",
        )
    console.print(table)


def _client() -> CongressClient:
    return CongressClient(api_key=get_settings().congress_api_key)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Words to search bill titles and text for")],
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum bills to list")] = SEARCH_LIMIT,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging")] = False,
):
    """Search Congress.gov for bills."""
    configure_logging(verbose)
    try:
        bills = _client().search_bills(query, limit)
    except (BillTextError, ValueError) as e:
        console.print(f"[bold red]Search failed:[/bold red] {e}")
        raise typer.Exit(1)
    _print_bills(f"Bills matching '{query}'", bills)


@app.command()
def recent(
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum bills to list")] = RECENT_LIMIT,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging")] = False,
):
    """List the most recently updated bills."""
    configure_logging(verbose)
    try:
        bills = _client().recent_bills(limit)
    except BillTextError as e:
        console.print(f"[bold red]Listing failed:[/bold red] {e}")
        raise typer.Exit(1)
    _print_bills("Recently updated bills", bills)
