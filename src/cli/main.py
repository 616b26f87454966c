"""BillChat CLI entry point."""

import typer

from src.cli.ask import ask
from src.cli.bills import app as bills_app
from src.cli.chat import chat
from src.cli.search import search

app = typer.Typer(
    name="billchat",
    help="Chat with an AI about the full text of US Congressional bills.",
)

app.command(name="ask")(ask)
app.command(name="chat")(chat)
app.command(name="search")(search)
app.add_typer(bills_app, name="bills")


if __name__ == "__main__":
    app()
