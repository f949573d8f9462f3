"""CLI for reorganizing the openHAB semantic model."""

from collections.abc import Sequence
from typing import Annotated

import typer
from loguru import logger

from semantic_model.api import OpenHABApi
from semantic_model.logging_config import configure_logging
from semantic_model.models.move import Choice
from semantic_model.protocols import ItemStoreProtocol
from semantic_model.session import ModelSession, MoveError

app = typer.Typer(help="Move items around the openHAB semantic model.")

_state: dict[str, str | None] = {"url": None}


class TerminalPrompt:
    """Answer the engine's questions on the terminal."""

    def choose(self, message: str, options: Sequence[Choice]) -> Choice:
        labels = [o.value for o in options]
        typer.echo(message)
        for i, label in enumerate(labels, start=1):
            typer.echo(f"  {i}. {label}")
        typer.echo("  0. Cancel")
        answer = typer.prompt("Choice", type=int, default=0)
        if 1 <= answer <= len(options):
            return options[answer - 1]
        return Choice.CANCEL

    def confirm(self, message: str) -> bool:
        return typer.confirm(message, default=False)

    def alert(self, message: str) -> None:
        typer.echo(message, err=True)


def _make_store() -> ItemStoreProtocol:
    return OpenHABApi(_state["url"])


def _open_session() -> ModelSession:
    return ModelSession(_make_store(), TerminalPrompt())


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="openHAB base URL (default: $OPENHAB_URL)"),
    ] = None,
) -> None:
    configure_logging(verbose=verbose)
    _state["url"] = url


@app.command()
def move(
    item: str = typer.Argument(..., help="Item to move"),
    into: Annotated[
        str | None,
        typer.Option("--into", "-i", help="Target group (omit for the model root)"),
    ] = None,
    source: Annotated[
        str | None,
        typer.Option("--from", "-f", help="Group to take the item from"),
    ] = None,
) -> None:
    """Move an item into another group, reclassifying it as needed."""
    session = _open_session()
    try:
        outcome = session.move(item, into=into, source=source)
    except MoveError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if outcome.cancelled:
        typer.echo("Move cancelled, nothing saved.")
        raise typer.Exit(1)
    typer.echo(f"Saved {len(outcome.saved)} items: {', '.join(outcome.saved)}")
    if outcome.errors:
        typer.echo(f"Failed to save: {', '.join(outcome.errors)}", err=True)
        raise typer.Exit(2)


@app.command()
def check(
    item: str = typer.Argument(..., help="Item to move"),
    into: Annotated[
        str | None,
        typer.Option("--into", "-i", help="Target group (omit for the model root)"),
    ] = None,
    source: Annotated[
        str | None,
        typer.Option("--from", "-f", help="Group to take the item from"),
    ] = None,
) -> None:
    """Tell whether a move would be accepted, without changing anything."""
    session = _open_session()
    try:
        message = session.check(item, into=into, source=source)
    except MoveError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if message:
        typer.echo(f"Rejected: {message}")
        raise typer.Exit(1)
    typer.echo("OK")
