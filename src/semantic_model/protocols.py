"""Protocols for the collaborators of the move engine."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from semantic_model.models.move import Choice
from semantic_model.models.node import Item


@runtime_checkable
class ItemStoreProtocol(Protocol):
    """Source of truth for items: the REST API or an in-memory fake."""

    def fetch_items(self) -> list[Item]:
        """Return every item, with its semantics metadata."""
        ...

    def save_item(self, item: Item) -> None:
        """Persist the current state of one item."""
        ...


@runtime_checkable
class PromptProtocol(Protocol):
    """The dialog layer the engine asks when it needs a human decision."""

    def choose(self, message: str, options: Sequence[Choice]) -> Choice:
        """Offer `options` and return the selected one.

        Declining is always possible and is answered with `Choice.CANCEL`,
        which is never part of `options`.
        """
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        ...

    def alert(self, message: str) -> None:
        """Tell the user why a move was rejected."""
        ...
