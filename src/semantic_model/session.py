"""Host for the move engine: owns the tree and reloads it on cancellation."""

from dataclasses import dataclass

from loguru import logger

from semantic_model.core.importer.loader import build_model
from semantic_model.core.move.engine import MoveEngine
from semantic_model.core.move.gestures import DragGesture
from semantic_model.core.rules.classification import check_add
from semantic_model.core.tree.navigation import find_node, find_parents, node_children
from semantic_model.models.move import MoveState
from semantic_model.models.node import ModelNode
from semantic_model.protocols import ItemStoreProtocol, PromptProtocol


class MoveError(LookupError):
    """A move names an item or container that is not in the model."""


@dataclass(frozen=True)
class MoveOutcome:
    """Result of a single move."""

    state: MoveState
    cancelled: bool
    saved: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()


class ModelSession:
    """Load the model from a store and run moves against it."""

    def __init__(self, store: ItemStoreProtocol, prompt: PromptProtocol) -> None:
        self._store = store
        self.engine = MoveEngine(store, prompt, on_reload=self.reload)
        self.reload_count = 0
        self.root = build_model(store.fetch_items())

    def reload(self) -> None:
        """Rebuild the tree from the store, dropping unsaved changes."""
        self.root = build_model(self._store.fetch_items())
        self.reload_count += 1
        logger.debug("Model reloaded from store")

    def node(self, name: str | None) -> ModelNode:
        """Return the node for `name`, or the root for None."""
        if name is None:
            return self.root
        node = find_node(self.root, name)
        if node is None:
            msg = f"Item {name!r} not found in the model"
            raise MoveError(msg)
        return node

    def source_of(self, node: ModelNode, source: str | None = None) -> ModelNode:
        """Pick the container a node is dragged out of."""
        if source is not None:
            container = self.node(source)
            if not any(c is node for c in node_children(container)):
                msg = f"Item {node.name!r} is not a child of {source!r}"
                raise MoveError(msg)
            return container
        parents = find_parents(self.root, node)
        if not parents:
            msg = f"Item {node.name!r} has no parent"
            raise MoveError(msg)
        return parents[0]

    def check(self, name: str, *, into: str | None, source: str | None = None) -> str | None:
        """Return the rejection message a move would get, without moving."""
        node = self.node(name)
        return check_add(node, self.node(into), self.source_of(node, source))

    def move(
        self,
        name: str,
        *,
        into: str | None,
        source: str | None = None,
        index: int | None = None,
    ) -> MoveOutcome:
        """Drag item `name` into container `into` (None = model root).

        Args:
            name: Item to move.
            into: Target container item, or None for the model root.
            source: Container to take the item from when it has several.
            index: Drop position in the target (None = last).
        """
        node = self.node(name)
        target = self.node(into)
        parent = self.source_of(node, source)
        old_index = next(i for i, c in enumerate(node_children(parent)) if c is node)

        DragGesture(self.engine).drag(parent, old_index, target, index)

        record = self.engine.record
        result = self.engine.save_result or {}
        return MoveOutcome(
            state=record.state,
            cancelled=record.cancelled,
            saved=tuple(result.get("saved", ())),
            errors=tuple(result.get("errors", {})),
        )
