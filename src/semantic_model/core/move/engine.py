"""The move state machine driving drag-and-drop reorganization of the model.

Gesture callbacks (`drag_start`, `drag_change`, `drag_move`, `drag_end`)
update the single move record. After every transition the engine checks
which gate is open and runs the matching step:

- ADD: validate the drop target and reclassify the node into it,
- REMOVE: detach the node from its source container (or keep it there),
- SAVE: confirm and persist the node with its whole subtree.

Any rejection or declined prompt cancels the move and asks the host to
reload the tree from the item store. In-memory changes are never undone
one by one.
"""

from collections.abc import Callable
from typing import Any

from loguru import logger

from semantic_model.core.move.reconcile import KEEP_CHOICES, Reconciler
from semantic_model.core.rules.classification import check_add
from semantic_model.core.tree.navigation import item_label, nested_nodes, node_children
from semantic_model.core.write.client import save_nodes
from semantic_model.models.move import Choice, Gate, MoveRecord, MoveSnapshot, MoveState
from semantic_model.models.node import ModelNode
from semantic_model.protocols import ItemStoreProtocol, PromptProtocol


class MoveEngine:
    """Own the move record and sequence add, remove and save for each drag."""

    def __init__(
        self,
        store: ItemStoreProtocol,
        prompt: PromptProtocol,
        *,
        on_reload: Callable[[], None] | None = None,
    ) -> None:
        self._store = store
        self._prompt = prompt
        self._on_reload = on_reload
        self._record = MoveRecord()
        self._reconciler = Reconciler(self._record, prompt, self.cancel)
        self.saved_nodes: list[ModelNode] = []
        self.save_result: dict[str, Any] | None = None

    @property
    def record(self) -> MoveRecord:
        return self._record

    @property
    def state(self) -> MoveState:
        return self._record.state

    def snapshot(self) -> MoveSnapshot:
        return self._record.snapshot()

    # --- Gesture events ---

    def drag_start(self, source: ModelNode, index: int) -> None:
        """Start a move of the child at `index` of `source`'s flattened children."""
        node = node_children(source)[index]
        self._record = MoveRecord(node=node, moving=True)
        self._reconciler = Reconciler(self._record, self._prompt, self.cancel)
        self.saved_nodes = []
        self.save_result = None
        logger.debug("Drag start: {}", self.snapshot())

    def drag_change(
        self,
        container: ModelNode,
        *,
        added: int | None = None,
        removed: int | None = None,
    ) -> None:
        """Record an insertion into or a removal from `container`."""
        if added is not None:
            self._record.new_parent = container
            self._record.can_add = True
        if removed is not None:
            self._record.old_parent = container
            self._record.old_index = removed
            self._record.can_remove = True
        logger.debug("Drag change: {}", self.snapshot())
        self._dispatch()

    def drag_move(self, target: ModelNode | None) -> None:
        """Expand a collapsed group while something is dragged over it."""
        if target is not None and target.item is not None and target.item.is_group:
            target.opened = True

    def drag_end(self) -> None:
        self._record.moving = False
        self._record.drag_end = True
        logger.debug("Drag end: {}", self.snapshot())
        self._dispatch()

    # --- Gate dispatch ---

    def _dispatch(self) -> None:
        while (gate := self._record.gate()) is not None:
            if gate is Gate.ADD:
                self.validate_add()
            elif gate is Gate.REMOVE:
                self.validate_remove()
            elif gate is Gate.SAVE:
                self.save_update()

    def validate_add(self) -> None:
        record = self._record
        record.adding = True
        node, parent = record.node, record.new_parent
        if node is None or parent is None:
            return

        message = check_add(node, parent, record.old_parent)
        if message:
            self.cancel(message)
            return

        self._reconciler.add_into(node, parent)
        if not record.cancelled and not record.can_remove and record.old_parent is None:
            # Nothing reported a removal, so there is nothing left to detach.
            record.drag_finished = True

    def validate_remove(self) -> None:
        record = self._record
        record.removing = True
        node, source, destination = record.node, record.old_parent, record.new_parent
        if node is None or source is None:
            return
        logger.debug("Remove: {}", self.snapshot())

        if destination is None:
            self.cancel(f'No drop target for "{item_label(node)}"')
        elif source.is_semantic and destination.is_semantic:
            self._reconciler.remove(node, source, record.old_index, destination)
        elif source.is_root and node.is_semantic:
            self._reconciler.remove(node, source, record.old_index, destination)
        elif source.item is not None and source.item.is_group:
            record.move_confirmed = True
            choice = self._prompt.choose(
                f'Item "{item_label(node)}" dragged from group "{item_label(source)}" '
                f'into "{item_label(destination)}", keep original?',
                KEEP_CHOICES,
            )
            if choice is Choice.KEEP:
                self._reconciler.keep(node, source, record.old_index)
            elif choice is Choice.REMOVE:
                self._reconciler.remove(node, source, record.old_index, destination)
            else:
                self.cancel(None)
        else:
            self._reconciler.remove(node, source, record.old_index, destination)

    def save_update(self) -> None:
        record = self._record
        record.saving = True
        node, parent = record.node, record.new_parent
        if node is None:
            return

        if not record.move_confirmed and not self._prompt.confirm(
            f'Move "{item_label(node)}" into "{item_label(parent)}"?'
        ):
            self.cancel(None)
            return
        self._save_model_update(node)

    def _save_model_update(self, node: ModelNode) -> None:
        record = self._record
        record.drag_finished = False
        nodes = [node, *nested_nodes(node)]
        self.save_result = save_nodes(self._store, [n.item for n in nodes if n.item])
        self.saved_nodes = nodes
        record.saving = False
        logger.info("Saved move of {} ({} items)", node.name, len(nodes))

    # --- Cancellation ---

    def cancel(self, message: str | None = None) -> None:
        """Abort the move and ask the host to reload the tree."""
        if message:
            logger.info("Move rejected: {}", message)
            self._prompt.alert(message)
        record = self._record
        record.cancelled = True
        record.can_add = False
        record.can_remove = False
        record.adding = False
        record.removing = False
        logger.debug("Cancelled: {}", self.snapshot())
        if self._on_reload is not None:
            self._on_reload()
