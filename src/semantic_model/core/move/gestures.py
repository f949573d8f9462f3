"""Drive the engine with the events a sortable tree widget emits for one drag."""

from semantic_model.core.move.engine import MoveEngine
from semantic_model.core.tree.navigation import node_children, set_children
from semantic_model.models.node import ModelNode


class DragGesture:
    """Replay a drag of one child from a source container into a target.

    Like the widget, the gesture puts the node into the target list right
    away and leaves the source list to the engine.
    """

    def __init__(self, engine: MoveEngine) -> None:
        self._engine = engine

    def drag(
        self,
        source: ModelNode,
        old_index: int,
        target: ModelNode,
        new_index: int | None = None,
        *,
        hover: list[ModelNode] | None = None,
    ) -> None:
        """Run start, hover, change and end for a single drop.

        Args:
            source: Container the node is dragged out of.
            old_index: Index of the node in the source's flattened children.
            target: Container the node is dropped into.
            new_index: Drop position in the target (None = last).
            hover: Containers passed over on the way, in order.
        """
        node = node_children(source)[old_index]
        self._engine.drag_start(source, old_index)
        for container in hover or [target]:
            self._engine.drag_move(container)

        children = node_children(target)
        index = len(children) if new_index is None else new_index
        if not any(c is node for c in children):
            children.insert(index, node)
            set_children(target, children)

        self._engine.drag_change(target, added=index)
        self._engine.drag_change(source, removed=old_index)
        self._engine.drag_end()
