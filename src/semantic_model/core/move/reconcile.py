"""Reconciliation actions: reclassify, re-tag and re-parent nodes during a move."""

from collections.abc import Callable

from loguru import logger

from semantic_model.core.tree.navigation import contains, item_label, node_children, set_children
from semantic_model.models.move import Choice, MoveRecord
from semantic_model.models.node import (
    EQUIPMENT,
    LOCATION,
    POINT,
    ModelNode,
    Semantics,
    semantic_tag,
)
from semantic_model.protocols import PromptProtocol

GROUP_CHOICES = (Choice.LOCATION, Choice.EQUIPMENT, Choice.NON_SEMANTIC)
# Groups inside a Location are always classified.
LOCATION_GROUP_CHOICES = (Choice.LOCATION, Choice.EQUIPMENT)
ITEM_CHOICES = (Choice.EQUIPMENT, Choice.POINT, Choice.NON_SEMANTIC)
EQUIPMENT_CHOICES = (Choice.EQUIPMENT, Choice.POINT)
KEEP_CHOICES = (Choice.KEEP, Choice.REMOVE)

Action = Callable[[ModelNode, ModelNode], None]


class Reconciler:
    """Apply the add/remove half of one move to the tree.

    Instances live for a single move and mutate only while the engine holds
    the corresponding gate open.
    """

    def __init__(
        self,
        record: MoveRecord,
        prompt: PromptProtocol,
        cancel: Callable[[str | None], None],
    ) -> None:
        self._record = record
        self._prompt = prompt
        self._cancel = cancel

    # --- Dispatch by target container ---

    def add_into(self, node: ModelNode, parent: ModelNode) -> None:
        if parent.is_location:
            self.add_into_location(node, parent)
        elif parent.is_equipment:
            self.add_into_equipment(node, parent)
        elif parent.item is not None:
            self.add_into_group(node, parent)
        else:
            self.add_into_root(node, parent)

    def add_into_location(self, node: ModelNode, parent: ModelNode) -> None:
        if self._add_classified(node, parent):
            return
        choices = LOCATION_GROUP_CHOICES if node.item and node.item.is_group else ITEM_CHOICES
        self._ask(node, parent, choices)

    def add_into_equipment(self, node: ModelNode, parent: ModelNode) -> None:
        if node.is_location:
            self._cancel(
                f'Cannot move Location "{item_label(node)}" '
                f'into Equipment "{item_label(parent)}"'
            )
            return
        if self._add_classified(node, parent):
            return
        self._ask(node, parent, EQUIPMENT_CHOICES)

    def add_into_group(self, node: ModelNode, parent: ModelNode) -> None:
        if not self._add_classified(node, parent):
            self.add_non_semantic(node, parent)

    def add_into_root(self, node: ModelNode, parent: ModelNode) -> None:
        if self._add_classified(node, parent):
            return
        choices = GROUP_CHOICES if node.item and node.item.is_group else ITEM_CHOICES
        self._ask(node, parent, choices)

    def _add_classified(self, node: ModelNode, parent: ModelNode) -> bool:
        if node.is_location:
            self.add_location(node, parent)
        elif node.is_equipment:
            self.add_equipment(node, parent)
        elif node.is_point:
            self.add_point(node, parent)
        else:
            return False
        return True

    def _ask(self, node: ModelNode, parent: ModelNode, choices: tuple[Choice, ...]) -> None:
        self._record.move_confirmed = True
        message = f'Insert "{item_label(node)}" into "{item_label(parent)}" as'
        choice = self._prompt.choose(message, choices)
        actions: dict[Choice, Action] = {
            Choice.LOCATION: self.add_location,
            Choice.EQUIPMENT: self.add_equipment,
            Choice.POINT: self.add_point,
            Choice.NON_SEMANTIC: self.add_non_semantic,
        }
        action = actions.get(choice) if choice in choices else None
        if action is None:
            logger.debug("Insert of {} declined ({})", node.name, choice.value)
            self._cancel(None)
            return
        action(node, parent)

    # --- Classification actions ---

    def add_location(self, node: ModelNode, parent: ModelNode) -> None:
        semantics = self._semantics_for(node, parent, LOCATION)
        if parent.is_location:
            semantics.config["isPartOf"] = parent.item.name  # type: ignore[union-attr]
        self._classify(node, semantics)
        self._cascade(node, self.add_into_location)
        self.update_after_add(node, parent, semantics)

    def add_equipment(self, node: ModelNode, parent: ModelNode) -> None:
        semantics = self._semantics_for(node, parent, EQUIPMENT)
        if parent.is_location:
            semantics.config["hasLocation"] = parent.item.name  # type: ignore[union-attr]
        elif parent.is_equipment:
            semantics.config["isPartOf"] = parent.item.name  # type: ignore[union-attr]
        self._classify(node, semantics)
        self._cascade(node, self.add_into_equipment)
        self.update_after_add(node, parent, semantics)

    def add_point(self, node: ModelNode, parent: ModelNode) -> None:
        semantics = self._semantics_for(node, parent, POINT)
        if parent.is_location:
            semantics.config["hasLocation"] = parent.item.name  # type: ignore[union-attr]
        elif parent.is_equipment:
            semantics.config["isPointOf"] = parent.item.name  # type: ignore[union-attr]
        self._classify(node, semantics)
        self.update_after_add(node, parent, semantics)

    def add_non_semantic(self, node: ModelNode, parent: ModelNode) -> None:
        self._declassify(node)
        self.update_after_add(node, parent, None)

    @staticmethod
    def _semantics_for(node: ModelNode, parent: ModelNode, kind: str) -> Semantics:
        previous = node.item.semantics if node.item else None
        if previous is None or not previous.value.startswith(kind):
            return Semantics(value=kind)
        # A parent without linkage leaves the existing relations alone.
        keep_config = not (parent.is_location or parent.is_equipment)
        return Semantics(value=previous.value, config=dict(previous.config) if keep_config else {})

    @staticmethod
    def _classify(node: ModelNode, semantics: Semantics) -> None:
        tags = node.item.tags  # type: ignore[union-attr]
        tag = semantic_tag(semantics.value)
        if tag not in tags:
            tags.append(tag)
        node.semantic_class = semantics.value

    @staticmethod
    def _declassify(node: ModelNode) -> None:
        item = node.item
        if item is not None and item.semantics is not None:
            tag = semantic_tag(item.semantics.value)
            if tag in item.tags:
                item.tags.remove(tag)
            del item.metadata["semantics"]
        node.semantic_class = ""

    def _cascade(self, node: ModelNode, add_into: Action) -> None:
        for child in node_children(node):
            if self._record.cancelled:
                return
            add_into(child, node)

    def update_after_add(
        self, node: ModelNode, parent: ModelNode, semantics: Semantics | None
    ) -> None:
        """Commit the semantics of `node` and attach it to `parent`."""
        if self._record.cancelled:
            return
        item = node.item
        if item is None:
            return
        if semantics is None:
            item.metadata.pop("semantics", None)
        else:
            item.metadata["semantics"] = semantics

        if parent.item is not None and parent.item.is_group and parent.item.name not in item.group_names:
            item.group_names.append(parent.item.name)

        children = node_children(parent)
        if not contains(parent, node):
            # the gesture source does not always insert before the add gate opens
            children.append(node)
        set_children(parent, children)

        if node is self._record.node:
            self._record.can_add = False
            self._record.adding = False
            logger.debug("Add finished: {}", self._record.snapshot())

    # --- Removal from the source container ---

    def remove(
        self,
        node: ModelNode,
        source: ModelNode,
        old_index: int | None,
        destination: ModelNode | None = None,
    ) -> None:
        """Detach `node` from `source`."""
        item = node.item
        if item is None:
            return
        if source.item is not None and source.item.name in item.group_names:
            item.group_names.remove(source.item.name)
        if source.item is not None and item.semantics is not None:
            item.semantics.config = {
                k: v for k, v in item.semantics.config.items() if v != source.item.name
            }

        children = node_children(source)
        if old_index is not None and 0 <= old_index < len(children) and children[old_index] is node:
            del children[old_index]
        else:
            children = [c for c in children if c.name != node.name]
        set_children(source, children)

        if (
            destination is not None
            and destination.item is not None
            and destination.item.is_group
            and not destination.is_semantic
            and node.is_semantic
        ):
            logger.debug("Stripping semantics of {} moved into {}", node.name, destination.name)
            self._declassify(node)
            set_children(destination, node_children(destination))

        self.update_after_remove()

    def keep(self, node: ModelNode, source: ModelNode, old_index: int | None) -> None:
        """Leave `node` in `source` as well, so it ends up in both containers."""
        children = node_children(source)
        if not contains(source, node):
            index = old_index if old_index is not None else len(children)
            children.insert(index, node)
        set_children(source, children)
        self.update_after_remove()

    def update_after_remove(self) -> None:
        self._record.can_remove = False
        self._record.removing = False
        self._record.drag_finished = True
        logger.debug("Remove finished: {}", self._record.snapshot())
