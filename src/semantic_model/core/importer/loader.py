"""Build the semantic model tree from a flat list of items."""

from collections import deque

from loguru import logger

from semantic_model.core.tree.navigation import set_children
from semantic_model.models.node import Item, ModelNode, semantic_class_of


def build_model(items: list[Item]) -> ModelNode:
    """Arrange items into a tree rooted at an item-less node.

    An item is a child of every present Group named in its group_names, items
    without such a group hang off the root. A node reachable from two groups
    is the same object under both.

    Args:
        items: Items with their semantics metadata.

    Returns:
        The root node.
    """
    root = ModelNode(item=None)
    nodes = {item.name: ModelNode(item=item, semantic_class=semantic_class_of(item)) for item in items}
    members: dict[str, list[ModelNode]] = {name: [] for name in nodes}
    top_level: list[ModelNode] = []
    groups = {item.name for item in items if item.is_group}

    for item in items:
        node = nodes[item.name]
        parents = [g for g in item.group_names if g in groups]
        if not parents:
            top_level.append(node)
        for group_name in parents:
            members[group_name].append(node)

    # BFS from the root so group cycles cannot recurse forever.
    attached: set[str] = set()
    todo: deque[tuple[ModelNode, list[ModelNode]]] = deque([(root, top_level)])
    while todo:
        parent, children = todo.popleft()
        set_children(parent, children)
        for child in children:
            if child.name in attached:
                continue
            attached.add(child.name)  # type: ignore[arg-type]
            todo.append((child, members[child.name]))  # type: ignore[index]

    unreachable = sorted(set(nodes) - attached)
    if unreachable:
        logger.warning("Items only reachable through a group cycle: {}", unreachable)

    logger.debug("Built model with {} items, {} at top level", len(nodes), len(top_level))
    return root
