"""Tree navigation: child partitions, descendants, lookups."""

from collections.abc import Iterator

from semantic_model.models.node import ModelNode


def node_children(node: ModelNode) -> list[ModelNode]:
    """Return the children of a node as one list, in partition order."""
    c = node.children
    return [*c.locations, *c.equipment, *c.points, *c.groups, *c.items]


def set_children(node: ModelNode, node_list: list[ModelNode]) -> None:
    """Replace the children of a node, sorting each one into its partition.

    Relative order inside a partition follows `node_list`.
    """
    c = node.children
    c.locations = [n for n in node_list if n.is_location]
    c.equipment = [n for n in node_list if n.is_equipment]
    c.points = [n for n in node_list if n.is_point]
    c.groups = [n for n in node_list if not n.is_semantic and n.item and n.item.is_group]
    c.items = [n for n in node_list if not n.is_semantic and not (n.item and n.item.is_group)]


def nested_nodes(node: ModelNode) -> list[ModelNode]:
    """Flatten the descendants of a node in pre-order.

    A node reachable through two containers is listed once.
    """
    nodes: list[ModelNode] = []
    _collect(node, nodes, {id(node)})
    return nodes


def _collect(node: ModelNode, nodes: list[ModelNode], seen: set[int]) -> None:
    for child in node_children(node):
        if id(child) in seen:
            continue
        seen.add(id(child))
        nodes.append(child)
        _collect(child, nodes, seen)


def iter_tree(root: ModelNode) -> Iterator[ModelNode]:
    """Yield the root and all of its descendants."""
    yield root
    yield from nested_nodes(root)


def find_node(root: ModelNode, name: str) -> ModelNode | None:
    """Find the node wrapping the item called `name`."""
    return next((n for n in iter_tree(root) if n.name == name), None)


def find_parents(root: ModelNode, node: ModelNode) -> list[ModelNode]:
    """Return every container that lists `node` as a direct child."""
    return [p for p in iter_tree(root) if any(c is node for c in node_children(p))]


def contains(container: ModelNode, node: ModelNode) -> bool:
    """Check whether `node` is a direct child of `container`, by item name."""
    return any(c.name == node.name for c in node_children(container))


def item_label(node: ModelNode | None, *, include_name: bool = False) -> str:
    """Human-readable label of a node for prompts and messages."""
    if node is None or node.item is None:
        return "model root"
    item = node.item
    if not item.label:
        return item.name
    return f"{item.label} ({item.name})" if include_name else item.label
