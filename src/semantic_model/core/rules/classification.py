"""Rules deciding whether a node may enter a container.

Every check returns None when the move is allowed and a human-readable
rejection message otherwise. Nothing here mutates the tree.
"""

from semantic_model.core.rules.item_types import aggregation_functions, split_type
from semantic_model.core.tree.navigation import item_label, nested_nodes, node_children
from semantic_model.models.node import ModelNode


def effective_type(node: ModelNode) -> tuple[str, str | None]:
    """Return (base type, dimension) a node contributes to its parent group."""
    if node.item is None:
        return "None", None
    if node.item.is_group:
        return split_type(node.item.group_type)
    return split_type(node.item.type)


def check_group_type(node: ModelNode, parent: ModelNode) -> str | None:
    """Check the node's value type against the parent's declared group type."""
    if parent.item is None:
        return None
    base_type, base_dimension = split_type(parent.item.group_type)
    if base_type == "None":
        return None

    value_type, dimension = effective_type(node)
    what = "group item" if node.item and node.item.is_group else "item"
    if value_type in ("Number", "None") and base_type == "Number":
        if base_dimension and dimension and base_dimension != dimension:
            return (
                f'Group dimension "{base_dimension}" of group "{item_label(parent)}" '
                f'not compatible with {what} dimension "{dimension}" '
                f'of {what} "{item_label(node)}"'
            )
        if dimension:
            for child in node_children(parent):
                if child is node or child.name == node.name:
                    continue
                _, child_dimension = effective_type(child)
                if child_dimension and child_dimension != dimension:
                    return (
                        f'Group "{item_label(parent)}" already contains item '
                        f'"{item_label(child)}" with dimension "{child_dimension}" '
                        f'different from dimension "{dimension}"'
                    )

    function = parent.item.function
    if function and function.name not in aggregation_functions(value_type):
        return (
            f'Group aggregation function "{function.name}" for group "{item_label(parent)}" '
            f'not compatible with type "{value_type}" of item "{item_label(node)}"'
        )
    return None


def is_valid_group_type(node: ModelNode, parent: ModelNode) -> bool:
    return check_group_type(node, parent) is None


def check_not_descendant(node: ModelNode, parent: ModelNode) -> str | None:
    """Reject dropping a node into itself or anywhere inside its own subtree."""
    if parent is node or any(n is parent for n in nested_nodes(node)):
        return (
            f'Cannot move "{item_label(node)}" into "{item_label(parent)}", '
            "which is the item itself or one of its descendants"
        )
    return None


def check_membership(node: ModelNode, parent: ModelNode) -> str | None:
    """Reject a node already listed as a member of the target group."""
    if parent.item and node.item and parent.item.name in node.item.group_names:
        return f'Group "{item_label(parent)}" already contains item "{item_label(node)}"'
    return None


def check_semantic_descendants(node: ModelNode, parent: ModelNode) -> str | None:
    """Reject a non-semantic group hiding semantic items inside a semantic container."""
    if not parent.is_semantic or node.is_semantic:
        return None
    if node.item is None or not node.item.is_group:
        return None
    semantic_node = next((n for n in nested_nodes(node) if n.is_semantic), None)
    if semantic_node is None:
        return None
    return (
        f'Cannot insert non-semantic group "{item_label(node)}" with semantic child '
        f'"{item_label(semantic_node)}" into semantic group "{item_label(parent)}"'
    )


def check_semantic_source(
    node: ModelNode, parent: ModelNode, old_parent: ModelNode | None
) -> str | None:
    """Reject pulling a semantic item out of a plain group into a semantic one."""
    if old_parent is None or old_parent.is_root or old_parent.is_semantic:
        return None
    if not node.is_semantic or not parent.is_semantic:
        return None
    return (
        f'Cannot move semantic item "{item_label(node)}" from non-semantic group '
        f'"{item_label(old_parent)}" into semantic group "{item_label(parent)}"'
    )


def check_add(
    node: ModelNode, parent: ModelNode, old_parent: ModelNode | None = None
) -> str | None:
    """Run every pre-mutation check in order, returning the first rejection."""
    return (
        check_not_descendant(node, parent)
        or check_membership(node, parent)
        or check_semantic_descendants(node, parent)
        or check_semantic_source(node, parent, old_parent)
        or check_group_type(node, parent)
    )
