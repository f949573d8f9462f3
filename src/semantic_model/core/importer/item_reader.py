"""Convert between REST item JSON and domain models."""

from typing import Any

from semantic_model.config import SEMANTICS_NAMESPACE
from semantic_model.models.node import GroupFunction, Item, Semantics


def parse_item(data: dict[str, Any]) -> Item:
    """Parse one item as returned by `GET /rest/items`.

    Args:
        data: Raw item object.

    Returns:
        Item with its semantics metadata parsed, other namespaces kept raw.
    """
    metadata: dict[str, Any] = dict(data.get("metadata") or {})
    raw_semantics = metadata.get(SEMANTICS_NAMESPACE)
    if raw_semantics and raw_semantics.get("value"):
        metadata[SEMANTICS_NAMESPACE] = Semantics(
            value=raw_semantics["value"],
            config={k: str(v) for k, v in (raw_semantics.get("config") or {}).items()},
        )
    else:
        metadata.pop(SEMANTICS_NAMESPACE, None)

    function: GroupFunction | None = None
    raw_function = data.get("function")
    if raw_function and raw_function.get("name"):
        function = GroupFunction(
            name=raw_function["name"],
            params=tuple(raw_function.get("params") or ()),
        )

    return Item(
        name=data["name"],
        type=data["type"],
        label=data.get("label") or "",
        category=data.get("category"),
        group_type=data.get("groupType"),
        function=function,
        tags=list(dict.fromkeys(data.get("tags") or [])),
        group_names=list(dict.fromkeys(data.get("groupNames") or [])),
        metadata=metadata,
    )


def item_payload(item: Item) -> dict[str, Any]:
    """Build the body for `PUT /rest/items/{name}` (metadata is saved separately)."""
    payload: dict[str, Any] = {
        "name": item.name,
        "type": item.type,
        "label": item.label,
        "tags": list(item.tags),
        "groupNames": list(item.group_names),
    }
    if item.category:
        payload["category"] = item.category
    if item.is_group:
        if item.group_type:
            payload["groupType"] = item.group_type
        if item.function:
            payload["function"] = {"name": item.function.name, "params": list(item.function.params)}
    return payload


def semantics_payload(semantics: Semantics) -> dict[str, Any]:
    """Build the body for `PUT /rest/items/{name}/metadata/semantics`."""
    return {"value": semantics.value, "config": dict(semantics.config)}
