"""Write moved items back to the item store."""

from typing import Any

import requests
from loguru import logger

from semantic_model.models.node import Item
from semantic_model.protocols import ItemStoreProtocol


def save_nodes(store: ItemStoreProtocol, items: list[Item]) -> dict[str, Any]:
    """Save each item through the store, in order.

    A failing item does not stop the others. Failures are reported, not
    retried.

    Args:
        store: Item store to write to.
        items: Items to save, usually a moved node followed by its subtree.

    Returns:
        Dict with `success`, the `saved` item names and per-item `errors`.
    """
    saved: list[str] = []
    errors: dict[str, str] = {}
    for item in items:
        try:
            store.save_item(item)
        except (RuntimeError, requests.RequestException) as e:
            logger.warning("Failed to save item {}: {}", item.name, e)
            errors[item.name] = str(e)
            continue
        saved.append(item.name)

    if errors:
        logger.error("Saved {} of {} items", len(saved), len(items))
    return {"success": not errors, "saved": saved, "errors": errors}
