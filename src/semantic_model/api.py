"""openHAB REST client for reading and saving items."""

import json
import logging
from typing import Any

import requests

from semantic_model.config import API_TOKEN_FILES, REQUEST_TIMEOUT, SEMANTICS_NAMESPACE, resolve_base_url
from semantic_model.core.importer.item_reader import item_payload, parse_item, semantics_payload
from semantic_model.models.node import Item


class OpenHABApi:
    """Encapsulated openHAB items API."""

    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = resolve_base_url(base_url)
        self.sess = requests.Session()
        self.logger = logging.getLogger("api")

        self.api_token: str | None = None
        api_token_name: str | None = None
        for token_path in API_TOKEN_FILES:
            try:
                self.api_token = token_path.read_text(encoding="utf-8").strip()
                api_token_name = str(token_path)
                break
            except FileNotFoundError:
                pass

        if self.api_token:
            self.sess.headers["Authorization"] = f"Bearer {self.api_token}"
        else:
            # Anonymous access works when the instance allows implicit user role.
            self.logger.debug(f"No openHAB token found, was looking at {API_TOKEN_FILES!r}")

        self.logger.debug(f"API ready: {self.base_url!r}, token from {api_token_name!r}")

    def call(self, method: str, path: str, body: Any = None) -> Any:
        """Invoke a REST endpoint, return the decoded JSON answer (or None)."""
        self.logger.debug(f"Making request: {method} {path!r}")
        r = self.sess.request(
            method,
            f"{self.base_url}/rest/{path}",
            data=json.dumps(body) if body is not None else None,
            headers={"Content-Type": "application/json"} if body is not None else None,
            timeout=REQUEST_TIMEOUT,
        )
        if r.status_code == 404:
            msg = f"API call failed: ({method} {path!r}) -> not found"
            raise RuntimeError(msg)
        r.raise_for_status()
        if not r.content:
            return None
        return r.json()

    def fetch_items(self) -> list[Item]:
        """Return all items with their semantics metadata."""
        raw = self.call("GET", f"items?metadata={SEMANTICS_NAMESPACE}")
        if not isinstance(raw, list):
            msg = f"bad items answer: {type(raw).__name__}"
            raise RuntimeError(msg)
        return [parse_item(data) for data in raw]

    def save_item(self, item: Item) -> None:
        """Write an item and its semantics metadata."""
        self.call("PUT", f"items/{item.name}", item_payload(item))
        metadata_path = f"items/{item.name}/metadata/{SEMANTICS_NAMESPACE}"
        if item.semantics is not None:
            self.call("PUT", metadata_path, semantics_payload(item.semantics))
        else:
            try:
                self.call("DELETE", metadata_path)
            except RuntimeError:
                self.logger.debug(f"No semantics metadata to delete for {item.name!r}")
