"""Configuration constants for semantic-model."""

import os
from pathlib import Path

# API token location. First file found is used.
API_TOKEN_FILES: list[Path] = [
    Path("~/.config/openhab-token.txt").expanduser(),
    Path("~/.config/secret/openhab-token.txt").expanduser(),
    Path(f"/run/user/{os.getuid()}/openhab-token"),
]

# REST endpoint of the openHAB instance, OPENHAB_URL overrides it.
DEFAULT_BASE_URL: str = "http://localhost:8080"

# Seconds before a REST request is abandoned.
REQUEST_TIMEOUT: float = 10.0

# Metadata namespace holding the semantic classification of an item.
SEMANTICS_NAMESPACE: str = "semantics"


def resolve_base_url(url: str | None = None) -> str:
    """Return the REST base URL: explicit value, then $OPENHAB_URL, then the default."""
    return (url or os.environ.get("OPENHAB_URL") or DEFAULT_BASE_URL).rstrip("/")
