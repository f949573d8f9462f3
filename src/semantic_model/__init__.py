"""Drag-and-drop reorganization of the openHAB semantic model."""

from semantic_model.api import OpenHABApi
from semantic_model.core.move.engine import MoveEngine
from semantic_model.protocols import ItemStoreProtocol, PromptProtocol
from semantic_model.session import ModelSession

__all__ = ["ItemStoreProtocol", "ModelSession", "MoveEngine", "OpenHABApi", "PromptProtocol"]
