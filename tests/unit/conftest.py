"""Shared test fixtures."""

import pytest

from semantic_model.core.importer.loader import build_model
from semantic_model.models.node import ModelNode
from semantic_model.session import ModelSession
from tests.unit.fakes import FakePrompt, FakeStore
from tests.unit.model_data import MODEL_ITEMS


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(MODEL_ITEMS)


@pytest.fixture
def model(store: FakeStore) -> ModelNode:
    """Return the root of a freshly built model."""
    return build_model(store.fetch_items())


@pytest.fixture
def prompt() -> FakePrompt:
    return FakePrompt()


@pytest.fixture
def session(store: FakeStore, prompt: FakePrompt) -> ModelSession:
    return ModelSession(store, prompt)
