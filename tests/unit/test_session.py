"""Tests for ModelSession lookups and dry-run checks."""

import pytest

from semantic_model.session import ModelSession, MoveError
from tests.unit.fakes import FakePrompt, FakeStore


def test_node_none_is_root(session: ModelSession) -> None:
    assert session.node(None) is session.root


def test_unknown_item_raises(session: ModelSession) -> None:
    with pytest.raises(MoveError, match="'Nope' not found"):
        session.node("Nope")


def test_source_defaults_to_first_parent(session: ModelSession) -> None:
    fridge_temp = session.node("Fridge_Temp")

    assert session.source_of(fridge_temp) is session.node("Fridge")


def test_source_must_contain_item(session: ModelSession) -> None:
    with pytest.raises(MoveError, match="not a child of 'Misc'"):
        session.source_of(session.node("Door"), "Misc")


def test_check_accepts_valid_move(session: ModelSession, store: FakeStore) -> None:
    assert session.check("Temp_LR", into="LivingRoom") is None
    assert session.check("Kitchen", into=None) is None
    assert store.fetch_count == 1


def test_check_reports_rejection_without_prompting(
    session: ModelSession, store: FakeStore, prompt: FakePrompt
) -> None:
    message = session.check("Party_Light", into="LivingRoom")

    assert message == (
        'Cannot move semantic item "Party Light" from non-semantic group '
        '"Miscellaneous" into semantic group "Living Room"'
    )
    assert prompt.alerts == []
    assert session.reload_count == 0
    assert store.saved == []


def test_check_reports_existing_membership(session: ModelSession) -> None:
    message = session.check("Fridge_Temp", into="Fridge")

    assert message == 'Group "Fridge" already contains item "Fridge Temperature"'


def test_move_into_plain_group_at_index(
    session: ModelSession, store: FakeStore, prompt: FakePrompt
) -> None:
    prompt.confirms = [True]

    outcome = session.move("Door", into="Misc", index=0)

    assert outcome.saved == ("Door",)
    assert store.saved[0].group_names == ["Misc"]
