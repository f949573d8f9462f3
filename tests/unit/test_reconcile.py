"""Tests for the reconciliation actions applied during a move."""

from semantic_model.core.move.reconcile import (
    EQUIPMENT_CHOICES,
    GROUP_CHOICES,
    ITEM_CHOICES,
    LOCATION_GROUP_CHOICES,
    Reconciler,
)
from semantic_model.core.tree.navigation import node_children, set_children
from semantic_model.models.move import Choice, MoveRecord
from semantic_model.models.node import ModelNode, Semantics
from tests.unit.fakes import FakePrompt
from tests.unit.model_data import node


class _Harness:
    def __init__(self, moved: ModelNode, prompt: FakePrompt | None = None) -> None:
        self.record = MoveRecord(node=moved, drag_end=True, can_add=True, adding=True)
        self.prompt = prompt or FakePrompt()
        self.messages: list[str | None] = []
        self.reconciler = Reconciler(self.record, self.prompt, self._cancel)

    def _cancel(self, message: str | None) -> None:
        self.record.cancelled = True
        self.messages.append(message)


def test_add_point_is_idempotent(model: ModelNode) -> None:
    temp, living_room = node(model, "Temp_LR"), node(model, "LivingRoom")
    harness = _Harness(temp)

    harness.reconciler.add_point(temp, living_room)
    harness.reconciler.add_point(temp, living_room)

    assert temp.semantic_class == "Point"
    assert temp.item is not None
    assert temp.item.tags == ["Point"]
    assert temp.item.group_names == ["LivingRoom"]
    assert temp.item.semantics == Semantics(value="Point", config={"hasLocation": "LivingRoom"})
    assert living_room.children.points == [temp]
    assert not harness.record.can_add
    assert not harness.record.adding


def test_add_location_is_idempotent(model: ModelNode) -> None:
    stuff, living_room = node(model, "Stuff"), node(model, "LivingRoom")
    harness = _Harness(stuff)

    harness.reconciler.add_location(stuff, living_room)
    harness.reconciler.add_location(stuff, living_room)

    assert stuff.semantic_class == "Location"
    assert stuff.item is not None
    assert stuff.item.tags == ["Location"]
    assert stuff.item.semantics == Semantics(value="Location", config={"isPartOf": "LivingRoom"})
    assert living_room.children.locations == [stuff]


def test_add_equipment_is_idempotent(model: ModelNode) -> None:
    fridge, living_room = node(model, "Fridge"), node(model, "LivingRoom")
    harness = _Harness(fridge)

    harness.reconciler.add_equipment(fridge, living_room)
    harness.reconciler.add_equipment(fridge, living_room)

    assert fridge.semantic_class == "Equipment_Refrigerator"
    assert fridge.item is not None
    assert fridge.item.tags == ["Refrigerator"]
    assert fridge.item.group_names == ["Kitchen", "LivingRoom"]
    assert fridge.item.semantics == Semantics(
        value="Equipment_Refrigerator", config={"hasLocation": "LivingRoom"}
    )
    assert living_room.children.equipment == [fridge]


def test_plain_group_into_location_must_be_classified(model: ModelNode) -> None:
    stuff, living_room = node(model, "Stuff"), node(model, "LivingRoom")
    harness = _Harness(stuff, FakePrompt(choices=[Choice.EQUIPMENT]))

    harness.reconciler.add_into_location(stuff, living_room)

    assert harness.prompt.asked == [('Insert "Stuff" into "Living Room" as', LOCATION_GROUP_CHOICES)]
    assert stuff.item is not None
    assert stuff.item.semantics == Semantics(value="Equipment", config={"hasLocation": "LivingRoom"})


def test_add_equipment_into_equipment_is_part_of(model: ModelNode) -> None:
    stuff, fridge = node(model, "Stuff"), node(model, "Fridge")
    harness = _Harness(stuff)

    harness.reconciler.add_equipment(stuff, fridge)
    harness.reconciler.add_equipment(stuff, fridge)

    assert stuff.item is not None
    assert stuff.item.tags == ["Equipment"]
    assert stuff.item.semantics == Semantics(value="Equipment", config={"isPartOf": "Fridge"})
    assert fridge.children.equipment == [stuff]


def test_add_location_cascades_into_subtree(model: ModelNode) -> None:
    kitchen, living_room = node(model, "Kitchen"), node(model, "LivingRoom")
    harness = _Harness(kitchen)

    harness.reconciler.add_into(kitchen, living_room)

    assert kitchen.item is not None
    assert kitchen.item.semantics == Semantics(
        value="Location_Indoor_Room_Kitchen", config={"isPartOf": "LivingRoom"}
    )
    fridge, fridge_temp = node(model, "Fridge"), node(model, "Fridge_Temp")
    assert fridge.item is not None and fridge_temp.item is not None
    assert fridge.item.semantics == Semantics(
        value="Equipment_Refrigerator", config={"hasLocation": "Kitchen"}
    )
    assert fridge_temp.item.semantics == Semantics(
        value="Point_Measurement", config={"isPointOf": "Fridge"}
    )
    assert harness.prompt.asked == []


def test_cascade_asks_for_unclassified_children(model: ModelNode) -> None:
    stuff, door, living_room = node(model, "Stuff"), node(model, "Door"), node(model, "LivingRoom")
    assert door.item is not None
    door.item.group_names.append("Stuff")
    set_children(stuff, [door])
    harness = _Harness(stuff, FakePrompt(choices=[Choice.POINT]))

    harness.reconciler.add_location(stuff, living_room)

    assert harness.prompt.asked == [('Insert "Front Door" into "Stuff" as', ITEM_CHOICES)]
    assert door.item.semantics == Semantics(value="Point", config={"hasLocation": "Stuff"})
    assert stuff.children.points == [door]


def test_add_non_semantic_drops_semantics_and_tag(model: ModelNode) -> None:
    light, stuff = node(model, "Party_Light"), node(model, "Stuff")
    harness = _Harness(light)

    harness.reconciler.add_non_semantic(light, stuff)

    assert light.semantic_class == ""
    assert light.item is not None
    assert light.item.semantics is None
    assert "Switch" not in light.item.tags
    assert stuff.children.items == [light]


def test_root_dispatch_offers_group_choices(model: ModelNode) -> None:
    archive = node(model, "Archive")
    harness = _Harness(archive, FakePrompt(choices=[Choice.EQUIPMENT]))

    harness.reconciler.add_into_root(archive, model)

    assert harness.prompt.asked[0][1] == GROUP_CHOICES
    assert archive.semantic_class == "Equipment"
    assert harness.record.move_confirmed


def test_equipment_dispatch_offers_equipment_or_point(model: ModelNode) -> None:
    stuff, fridge = node(model, "Stuff"), node(model, "Fridge")
    harness = _Harness(stuff, FakePrompt(choices=[Choice.POINT]))

    harness.reconciler.add_into_equipment(stuff, fridge)

    assert harness.prompt.asked[0][1] == EQUIPMENT_CHOICES
    assert stuff.item is not None
    assert stuff.item.semantics == Semantics(value="Point", config={"isPointOf": "Fridge"})


def test_location_cannot_enter_equipment(model: ModelNode) -> None:
    living_room, fridge = node(model, "LivingRoom"), node(model, "Fridge")
    harness = _Harness(living_room)

    harness.reconciler.add_into_equipment(living_room, fridge)

    assert harness.messages == ['Cannot move Location "Living Room" into Equipment "Fridge"']
    assert living_room.item is not None
    assert "Fridge" not in living_room.item.group_names


def test_unoffered_answer_cancels(model: ModelNode) -> None:
    stuff = node(model, "Stuff")
    harness = _Harness(stuff, FakePrompt(choices=[Choice.KEEP]))

    harness.reconciler.add_into_root(stuff, model)

    assert harness.messages == [None]
    assert stuff.semantic_class == ""


def test_add_into_plain_group_keeps_class(model: ModelNode) -> None:
    fridge_temp, misc = node(model, "Fridge_Temp"), node(model, "Misc")
    harness = _Harness(fridge_temp)

    harness.reconciler.add_into_group(fridge_temp, misc)

    assert fridge_temp.item is not None
    assert fridge_temp.item.semantics == Semantics(
        value="Point_Measurement", config={"isPointOf": "Fridge"}
    )
    assert fridge_temp.item.group_names == ["Fridge", "Misc"]


def test_remove_into_plain_group_strips_semantics(model: ModelNode) -> None:
    fridge_temp, fridge, misc = node(model, "Fridge_Temp"), node(model, "Fridge"), node(model, "Misc")
    harness = _Harness(fridge_temp)
    harness.reconciler.add_into_group(fridge_temp, misc)

    harness.reconciler.remove(fridge_temp, fridge, 0, misc)

    assert fridge_temp.item is not None
    assert fridge_temp.item.semantics is None
    assert fridge_temp.semantic_class == ""
    assert fridge_temp.item.group_names == ["Misc"]
    assert "Measurement" not in fridge_temp.item.tags
    assert node_children(fridge) == []
    assert misc.children.items == [fridge_temp]
    assert harness.record.drag_finished
    assert not harness.record.can_remove


def test_remove_drops_relation_to_source(model: ModelNode) -> None:
    fridge_temp, fridge = node(model, "Fridge_Temp"), node(model, "Fridge")
    harness = _Harness(fridge_temp)
    harness.reconciler.add_into_root(fridge_temp, model)

    harness.reconciler.remove(fridge_temp, fridge, 0, model)

    assert fridge_temp.item is not None
    assert fridge_temp.item.semantics == Semantics(value="Point_Measurement", config={})
    assert fridge_temp.item.group_names == []


def test_remove_falls_back_to_name_when_index_is_stale(model: ModelNode) -> None:
    light, misc = node(model, "Party_Light"), node(model, "Misc")
    harness = _Harness(light)

    harness.reconciler.remove(light, misc, 5, model)

    assert [n.name for n in node_children(misc)] == ["Archive"]


def test_keep_puts_node_back_at_old_index(model: ModelNode) -> None:
    light, misc = node(model, "Party_Light"), node(model, "Misc")
    set_children(misc, [n for n in node_children(misc) if n is not light])
    assert light.item is not None
    harness = _Harness(light)

    harness.reconciler.keep(light, misc, 0)

    assert node_children(misc)[0] is light
    assert light.item.group_names == ["Misc"]
    assert harness.record.drag_finished
