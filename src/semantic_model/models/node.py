"""Domain models for the semantic model tree."""

from dataclasses import dataclass, field
from typing import Any

LOCATION = "Location"
EQUIPMENT = "Equipment"
POINT = "Point"

GROUP_TYPE = "Group"


@dataclass(frozen=True)
class GroupFunction:
    """Aggregation function declared by a Group item."""

    name: str
    params: tuple[str, ...] = ()


@dataclass
class Semantics:
    """The `semantics` metadata block of an item."""

    value: str
    config: dict[str, str] = field(default_factory=dict)


@dataclass
class Item:
    """A single item as known to the item registry."""

    name: str
    type: str
    label: str = ""
    category: str | None = None
    group_type: str | None = None
    function: GroupFunction | None = None
    tags: list[str] = field(default_factory=list)
    group_names: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_group(self) -> bool:
        return self.type == GROUP_TYPE

    @property
    def semantics(self) -> Semantics | None:
        value = self.metadata.get("semantics")
        return value if isinstance(value, Semantics) else None


@dataclass
class Children:
    """The five ordered child partitions of a container node."""

    locations: list["ModelNode"] = field(default_factory=list)
    equipment: list["ModelNode"] = field(default_factory=list)
    points: list["ModelNode"] = field(default_factory=list)
    groups: list["ModelNode"] = field(default_factory=list)
    items: list["ModelNode"] = field(default_factory=list)


@dataclass(eq=False)
class ModelNode:
    """A node of the semantic model tree.

    The root of the model has no item. Nodes compare by identity, a node
    referenced from two containers is the same object in both.
    """

    item: Item | None
    semantic_class: str = ""
    children: Children = field(default_factory=Children)
    opened: bool = False

    @property
    def is_root(self) -> bool:
        return self.item is None

    @property
    def name(self) -> str | None:
        return self.item.name if self.item else None

    @property
    def is_location(self) -> bool:
        return self.semantic_class.startswith(LOCATION)

    @property
    def is_equipment(self) -> bool:
        return self.semantic_class.startswith(EQUIPMENT)

    @property
    def is_point(self) -> bool:
        return self.semantic_class.startswith(POINT)

    @property
    def is_semantic(self) -> bool:
        return self.semantic_class != ""

    def __repr__(self) -> str:
        return f"ModelNode({self.name or '<root>'!r}, class={self.semantic_class!r})"


def semantic_class_of(item: Item | None) -> str:
    """Derive a node class from the item's semantics metadata."""
    if item is None or item.semantics is None:
        return ""
    return item.semantics.value or ""


def semantic_tag(value: str) -> str:
    """Return the tag carried by an item classified as `value`.

    `Location_Indoor_Room` is tagged `Room`, a bare `Point` is tagged `Point`.
    """
    return value.rsplit("_", 1)[-1]
