"""The in-flight move record and the states derived from it."""

from dataclasses import dataclass
from enum import Enum

from semantic_model.models.node import ModelNode


class MoveState(Enum):
    """Coarse state of a move, derived from the record flags."""

    IDLE = "idle"
    DRAGGING = "dragging"
    AWAITING_ADD = "awaiting_add"
    AWAITING_REMOVE = "awaiting_remove"
    SETTLING = "settling"
    SAVING = "saving"
    CANCELLED = "cancelled"


class Gate(Enum):
    """The step the engine has to run next."""

    ADD = "add"
    REMOVE = "remove"
    SAVE = "save"


class Choice(Enum):
    """Options offered to the user by the engine's prompts."""

    LOCATION = "Location"
    EQUIPMENT = "Equipment"
    POINT = "Point"
    NON_SEMANTIC = "Non Semantic"
    KEEP = "Keep"
    REMOVE = "Remove"
    CANCEL = "Cancel"


@dataclass(frozen=True)
class MoveSnapshot:
    """Immutable view of a move record, for logging and observers."""

    state: MoveState
    node: str | None
    old_parent: str | None
    new_parent: str | None
    old_index: int | None
    flags: tuple[str, ...]


_FLAGS = (
    "moving",
    "drag_end",
    "drag_finished",
    "can_add",
    "can_remove",
    "adding",
    "removing",
    "saving",
    "cancelled",
    "move_confirmed",
)


@dataclass
class MoveRecord:
    """The single outstanding move transaction."""

    node: ModelNode | None = None
    old_parent: ModelNode | None = None
    new_parent: ModelNode | None = None
    old_index: int | None = None
    moving: bool = False
    drag_end: bool = False
    drag_finished: bool = False
    can_add: bool = False
    can_remove: bool = False
    adding: bool = False
    removing: bool = False
    saving: bool = False
    cancelled: bool = False
    move_confirmed: bool = False

    @property
    def add_open(self) -> bool:
        return (
            not self.cancelled
            and self.drag_end
            and not self.drag_finished
            and self.can_add
            and not self.adding
        )

    @property
    def remove_open(self) -> bool:
        return (
            not self.cancelled
            and self.drag_end
            and not self.drag_finished
            and not self.can_add
            and self.can_remove
            and not self.removing
        )

    @property
    def save_open(self) -> bool:
        return (
            not self.cancelled
            and self.drag_end
            and self.drag_finished
            and not self.can_add
            and not self.can_remove
            and not self.saving
        )

    def gate(self) -> Gate | None:
        """Return the open gate, the three conditions exclude each other."""
        if self.add_open:
            return Gate.ADD
        if self.remove_open:
            return Gate.REMOVE
        if self.save_open:
            return Gate.SAVE
        return None

    @property
    def state(self) -> MoveState:
        if self.node is None:
            return MoveState.IDLE
        if self.cancelled:
            return MoveState.CANCELLED
        if self.moving:
            return MoveState.DRAGGING
        if not self.drag_end:
            return MoveState.IDLE
        if self.saving:
            return MoveState.SAVING
        if self.can_add:
            return MoveState.AWAITING_ADD
        if self.can_remove:
            return MoveState.AWAITING_REMOVE
        if self.drag_finished:
            return MoveState.SETTLING
        return MoveState.IDLE

    def snapshot(self) -> MoveSnapshot:
        return MoveSnapshot(
            state=self.state,
            node=self.node.name if self.node else None,
            old_parent=_container_name(self.old_parent),
            new_parent=_container_name(self.new_parent),
            old_index=self.old_index,
            flags=tuple(f for f in _FLAGS if getattr(self, f)),
        )


def _container_name(node: ModelNode | None) -> str | None:
    if node is None:
        return None
    return node.name or "<root>"
