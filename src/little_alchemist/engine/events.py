from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from .geometry import Vec2


@dataclass(frozen=True)
class PointerPressed:
    position: Vec2


@dataclass(frozen=True)
class PointerMoved:
    position: Vec2


@dataclass(frozen=True)
class PointerReleased:
    position: Vec2


@dataclass(frozen=True)
class Scrolled:
    """Mouse wheel movement; positive delta scrolls the list up."""

    delta: float
    position: Vec2


InputEvent = Union[PointerPressed, PointerMoved, PointerReleased, Scrolled]


class MutationKind(Enum):
    """Outcomes reported by Sandbox.advance() to UI or systems."""

    SPAWNED = auto()
    SPAWN_REJECTED = auto()
    DRAG_STARTED = auto()
    DRAG_ENDED = auto()
    TRASHED = auto()
    COMBINED = auto()
    DISCOVERED = auto()
    INVALID_COMBINATION = auto()
    EVICTED = auto()


@dataclass(frozen=True)
class Mutation:
    """A single state change produced while processing input.

    Attributes:
        kind: What happened.
        element_id: The element involved (the result element for COMBINED).
        handle: The instance created, removed or dragged, if any.
        consumed: Handles removed by a combination.
        position: Where it happened, if relevant.
    """

    kind: MutationKind
    element_id: Optional[str] = None
    handle: Optional[int] = None
    consumed: tuple[int, ...] = ()
    position: Optional[Vec2] = None
