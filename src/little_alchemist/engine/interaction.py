from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from ..config import LayoutConfig, SandboxConfig
from ..exceptions import CapacityRejectedError
from .catalog import ElementCatalog
from .combinations import CombinationRegistry
from .events import (
    InputEvent,
    Mutation,
    MutationKind,
    PointerMoved,
    PointerPressed,
    PointerReleased,
    Scrolled,
)
from .geometry import Rect, Vec2
from .palette import Palette
from .pool import Handle, ObjectInstance, ObjectPool

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = auto()
    DRAGGING = auto()


@dataclass(frozen=True)
class InvalidMarker:
    """Red cross shown where a combination attempt failed."""

    position: Vec2
    expires_at: float

    def remaining(self, now: float) -> float:
        return max(0.0, self.expires_at - now)

    def active(self, now: float) -> bool:
        return now < self.expires_at


class InteractionController:
    """Pointer-driven state machine: palette spawns, dragging, trash and combinations.

    The controller is the only writer of the pool and the catalog. Each input
    event causes at most one state transition; the mutations it performs are
    returned so callers can react without diffing snapshots.

    Hit-testing and collision both use pool iteration order as the tie-break:
    the first matching instance wins.
    """

    def __init__(
        self,
        catalog: ElementCatalog,
        registry: CombinationRegistry,
        pool: ObjectPool,
        palette: Palette,
        config: Optional[SandboxConfig] = None,
        layout: Optional[LayoutConfig] = None,
    ) -> None:
        self.catalog = catalog
        self.registry = registry
        self.pool = pool
        self.palette = palette
        self.config = config or SandboxConfig()
        self.layout = layout or palette.layout
        self.trash = Rect(*self.layout.trash_bounds())
        self.marker: Optional[InvalidMarker] = None
        self._state = DragState.IDLE
        self._dragged: Optional[Handle] = None
        self._out: List[Mutation] = []
        pool.on_evict = self._on_evict

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def dragged(self) -> Optional[Handle]:
        return self._dragged

    def bounds_of(self, instance: ObjectInstance) -> Rect:
        return instance.bounds(self.config.token_size)

    # ---------- Event dispatch ----------
    def handle(self, event: InputEvent, now: float) -> List[Mutation]:
        """Apply one input event and return the mutations it caused."""
        self._out = []
        if isinstance(event, PointerPressed):
            self.on_press(event.position, now)
        elif isinstance(event, PointerMoved):
            self.on_move(event.position)
        elif isinstance(event, PointerReleased):
            self.on_release(event.position, now)
        elif isinstance(event, Scrolled):
            self.palette.scroll(event.delta, event.position, self.catalog.discovered_count())
        else:
            logger.warning("Ignoring unsupported input event: %r", event)
        out, self._out = self._out, []
        return out

    def expire(self, now: float) -> None:
        """Drop the invalid marker and instance hints once the marker has timed out."""
        if self.marker is not None and not self.marker.active(now):
            self.marker = None
            self.pool.clear_hints()

    # ---------- Transitions ----------
    def on_press(self, position: Vec2, now: float) -> None:
        if self._state is not DragState.IDLE:
            logger.debug("Press ignored while dragging #%s", self._dragged)
            return

        element_id = self.palette.entry_at(position, self.catalog.discovered_ids())
        if element_id is not None:
            self.spawn(element_id, now)
            return

        for handle, instance in self.pool.iterate():
            if self.bounds_of(instance).contains(position):
                instance.dragging = True
                self._state = DragState.DRAGGING
                self._dragged = handle
                logger.debug("Started dragging %s #%d", instance.element_id, handle)
                self._out.append(Mutation(MutationKind.DRAG_STARTED, instance.element_id, handle))
                return

    def on_move(self, position: Vec2) -> None:
        instance = self._dragged_instance()
        if instance is None:
            return
        half = self.config.token_size / 2.0
        instance.position = position - Vec2(half, half)

    def on_release(self, position: Vec2, now: float) -> None:
        handle = self._dragged
        instance = self._dragged_instance()
        if handle is None or instance is None:
            self._reset_drag()
            return

        if self.bounds_of(instance).intersects(self.trash):
            self.pool.remove(handle)
            logger.debug("Trashed %s #%d", instance.element_id, handle)
            self._out.append(Mutation(MutationKind.TRASHED, instance.element_id, handle, position=instance.position))
        else:
            self.resolve_collisions(handle, now)

        instance.dragging = False
        self._out.append(Mutation(MutationKind.DRAG_ENDED, instance.element_id, handle, position=position))
        self._reset_drag()

    def spawn(self, element_id: str, now: float) -> Optional[Handle]:
        """Create an instance of a discovered element at the default spawn point."""
        if not self.catalog.is_discovered(element_id):
            logger.debug("Spawn of undiscovered element %s ignored", element_id)
            return None
        evict = self.config.capacity_policy == "evict"
        position = Vec2(*self.config.spawn_position)
        try:
            handle = self.pool.insert(element_id, position, now, evict=evict)
        except CapacityRejectedError as exc:
            logger.debug("%s", exc)
            self._out.append(Mutation(MutationKind.SPAWN_REJECTED, element_id, position=position))
            return None
        self.catalog.record_creation(element_id)
        self._out.append(Mutation(MutationKind.SPAWNED, element_id, handle, position=position))
        return handle

    # ---------- Collision resolution ----------
    def resolve_collisions(self, handle: Handle, now: float) -> Optional[Handle]:
        """Combine the dropped instance with the first overlapping partner that has a recipe.

        Overlapping partners without a recipe get a hint and the first of them
        places the invalid marker; scanning goes on in case a later partner
        does combine. A marker placed before a later combination stays.
        Returns the handle of the produced instance, if any.
        """
        dragged = self.pool.get(handle)
        if dragged is None:
            return None
        self.pool.clear_hints()
        dragged_bounds = self.bounds_of(dragged)
        marked = False

        for other_handle, other in self.pool.iterate():
            if other_handle == handle or other.dragging:
                continue
            if not dragged_bounds.intersects(self.bounds_of(other)):
                continue

            midpoint = dragged.position.midpoint(other.position)
            result = self.registry.resolve(dragged.element_id, other.element_id)
            if result is None:
                other.hinted = True
                if not marked:
                    marked = True
                    self.marker = InvalidMarker(midpoint, now + self.config.invalid_marker_lifetime)
                    logger.debug("Invalid combination: %s + %s", dragged.element_id, other.element_id)
                    self._out.append(
                        Mutation(MutationKind.INVALID_COMBINATION, other.element_id, other_handle, position=midpoint)
                    )
                continue

            return self._combine(handle, dragged, other_handle, other, result, midpoint, now)

        return None

    def _combine(
        self,
        handle: Handle,
        dragged: ObjectInstance,
        other_handle: Handle,
        other: ObjectInstance,
        result: str,
        midpoint: Vec2,
        now: float,
    ) -> Handle:
        # Remove first so the result never triggers an eviction
        self.pool.remove(handle)
        self.pool.remove(other_handle)
        first = self.catalog.mark_discovered(result)
        new_handle = self.pool.insert(result, midpoint, now)
        logger.debug("Combined %s + %s -> %s #%d", dragged.element_id, other.element_id, result, new_handle)
        self._out.append(
            Mutation(MutationKind.COMBINED, result, new_handle, consumed=(handle, other_handle), position=midpoint)
        )
        if first:
            self._out.append(Mutation(MutationKind.DISCOVERED, result, new_handle))
        return new_handle

    # ---------- Helpers ----------
    def _dragged_instance(self) -> Optional[ObjectInstance]:
        if self._dragged is None:
            return None
        return self.pool.get(self._dragged)

    def _reset_drag(self) -> None:
        self._state = DragState.IDLE
        self._dragged = None

    def _on_evict(self, handle: Handle, instance: ObjectInstance) -> None:
        if handle == self._dragged:
            self._reset_drag()
        self._out.append(Mutation(MutationKind.EVICTED, instance.element_id, handle, position=instance.position))
