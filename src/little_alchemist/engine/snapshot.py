from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .catalog import ElementCatalog
from .combinations import CombinationRegistry
from .interaction import DragState, InteractionController
from .pool import ObjectPool


@dataclass(frozen=True)
class ElementView:
    id: str
    description: str
    discovered: bool
    creation_count: int
    formula: str

    @property
    def display_name(self) -> str:
        return self.id if self.discovered else "???"


@dataclass(frozen=True)
class InstanceView:
    handle: int
    element_id: str
    x: float
    y: float
    dragging: bool
    hinted: bool


@dataclass(frozen=True)
class MarkerView:
    x: float
    y: float
    remaining: float


@dataclass(frozen=True)
class Snapshot:
    """Read-only projection of engine state for renderers and UI panels.

    Take it between frames, after Sandbox.advance() returns; it never changes
    afterwards.
    """

    palette: Tuple[Tuple[str, int], ...]
    catalog: Tuple[ElementView, ...]
    instances: Tuple[InstanceView, ...]
    marker: Optional[MarkerView]
    object_count: int
    max_objects: int
    palette_scroll: float
    state: DragState

    @property
    def discovered_count(self) -> int:
        return len(self.palette)

    def element(self, element_id: str) -> Optional[ElementView]:
        for view in self.catalog:
            if view.id == element_id:
                return view
        return None


def build_snapshot(
    catalog: ElementCatalog,
    registry: CombinationRegistry,
    pool: ObjectPool,
    controller: InteractionController,
    now: float,
) -> Snapshot:
    marker = None
    if controller.marker is not None and controller.marker.active(now):
        m = controller.marker
        marker = MarkerView(m.position.x, m.position.y, m.remaining(now))
    return Snapshot(
        palette=tuple((e.id, e.creation_count) for e in catalog if e.discovered),
        catalog=tuple(
            ElementView(e.id, e.description, e.discovered, e.creation_count, registry.formula(e.id))
            for e in catalog
        ),
        instances=tuple(
            InstanceView(h, i.element_id, i.position.x, i.position.y, i.dragging, i.hinted)
            for h, i in pool.iterate()
        ),
        marker=marker,
        object_count=pool.size(),
        max_objects=pool.capacity,
        palette_scroll=controller.palette.scroll_offset,
        state=controller.state,
    )
