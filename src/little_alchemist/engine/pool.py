from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Tuple

from ..exceptions import CapacityRejectedError
from .catalog import ElementCatalog
from .geometry import Rect, Vec2

logger = logging.getLogger(__name__)

Handle = int


@dataclass
class ObjectInstance:
    """A live token on the sandbox surface.

    ``element_id`` is a key into the ElementCatalog; the instance never owns
    element data. ``position`` is the top-left corner of its square bounds.
    """

    element_id: str
    position: Vec2
    created_at: float
    dragging: bool = False
    hinted: bool = False

    def bounds(self, size: float) -> Rect:
        return Rect.square(self.position, size)


class ObjectPool:
    """Owns every live ObjectInstance and keeps the count within ``max_objects``.

    Insertion order is the iteration order and serves as the tie-break for
    hit-testing and collision. When full, inserting evicts the instance with
    the smallest creation timestamp (first inserted on ties).
    """

    def __init__(
        self,
        catalog: ElementCatalog,
        max_objects: int = 50,
        on_evict: Optional[Callable[[Handle, ObjectInstance], None]] = None,
    ) -> None:
        if max_objects <= 0:
            raise ValueError("max_objects must be positive")
        self._catalog = catalog
        self._max_objects = max_objects
        self.on_evict = on_evict
        self._instances: Dict[Handle, ObjectInstance] = {}
        self._next_handle = itertools.count(1)

    @property
    def capacity(self) -> int:
        return self._max_objects

    @property
    def is_full(self) -> bool:
        return len(self._instances) >= self._max_objects

    def size(self) -> int:
        return len(self._instances)

    def __len__(self) -> int:
        return len(self._instances)

    def __contains__(self, handle: object) -> bool:
        return handle in self._instances

    def get(self, handle: Handle) -> Optional[ObjectInstance]:
        return self._instances.get(handle)

    def insert(self, element_id: str, position: Vec2, timestamp: float, evict: bool = True) -> Handle:
        """Add a new instance and return its handle.

        Raises:
            ElementNotFoundError: element_id is not in the catalog.
            CapacityRejectedError: the pool is full and evict is False.
        """
        self._catalog.lookup(element_id)
        if self.is_full and not evict:
            raise CapacityRejectedError(
                f"Object pool full ({self._max_objects}); refusing to spawn {element_id}"
            )
        while len(self._instances) >= self._max_objects:
            self._evict_oldest()
        handle = next(self._next_handle)
        self._instances[handle] = ObjectInstance(element_id=element_id, position=position, created_at=timestamp)
        logger.debug("Inserted %s #%d at (%.1f, %.1f) t=%.3f", element_id, handle, position.x, position.y, timestamp)
        return handle

    def remove(self, handle: Handle) -> bool:
        """Remove an instance. Returns False if it was already gone."""
        instance = self._instances.pop(handle, None)
        if instance is None:
            return False
        logger.debug("Removed %s #%d", instance.element_id, handle)
        return True

    def iterate(self) -> Iterator[Tuple[Handle, ObjectInstance]]:
        # Snapshot the items so removals during a scan do not disturb it
        return iter(list(self._instances.items()))

    def oldest(self) -> Optional[Handle]:
        if not self._instances:
            return None
        return min(self._instances, key=lambda h: self._instances[h].created_at)

    def clear_hints(self) -> None:
        for instance in self._instances.values():
            instance.hinted = False

    def _evict_oldest(self) -> None:
        handle = self.oldest()
        if handle is None:
            return
        instance = self._instances.pop(handle)
        logger.debug("Evicted oldest instance %s #%d (t=%.3f)", instance.element_id, handle, instance.created_at)
        if self.on_evict is not None:
            self.on_evict(handle, instance)
