from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional

from ..config import Settings
from .catalog import ElementCatalog
from .combinations import CombinationRegistry
from .events import InputEvent, Mutation
from .interaction import InteractionController
from .palette import Palette
from .pool import ObjectPool
from .snapshot import Snapshot, build_snapshot

if TYPE_CHECKING:
    from ..data.loader import AlchemyData

logger = logging.getLogger(__name__)

Listener = Callable[[Mutation, "Sandbox"], None]


class Sandbox:
    """A play session: catalog, recipes, live tokens and the interaction controller.

    ``advance()`` is the only mutating entry point. It is decoupled from any
    drawing so the whole simulation can run headless in tests.
    """

    def __init__(
        self,
        catalog: ElementCatalog,
        registry: CombinationRegistry,
        settings: Optional[Settings] = None,
    ) -> None:
        registry.validate_against(catalog)
        self.settings = settings or Settings()
        self.catalog = catalog
        self.registry = registry
        self.pool = ObjectPool(catalog, max_objects=self.settings.sandbox.max_objects)
        self.palette = Palette(self.settings.layout)
        self.controller = InteractionController(
            catalog, registry, self.pool, self.palette, self.settings.sandbox, self.settings.layout
        )
        self._listeners: List[Listener] = []
        logger.info(
            "Sandbox ready: %d elements (%d discovered), %d recipes, max_objects=%d",
            len(catalog),
            catalog.discovered_count(),
            len(registry),
            self.pool.capacity,
        )

    @classmethod
    def from_data(cls, data: Optional["AlchemyData"] = None, settings: Optional[Settings] = None) -> "Sandbox":
        """Build a sandbox from AlchemyData, defaulting to the packaged element set."""
        from ..data.loader import load_alchemy_data

        if data is None:
            data = load_alchemy_data()
        return cls(data.build_catalog(), data.build_registry(), settings)

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to mutations (spawns, combinations, discoveries...)."""
        self._listeners.append(listener)

    def _emit(self, mutation: Mutation) -> None:
        for l in list(self._listeners):
            try:
                l(mutation, self)
            except Exception as ex:  # pragma: no cover - listeners shouldn't crash engine
                logger.exception("Listener errored on %s: %s", mutation.kind, ex)

    def advance(self, events: Iterable[InputEvent], now: float) -> List[Mutation]:
        """Process one frame of input in arrival order.

        Args:
            events: Pointer and scroll events received since the last frame.
            now: Frame clock value in seconds; must not decrease between calls.

        Returns:
            Every mutation performed, in order.
        """
        self.controller.expire(now)
        mutations: List[Mutation] = []
        for event in events:
            mutations.extend(self.controller.handle(event, now))
        for mutation in mutations:
            self._emit(mutation)
        return mutations

    def snapshot(self, now: float) -> Snapshot:
        return build_snapshot(self.catalog, self.registry, self.pool, self.controller, now)
