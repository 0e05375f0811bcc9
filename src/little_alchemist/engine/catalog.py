from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List

from ..exceptions import ConfigurationError, ElementNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class Element:
    """A discoverable element type.

    Attributes:
        id: Stable unique name, e.g. "Fire".
        description: Display text shown in the encyclopedia.
        discovered: Whether the player has unlocked this element. Never reset once True.
        creation_count: How many instances of this element have been produced.
    """

    id: str
    description: str
    discovered: bool = False
    creation_count: int = 0


class ElementCatalog:
    """Ordered registry of element types with discovery state.

    Order is display order and is fixed at construction. The catalog is the
    single owner of Element data; instances refer to elements by id only.
    """

    def __init__(self, elements: Iterable[Element]) -> None:
        self._order: List[Element] = []
        self._by_id: Dict[str, Element] = {}
        for element in elements:
            if element.id in self._by_id:
                raise ConfigurationError(f"Duplicate element id: {element.id}")
            self._order.append(element)
            self._by_id[element.id] = element
        logger.debug("ElementCatalog initialized with %d elements", len(self._order))

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._order)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._by_id

    def lookup(self, element_id: str) -> Element:
        try:
            return self._by_id[element_id]
        except KeyError:
            raise ElementNotFoundError(element_id) from None

    def is_discovered(self, element_id: str) -> bool:
        return self.lookup(element_id).discovered

    def mark_discovered(self, element_id: str) -> bool:
        """Unlock an element and count one production of it.

        Returns True if this call performed the first discovery.
        """
        element = self.lookup(element_id)
        first = not element.discovered
        element.discovered = True
        element.creation_count += 1
        if first:
            logger.info("Discovered new element: %s", element_id)
        return first

    def record_creation(self, element_id: str) -> None:
        """Count one production of an element without touching its discovery flag."""
        self.lookup(element_id).creation_count += 1

    def discovered_ids(self) -> List[str]:
        return [e.id for e in self._order if e.discovered]

    def discovered_count(self) -> int:
        return sum(1 for e in self._order if e.discovered)
