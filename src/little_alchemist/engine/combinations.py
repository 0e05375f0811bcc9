from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..exceptions import ConfigurationError
from .catalog import ElementCatalog

logger = logging.getLogger(__name__)

Recipe = Tuple[str, str, str]  # (first, second, result)

BASIC_FORMULA = "Basic Element"


class CombinationRegistry:
    """Immutable, order-independent lookup of element recipes.

    Pairs are keyed by frozenset, so ``resolve("Fire", "Water")`` and
    ``resolve("Water", "Fire")`` hit the same entry. A duplicate pair such as
    ("Fire", "Fire") collapses to a one-element frozenset.

    The registry also owns the formula table shown by the encyclopedia: the
    first recipe declared for a result is its formula.
    """

    def __init__(self, recipes: Iterable[Recipe]) -> None:
        table: Dict[FrozenSet[str], str] = {}
        formulas: Dict[str, str] = {}
        recipe_list: List[Recipe] = []
        for first, second, result in recipes:
            key = frozenset((first, second))
            existing = table.get(key)
            if existing is not None and existing != result:
                raise ConfigurationError(
                    f"Conflicting recipes for {first} + {second}: {existing!r} vs {result!r}"
                )
            if existing is None:
                table[key] = result
                recipe_list.append((first, second, result))
            formulas.setdefault(result, f"{first} + {second}")
        self._table: Mapping[FrozenSet[str], str] = MappingProxyType(table)
        self._formulas: Mapping[str, str] = MappingProxyType(formulas)
        self._recipes: Tuple[Recipe, ...] = tuple(recipe_list)
        logger.debug("CombinationRegistry initialized with %d recipes", len(self._recipes))

    def __len__(self) -> int:
        return len(self._recipes)

    @property
    def recipes(self) -> Tuple[Recipe, ...]:
        return self._recipes

    def is_valid(self, a: str, b: str) -> bool:
        return frozenset((a, b)) in self._table

    def resolve(self, a: str, b: str) -> Optional[str]:
        """Return the result of combining a and b, or None if no recipe exists."""
        return self._table.get(frozenset((a, b)))

    def formula(self, element_id: str) -> str:
        return self._formulas.get(element_id, BASIC_FORMULA)

    def validate_against(self, catalog: ElementCatalog) -> None:
        """Ensure every recipe input and result exists in the catalog."""
        missing = sorted(
            {eid for recipe in self._recipes for eid in recipe if eid not in catalog}
        )
        if missing:
            raise ConfigurationError(f"Recipes reference unknown elements: {', '.join(missing)}")
