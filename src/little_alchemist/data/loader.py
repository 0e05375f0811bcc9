from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from ..engine.catalog import Element, ElementCatalog
from ..engine.combinations import CombinationRegistry, Recipe
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DATA_PACKAGE = "little_alchemist.data"


@lru_cache(maxsize=1)
def _load_schema() -> Dict[str, Any]:
    """Load the element/recipe JSON schema; cached since the schema is static."""
    text = resources.files(DATA_PACKAGE).joinpath("alchemy.schema.json").read_text(encoding="utf-8")
    return json.loads(text)


def validate_alchemy_dict(data: Dict[str, Any]) -> None:
    """Validate raw element/recipe data against the JSON schema.

    Raises:
        ConfigurationError wrapping the first jsonschema.ValidationError.
    """
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        for err in errors:
            logger.error("Alchemy data validation error at %s: %s", list(err.path), err.message)
        raise ConfigurationError(f"Invalid alchemy data: {errors[0].message}") from errors[0]


@dataclass(frozen=True)
class AlchemyData:
    """Parsed, validated construction data for a sandbox session."""

    elements: Tuple[Element, ...]
    recipes: Tuple[Recipe, ...]

    def build_catalog(self) -> ElementCatalog:
        # Fresh Element objects so each session starts from the configured discovery state
        return ElementCatalog(
            Element(id=e.id, description=e.description, discovered=e.discovered) for e in self.elements
        )

    def build_registry(self) -> CombinationRegistry:
        return CombinationRegistry(self.recipes)


def parse_alchemy_dict(data: Dict[str, Any]) -> AlchemyData:
    validate_alchemy_dict(data)
    elements = tuple(
        Element(id=raw["id"], description=raw["description"], discovered=bool(raw.get("discovered", False)))
        for raw in data["elements"]
    )
    recipes: List[Recipe] = [(r[0], r[1], r[2]) for r in data["recipes"]]

    # Integrity checks: these reject startup rather than fail mid-session
    catalog = ElementCatalog(elements)
    registry = CombinationRegistry(recipes)
    registry.validate_against(catalog)
    return AlchemyData(elements=elements, recipes=tuple(recipes))


def load_alchemy_data(path: Optional[Path] = None) -> AlchemyData:
    """Load element and recipe data from YAML.

    If path is None, loads the embedded default resource little_alchemist/data/alchemy.yaml.
    """
    if path is None:
        text = resources.files(DATA_PACKAGE).joinpath("alchemy.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded alchemy data resource")
    else:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        logger.debug("Loaded alchemy data from path: %s", path)

    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        logger.error("Malformed alchemy data: %s", exc)
        raise ConfigurationError(f"Malformed alchemy data: {exc}") from exc
    data = parse_alchemy_dict(raw)
    logger.info(
        "Alchemy data: %d elements (%d discovered), %d recipes",
        len(data.elements),
        sum(1 for e in data.elements if e.discovered),
        len(data.recipes),
    )
    return data
