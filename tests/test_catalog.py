import pytest

from little_alchemist.engine.catalog import Element, ElementCatalog
from little_alchemist.exceptions import ConfigurationError, ElementNotFoundError


def _catalog() -> ElementCatalog:
    return ElementCatalog(
        [
            Element("Fire", "A blazing flame", discovered=True),
            Element("Water", "Crystal clear liquid", discovered=True),
            Element("Steam", "Hot water vapor"),
            Element("Mud", "Wet and sticky earth"),
        ]
    )


def test_lookup_and_not_found():
    catalog = _catalog()
    assert catalog.lookup("Fire").description == "A blazing flame"
    assert "Steam" in catalog
    assert "Plasma" not in catalog

    with pytest.raises(ElementNotFoundError) as info:
        catalog.lookup("Plasma")
    # NotFound is also a KeyError so dict-style callers can catch it
    assert isinstance(info.value, KeyError)
    assert "Plasma" in str(info.value)


def test_mark_discovered_is_idempotent_and_counts():
    catalog = _catalog()
    steam = catalog.lookup("Steam")
    assert steam.discovered is False and steam.creation_count == 0

    assert catalog.mark_discovered("Steam") is True
    assert catalog.mark_discovered("Steam") is False
    assert steam.discovered is True
    assert steam.creation_count == 2


def test_record_creation_leaves_discovery_alone():
    catalog = _catalog()
    catalog.record_creation("Fire")
    catalog.record_creation("Mud")
    assert catalog.lookup("Fire").creation_count == 1
    assert catalog.lookup("Mud").creation_count == 1
    assert catalog.is_discovered("Mud") is False


def test_discovered_ids_keep_catalog_order():
    catalog = _catalog()
    catalog.mark_discovered("Mud")
    catalog.mark_discovered("Steam")
    assert catalog.discovered_ids() == ["Fire", "Water", "Steam", "Mud"]
    assert catalog.discovered_count() == 4


def test_discovery_is_monotonic():
    catalog = _catalog()
    catalog.mark_discovered("Steam")
    for _ in range(5):
        catalog.record_creation("Steam")
        catalog.mark_discovered("Steam")
    assert catalog.is_discovered("Steam") is True


def test_duplicate_ids_rejected():
    with pytest.raises(ConfigurationError):
        ElementCatalog([Element("Fire", "a"), Element("Fire", "b")])
