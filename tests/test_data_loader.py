from pathlib import Path

import pytest

from little_alchemist.data.loader import load_alchemy_data, parse_alchemy_dict
from little_alchemist.engine.sandbox import Sandbox
from little_alchemist.exceptions import ConfigurationError


def _data(**overrides):
    data = {
        "elements": [
            {"id": "Fire", "description": "flame", "discovered": True},
            {"id": "Water", "description": "liquid", "discovered": True},
            {"id": "Steam", "description": "vapor"},
        ],
        "recipes": [["Fire", "Water", "Steam"]],
    }
    data.update(overrides)
    return data


def test_default_data_loads():
    data = load_alchemy_data()
    assert len(data.elements) == 26
    assert len(data.recipes) == 22
    assert [e.id for e in data.elements if e.discovered] == ["Fire", "Water", "Earth", "Air"]


def test_each_build_starts_a_fresh_catalog():
    data = load_alchemy_data()
    first = data.build_catalog()
    first.mark_discovered("Steam")
    second = data.build_catalog()
    assert second.is_discovered("Steam") is False
    assert second.lookup("Steam").creation_count == 0


def test_parse_minimal_dict():
    data = parse_alchemy_dict(_data())
    registry = data.build_registry()
    assert registry.resolve("Water", "Fire") == "Steam"


def test_duplicate_ids_rejected():
    elements = _data()["elements"] + [{"id": "Fire", "description": "again"}]
    with pytest.raises(ConfigurationError):
        parse_alchemy_dict(_data(elements=elements))


def test_dangling_recipe_rejected():
    with pytest.raises(ConfigurationError):
        parse_alchemy_dict(_data(recipes=[["Fire", "Water", "Plasma"]]))


def test_schema_violation_rejected():
    bad = _data(elements=[{"id": "Fire"}])
    with pytest.raises(ConfigurationError):
        parse_alchemy_dict(bad)

    with pytest.raises(ConfigurationError):
        parse_alchemy_dict(_data(recipes=[["Fire", "Water"]]))


def test_load_from_yaml_file(tmp_path: Path):
    path = tmp_path / "tiny.yaml"
    path.write_text(
        "elements:\n"
        "  - {id: Fire, description: flame, discovered: true}\n"
        "  - {id: Ember, description: glow}\n"
        "recipes:\n"
        "  - [Fire, Fire, Ember]\n",
        encoding="utf-8",
    )
    data = load_alchemy_data(path)
    sandbox = Sandbox.from_data(data)
    assert sandbox.registry.resolve("Fire", "Fire") == "Ember"
    assert sandbox.catalog.discovered_ids() == ["Fire"]


def test_malformed_yaml_file_rejected(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("elements: [\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_alchemy_data(path)
