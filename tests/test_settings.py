from pathlib import Path

import pytest

from little_alchemist.config import LayoutConfig, SandboxConfig, Settings
from little_alchemist.exceptions import ConfigurationError


def test_packaged_defaults_match_dataclasses():
    settings = Settings.load()
    assert settings.sandbox == SandboxConfig()
    assert settings.layout == LayoutConfig()
    assert settings.layout.trash_bounds() == (10.0, 526.0, 64.0, 64.0)


def test_user_overlay_merges_nested_values(tmp_path: Path):
    path = tmp_path / "user.yaml"
    path.write_text("sandbox:\n  max_objects: 10\n  spawn_position: [100, 120]\n", encoding="utf-8")

    settings = Settings.load(path)

    assert settings.sandbox.max_objects == 10
    assert settings.sandbox.spawn_position == (100.0, 120.0)
    # Untouched keys keep their defaults
    assert settings.sandbox.capacity_policy == "reject"
    assert settings.layout.window_width == 800


def test_missing_user_file_falls_back_to_defaults(tmp_path: Path):
    settings = Settings.load(tmp_path / "nope.yaml")
    assert settings.sandbox.max_objects == 50


def test_invalid_values_rejected(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("sandbox:\n  capacity_policy: drop\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)

    path.write_text("sandbox:\n  max_objects: 0\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)


def test_unknown_key_rejected(tmp_path: Path):
    path = tmp_path / "typo.yaml"
    path.write_text("layout:\n  window_widht: 640\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)


def test_wrongly_typed_values_rejected(tmp_path: Path):
    path = tmp_path / "typed.yaml"
    path.write_text("sandbox:\n  max_objects: many\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)

    path.write_text("sandbox:\n  spawn_position: 5\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)

    path.write_text("sandbox:\n  spawn_position: [left, top]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)


def test_malformed_yaml_rejected(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("sandbox: [\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)
