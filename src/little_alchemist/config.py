from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Optional, Tuple

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CAPACITY_POLICIES = ("reject", "evict")


@dataclass(frozen=True)
class SandboxConfig:
    """Runtime rules of the sandbox.

    capacity_policy decides what a palette spawn does when the pool is full:
    "reject" ignores the click, "evict" removes the oldest token to make room.
    """

    max_objects: int = 50
    capacity_policy: str = "reject"
    # Tokens are square; the pointer grabs them by their center
    token_size: float = 50.0
    spawn_position: Tuple[float, float] = (400.0, 300.0)
    # Seconds the red cross stays visible after a failed combination
    invalid_marker_lifetime: float = 1.0


@dataclass(frozen=True)
class LayoutConfig:
    """Screen geometry shared by the engine's hit-testing and the renderer (in pixels)."""

    window_width: int = 800
    window_height: int = 600
    sidebar_width: float = 100.0
    palette_x: float = 705.0
    palette_top: float = 10.0
    row_height: float = 30.0
    scroll_speed: float = 30.0
    trash_x: float = 10.0
    trash_bottom_margin: float = 74.0
    trash_size: float = 64.0

    def trash_bounds(self) -> Tuple[float, float, float, float]:
        return (self.trash_x, self.window_height - self.trash_bottom_margin, self.trash_size, self.trash_size)


@dataclass(frozen=True)
class Settings:
    sandbox: SandboxConfig = field(default_factory=SandboxConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            try:
                return yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                logger.error("Malformed settings file %s: %s", path, exc)
                raise ConfigurationError(f"Malformed settings file {path}: {exc}") from exc

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        try:
            sandbox_data = dict(data.get("sandbox") or {})
            if "spawn_position" in sandbox_data:
                sandbox_data["spawn_position"] = tuple(float(v) for v in sandbox_data["spawn_position"])
            sandbox = SandboxConfig(**sandbox_data)
            layout = LayoutConfig(**(data.get("layout") or {}))
            settings = Settings(sandbox=sandbox, layout=layout)
            settings.validate()
        except (TypeError, ValueError) as exc:
            # Unknown keys and wrongly typed values both end up here
            raise ConfigurationError(f"Invalid settings: {exc}") from exc
        return settings

    def validate(self) -> None:
        sb = self.sandbox
        if sb.max_objects <= 0:
            raise ConfigurationError("sandbox.max_objects must be positive")
        if sb.capacity_policy not in CAPACITY_POLICIES:
            raise ConfigurationError(
                f"sandbox.capacity_policy must be one of {CAPACITY_POLICIES}, got {sb.capacity_policy!r}"
            )
        if sb.token_size <= 0:
            raise ConfigurationError("sandbox.token_size must be positive")
        if len(sb.spawn_position) != 2:
            raise ConfigurationError("sandbox.spawn_position must be a pair of coordinates")
        if sb.invalid_marker_lifetime < 0:
            raise ConfigurationError("sandbox.invalid_marker_lifetime cannot be negative")
        if self.layout.row_height <= 0:
            raise ConfigurationError("layout.row_height must be positive")

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and an optional user override file.

        If user_path is provided and exists, its values are overlaid onto the defaults.
        """
        try:
            with resources.files("little_alchemist.data").joinpath("default_settings.yaml").open(
                "r", encoding="utf-8"
            ) as f:
                default_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Malformed default settings: {exc}") from exc
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("Settings file %s does not exist; using defaults", user_path)

        return cls._from_dict(cls._deep_merge(default_data, user_data))
