from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import Settings
from .data.loader import load_alchemy_data
from .engine.loop import GameConfig, GameEngine
from .engine.sandbox import Sandbox

logger = logging.getLogger(__name__)


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def build_sandbox(config_path: Optional[Path] = None, data_path: Optional[Path] = None) -> Sandbox:
    """Create a sandbox from packaged defaults plus optional settings/data overrides."""
    settings = Settings.load(config_path)
    data = load_alchemy_data(data_path)
    return Sandbox.from_data(data, settings)


def run_gui(
    max_steps: Optional[int] = None,
    tick_rate: float = 60.0,
    config_path: Optional[Path] = None,
    data_path: Optional[Path] = None,
) -> int:
    """Run the sandbox with an Arcade GUI if available, otherwise fallback to headless.

    Args:
        max_steps: Optional stop after N updates; None runs until window closed.
        tick_rate: Target updates per second for GUI mode.
        config_path: Optional YAML settings overlay.
        data_path: Optional YAML element/recipe file replacing the packaged one.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(max_steps=max_steps, tick_rate=tick_rate, config_path=config_path, data_path=data_path)

    from .ui.arcade_window import SandboxWindow

    try:
        sandbox = build_sandbox(config_path, data_path)
    except Exception:
        logger.exception("Failed to build sandbox")
        return 1

    engine = GameEngine(sandbox, GameConfig(tick_rate=tick_rate, max_steps=max_steps))
    window = SandboxWindow(engine)
    try:
        logger.info("Launching Arcade window")
        window.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        try:
            window.close()
        except Exception:
            logger.debug("Window already closed")


def run_headless(
    max_steps: Optional[int] = 60,
    tick_rate: float = 30.0,
    config_path: Optional[Path] = None,
    data_path: Optional[Path] = None,
) -> int:
    """Run the sandbox in a headless console loop.

    Args:
        max_steps: Stop after N updates; defaults to 60.
        tick_rate: Target updates per second for headless mode.
    """
    if max_steps is None:
        # Safety in CI/headless: always bound the loop
        max_steps = 60

    print("Little Alchemist (headless)")
    print("Press Ctrl+C to exit. Running...\n")

    try:
        sandbox = build_sandbox(config_path, data_path)
    except Exception:
        logger.exception("Failed to build sandbox")
        return 1

    engine = GameEngine(sandbox, GameConfig(tick_rate=tick_rate, max_steps=max_steps))
    try:
        engine.run()
        snap = sandbox.snapshot(engine.clock)
        print(f"Loop complete (steps={engine.step})")
        print(f"Discovered {snap.discovered_count}/{len(snap.catalog)}: {', '.join(e for e, _ in snap.palette)}")
        return 0
    except KeyboardInterrupt:
        engine.stop()
        print("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1


def run_auto(
    max_steps: Optional[int] = None,
    tick_rate: float = 60.0,
    config_path: Optional[Path] = None,
    data_path: Optional[Path] = None,
) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    Honors environment overrides:
      - ALCHEMIST_HEADLESS=1 forces headless.
      - ALCHEMIST_GUI=1 forces GUI (if arcade importable).
    """
    headless_env = os.getenv("ALCHEMIST_HEADLESS")
    gui_env = os.getenv("ALCHEMIST_GUI")

    if headless_env == "1":
        return run_headless(max_steps=max_steps, tick_rate=tick_rate, config_path=config_path, data_path=data_path)

    if gui_env == "1":
        return run_gui(max_steps=max_steps, tick_rate=tick_rate, config_path=config_path, data_path=data_path)

    # Default preference: GUI if available
    return run_gui(max_steps=max_steps, tick_rate=tick_rate, config_path=config_path, data_path=data_path)
