import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from little_alchemist.engine.events import PointerMoved, PointerPressed, PointerReleased  # noqa: E402
from little_alchemist.engine.geometry import Vec2  # noqa: E402
from little_alchemist.engine.sandbox import Sandbox  # noqa: E402


@pytest.fixture
def sandbox() -> Sandbox:
    return Sandbox.from_data()


@pytest.fixture
def drag():
    """Press at start, move to end and release there, all within one frame."""

    def _drag(sb: Sandbox, start, end, now: float = 1.0):
        return sb.advance(
            [
                PointerPressed(Vec2(*start)),
                PointerMoved(Vec2(*end)),
                PointerReleased(Vec2(*end)),
            ],
            now,
        )

    return _drag
