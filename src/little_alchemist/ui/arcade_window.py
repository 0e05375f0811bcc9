from __future__ import annotations

import logging
import zlib
from typing import Tuple

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover - optional for test envs
    arcade = None

from ..engine.events import PointerMoved, PointerPressed, PointerReleased, Scrolled
from ..engine.geometry import Vec2
from ..engine.loop import GameEngine
from ..engine.snapshot import Snapshot

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]

SANDBOX_BG = (236, 240, 245, 255)
SIDEBAR_BG = (40, 44, 52, 255)
TEXT = (20, 20, 20, 255)
SIDEBAR_TEXT = (230, 230, 230, 255)
TRASH = (190, 60, 60, 255)
MARKER = (220, 0, 0, 255)

ELEMENT_COLORS = {
    "Fire": (235, 90, 40),
    "Water": (50, 120, 230),
    "Earth": (130, 90, 50),
    "Air": (180, 210, 235),
}


def element_color(element_id: str, alpha: int = 255) -> Color:
    """Stable colour per element; basic elements get hand-picked ones."""
    rgb = ELEMENT_COLORS.get(element_id)
    if rgb is None:
        h = zlib.crc32(element_id.encode("utf-8"))
        rgb = (64 + (h & 0x7F), 64 + ((h >> 8) & 0x7F), 64 + ((h >> 16) & 0x7F))
    return (rgb[0], rgb[1], rgb[2], alpha)


class SandboxWindow:
    """Arcade window that draws engine snapshots and forwards mouse input.

    Engine coordinates grow downwards from the top-left corner; Arcade's grow
    upwards, so every y is flipped on the way in and out.

    Note: This class is only created if Arcade is available. Tests focus on the
    engine, not rendering.
    """

    def __init__(self, engine: GameEngine, title: str = "Little Alchemist"):
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        self.engine = engine
        self.layout = engine.sandbox.settings.layout
        self.token_size = engine.sandbox.settings.sandbox.token_size
        self._window = arcade.Window(self.layout.window_width, self.layout.window_height, title=title)
        self._window.on_draw = self.on_draw
        self._window.on_update = self.on_update
        self._window.on_mouse_press = self.on_mouse_press
        self._window.on_mouse_release = self.on_mouse_release
        self._window.on_mouse_motion = self.on_mouse_motion
        self._window.on_mouse_drag = self.on_mouse_drag
        self._window.on_mouse_scroll = self.on_mouse_scroll
        self._window.on_key_press = self.on_key_press
        logger.info("Arcade window initialized (%dx%d)", self.layout.window_width, self.layout.window_height)

    def run(self):
        self.engine.start()
        arcade.run()

    def close(self):
        self._window.close()

    def _to_engine(self, x: float, y: float) -> Vec2:
        return Vec2(x, self.layout.window_height - y)

    # ---------- Input ----------
    def on_mouse_press(self, x, y, button, modifiers):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.engine.feed(PointerPressed(self._to_engine(x, y)))

    def on_mouse_release(self, x, y, button, modifiers):
        if button == arcade.MOUSE_BUTTON_LEFT:
            self.engine.feed(PointerReleased(self._to_engine(x, y)))

    def on_mouse_motion(self, x, y, dx, dy):
        self.engine.feed(PointerMoved(self._to_engine(x, y)))

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        self.engine.feed(PointerMoved(self._to_engine(x, y)))

    def on_mouse_scroll(self, x, y, scroll_x, scroll_y):
        self.engine.feed(Scrolled(delta=scroll_y, position=self._to_engine(x, y)))

    def on_key_press(self, symbol, modifiers):
        if symbol == arcade.key.ESCAPE:
            self.engine.stop()
            self.close()

    def on_update(self, delta_time: float):
        # Arcade drives timing; we pass along dt to the engine
        if self.engine.running:
            self.engine.update(delta_time)
        else:
            self.close()

    # ---------- Drawing ----------
    def _rect(self, x: float, y: float, w: float, h: float, color: Color, filled: bool = True) -> None:
        top = self.layout.window_height - y
        if filled:
            arcade.draw_lrbt_rectangle_filled(x, x + w, top - h, top, color)
        else:
            arcade.draw_lrbt_rectangle_outline(x, x + w, top - h, top, color, 2)

    def _text(self, text: str, x: float, y: float, color: Color, size: int = 12) -> None:
        # y is the top of the text line in engine space
        arcade.draw_text(text, x, self.layout.window_height - y - size - 4, color, size)

    def on_draw(self):
        self._window.clear()
        snap = self.engine.sandbox.snapshot(self.engine.clock)
        lay = self.layout
        sidebar_x = lay.window_width - lay.sidebar_width

        self._rect(0, 0, sidebar_x, lay.window_height, SANDBOX_BG)
        self._rect(sidebar_x, 0, lay.sidebar_width, lay.window_height, SIDEBAR_BG)
        self._draw_palette(snap)

        # Dragged token last so it sits on top
        ordered = sorted(snap.instances, key=lambda i: i.dragging)
        for inst in ordered:
            alpha = 128 if inst.hinted else 255
            self._rect(inst.x, inst.y, self.token_size, self.token_size, element_color(inst.element_id, alpha))
            self._text(inst.element_id, inst.x + 2, inst.y + self.token_size / 2 - 8, TEXT, 9)

        tx, ty, tw, th = lay.trash_bounds()
        self._rect(tx, ty, tw, th, TRASH, filled=False)
        self._text("Trash", tx + 12, ty + th / 2 - 8, TRASH, 10)

        if snap.marker is not None:
            self._draw_marker(snap.marker.x, snap.marker.y)

        self._text(f"Objects: {snap.object_count}/{snap.max_objects}", 10, 10, TEXT, 12)
        self._text(f"Discovered: {snap.discovered_count}/{len(snap.catalog)}", 10, 30, TEXT, 12)

    def _draw_palette(self, snap: Snapshot) -> None:
        lay = self.layout
        for index, (element_id, count) in enumerate(snap.palette):
            y = lay.palette_top + index * lay.row_height - snap.palette_scroll
            if y < -lay.row_height or y > lay.window_height:
                continue
            self._rect(lay.palette_x, y + 5, 20, 20, element_color(element_id))
            self._text(f"{element_id} ({count})", lay.palette_x + 25, y + 4, SIDEBAR_TEXT, 9)

    def _draw_marker(self, x: float, y: float, size: float = 24.0) -> None:
        top = self.layout.window_height - y
        arcade.draw_line(x, top, x + size, top - size, MARKER, 3)
        arcade.draw_line(x, top - size, x + size, top, MARKER, 3)
