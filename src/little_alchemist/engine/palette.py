from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..config import LayoutConfig
from .geometry import Rect, Vec2

logger = logging.getLogger(__name__)


class Palette:
    """Hit-testing and scrolling for the column of discovered elements.

    Entries are laid out top to bottom in catalog order, one row per discovered
    element, shifted up by the current scroll offset.
    """

    def __init__(self, layout: LayoutConfig) -> None:
        self.layout = layout
        self.scroll_offset: float = 0.0

    def entry_rect(self, index: int) -> Rect:
        lay = self.layout
        y = lay.palette_top + index * lay.row_height - self.scroll_offset
        return Rect(lay.palette_x, y, lay.sidebar_width, lay.row_height)

    def _visible(self, rect: Rect) -> bool:
        return -self.layout.row_height <= rect.y <= self.layout.window_height

    def entry_at(self, position: Vec2, discovered_ids: Sequence[str]) -> Optional[str]:
        """Return the element id under the pointer, if a visible entry is hit."""
        for index, element_id in enumerate(discovered_ids):
            rect = self.entry_rect(index)
            if self._visible(rect) and rect.contains(position):
                return element_id
        return None

    def over_column(self, position: Vec2) -> bool:
        return position.x > self.layout.window_width - self.layout.sidebar_width

    def max_scroll(self, entry_count: int) -> float:
        lay = self.layout
        return max(0.0, entry_count * lay.row_height - lay.window_height + 50)

    def scroll(self, delta: float, position: Vec2, entry_count: int) -> bool:
        """Scroll the column if the pointer is over it. Returns True if handled."""
        if not self.over_column(position):
            return False
        offset = self.scroll_offset - delta * self.layout.scroll_speed
        self.scroll_offset = max(0.0, min(offset, self.max_scroll(entry_count)))
        logger.debug("Palette scrolled to %.1f", self.scroll_offset)
        return True
