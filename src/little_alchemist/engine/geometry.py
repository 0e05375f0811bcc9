from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def midpoint(self, other: "Vec2") -> "Vec2":
        return Vec2((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen space (y grows downwards)."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def square(cls, origin: Vec2, size: float) -> "Rect":
        return cls(origin.x, origin.y, size, size)

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def contains(self, p: Vec2) -> bool:
        return (self.x <= p.x < self.right) and (self.y <= p.y < self.bottom)

    def intersects(self, other: "Rect") -> bool:
        # Touching edges do not count as overlap
        return (
            max(self.x, other.x) < min(self.right, other.right)
            and max(self.y, other.y) < min(self.bottom, other.bottom)
        )
