"""Small value types shared by layout and agent motion."""

from __future__ import annotations

import math
from typing import NamedTuple


class Vec3(NamedTuple):
    """Point or direction in galaxy space."""

    x: float
    y: float
    z: float

    def __add__(self, other: Vec3) -> Vec3:  # type: ignore[override]
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def lerp(self, other: Vec3, t: float) -> Vec3:
        """Linear interpolation from self (t=0) to other (t=1)."""
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )


ORIGIN = Vec3(0.0, 0.0, 0.0)


class Color(NamedTuple):
    """sRGB color with channels in 0.0-1.0."""

    r: float
    g: float
    b: float

    def to_hex(self) -> str:
        channels = (max(0, min(255, round(c * 255))) for c in self)
        return "#" + "".join(f"{c:02x}" for c in channels)
