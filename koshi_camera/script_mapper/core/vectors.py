"""Small immutable 3D value types shared by the grammar and the path model."""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Vec3:
    """World-space position."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def lerp(self, other: "Vec3", t: float) -> "Vec3":
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def distance_to(self, other: "Vec3") -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        dz = other.z - self.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)


@dataclass(frozen=True)
class Rotation:
    """Camera rotation in degrees: rx pitch, ry yaw, rz roll."""
    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.rx, self.ry, self.rz)

    def lerp(self, other: "Rotation", t: float) -> "Rotation":
        return Rotation(
            self.rx + (other.rx - self.rx) * t,
            self.ry + (other.ry - self.ry) * t,
            self.rz + (other.rz - self.rz) * t,
        )


__all__ = ["Vec3", "Rotation"]
