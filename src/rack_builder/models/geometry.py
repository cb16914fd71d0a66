"""Geometric primitives for placed rack members.

World axes follow the rack:
```
  X : length  (bays laid end-to-end, centred on the origin)
  Y : height  (up, floor at Y=0)
  Z : depth   (back ↔ front, centred on the origin)
```
"""

from __future__ import annotations

from pydantic import BaseModel


def clamp(value: float, lo: float, hi: float) -> float:
    """Constrain value into [lo, hi]. Callers must ensure lo <= hi."""
    return max(lo, min(hi, value))


class Point3D(BaseModel):
    """3D point (meters)."""

    x: float
    y: float
    z: float


class Extents(BaseModel):
    """Full box size along each axis (meters), not half-extents."""

    x: float
    y: float
    z: float

    def is_degenerate(self, tol: float = 1e-12) -> bool:
        """True if any side has zero or negative length."""
        return min(self.x, self.y, self.z) <= tol
