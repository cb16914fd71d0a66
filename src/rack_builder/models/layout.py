"""Layout output: level stack, tier envelopes and placed primitives.

Everything here is in meters. The external renderer consumes
``Layout.primitives`` and is responsible for meshes and materials.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from rack_builder.models.geometry import Extents, Point3D
from rack_builder.units import units_to_inches
from rack_builder.validators.issues import LayoutIssue


class PrimitiveKind(str, Enum):
    """Role of a placed primitive."""

    POST = "post"
    LONG_BEAM = "long-beam"
    TRANS_BEAM = "trans-beam"
    DUCT = "duct"
    PIPE = "pipe"
    FLOOR = "floor"
    CEILING = "ceiling"
    ROOF = "roof"
    WALL = "wall"


class Primitive(BaseModel):
    """A placed box or cylinder.

    Boxes carry ``extents`` (full size along X, Y, Z). Cylinders carry
    ``radius`` and ``length`` and run along ``axis``.
    """

    kind: PrimitiveKind
    name: str = ""
    position: Point3D
    extents: Extents | None = None
    radius: float | None = None
    length: float | None = None
    axis: str | None = None
    tier: int | None = Field(default=None, description="1-based tier index for ducts and pipes")
    index: int | None = Field(
        default=None, description="Bay boundary for frame members, pipe index within its tier"
    )
    conforming: bool = True

    @property
    def is_box(self) -> bool:
        return self.extents is not None

    def bounds(self) -> tuple[Point3D, Point3D]:
        """Axis-aligned bounding box as (min corner, max corner)."""
        p = self.position
        if self.extents is not None:
            hx, hy, hz = self.extents.x / 2, self.extents.y / 2, self.extents.z / 2
        else:
            r = self.radius or 0.0
            half_len = (self.length or 0.0) / 2
            hx, hy, hz = {
                "x": (half_len, r, r),
                "y": (r, half_len, r),
                "z": (r, r, half_len),
            }[self.axis or "x"]
        return (
            Point3D(x=p.x - hx, y=p.y - hy, z=p.z - hz),
            Point3D(x=p.x + hx, y=p.y + hy, z=p.z + hz),
        )


class LevelStack(BaseModel):
    """Beam centreline elevations derived from the tier stack."""

    levels: list[float] = Field(description="Unique beam elevations, ascending")
    roof_level: float
    tier_bottoms: list[float] = Field(
        description="Bottom-beam centreline per tier, top-to-bottom (not deduplicated)"
    )
    total_height: float
    beam_size: float

    @property
    def top_level(self) -> float:
        return self.levels[-1]

    @property
    def bottom_level(self) -> float:
        return self.levels[0]


class TierEnvelope(BaseModel):
    """Usable space inside one tier."""

    tier: int
    bottom_y: float = Field(description="Top face of the tier's bottom beam")
    top_y: float
    clear_height: float
    depth_clearance: float = Field(description="Rack depth minus post size")

    @property
    def clear_height_in(self) -> float:
        return units_to_inches(self.clear_height)

    @property
    def depth_clearance_in(self) -> float:
        return units_to_inches(self.depth_clearance)


class Layout(BaseModel):
    """Result of one rebuild pass."""

    levels: list[float]
    roof_level: float
    total_height: float
    envelopes: list[TierEnvelope] = Field(default_factory=list)
    primitives: list[Primitive] = Field(default_factory=list)
    issues: list[LayoutIssue] = Field(default_factory=list)

    def of_kind(self, kind: PrimitiveKind) -> list[Primitive]:
        """All primitives with the given role, in emission order."""
        return [p for p in self.primitives if p.kind == kind]

    def envelope(self, tier: int) -> TierEnvelope:
        """Envelope for a 1-based tier index or raise ValueError."""
        env = next((e for e in self.envelopes if e.tier == tier), None)
        if env is None:
            raise ValueError(f"Tier {tier} not found in layout")
        return env
