"""Parameter aggregate: corridor, rack frame and per-tier utility specs.

Units follow the input convention of the editing surfaces: overall
dimensions in feet, member and utility sizes in inches. Resolvers convert
to meters via :mod:`rack_builder.units`.

Fields are type-checked only. Out-of-range values are clamped and
reported by the constraint propagator, which is the only code path that
modifies a loaded aggregate.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from rack_builder.units import feet_to_inches

# Defaults for entries appended when the tier count grows
DEFAULT_TIER_HEIGHT_FT = 2.0
DEFAULT_DUCT_WIDTH_IN = 18.0
DEFAULT_DUCT_HEIGHT_IN = 16.0
DEFAULT_PIPE_DIAM_IN = 4.0
DEFAULT_PIPE_VERT_IN = 4.0

# Flat (camelCase) aggregate keys → (section, field)
CORRIDOR_KEYS = {
    "corridorWidth": "width",
    "corridorHeight": "height",
    "ceilingHeight": "ceiling_height",
    "ceilingDepth": "ceiling_depth",
    "slabDepth": "slab_depth",
    "wallThickness": "wall_thickness",
}
RACK_KEYS = {
    "bayCount": "bay_count",
    "bayWidth": "bay_width",
    "depth": "depth",
    "postSize": "post_size",
    "beamSize": "beam_size",
    "topClearance": "top_clearance",
}
TIER_ARRAY_KEYS = (
    "tierHeights",
    "ductEnabled",
    "ductWidths",
    "ductHeights",
    "ductOffsets",
    "pipeEnabled",
    "pipesPerTier",
)


class Corridor(BaseModel):
    """Enclosing corridor box. Invariant: ceiling_height <= height."""

    width: float = Field(default=10.0, description="Inside corridor width in feet (Z axis)")
    height: float = Field(default=15.0, description="Total corridor height in feet")
    ceiling_height: float = Field(default=9.0, description="Intermediate ceiling height in feet")
    ceiling_depth: float = Field(default=6.0, description="Intermediate ceiling thickness in inches")
    slab_depth: float = Field(default=8.0, description="Floor/roof slab thickness in inches")
    wall_thickness: float = Field(default=8.0, description="Side wall thickness in inches")


class RackFrame(BaseModel):
    """Rack skeleton geometry.

    Invariants (enforced by the propagator): depth <= corridor width,
    top_clearance within [corridor height - ceiling height, corridor height].
    """

    bay_count: int = Field(default=4, description="Number of bays along X (>= 1)")
    bay_width: float = Field(default=3.0, description="Width of one bay in feet")
    depth: float = Field(default=4.0, description="Overall rack depth in feet (Z axis)")
    post_size: float = Field(default=2.0, description="Square post size in inches")
    beam_size: float = Field(default=2.0, description="Square beam size in inches")
    top_clearance: float = Field(
        default=15.0, description="Elevation of the roof-beam centreline in feet"
    )

    @property
    def length_ft(self) -> float:
        """Overall rack length (bays end-to-end) in feet."""
        return self.bay_count * self.bay_width

    @property
    def depth_clearance_in(self) -> float:
        """Usable width between posts across the depth axis, in inches."""
        return feet_to_inches(self.depth) - self.post_size


class DuctSpec(BaseModel):
    """Rectangular duct running the length of one tier (sizes in inches)."""

    enabled: bool = False
    width: float = Field(default=DEFAULT_DUCT_WIDTH_IN, description="Width across depth axis")
    height: float = Field(default=DEFAULT_DUCT_HEIGHT_IN, description="Height")
    offset: float = Field(default=0.0, description="Side offset from rack centreline")


class PipeSpec(BaseModel):
    """Round pipe running the length of one tier (inches)."""

    diam: float = Field(
        default=DEFAULT_PIPE_DIAM_IN,
        validation_alias=AliasChoices("diam", "diamIn", "diameter"),
    )
    side: float = Field(
        default=0.0,
        validation_alias=AliasChoices("side", "sideOffIn"),
        description="Side offset from rack centreline",
    )
    vert: float = Field(
        default=DEFAULT_PIPE_VERT_IN,
        validation_alias=AliasChoices("vert", "vertOffIn"),
        description="Offset of the pipe underside above the tier's bottom beam",
    )


def _default_pipes() -> list[PipeSpec]:
    return [PipeSpec()]


class Tier(BaseModel):
    """One storage level of the rack, with its utility specs."""

    height: float = Field(default=DEFAULT_TIER_HEIGHT_FT, description="Clear height in feet")
    duct: DuctSpec = Field(default_factory=DuctSpec)
    pipes_enabled: bool = False
    pipes: list[PipeSpec] = Field(default_factory=_default_pipes)

    def resize_pipes(self, count: int) -> None:
        """Grow or shrink the pipe list, keeping existing pipes untouched."""
        count = max(count, 0)
        del self.pipes[count:]
        while len(self.pipes) < count:
            self.pipes.append(PipeSpec())


def _default_tiers() -> list[Tier]:
    return [Tier(), Tier()]


class RackParams(BaseModel):
    """The single owned parameter aggregate.

    ``tiers`` is indexed top-to-bottom; tier numbers exposed to callers are
    1-based. ``tiers`` must hold exactly ``tier_count`` entries after
    :meth:`sync_tiers` (run by the propagator before any resolver).
    """

    corridor: Corridor = Field(default_factory=Corridor)
    rack: RackFrame = Field(default_factory=RackFrame)
    tier_count: int = 2
    tiers: list[Tier] = Field(default_factory=_default_tiers)

    # ── Tier lifecycle ────────────────────────────────────────────────

    def sync_tiers(self) -> bool:
        """Truncate or append default tiers to match tier_count.

        Returns True if the tier list was resized.
        """
        n = max(self.tier_count, 0)
        if len(self.tiers) == n:
            return False
        del self.tiers[n:]
        while len(self.tiers) < n:
            self.tiers.append(Tier())
        return True

    def resize_tiers(self, count: int) -> None:
        """Set the tier count and resize the per-tier list immediately."""
        self.tier_count = count
        self.sync_tiers()

    def tier(self, index: int) -> Tier:
        """Get a tier by 1-based index or raise ValueError."""
        if not 1 <= index <= len(self.tiers):
            raise ValueError(
                f"Tier {index} not found. Valid tiers: 1..{len(self.tiers)}"
            )
        return self.tiers[index - 1]

    # ── Parallel-array views ──────────────────────────────────────────

    @property
    def tier_heights(self) -> list[float]:
        return [t.height for t in self.tiers]

    @property
    def duct_enabled(self) -> list[bool]:
        return [t.duct.enabled for t in self.tiers]

    @property
    def duct_widths(self) -> list[float]:
        return [t.duct.width for t in self.tiers]

    @property
    def duct_heights(self) -> list[float]:
        return [t.duct.height for t in self.tiers]

    @property
    def duct_offsets(self) -> list[float]:
        return [t.duct.offset for t in self.tiers]

    @property
    def pipe_enabled(self) -> list[bool]:
        return [t.pipes_enabled for t in self.tiers]

    @property
    def pipes_per_tier(self) -> list[list[PipeSpec]]:
        return [list(t.pipes) for t in self.tiers]

    # ── Flat aggregate ────────────────────────────────────────────────

    @classmethod
    def from_flat(cls, data: dict[str, Any]) -> RackParams:
        """Build from the flat camelCase aggregate used by editing surfaces.

        Per-tier arrays may be shorter than each other; missing entries take
        defaults. ``tierCount`` defaults to the longest per-tier array.
        """
        corridor = Corridor(**{
            field: data[key] for key, field in CORRIDOR_KEYS.items() if key in data
        })
        rack = RackFrame(**{
            field: data[key] for key, field in RACK_KEYS.items() if key in data
        })

        arrays = {key: list(data.get(key) or []) for key in TIER_ARRAY_KEYS}
        n_tiers = max((len(v) for v in arrays.values()), default=0)

        tiers = []
        for i in range(n_tiers):
            def pick(key: str, default: Any) -> Any:
                values = arrays[key]
                return values[i] if i < len(values) and values[i] is not None else default

            duct = DuctSpec(
                enabled=pick("ductEnabled", False),
                width=pick("ductWidths", DEFAULT_DUCT_WIDTH_IN),
                height=pick("ductHeights", DEFAULT_DUCT_HEIGHT_IN),
                offset=pick("ductOffsets", 0.0),
            )
            pipes = pick("pipesPerTier", None)
            tiers.append(Tier(
                height=pick("tierHeights", DEFAULT_TIER_HEIGHT_FT),
                duct=duct,
                pipes_enabled=pick("pipeEnabled", False),
                pipes=_default_pipes() if pipes is None else [
                    PipeSpec.model_validate(p) for p in pipes
                ],
            ))

        return cls(
            corridor=corridor,
            rack=rack,
            tier_count=data.get("tierCount", n_tiers),
            tiers=tiers,
        )

    def to_flat(self) -> dict[str, Any]:
        """Export as the flat camelCase aggregate."""
        data: dict[str, Any] = {}
        for key, field in CORRIDOR_KEYS.items():
            data[key] = getattr(self.corridor, field)
        for key, field in RACK_KEYS.items():
            data[key] = getattr(self.rack, field)
        data["tierCount"] = self.tier_count
        data["tierHeights"] = self.tier_heights
        data["ductEnabled"] = self.duct_enabled
        data["ductWidths"] = self.duct_widths
        data["ductHeights"] = self.duct_heights
        data["ductOffsets"] = self.duct_offsets
        data["pipeEnabled"] = self.pipe_enabled
        data["pipesPerTier"] = [
            [p.model_dump() for p in pipes] for pipes in self.pipes_per_tier
        ]
        return data

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> RackParams:
        """Load parameters from JSON, in either nested or flat form."""
        data = json.loads(Path(path).read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        if "corridor" in data or "rack" in data or "tiers" in data:
            return cls.model_validate(data)
        return cls.from_flat(data)
