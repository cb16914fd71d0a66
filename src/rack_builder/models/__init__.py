"""Rack data models."""

from rack_builder.models.geometry import Extents, Point3D, clamp
from rack_builder.models.params import (
    Corridor,
    DuctSpec,
    PipeSpec,
    RackFrame,
    RackParams,
    Tier,
)
from rack_builder.models.layout import (
    Layout,
    LevelStack,
    Primitive,
    PrimitiveKind,
    TierEnvelope,
)

__all__ = [
    "Extents",
    "Point3D",
    "clamp",
    "Corridor",
    "DuctSpec",
    "PipeSpec",
    "RackFrame",
    "RackParams",
    "Tier",
    "Layout",
    "LevelStack",
    "Primitive",
    "PrimitiveKind",
    "TierEnvelope",
]
