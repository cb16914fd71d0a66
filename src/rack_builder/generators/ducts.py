"""Duct placement resolver.

A duct is a rectangular box running the full rack length inside one
tier, resting on the tier's bottom beam. Sizes are clamped in inches
against the tier envelope:

    height ∈ [ε, clear height]
    width  ∈ [ε, depth clearance]
    |offset| <= depth/2 - post/2 - width/2

The resolver never mutates the DuctSpec; the propagator writes the clamped
values back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rack_builder.models.geometry import Extents, Point3D, clamp
from rack_builder.models.layout import Primitive, PrimitiveKind, TierEnvelope
from rack_builder.models.params import DuctSpec, RackFrame
from rack_builder.units import feet_to_units, inches_to_units
from rack_builder.validators.issues import LayoutIssue

logger = logging.getLogger(__name__)

MIN_SIZE_IN = 0.01
DUCT_OVERHANG_IN = 4.0


@dataclass
class DuctPlacement:
    """Clamped duct values (inches) and the resulting primitive."""

    tier: int
    width: float
    height: float
    offset: float
    half_range: float
    primitive: Primitive | None = None
    issues: list[LayoutIssue] = field(default_factory=list)

    @property
    def suppressed(self) -> bool:
        return self.primitive is None


def offset_half_range(depth_clearance_in: float, width_in: float) -> float:
    """Largest allowed |side offset| for a member of the given width."""
    return depth_clearance_in / 2 - width_in / 2


def resolve_duct(
    tier: int,
    duct: DuctSpec,
    envelope: TierEnvelope,
    rack: RackFrame,
) -> DuctPlacement | None:
    """Place the duct of a tier. Returns None if the duct is disabled."""
    if not duct.enabled:
        return None

    element_id = f"tier {tier} duct"
    clear_in = envelope.clear_height_in
    depth_in = envelope.depth_clearance_in

    if clear_in < MIN_SIZE_IN or depth_in < MIN_SIZE_IN:
        reason = (
            f"tier clear height {clear_in:.2f}in" if clear_in < MIN_SIZE_IN
            else f"depth clearance {depth_in:.2f}in (post {rack.post_size:g}in >= depth)"
        )
        message = f"Duct in tier {tier} suppressed: no room, {reason}."
        logger.warning(message)
        return DuctPlacement(
            tier=tier,
            width=duct.width,
            height=duct.height,
            offset=duct.offset,
            half_range=0.0,
            issues=[LayoutIssue(
                severity="suppressed",
                element_type="Duct",
                element_id=element_id,
                message=message,
                tier=tier,
            )],
        )

    issues: list[LayoutIssue] = []
    height = _clamped(duct.height, MIN_SIZE_IN, clear_in, "height", tier, issues)
    width = _clamped(duct.width, MIN_SIZE_IN, depth_in, "width", tier, issues)
    half = offset_half_range(depth_in, width)
    offset = _clamped(duct.offset, -half, half, "offset", tier, issues)

    height_m = inches_to_units(height)
    primitive = Primitive(
        kind=PrimitiveKind.DUCT,
        name=f"Duct tier {tier}",
        position=Point3D(
            x=0.0,
            y=envelope.bottom_y + height_m / 2,
            z=inches_to_units(offset),
        ),
        extents=Extents(
            x=feet_to_units(rack.length_ft) + inches_to_units(DUCT_OVERHANG_IN),
            y=height_m,
            z=inches_to_units(width),
        ),
        tier=tier,
    )
    return DuctPlacement(
        tier=tier,
        width=width,
        height=height,
        offset=offset,
        half_range=half,
        primitive=primitive,
        issues=issues,
    )


def _clamped(
    value: float,
    lo: float,
    hi: float,
    name: str,
    tier: int,
    issues: list[LayoutIssue],
) -> float:
    result = clamp(value, lo, hi)
    if result != value:
        message = (
            f"Duct {name} in tier {tier} clamped from {value:g}in to {result:g}in "
            f"(range {lo:g}..{hi:g})."
        )
        logger.warning(message)
        issues.append(LayoutIssue(
            severity="clamp",
            element_type="Duct",
            element_id=f"tier {tier} duct",
            message=message,
            field=name,
            tier=tier,
        ))
    return result
