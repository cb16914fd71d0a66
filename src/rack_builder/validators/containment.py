"""Post-layout containment checks.

Re-derives the containment rules from the emitted geometry alone, so a
resolver regression shows up as an error rather than as a pipe poking
through a beam.
"""

from __future__ import annotations

from rack_builder.models.layout import Layout, Primitive, PrimitiveKind, TierEnvelope
from rack_builder.models.params import RackParams
from rack_builder.units import feet_to_units
from rack_builder.validators.issues import LayoutIssue

TOLERANCE = 1e-9  # meters


def validate_layout(params: RackParams, layout: Layout) -> list[LayoutIssue]:
    """Run all containment checks. Returns list of errors."""
    errors: list[LayoutIssue] = []
    errors.extend(validate_rack_in_corridor(params, layout))
    for prim in layout.primitives:
        if prim.is_box and prim.extents.is_degenerate():
            label = prim.name or prim.kind.value
            errors.append(_error(
                prim.kind.value.capitalize(), label,
                f"{label} has a zero-size side: {prim.extents.x:.4f} x "
                f"{prim.extents.y:.4f} x {prim.extents.z:.4f}m.",
                tier=prim.tier,
            ))
        if prim.kind in (PrimitiveKind.DUCT, PrimitiveKind.PIPE) and prim.tier is not None:
            if prim.kind == PrimitiveKind.PIPE and not prim.conforming:
                continue
            errors.extend(validate_in_envelope(prim, layout.envelope(prim.tier)))
    return errors


def validate_rack_in_corridor(params: RackParams, layout: Layout) -> list[LayoutIssue]:
    """Rack depth fits the corridor and the roof beam sits below the roof."""
    errors: list[LayoutIssue] = []
    depth = feet_to_units(params.rack.depth)
    width = feet_to_units(params.corridor.width)
    height = feet_to_units(params.corridor.height)

    if depth > width + TOLERANCE:
        errors.append(_error(
            "RackFrame", "rack",
            f"Rack depth {params.rack.depth:g}ft exceeds corridor width "
            f"{params.corridor.width:g}ft.",
        ))
    if layout.roof_level > height + TOLERANCE:
        errors.append(_error(
            "RackFrame", "rack",
            f"Roof beam at {layout.roof_level:.3f}m is above the corridor "
            f"height {height:.3f}m.",
        ))
    return errors


def validate_in_envelope(prim: Primitive, envelope: TierEnvelope) -> list[LayoutIssue]:
    """Check that a duct or pipe body stays inside its tier envelope."""
    errors: list[LayoutIssue] = []
    lo, hi = prim.bounds()
    label = prim.name or prim.kind.value

    if lo.y < envelope.bottom_y - TOLERANCE:
        errors.append(_error(
            prim.kind.value.capitalize(), label,
            f"{label} extends {envelope.bottom_y - lo.y:.4f}m below tier "
            f"{envelope.tier}'s bottom beam.",
            tier=envelope.tier,
        ))
    if hi.y > envelope.top_y + TOLERANCE:
        errors.append(_error(
            prim.kind.value.capitalize(), label,
            f"{label} extends {hi.y - envelope.top_y:.4f}m above tier "
            f"{envelope.tier}'s clear height.",
            tier=envelope.tier,
        ))
    half = envelope.depth_clearance / 2
    if lo.z < -half - TOLERANCE or hi.z > half + TOLERANCE:
        errors.append(_error(
            prim.kind.value.capitalize(), label,
            f"{label} crosses the post line (z {lo.z:.4f}..{hi.z:.4f}m, "
            f"allowed ±{half:.4f}m).",
            tier=envelope.tier,
        ))
    return errors


def _error(element_type: str, element_id: str, message: str, tier: int | None = None) -> LayoutIssue:
    return LayoutIssue(
        severity="error",
        element_type=element_type,
        element_id=element_id,
        message=message,
        tier=tier,
    )
