"""Pipe placement resolver.

Each tier holds 0..N round pipes running along X, each sized and offset
independently (inches):

    |side| <= depth/2 - post/2 - diam/2
    vert   ∈ [0, clear height - diam]     (vert = underside above bottom beam)

A pipe whose diameter does not fit the tier is still emitted but flagged
non-conforming, with its offsets pinned to 0.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from rack_builder.generators.ducts import MIN_SIZE_IN, offset_half_range
from rack_builder.models.geometry import Point3D, clamp
from rack_builder.models.layout import Primitive, PrimitiveKind, TierEnvelope
from rack_builder.models.params import PipeSpec, RackFrame
from rack_builder.units import feet_to_units, inches_to_units
from rack_builder.validators.issues import LayoutIssue

logger = logging.getLogger(__name__)

PIPE_OVERHANG_IN = 4.0


@dataclass
class PipePlacement:
    """Clamped pipe values (inches) and the resulting primitive."""

    tier: int
    index: int
    diam: float
    side: float
    vert: float
    conforming: bool
    primitive: Primitive
    issues: list[LayoutIssue] = field(default_factory=list)


def resolve_pipe(
    tier: int,
    index: int,
    pipe: PipeSpec,
    envelope: TierEnvelope,
    rack: RackFrame,
) -> PipePlacement:
    """Place one pipe (1-based index within its tier)."""
    element_id = f"tier {tier} pipe {index}"
    issues: list[LayoutIssue] = []
    clear_in = envelope.clear_height_in
    depth_in = envelope.depth_clearance_in
    conforming = True

    diam = _clamped(pipe.diam, MIN_SIZE_IN, float("inf"), "diam", tier, index, issues)

    half = offset_half_range(depth_in, diam)
    if half < 0:
        conforming = False
        side = 0.0
        _nonconforming(
            f"Pipe {index} in tier {tier} ({diam:g}in) is wider than the depth "
            f"clearance {depth_in:.2f}in; side offset pinned to 0.",
            tier, element_id, issues,
        )
    else:
        side = _clamped(pipe.side, -half, half, "side", tier, index, issues)

    if diam >= clear_in:
        conforming = False
        vert = 0.0
        _nonconforming(
            f"Pipe {index} in tier {tier} ({diam:g}in) does not fit the clear "
            f"height {clear_in:.2f}in; vertical offset pinned to 0.",
            tier, element_id, issues,
        )
    else:
        vert = _clamped(pipe.vert, 0.0, clear_in - diam, "vert", tier, index, issues)

    r = inches_to_units(diam) / 2
    y = envelope.bottom_y + inches_to_units(vert) + r
    # Final clamp against rounding at the tier boundary
    lo, hi = envelope.bottom_y + r, envelope.top_y - r
    y = clamp(y, lo, hi) if lo <= hi else lo

    primitive = Primitive(
        kind=PrimitiveKind.PIPE,
        name=f"Pipe {index} tier {tier}",
        position=Point3D(x=0.0, y=y, z=inches_to_units(side)),
        radius=r,
        length=feet_to_units(rack.length_ft) + inches_to_units(PIPE_OVERHANG_IN),
        axis="x",
        tier=tier,
        index=index,
        conforming=conforming,
    )
    return PipePlacement(
        tier=tier,
        index=index,
        diam=diam,
        side=side,
        vert=vert,
        conforming=conforming,
        primitive=primitive,
        issues=issues,
    )


def resolve_pipes(
    tier: int,
    pipes: Sequence[PipeSpec],
    envelope: TierEnvelope,
    rack: RackFrame,
) -> list[PipePlacement]:
    """Place every pipe of a tier."""
    return [
        resolve_pipe(tier, i + 1, pipe, envelope, rack)
        for i, pipe in enumerate(pipes)
    ]


def _clamped(
    value: float,
    lo: float,
    hi: float,
    name: str,
    tier: int,
    index: int,
    issues: list[LayoutIssue],
) -> float:
    result = clamp(value, lo, hi)
    if result != value:
        message = (
            f"Pipe {index} {name} in tier {tier} clamped from {value:g}in "
            f"to {result:g}in."
        )
        logger.warning(message)
        issues.append(LayoutIssue(
            severity="clamp",
            element_type="Pipe",
            element_id=f"tier {tier} pipe {index}",
            message=message,
            field=name,
            tier=tier,
        ))
    return result


def _nonconforming(
    message: str,
    tier: int,
    element_id: str,
    issues: list[LayoutIssue],
) -> None:
    logger.warning(message)
    issues.append(LayoutIssue(
        severity="nonconforming",
        element_type="Pipe",
        element_id=element_id,
        message=message,
        tier=tier,
    ))
