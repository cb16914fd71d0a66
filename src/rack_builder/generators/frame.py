"""Frame assembler: posts and beams of the rack skeleton.

The rack is centred on the origin in plan and sits on the floor:
```
   back row  (z = -depth/2)   P───────P───────P───────P
                              │  bay  │  bay  │  bay  │
   front row (z = +depth/2)   P───────P───────P───────P
             x = -length/2 ──────────────────────► x = +length/2
```
There are bay_count + 1 post frames along X, each with a back and a
front post. Longitudinal beams (along X) run only at the topmost and
bottommost levels. Transverse beams (along Z) sit at every level on
every post frame.
"""

from __future__ import annotations

import logging

from rack_builder.models.geometry import Extents, Point3D
from rack_builder.models.layout import LevelStack, Primitive, PrimitiveKind
from rack_builder.models.params import RackFrame
from rack_builder.units import feet_to_units, inches_to_units
from rack_builder.validators.issues import LayoutIssue

logger = logging.getLogger(__name__)

DEPTH_ROWS = (("back", -1.0), ("front", 1.0))


def frame_positions(rack: RackFrame) -> list[float]:
    """X coordinate of each post frame, left to right."""
    length = feet_to_units(rack.length_ft)
    return [
        -length / 2 + feet_to_units(i * rack.bay_width)
        for i in range(rack.bay_count + 1)
    ]


def assemble_frame(
    stack: LevelStack,
    rack: RackFrame,
) -> tuple[list[Primitive], list[LayoutIssue]]:
    """Emit posts, longitudinal beams and transverse beams.

    Returns:
        (primitives, issues). Posts are suppressed with an issue when the
        stack has no height (zero tiers).
    """
    primitives: list[Primitive] = []
    issues: list[LayoutIssue] = []

    length = feet_to_units(rack.length_ft)
    depth = feet_to_units(rack.depth)
    post = inches_to_units(rack.post_size)
    beam = stack.beam_size
    dz = depth / 2
    xs = frame_positions(rack)

    # Posts: from the roof-beam underside down to the top of the lowest beam
    if stack.total_height > 0:
        post_y = stack.roof_level - beam / 2 - stack.total_height / 2
        for i, x in enumerate(xs):
            for row, sign in DEPTH_ROWS:
                primitives.append(Primitive(
                    kind=PrimitiveKind.POST,
                    name=f"Post {i + 1} {row}",
                    position=Point3D(x=x, y=post_y, z=sign * dz),
                    extents=Extents(x=post, y=stack.total_height, z=post),
                    index=i,
                ))
    else:
        issues.append(_suppressed(
            "Post", "rack",
            "Posts suppressed: structure has zero height (no tiers).",
        ))

    if beam <= 0:
        issues.append(_suppressed(
            "Beam", "rack", f"Beams suppressed: beam size {rack.beam_size:g}in is not positive.",
        ))
        return primitives, issues

    # Longitudinal rails, once per distinct extreme level
    extremes = [stack.top_level]
    if stack.bottom_level != stack.top_level:
        extremes.append(stack.bottom_level)
    for y in extremes:
        for row, sign in DEPTH_ROWS:
            primitives.append(Primitive(
                kind=PrimitiveKind.LONG_BEAM,
                name=f"Rail {row} @ {y:.3f}",
                position=Point3D(x=0.0, y=y, z=sign * dz),
                extents=Extents(x=length + post, y=beam, z=beam),
            ))

    for y in stack.levels:
        for i, x in enumerate(xs):
            primitives.append(Primitive(
                kind=PrimitiveKind.TRANS_BEAM,
                name=f"Cross beam {i + 1} @ {y:.3f}",
                position=Point3D(x=x, y=y, z=0.0),
                extents=Extents(x=beam, y=beam, z=depth + post),
                index=i,
            ))

    logger.debug("Assembled frame: %d primitives", len(primitives))
    return primitives, issues


def _suppressed(element_type: str, element_id: str, message: str) -> LayoutIssue:
    logger.warning(message)
    return LayoutIssue(
        severity="suppressed",
        element_type=element_type,
        element_id=element_id,
        message=message,
    )
