"""Level stacker.

Tiers are stacked top-to-bottom from the roof beam. Every beam centreline
elevation (the roof plus the bottom of each tier) becomes a level:

```
  top_clearance ─┬─ roof beam        ← roof_level = top - beam/2
                 │  tier 1 (clear)
                 ├─ bottom beam 1    ← tier_bottoms[0]
                 │  tier 2 (clear)
                 ├─ bottom beam 2    ← tier_bottoms[1]
                 ...
```

Levels are deduplicated so coincident elevations get one beam plane.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rack_builder.models.layout import LevelStack
from rack_builder.units import feet_to_units, inches_to_units

logger = logging.getLogger(__name__)

LEVEL_TOLERANCE = 1e-9  # meters


def stack_levels(
    top_clearance: float,
    beam_size: float,
    tier_heights: Sequence[float],
) -> LevelStack:
    """Compute beam levels and total structure height.

    Args:
        top_clearance: Roof-beam centreline elevation (feet).
        beam_size: Beam thickness (inches).
        tier_heights: Clear tier heights top-to-bottom (feet).

    Returns:
        LevelStack in meters with ascending unique levels.
    """
    top = feet_to_units(top_clearance)
    beam = inches_to_units(beam_size)
    heights = [feet_to_units(h) for h in tier_heights]

    roof_level = top - beam / 2
    tier_bottoms: list[float] = []
    cursor = top
    for i, h in enumerate(heights):
        tier_bottoms.append(cursor - (i + 1) * beam - h - beam / 2)
        cursor -= h

    if heights:
        total_height = sum(heights) + (len(heights) - 1) * beam
    else:
        total_height = 0.0

    levels = unique_levels([roof_level, *tier_bottoms])
    logger.debug("Stacked %d tiers into %d levels", len(heights), len(levels))
    return LevelStack(
        levels=levels,
        roof_level=roof_level,
        tier_bottoms=tier_bottoms,
        total_height=total_height,
        beam_size=beam,
    )


def unique_levels(elevations: Sequence[float], tol: float = LEVEL_TOLERANCE) -> list[float]:
    """Sort ascending and merge elevations closer than tol."""
    merged: list[float] = []
    for y in sorted(elevations):
        if merged and y - merged[-1] <= tol:
            continue
        merged.append(y)
    return merged
