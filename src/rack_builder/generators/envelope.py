"""Tier envelope resolver: usable space inside a tier."""

from __future__ import annotations

from collections.abc import Sequence

from rack_builder.generators.levels import stack_levels
from rack_builder.models.layout import LevelStack, TierEnvelope
from rack_builder.models.params import RackFrame
from rack_builder.units import feet_to_units, inches_to_units


def resolve_envelope(
    tier: int,
    rack: RackFrame,
    tier_heights: Sequence[float],
    stack: LevelStack | None = None,
) -> TierEnvelope:
    """Clear vertical span and depth clearance of a 1-based tier.

    The envelope starts at the top face of the tier's bottom beam and
    spans the tier's clear height. Pass a precomputed ``stack`` to avoid
    restacking when resolving every tier.
    """
    if not 1 <= tier <= len(tier_heights):
        raise ValueError(
            f"Tier {tier} not found. Valid tiers: 1..{len(tier_heights)}"
        )
    if stack is None:
        stack = stack_levels(rack.top_clearance, rack.beam_size, tier_heights)

    bottom_y = stack.tier_bottoms[tier - 1] + stack.beam_size / 2
    clear_height = feet_to_units(tier_heights[tier - 1])
    return TierEnvelope(
        tier=tier,
        bottom_y=bottom_y,
        top_y=bottom_y + clear_height,
        clear_height=clear_height,
        depth_clearance=feet_to_units(rack.depth) - inches_to_units(rack.post_size),
    )


def resolve_envelopes(
    rack: RackFrame,
    tier_heights: Sequence[float],
    stack: LevelStack | None = None,
) -> list[TierEnvelope]:
    """Envelopes for every tier, top-to-bottom."""
    if stack is None:
        stack = stack_levels(rack.top_clearance, rack.beam_size, tier_heights)
    return [
        resolve_envelope(i + 1, rack, tier_heights, stack)
        for i in range(len(tier_heights))
    ]
