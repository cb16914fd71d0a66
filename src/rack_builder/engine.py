"""Constraint propagation and the rebuild trigger.

One explicit, dependency-ordered pass runs after every parameter edit:

  1. resize the per-tier list to tier_count
  2. clamp upstream sizes (corridor, rack frame, tier heights)
  3. restack levels and resolve every tier envelope
  4. re-clamp every enabled duct and pipe into the fresh ranges
  5. signal whether geometry must be rebuilt

The pass is idempotent: running it again on its own output changes
nothing and yields identical geometry.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from pydantic import BaseModel

from rack_builder.generators.ducts import MIN_SIZE_IN, DuctPlacement, resolve_duct
from rack_builder.generators.envelope import resolve_envelopes
from rack_builder.generators.frame import assemble_frame
from rack_builder.generators.levels import stack_levels
from rack_builder.generators.pipes import PipePlacement, resolve_pipes
from rack_builder.generators.shell import build_shell
from rack_builder.models.geometry import clamp
from rack_builder.models.layout import Layout, LevelStack, TierEnvelope
from rack_builder.models.params import RackParams
from rack_builder.validators.issues import LayoutIssue

logger = logging.getLogger(__name__)

MIN_SIZE_FT = 0.01


@dataclass
class PropagationResult:
    """Outcome of one propagation pass."""

    stack: LevelStack
    envelopes: list[TierEnvelope]
    duct_placements: list[DuctPlacement] = field(default_factory=list)
    pipe_placements: list[PipePlacement] = field(default_factory=list)
    issues: list[LayoutIssue] = field(default_factory=list)
    changed: bool = False  # parameters were resized or clamped by this pass
    needs_rebuild: bool = True  # parameters differ from the previous pass


class ConstraintPropagator:
    """Re-validates a parameter aggregate in place.

    This is the only component that mutates parameters; everything it
    calls is pure.
    """

    def __init__(self, params: RackParams) -> None:
        self.params = params
        self._last_state: str | None = None

    def propagate(self) -> PropagationResult:
        """Run the full clamp pass over the aggregate."""
        p = self.params
        before = p.model_dump_json()
        issues: list[LayoutIssue] = []

        _clamp_field(p, "tier_count", 0, math.inf, "RackParams", "params", issues)
        if p.sync_tiers():
            logger.debug("Resized tiers to %d", p.tier_count)

        self._clamp_upstream(issues)

        stack = stack_levels(p.rack.top_clearance, p.rack.beam_size, p.tier_heights)
        envelopes = resolve_envelopes(p.rack, p.tier_heights, stack)

        if p.rack.depth_clearance_in <= 0:
            logger.warning(
                "Post size %gin >= rack depth %gft: no depth clearance",
                p.rack.post_size, p.rack.depth,
            )

        ducts, pipes = self._clamp_utilities(envelopes, issues)

        after = p.model_dump_json()
        needs_rebuild = after != self._last_state
        self._last_state = after
        return PropagationResult(
            stack=stack,
            envelopes=envelopes,
            duct_placements=ducts,
            pipe_placements=pipes,
            issues=issues,
            changed=after != before,
            needs_rebuild=needs_rebuild,
        )

    def _clamp_upstream(self, issues: list[LayoutIssue]) -> None:
        corridor = self.params.corridor
        rack = self.params.rack

        for name in ("width", "height"):
            _clamp_field(corridor, name, MIN_SIZE_FT, math.inf, "Corridor", "corridor", issues)
        _clamp_field(
            corridor, "ceiling_height", 0.0, corridor.height, "Corridor", "corridor", issues
        )
        for name in ("ceiling_depth", "slab_depth", "wall_thickness"):
            _clamp_field(corridor, name, MIN_SIZE_IN, math.inf, "Corridor", "corridor", issues)

        _clamp_field(rack, "bay_count", 1, math.inf, "RackFrame", "rack", issues)
        _clamp_field(rack, "bay_width", MIN_SIZE_FT, math.inf, "RackFrame", "rack", issues)
        _clamp_field(
            rack, "depth", MIN_SIZE_FT, corridor.width, "RackFrame", "rack", issues
        )
        for name in ("post_size", "beam_size"):
            _clamp_field(rack, name, MIN_SIZE_IN, math.inf, "RackFrame", "rack", issues)
        _clamp_field(
            rack, "top_clearance",
            corridor.height - corridor.ceiling_height, corridor.height,
            "RackFrame", "rack", issues,
        )

        for i, tier in enumerate(self.params.tiers):
            _clamp_field(
                tier, "height", MIN_SIZE_FT, math.inf, "Tier", f"tier {i + 1}", issues,
                tier=i + 1,
            )

    def _clamp_utilities(
        self,
        envelopes: list[TierEnvelope],
        issues: list[LayoutIssue],
    ) -> tuple[list[DuctPlacement], list[PipePlacement]]:
        rack = self.params.rack
        ducts: list[DuctPlacement] = []
        pipes: list[PipePlacement] = []

        for tier, envelope in zip(self.params.tiers, envelopes):
            placement = resolve_duct(envelope.tier, tier.duct, envelope, rack)
            if placement is not None:
                issues.extend(placement.issues)
                ducts.append(placement)
                if not placement.suppressed:
                    tier.duct.width = placement.width
                    tier.duct.height = placement.height
                    tier.duct.offset = placement.offset

            if tier.pipes_enabled:
                for placed, spec in zip(
                    resolve_pipes(envelope.tier, tier.pipes, envelope, rack), tier.pipes
                ):
                    issues.extend(placed.issues)
                    pipes.append(placed)
                    spec.diam = placed.diam
                    spec.side = placed.side
                    spec.vert = placed.vert

        return ducts, pipes


class LayoutEngine:
    """Owns the propagator for one parameter aggregate and exposes rebuild().

    The aggregate is held by reference: editing surfaces mutate
    ``engine.params`` directly and then call :meth:`rebuild`.
    """

    def __init__(self, params: RackParams | None = None, include_shell: bool = False) -> None:
        self.params = params if params is not None else RackParams()
        self.include_shell = include_shell
        self.propagator = ConstraintPropagator(self.params)

    def rebuild(self) -> Layout:
        """Propagate constraints and emit a fresh geometry list."""
        result = self.propagator.propagate()
        primitives, frame_issues = assemble_frame(result.stack, self.params.rack)

        if self.include_shell:
            primitives.extend(build_shell(self.params.corridor, self.params.rack))
        primitives.extend(
            d.primitive for d in result.duct_placements if d.primitive is not None
        )
        primitives.extend(p.primitive for p in result.pipe_placements)

        return Layout(
            levels=result.stack.levels,
            roof_level=result.stack.roof_level,
            total_height=result.stack.total_height,
            envelopes=result.envelopes,
            primitives=primitives,
            issues=[*result.issues, *frame_issues],
        )


def _clamp_field(
    model: BaseModel,
    name: str,
    lo: float,
    hi: float,
    element_type: str,
    element_id: str,
    issues: list[LayoutIssue],
    tier: int | None = None,
) -> None:
    """Clamp one field in place, recording an issue if it moved."""
    value = getattr(model, name)
    result = clamp(value, lo, hi)
    if result == value:
        return
    setattr(model, name, result)
    message = f"{element_type}.{name} clamped from {value:g} to {result:g}."
    logger.warning(message)
    issues.append(LayoutIssue(
        severity="clamp",
        element_type=element_type,
        element_id=element_id,
        message=message,
        field=name,
        tier=tier,
    ))
