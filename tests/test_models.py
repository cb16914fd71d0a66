"""Tests for the parameter aggregate and layout models."""

import json

import pytest

from rack_builder.models import (
    Corridor,
    DuctSpec,
    Extents,
    PipeSpec,
    Point3D,
    Primitive,
    PrimitiveKind,
    RackFrame,
    RackParams,
    Tier,
)


class TestDefaults:
    def test_default_rack(self):
        p = RackParams()
        assert p.tier_count == 2
        assert p.tier_heights == [2.0, 2.0]
        assert p.rack.bay_count == 4
        assert p.corridor.width == 10

    def test_default_tier_utilities(self):
        tier = Tier()
        assert tier.duct.enabled is False
        assert (tier.duct.width, tier.duct.height, tier.duct.offset) == (18, 16, 0)
        assert tier.pipes_enabled is False
        assert tier.pipes == [PipeSpec(diam=4, side=0, vert=4)]

    def test_negative_values_accepted_for_clamping(self):
        rack = RackFrame(post_size=-2, depth=-1)
        assert rack.post_size == -2

    def test_wrong_type_rejected(self):
        with pytest.raises(ValueError):
            RackFrame(depth="deep")

    def test_rack_length(self):
        assert RackFrame(bay_count=3, bay_width=4).length_ft == 12

    def test_depth_clearance(self):
        assert RackFrame(depth=4, post_size=2).depth_clearance_in == 46


class TestResize:
    def test_grow_appends_defaults(self):
        p = RackParams()
        p.tiers[0].height = 5
        p.resize_tiers(4)
        assert len(p.tiers) == 4
        assert p.tier_heights == [5, 2, 2, 2]

    def test_shrink_truncates_and_preserves_prefix(self):
        p = RackParams()
        p.resize_tiers(4)
        p.tiers[0].duct = DuctSpec(enabled=True, width=12)
        p.tiers[1].pipes_enabled = True
        p.tiers[3].duct.enabled = True
        p.resize_tiers(2)
        assert len(p.tiers) == 2
        assert p.duct_enabled == [True, False]
        assert p.duct_widths[0] == 12
        assert p.pipe_enabled == [False, True]

    def test_every_view_has_k_entries(self):
        p = RackParams()
        for k in (0, 1, 3, 7):
            p.resize_tiers(k)
            for view in (
                p.tier_heights, p.duct_enabled, p.duct_widths, p.duct_heights,
                p.duct_offsets, p.pipe_enabled, p.pipes_per_tier,
            ):
                assert len(view) == k

    def test_regrow_uses_defaults_not_old_values(self):
        p = RackParams()
        p.tiers[1].height = 6
        p.resize_tiers(1)
        p.resize_tiers(2)
        assert p.tier_heights == [2, 2]

    def test_sync_reports_resize(self):
        p = RackParams()
        assert p.sync_tiers() is False
        p.tier_count = 3
        assert p.sync_tiers() is True

    def test_negative_count_empties(self):
        p = RackParams()
        p.tier_count = -1
        p.sync_tiers()
        assert p.tiers == []

    def test_tier_lookup(self):
        p = RackParams()
        assert p.tier(2) is p.tiers[1]
        with pytest.raises(ValueError, match="Valid tiers: 1..2"):
            p.tier(3)


class TestPipeResize:
    def test_preserves_existing(self):
        tier = Tier(pipes=[PipeSpec(diam=6, side=3, vert=1)])
        tier.resize_pipes(3)
        assert tier.pipes[0] == PipeSpec(diam=6, side=3, vert=1)
        assert tier.pipes[1:] == [PipeSpec(), PipeSpec()]

    def test_shrink(self):
        tier = Tier(pipes=[PipeSpec(diam=6), PipeSpec(diam=8)])
        tier.resize_pipes(1)
        assert [p.diam for p in tier.pipes] == [6]

    def test_zero(self):
        tier = Tier()
        tier.resize_pipes(0)
        assert tier.pipes == []


class TestFlatAggregate:
    def test_round_trip(self):
        p = RackParams()
        assert RackParams.from_flat(p.to_flat()) == p

    def test_flat_keys(self):
        flat = RackParams().to_flat()
        assert flat["corridorWidth"] == 10
        assert flat["postSize"] == 2
        assert flat["pipesPerTier"][0] == [{"diam": 4, "side": 0, "vert": 4}]

    def test_from_flat_fills_short_arrays(self):
        p = RackParams.from_flat({
            "tierCount": 3,
            "tierHeights": [3, 4, 5],
            "ductEnabled": [True],
        })
        assert p.tier_heights == [3, 4, 5]
        assert p.duct_enabled == [True, False, False]
        assert p.duct_widths == [18, 18, 18]

    def test_from_flat_accepts_long_pipe_names(self):
        p = RackParams.from_flat({
            "tierHeights": [2],
            "pipesPerTier": [[{"diamIn": 6, "sideOffIn": -2, "vertOffIn": 1}]],
        })
        assert p.tiers[0].pipes[0] == PipeSpec(diam=6, side=-2, vert=1)

    def test_tier_count_defaults_to_array_length(self):
        p = RackParams.from_flat({"tierHeights": [2, 3, 4]})
        assert p.tier_count == 3

    def test_load_flat(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text(json.dumps({"depth": 5, "tierHeights": [3]}))
        p = RackParams.load(path)
        assert p.rack.depth == 5
        assert p.tier_heights == [3]

    def test_load_nested(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text(RackParams(rack=RackFrame(depth=3)).model_dump_json())
        assert RackParams.load(path).rack.depth == 3

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="Expected a JSON object"):
            RackParams.load(path)

    def test_corridor_fields(self):
        c = Corridor(ceiling_depth=4, slab_depth=10, wall_thickness=6)
        flat = RackParams(corridor=c).to_flat()
        assert (flat["ceilingDepth"], flat["slabDepth"], flat["wallThickness"]) == (4, 10, 6)


class TestPrimitive:
    def test_box_bounds(self):
        prim = Primitive(
            kind=PrimitiveKind.DUCT,
            position=Point3D(x=0, y=1, z=0),
            extents=Extents(x=4, y=2, z=1),
        )
        lo, hi = prim.bounds()
        assert (lo.x, lo.y, lo.z) == (-2, 0, -0.5)
        assert (hi.x, hi.y, hi.z) == (2, 2, 0.5)

    def test_cylinder_bounds(self):
        prim = Primitive(
            kind=PrimitiveKind.PIPE,
            position=Point3D(x=0, y=1, z=0),
            radius=0.1,
            length=2,
            axis="x",
        )
        lo, hi = prim.bounds()
        assert lo.x == -1 and hi.x == 1
        assert lo.y == pytest.approx(0.9) and hi.y == pytest.approx(1.1)
        assert not prim.is_box

    def test_degenerate_extents(self):
        assert Extents(x=1, y=0, z=1).is_degenerate()
        assert not Extents(x=1, y=1, z=1).is_degenerate()
