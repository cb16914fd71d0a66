"""Tests for structured parameter patches."""

import pytest

from rack_builder.edits import apply_updates, parse_updates
from rack_builder.engine import LayoutEngine
from rack_builder.models import PipeSpec, PrimitiveKind, RackParams


class TestParseUpdates:
    def test_plain_json(self):
        assert parse_updates('{"depth": 5}') == {"depth": 5}

    def test_code_fences(self):
        text = '```json\n{"tierCount": 3}\n```'
        assert parse_updates(text) == {"tierCount": 3}

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Invalid JSON"):
            parse_updates("{depth: 5")

    def test_non_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            parse_updates("[1, 2]")


class TestApplyUpdates:
    def test_top_level(self):
        p = RackParams()
        ignored = apply_updates(p, {"depth": 5, "corridorWidth": 12})
        assert ignored == []
        assert p.rack.depth == 5
        assert p.corridor.width == 12

    def test_snake_case_keys(self):
        p = RackParams()
        apply_updates(p, {"post_size": 3, "ceiling_height": 8})
        assert p.rack.post_size == 3
        assert p.corridor.ceiling_height == 8

    def test_unknown_keys_ignored(self):
        p = RackParams()
        ignored = apply_updates(p, {"colour": "red", "depth": 3})
        assert ignored == ["colour"]
        assert p.rack.depth == 3

    def test_values_not_clamped(self):
        p = RackParams()
        apply_updates(p, {"depth": 50})
        assert p.rack.depth == 50

    def test_wrong_type_rejected(self):
        with pytest.raises(ValueError):
            apply_updates(RackParams(), {"bayCount": "many"})

    def test_tier_count_resizes(self):
        p = RackParams()
        apply_updates(p, {"tierCount": 4})
        assert len(p.tiers) == 4

    def test_add_tier_and_fill_it(self):
        p = RackParams()
        apply_updates(p, {"tierCount": 3, "tier": 3, "ductEnabled": True, "ductWidths": 12})
        assert p.duct_enabled == [False, False, True]
        assert p.tiers[2].duct.width == 12

    def test_per_tier_keys(self):
        p = RackParams()
        apply_updates(p, {"tier": 2, "tierHeights": 3.5, "pipeEnabled": True})
        assert p.tier_heights == [2, 3.5]
        assert p.pipe_enabled == [False, True]

    def test_pipes_replaced(self):
        p = RackParams()
        apply_updates(p, {
            "tier": 1,
            "pipesPerTier": [{"diam": 6, "side": -3, "vert": 1}, {"diamIn": 2}],
        })
        assert p.tiers[0].pipes == [PipeSpec(diam=6, side=-3, vert=1), PipeSpec(diam=2)]

    def test_pipe_count(self):
        p = RackParams()
        p.tiers[0].pipes[0].diam = 7
        apply_updates(p, {"tier": 1, "pipeCount": 3})
        assert [pipe.diam for pipe in p.tiers[0].pipes] == [7, 4, 4]

    def test_per_tier_without_tier(self):
        with pytest.raises(ValueError, match="need a 'tier'"):
            apply_updates(RackParams(), {"ductEnabled": True})

    def test_tier_out_of_range(self):
        with pytest.raises(ValueError, match="Tier 5 not found"):
            apply_updates(RackParams(), {"tier": 5, "ductEnabled": True})

    def test_patch_then_rebuild(self):
        engine = LayoutEngine()
        apply_updates(engine.params, {"tier": 1, "ductEnabled": True, "ductOffsets": 100})
        layout = engine.rebuild()
        assert engine.params.tiers[0].duct.offset == pytest.approx(14)
        assert len(layout.of_kind(PrimitiveKind.DUCT)) == 1
