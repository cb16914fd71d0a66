"""Tests for post-layout containment checks."""

from rack_builder.engine import LayoutEngine
from rack_builder.models import (
    DuctSpec,
    Extents,
    PipeSpec,
    Point3D,
    Primitive,
    PrimitiveKind,
    RackFrame,
    RackParams,
    TierEnvelope,
)
from rack_builder.validators.containment import (
    validate_in_envelope,
    validate_layout,
    validate_rack_in_corridor,
)
from rack_builder.validators.issues import LayoutIssue


def _envelope() -> TierEnvelope:
    return TierEnvelope(tier=1, bottom_y=1.0, top_y=2.0, clear_height=1.0, depth_clearance=1.0)


class TestValidateLayout:
    def test_default_layout_clean(self):
        engine = LayoutEngine()
        layout = engine.rebuild()
        assert validate_layout(engine.params, layout) == []

    def test_clamped_utilities_clean(self):
        p = RackParams()
        for tier in p.tiers:
            tier.duct = DuctSpec(enabled=True, width=90, height=90, offset=-90)
            tier.pipes_enabled = True
            tier.pipes = [PipeSpec(diam=6, side=90, vert=90), PipeSpec(diam=1, side=-90, vert=-3)]
        engine = LayoutEngine(p)
        assert validate_layout(p, engine.rebuild()) == []

    def test_nonconforming_pipe_skipped(self):
        p = RackParams()
        p.tiers[1].pipes_enabled = True
        p.tiers[1].pipes = [PipeSpec(diam=60)]
        engine = LayoutEngine(p)
        assert validate_layout(p, engine.rebuild()) == []

    def test_degenerate_box_reported(self):
        engine = LayoutEngine()
        layout = engine.rebuild()
        layout.primitives.append(Primitive(
            kind=PrimitiveKind.TRANS_BEAM,
            name="Cross beam 1 @ 0.000",
            position=Point3D(x=0, y=0, z=0),
            extents=Extents(x=0.05, y=0.0, z=1.0),
        ))
        errors = validate_layout(engine.params, layout)
        assert len(errors) == 1
        assert "zero-size side" in errors[0].message

    def test_unpropagated_depth_reported(self):
        layout = LayoutEngine().rebuild()
        p = RackParams(rack=RackFrame(depth=20))
        errors = validate_rack_in_corridor(p, layout)
        assert len(errors) == 1
        assert "exceeds corridor width" in errors[0].message
        assert errors[0].severity == "error"


class TestValidateInEnvelope:
    def test_inside(self):
        prim = Primitive(
            kind=PrimitiveKind.DUCT,
            name="Duct tier 1",
            position=Point3D(x=0, y=1.25, z=0),
            extents=Extents(x=3, y=0.5, z=0.5),
            tier=1,
        )
        assert validate_in_envelope(prim, _envelope()) == []

    def test_below_bottom_beam(self):
        prim = Primitive(
            kind=PrimitiveKind.PIPE,
            name="Pipe 1 tier 1",
            position=Point3D(x=0, y=1.0, z=0),
            radius=0.1,
            length=3,
            axis="x",
            tier=1,
        )
        errors = validate_in_envelope(prim, _envelope())
        assert len(errors) == 1
        assert "below tier 1" in errors[0].message

    def test_above_clear_height(self):
        prim = Primitive(
            kind=PrimitiveKind.DUCT,
            position=Point3D(x=0, y=1.9, z=0),
            extents=Extents(x=3, y=0.5, z=0.5),
            tier=1,
        )
        errors = validate_in_envelope(prim, _envelope())
        assert len(errors) == 1
        assert "above tier 1" in errors[0].message

    def test_crosses_post_line(self):
        prim = Primitive(
            kind=PrimitiveKind.DUCT,
            position=Point3D(x=0, y=1.25, z=0.4),
            extents=Extents(x=3, y=0.5, z=0.5),
            tier=1,
        )
        errors = validate_in_envelope(prim, _envelope())
        assert len(errors) == 1
        assert "post line" in errors[0].message
        assert errors[0].tier == 1


class TestLayoutIssue:
    def test_to_dict(self):
        issue = LayoutIssue(
            severity="clamp",
            element_type="Duct",
            element_id="tier 1 duct",
            message="clamped",
            field="width",
            tier=1,
        )
        assert issue.to_dict() == {
            "severity": "clamp",
            "element_type": "Duct",
            "element_id": "tier 1 duct",
            "message": "clamped",
            "field": "width",
            "tier": 1,
        }
