"""Three-tier utility rack in a 10ft corridor — proof of concept.

Corridor: 10ft wide, 15ft high, intermediate ceiling at 9ft
Rack: 4 bays x 3ft, 4ft deep, 2in posts and beams, roof beam at 15ft
- tier 1 (2ft): supply duct pushed hard against the front posts
- tier 2 (2ft): two pipes, one oversized on purpose
- tier 3 (3ft): empty

Cross-section (looking along X):
        back          front
   ─────┬───────────────┬───── roof beam
        │   [  duct  ]──┤      tier 1
   ─────┼───────────────┼─────
        │  o        O   │      tier 2
   ─────┼───────────────┼─────
        │               │      tier 3
   ─────┴───────────────┴─────
"""

import json
from pathlib import Path

from rack_builder.edits import apply_updates
from rack_builder.engine import LayoutEngine
from rack_builder.models import (
    Corridor,
    DuctSpec,
    PipeSpec,
    PrimitiveKind,
    RackFrame,
    RackParams,
    Tier,
)
from rack_builder.validators.containment import validate_layout

params = RackParams(
    corridor=Corridor(width=10, height=15, ceiling_height=9),
    rack=RackFrame(bay_count=4, bay_width=3, depth=4, post_size=2, beam_size=2),
    tier_count=3,
    tiers=[
        # Offset beyond the post line, clamped to 14in
        Tier(height=2, duct=DuctSpec(enabled=True, width=18, height=16, offset=30)),
        Tier(height=2, pipes_enabled=True, pipes=[
            PipeSpec(diam=4, side=-12, vert=2),
            PipeSpec(diam=30),  # taller than the tier: non-conforming
        ]),
        Tier(height=3),
    ],
)

engine = LayoutEngine(params, include_shell=True)
layout = engine.rebuild()

# --- Report adjustments ---
for issue in layout.issues:
    print(f"  [{issue.severity}] {issue.element_type}: {issue.message}")

# --- Validate ---
errors = validate_layout(params, layout)
if errors:
    print("⚠️  Validation errors:")
    for e in errors:
        print(f"  [{e.severity}] {e.element_type}: {e.message}")
else:
    print("✅ Validation passed")

# --- Edit and rebuild ---
apply_updates(params, {"tier": 3, "ductEnabled": True, "ductWidths": 24})
layout = engine.rebuild()

# --- Export ---
output = Path(__file__).parent / "output"
output.mkdir(exist_ok=True)
output_file = output / "corridor_rack.json"
output_file.write_text(layout.model_dump_json(indent=2))

print(f"📁 Exported to: {output_file}")
print(f"   Levels: {len(layout.levels)}")
print(f"   Total height: {layout.total_height:.3f} m")
print(f"   Posts: {len(layout.of_kind(PrimitiveKind.POST))}")
print(f"   Ducts: {len(layout.of_kind(PrimitiveKind.DUCT))}")
print(f"   Pipes: {len(layout.of_kind(PrimitiveKind.PIPE))}")
