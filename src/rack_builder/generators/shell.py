"""Corridor shell builder.

Floor slab, intermediate ceiling, roof slab and the two side walls that
enclose the rack. The shell is centred on the origin in X and Z:
```
        Y
        ↑
  roof ─┼──────────── (roof slab, underside at corridor height)
        │
  ceil ─┼──────────── (intermediate ceiling, top face at ceiling height)
        │
 floor ─┼──────────── (floor slab, top face at Y=0)
        └── Z (depth)
```
"""

from __future__ import annotations

from rack_builder.models.geometry import Extents, Point3D
from rack_builder.models.layout import Primitive, PrimitiveKind
from rack_builder.models.params import Corridor, RackFrame
from rack_builder.units import feet_to_units, inches_to_units

SHELL_LENGTH_ALLOWANCE_IN = 12.0


def build_shell(corridor: Corridor, rack: RackFrame) -> list[Primitive]:
    """Generate the corridor shell as box primitives.

    Args:
        corridor: Corridor dimensions.
        rack: Rack frame; only its overall length is used.

    Returns:
        Five primitives: floor, ceiling, roof, back wall, front wall.
    """
    length = feet_to_units(rack.length_ft) + inches_to_units(SHELL_LENGTH_ALLOWANCE_IN)
    width = feet_to_units(corridor.width)
    height = feet_to_units(corridor.height)
    ceiling_y = feet_to_units(corridor.ceiling_height)
    slab = inches_to_units(corridor.slab_depth)
    ceiling_depth = inches_to_units(corridor.ceiling_depth)
    wall = inches_to_units(corridor.wall_thickness)

    slab_extents = Extents(x=length, y=slab, z=width * 2)
    wall_extents = Extents(x=length, y=height, z=wall)
    dz = width / 2 + wall / 2

    return [
        Primitive(
            kind=PrimitiveKind.FLOOR,
            name="Floor Slab",
            position=Point3D(x=0.0, y=-slab / 2, z=0.0),
            extents=slab_extents,
        ),
        Primitive(
            kind=PrimitiveKind.CEILING,
            name="Ceiling",
            position=Point3D(x=0.0, y=ceiling_y - ceiling_depth / 2, z=0.0),
            extents=Extents(x=length, y=ceiling_depth, z=width),
        ),
        Primitive(
            kind=PrimitiveKind.ROOF,
            name="Roof Slab",
            position=Point3D(x=0.0, y=height + slab / 2, z=0.0),
            extents=slab_extents,
        ),
        Primitive(
            kind=PrimitiveKind.WALL,
            name="Back Wall",
            position=Point3D(x=0.0, y=height / 2, z=-dz),
            extents=wall_extents,
        ),
        Primitive(
            kind=PrimitiveKind.WALL,
            name="Front Wall",
            position=Point3D(x=0.0, y=height / 2, z=dz),
            extents=wall_extents,
        ),
    ]
