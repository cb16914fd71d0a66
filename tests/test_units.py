"""Tests for unit conversion."""

import math

from rack_builder.units import (
    feet_to_inches,
    feet_to_units,
    inches_to_units,
    units_to_inches,
)


class TestConversions:
    def test_foot(self):
        assert math.isclose(feet_to_units(1), 0.3048)

    def test_inch(self):
        assert math.isclose(inches_to_units(1), 0.0254)

    def test_feet_to_inches(self):
        assert feet_to_inches(4) == 48

    def test_twelve_inches_is_a_foot(self):
        assert math.isclose(inches_to_units(12), feet_to_units(1))

    def test_units_to_inches_inverts(self):
        assert math.isclose(units_to_inches(inches_to_units(18)), 18)

    def test_zero(self):
        assert feet_to_units(0) == 0
        assert inches_to_units(0) == 0
