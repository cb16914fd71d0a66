"""Unit conversion between input units (feet, inches) and meters.

Parameters are entered in feet and inches; every resolver works in meters.
"""

from __future__ import annotations

FT_TO_M = 0.3048
IN_TO_M = 0.0254
IN_PER_FT = 12.0


def feet_to_units(ft: float) -> float:
    """Feet → meters."""
    return ft * FT_TO_M


def inches_to_units(inches: float) -> float:
    """Inches → meters."""
    return inches * IN_TO_M


def feet_to_inches(ft: float) -> float:
    """Feet → inches."""
    return ft * IN_PER_FT


def units_to_inches(m: float) -> float:
    """Meters → inches. Used when reporting resolved sizes back in input units."""
    return m / IN_TO_M
