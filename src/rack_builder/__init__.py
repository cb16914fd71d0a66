"""Rack Builder — parametric tiered rack layout inside a corridor shell."""

__version__ = "0.1.0"
