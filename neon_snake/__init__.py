"""Neon Snake: tick-driven snake core shared by the 2D and 3D front ends."""

__version__ = "0.1.0"
