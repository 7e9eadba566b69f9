"""Coordinate-transform and domain-scaling engine for interactive canvas charts."""
