"""Linked track metadata dashboard (scatter, heatmap, parallel coordinates)."""

__version__ = "0.1.0"
