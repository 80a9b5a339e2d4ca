"""Rift Draft - champion select simulator and tournament series manager."""

__version__ = "0.1.0"
