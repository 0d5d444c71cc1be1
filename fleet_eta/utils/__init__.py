"""Utility functions for ETA computation."""

from .gpx import create_itinerary_gpx, save_gpx_file
from .units import format_duration, km_to_miles

__all__ = [
    "create_itinerary_gpx",
    "save_gpx_file",
    "format_duration",
    "km_to_miles",
]
