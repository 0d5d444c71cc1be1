"""Truck and city-to-city ETA calculator."""

__version__ = "0.1.0"
