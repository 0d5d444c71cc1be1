"""Map link builders for Google Maps."""

from typing import Sequence
from urllib.parse import quote

from fleet_eta.models import GeoPoint

GOOGLE_MAPS_URL = "https://www.google.com/maps"


def _param(value: str) -> str:
    # Same escaping as JavaScript's encodeURIComponent for 'lat,lng' pairs
    return quote(value, safe="")


def build_point_maps_url(point: GeoPoint) -> str:
    """Search link centered on a single point."""
    return f"{GOOGLE_MAPS_URL}/search/?api=1&query={point.as_param()}"


def build_directions_url(origin: GeoPoint, destination: GeoPoint) -> str:
    """Driving directions link for one leg."""
    return (
        f"{GOOGLE_MAPS_URL}/dir/?api=1"
        f"&origin={_param(origin.as_param())}"
        f"&destination={_param(destination.as_param())}"
        f"&travelmode=driving"
    )


def build_multi_stop_directions_url(origin: GeoPoint, stops: Sequence[GeoPoint]) -> str:
    """
    Driving directions link for a whole itinerary.

    The last stop becomes the destination and every earlier stop is passed,
    in order, as a pipe-separated ``waypoints`` parameter. Without stops the
    link goes from the origin to itself.
    """
    if not stops:
        return build_directions_url(origin, origin)

    url = build_directions_url(origin, stops[-1])
    waypoints = stops[:-1]
    if waypoints:
        joined = "|".join(p.as_param() for p in waypoints)
        url += f"&waypoints={_param(joined)}"
    return url
