"""GPX file generation utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

import gpxpy
import gpxpy.gpx

if TYPE_CHECKING:
    from fleet_eta.pipeline.itinerary import Itinerary


def create_itinerary_gpx(itinerary: Itinerary, name: str = "ETA itinerary") -> str:
    """
    Create a GPX file from an itinerary.

    The origin and every stop become waypoints (stops carry their ETA as
    the waypoint time), and a route links them in visiting order.

    Args:
        itinerary: A computed itinerary
        name: Name of the route

    Returns:
        GPX XML string
    """
    gpx = gpxpy.gpx.GPX()
    gpx.name = name
    gpx.description = (
        f"{len(itinerary.legs)} stop(s), {itinerary.total_distance_miles} mi, "
        f"{itinerary.total_duration_human}"
    )
    gpx.creator = "fleet-eta"
    gpx.time = itinerary.departure

    route = gpxpy.gpx.GPXRoute(name=name)
    gpx.routes.append(route)

    start = gpxpy.gpx.GPXWaypoint(
        latitude=itinerary.origin_point.latitude,
        longitude=itinerary.origin_point.longitude,
        time=itinerary.departure,
        name=itinerary.origin_label,
    )
    start.type = "Origin"
    gpx.waypoints.append(start)
    route.points.append(gpxpy.gpx.GPXRoutePoint(
        latitude=itinerary.origin_point.latitude,
        longitude=itinerary.origin_point.longitude,
        name=itinerary.origin_label,
    ))

    for leg in itinerary.legs:
        waypoint = gpxpy.gpx.GPXWaypoint(
            latitude=leg.destination_point.latitude,
            longitude=leg.destination_point.longitude,
            time=leg.arrival,
            name=leg.destination_label,
            description=f"Stop {leg.index + 1}: {leg.distance_miles} mi, {leg.duration_human}",
        )
        waypoint.type = "Stop"
        gpx.waypoints.append(waypoint)
        route.points.append(gpxpy.gpx.GPXRoutePoint(
            latitude=leg.destination_point.latitude,
            longitude=leg.destination_point.longitude,
            time=leg.arrival,
            name=leg.destination_label,
        ))

    return gpx.to_xml()


def save_gpx_file(gpx_content: str, filepath: str) -> None:
    """Save GPX content to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(gpx_content)
