"""Multi-leg itinerary builder.

Legs are chained: each leg starts where the previous one ended and departs
at its arrival time, so they are computed strictly in order. The running
state is an immutable accumulator folded over the stop list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Sequence

from fleet_eta.errors import InvalidRequestError, NotFoundError
from fleet_eta.models import GeoPoint
from fleet_eta.tools.base import Router
from fleet_eta.tools.export import build_directions_url, build_multi_stop_directions_url
from fleet_eta.utils.units import format_duration, km_to_miles, round_half_up

from .resolvers import ResolvedStop

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Leg:
    """One origin-to-stop leg."""
    index: int
    origin_label: str
    origin_point: GeoPoint
    destination_label: str
    destination_point: GeoPoint
    destination_city: str | None
    destination_state: str | None
    distance_km: float
    distance_miles: float
    duration_seconds: int
    arrival: datetime
    directions_url: str
    # running totals up to and including this leg
    cumulative_distance_km: float = 0.0
    cumulative_duration_seconds: int = 0

    @property
    def duration_human(self) -> str:
        return format_duration(self.duration_seconds)


@dataclass(frozen=True)
class Itinerary:
    """Ordered legs plus whole-route totals."""
    origin_label: str
    origin_point: GeoPoint
    departure: datetime
    legs: tuple[Leg, ...]
    total_distance_km: float
    total_duration_seconds: int
    final_arrival: datetime
    directions_url: str

    @property
    def total_distance_miles(self) -> float:
        return km_to_miles(self.total_distance_km)

    @property
    def total_duration_human(self) -> str:
        return format_duration(self.total_duration_seconds)


@dataclass(frozen=True)
class _Position:
    """Accumulator carried from one leg to the next."""
    point: GeoPoint
    label: str
    time: datetime
    distance_km: float = 0.0
    duration_seconds: int = 0
    legs: tuple[Leg, ...] = field(default_factory=tuple)


async def _advance(router: Router, position: _Position, stop: ResolvedStop) -> _Position:
    estimate = await router.route(position.point, stop.point)
    if estimate is None:
        logger.warning("No route from %s to %s", position.label, stop.label)
        raise NotFoundError(f"No route found from {position.label} to {stop.label}")

    distance_km = estimate.distance_meters / 1000
    duration_seconds = int(round_half_up(estimate.duration_seconds))
    arrival = position.time + timedelta(seconds=duration_seconds)

    total_km = position.distance_km + distance_km
    total_seconds = position.duration_seconds + duration_seconds

    leg = Leg(
        index=len(position.legs),
        origin_label=position.label,
        origin_point=position.point,
        destination_label=stop.label,
        destination_point=stop.point,
        destination_city=stop.city,
        destination_state=stop.state,
        distance_km=distance_km,
        distance_miles=km_to_miles(distance_km),
        duration_seconds=duration_seconds,
        arrival=arrival,
        directions_url=build_directions_url(position.point, stop.point),
        cumulative_distance_km=total_km,
        cumulative_duration_seconds=total_seconds,
    )

    return replace(
        position,
        point=stop.point,
        label=stop.label,
        time=arrival,
        distance_km=total_km,
        duration_seconds=total_seconds,
        legs=position.legs + (leg,),
    )


async def build_itinerary(
    router: Router,
    origin_point: GeoPoint,
    origin_label: str,
    stops: Sequence[ResolvedStop],
    departure: datetime,
) -> Itinerary:
    """
    Route origin -> stop 1 -> stop 2 ... and accumulate distance and time.

    Args:
        router: Routing collaborator, called once per leg
        origin_point: Where the trip starts
        origin_label: Display label of the start
        stops: Resolved stops in visiting order (non-empty)
        departure: Start time of the trip (the request time)

    Returns:
        Itinerary whose totals equal the sums over its legs

    Raises:
        InvalidRequestError: no stops given
        NotFoundError: the router found no route for some leg
    """
    if not stops:
        raise InvalidRequestError("No destinations provided")

    position = _Position(point=origin_point, label=origin_label, time=departure)
    for stop in stops:
        position = await _advance(router, position, stop)

    return Itinerary(
        origin_label=origin_label,
        origin_point=origin_point,
        departure=departure,
        legs=position.legs,
        total_distance_km=position.distance_km,
        total_duration_seconds=position.duration_seconds,
        final_arrival=position.time,
        directions_url=build_multi_stop_directions_url(
            origin_point, [s.point for s in stops]
        ),
    )
