"""Collaborator contracts used by the ETA pipeline.

Each protocol is one blocking (awaited) network call with a fixed shape.
Concrete clients live next to this module; tests substitute fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from fleet_eta.models import GeoPoint


@dataclass(frozen=True)
class VehicleRef:
    id: str
    name: str


@dataclass(frozen=True)
class VehiclePage:
    """One page of the fleet listing."""
    vehicles: list[VehicleRef] = field(default_factory=list)
    next_cursor: Optional[str] = None


@dataclass(frozen=True)
class GpsSnapshot:
    """Latest GPS fix of a vehicle."""
    latitude: float
    longitude: float
    reverse_geo_label: Optional[str] = None
    time: Optional[str] = None
    heading_degrees: Optional[float] = None
    speed_mph: Optional[float] = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


@dataclass(frozen=True)
class RouteEstimate:
    distance_meters: float
    duration_seconds: float


class VehicleDirectory(Protocol):
    async def list_vehicles(self, cursor: Optional[str] = None) -> VehiclePage:
        """Fetch one page of vehicles; ``next_cursor`` is None on the last page."""
        ...


class GpsSource(Protocol):
    async def get_snapshot(self, vehicle_id: str) -> Optional[GpsSnapshot]:
        ...


class Geocoder(Protocol):
    async def geocode(self, text: str) -> Optional[GeoPoint]:
        """Return the first match for a location string, or None."""
        ...


class Router(Protocol):
    async def route(self, origin: GeoPoint, destination: GeoPoint) -> Optional[RouteEstimate]:
        ...


class ChatNotifier(Protocol):
    async def send_message(self, chat_id: int | str, text: str) -> bool:
        """Deliver a reply; failures are logged and reported as False."""
        ...
