"""Turn request fields into geographic points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from fleet_eta.errors import InvalidRequestError, NotFoundError
from fleet_eta.models import GeoPoint, StopInput
from fleet_eta.tools.base import Geocoder, GpsSnapshot, GpsSource, VehicleDirectory, VehicleRef

logger = logging.getLogger(__name__)

TRUCK_LOCATION_PLACEHOLDER = "Truck current location"


@dataclass(frozen=True)
class ResolvedStop:
    """A geocoded stop; city/state are kept only when the stop was given that way."""
    point: GeoPoint
    label: str
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass(frozen=True)
class ResolvedOrigin:
    point: GeoPoint
    label: str
    mode: Literal["truck", "city"]
    truck_number: Optional[str] = None
    vehicle: Optional[VehicleRef] = None
    snapshot: Optional[GpsSnapshot] = None


def city_state_query(city: str, state: str) -> str:
    return f"{city}, {state}, USA"


class StopResolver:
    """Geocode stop descriptors, one at a time."""

    def __init__(self, geocoder: Geocoder):
        self.geocoder = geocoder

    async def resolve(self, stop: StopInput) -> ResolvedStop:
        if stop.address:
            point = await self.geocoder.geocode(stop.address)
            if point is None:
                raise InvalidRequestError(f"Cannot geocode address: {stop.address}")
            return ResolvedStop(point=point, label=stop.address)

        if stop.city and stop.state:
            point = await self.geocoder.geocode(city_state_query(stop.city, stop.state))
            if point is None:
                raise InvalidRequestError(f"Cannot geocode city/state: {stop.city}, {stop.state}")
            return ResolvedStop(
                point=point,
                label=f"{stop.city}, {stop.state}",
                city=stop.city,
                state=stop.state,
            )

        raise InvalidRequestError("Stop must have either address or city+state")

    async def resolve_all(self, stops: list[StopInput] | tuple[StopInput, ...]) -> list[ResolvedStop]:
        """Resolve in order; the first failing stop aborts the whole list."""
        resolved = []
        for i, stop in enumerate(stops):
            try:
                resolved.append(await self.resolve(stop))
            except InvalidRequestError:
                logger.warning("Stop %d could not be resolved: %s", i, stop)
                raise
        return resolved


class OriginResolver:
    """Starting point from a truck's GPS fix or from an origin city/state."""

    def __init__(
        self,
        vehicles: VehicleDirectory,
        gps: GpsSource,
        geocoder: Geocoder,
    ):
        self.vehicles = vehicles
        self.gps = gps
        self.geocoder = geocoder

    async def find_vehicle(self, truck_number: str) -> Optional[VehicleRef]:
        """Page through the fleet until a vehicle name matches (trimmed, case-insensitive)."""
        wanted = truck_number.strip().lower()
        cursor = None
        pages = 0

        while True:
            page = await self.vehicles.list_vehicles(cursor)
            pages += 1
            match = next(
                (v for v in page.vehicles if (v.name or "").strip().lower() == wanted),
                None,
            )
            if match:
                return VehicleRef(id=match.id, name=(match.name or truck_number).strip())

            if not page.next_cursor:
                break
            cursor = page.next_cursor

        logger.debug("Truck %s not found after %d page(s)", truck_number, pages)
        return None

    async def resolve(
        self,
        truck_number: Optional[str] = None,
        origin_city: Optional[str] = None,
        origin_state: Optional[str] = None,
    ) -> ResolvedOrigin:
        if truck_number:
            return await self._resolve_truck(truck_number)
        return await self._resolve_city(origin_city, origin_state)

    async def _resolve_truck(self, truck_number: str) -> ResolvedOrigin:
        vehicle = await self.find_vehicle(truck_number)
        if vehicle is None:
            raise NotFoundError(f"Truck {truck_number} not found in Samsara")

        snapshot = await self.gps.get_snapshot(vehicle.id)
        if snapshot is None:
            raise NotFoundError(f"No GPS data for truck {truck_number}")

        return ResolvedOrigin(
            point=snapshot.point,
            label=snapshot.reverse_geo_label or TRUCK_LOCATION_PLACEHOLDER,
            mode="truck",
            truck_number=truck_number,
            vehicle=vehicle,
            snapshot=snapshot,
        )

    async def _resolve_city(self, city: Optional[str], state: Optional[str]) -> ResolvedOrigin:
        if not city or not state:
            raise InvalidRequestError(
                "originCity and originState are required for city-based routing"
            )

        point = await self.geocoder.geocode(city_state_query(city, state))
        if point is None:
            raise InvalidRequestError(f"Cannot geocode origin {city}, {state}")

        return ResolvedOrigin(point=point, label=f"{city}, {state}", mode="city")
