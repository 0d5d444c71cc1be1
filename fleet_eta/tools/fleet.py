"""Fleet telemetry client for the Samsara API."""

import logging
from typing import Any, Optional

import httpx

from fleet_eta.config import Settings
from fleet_eta.errors import InternalError, UpstreamError

from .base import GpsSnapshot, VehiclePage, VehicleRef
from .http import fetch_json

logger = logging.getLogger(__name__)


class SamsaraClient:
    """
    Vehicle directory and GPS snapshot lookups.

    The bearer token is forwarded verbatim; a missing token is a server
    configuration problem and surfaces as an internal error on first use.
    """

    service = "samsara"

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = settings.samsara_base_url.rstrip("/")
        self.page_limit = settings.samsara_page_limit
        self.timeout = settings.http_timeout_s
        self._token = settings.samsara_api_token
        self._transport = transport

    async def _get(self, path: str, params: dict[str, Any]) -> dict:
        if not self._token:
            raise InternalError("SAMSARA_API_TOKEN is not configured")

        data = await fetch_json(
            self.service,
            "GET",
            f"{self.base_url}{path}",
            params=params,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/json",
            },
            transport=self._transport,
            timeout=self.timeout,
        )
        if not isinstance(data, dict):
            raise UpstreamError(
                message=f"Unexpected Samsara response for {path}",
                service=self.service,
            )
        return data

    async def list_vehicles(self, cursor: Optional[str] = None) -> VehiclePage:
        """Fetch one page of ``/fleet/vehicles``."""
        params: dict[str, Any] = {"limit": self.page_limit}
        if cursor:
            params["after"] = cursor

        data = await self._get("/fleet/vehicles", params)

        vehicles = [
            VehicleRef(id=str(v["id"]), name=v.get("name") or "")
            for v in data.get("data") or []
            if "id" in v
        ]

        pagination = data.get("pagination") or {}
        next_cursor = None
        if pagination.get("hasNextPage"):
            next_cursor = pagination.get("endCursor") or None

        return VehiclePage(vehicles=vehicles, next_cursor=next_cursor)

    async def get_snapshot(self, vehicle_id: str) -> Optional[GpsSnapshot]:
        """Latest GPS fix for one vehicle, or None when Samsara has none."""
        data = await self._get(
            "/fleet/vehicles/stats",
            {"types": "gps", "vehicleIds": vehicle_id},
        )

        match = next(
            (v for v in data.get("data") or [] if str(v.get("id")) == str(vehicle_id)),
            None,
        )
        gps = (match or {}).get("gps")
        if not gps:
            return None

        try:
            reverse_geo = gps.get("reverseGeo") or {}
            return GpsSnapshot(
                latitude=float(gps["latitude"]),
                longitude=float(gps["longitude"]),
                reverse_geo_label=reverse_geo.get("formattedLocation"),
                time=gps.get("time"),
                heading_degrees=gps.get("headingDegrees"),
                speed_mph=gps.get("speedMilesPerHour"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(
                message=f"Malformed GPS data for vehicle {vehicle_id}",
                cause=e,
                service=self.service,
            ) from e
