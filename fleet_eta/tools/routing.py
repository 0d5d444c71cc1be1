"""Geocoding (Nominatim) and road routing (OSRM) clients."""

import logging
from typing import Optional

import httpx

from fleet_eta.config import Settings
from fleet_eta.errors import UpstreamError
from fleet_eta.models import GeoPoint

from .base import RouteEstimate
from .http import fetch_json

logger = logging.getLogger(__name__)

# OSRM answers these with HTTP 400 when the points cannot be connected
NO_ROUTE_CODES = ("NoRoute", "NoSegment")


class NominatimGeocoder:
    """
    Convert a place name or address to GPS coordinates.

    Uses Nominatim (OpenStreetMap) - no API key required, but a
    descriptive User-Agent is mandatory. Only the first match is used.
    """

    service = "nominatim"

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = settings.nominatim_url.rstrip("/")
        self.user_agent = settings.geocoder_user_agent
        self.timeout = settings.http_timeout_s
        self._transport = transport

    async def geocode(self, text: str) -> Optional[GeoPoint]:
        data = await fetch_json(
            self.service,
            "GET",
            f"{self.base_url}/search",
            params={
                "q": text,
                "format": "json",
                "limit": 1,
            },
            headers={
                "Accept": "application/json",
                "User-Agent": self.user_agent,
            },
            transport=self._transport,
            timeout=self.timeout,
        )

        if not isinstance(data, list) or not data:
            logger.debug("No geocoding result for %r", text)
            return None

        first = data[0]
        try:
            return GeoPoint(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(
                message=f"Malformed geocoding result for {text}",
                cause=e,
                service=self.service,
            ) from e


class OsrmRouter:
    """Driving distance and duration between two points via OSRM."""

    service = "osrm"

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = settings.osrm_url.rstrip("/")
        self.profile = settings.osrm_profile
        self.timeout = settings.http_timeout_s
        self._transport = transport

    async def route(self, origin: GeoPoint, destination: GeoPoint) -> Optional[RouteEstimate]:
        # OSRM expects lon,lat order
        coords = (
            f"{origin.longitude},{origin.latitude};"
            f"{destination.longitude},{destination.latitude}"
        )
        data = await fetch_json(
            self.service,
            "GET",
            f"{self.base_url}/route/v1/{self.profile}/{coords}",
            params={"overview": "false", "annotations": "duration"},
            headers={"Accept": "application/json"},
            transport=self._transport,
            timeout=self.timeout,
            accept_statuses=(400,),
        )

        if not isinstance(data, dict):
            return None

        code = data.get("code")
        if code in NO_ROUTE_CODES:
            logger.debug("No route between %s and %s: %s", origin, destination, code)
            return None
        if code is not None and code != "Ok":
            raise UpstreamError(
                message=f"{self.service} error {code}: {data.get('message', '')}",
                service=self.service,
            )

        routes = data.get("routes")
        if not routes:
            return None

        route0 = routes[0]
        return RouteEstimate(
            distance_meters=float(route0.get("distance") or 0.0),
            duration_seconds=float(route0.get("duration") or 0.0),
        )
