"""Deterministic ETA pipeline.

Pipeline steps:
1. Normalize the request (free-text query + structured fields)
2. Resolve the origin (truck GPS fix or origin city)
3. Geocode every stop, in order
4. Route each leg and chain arrival times
5. Assemble the response (and a chat-ready summary)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, Optional

import httpx
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from fleet_eta.config import Settings
from fleet_eta.errors import EtaError, ErrorKind
from fleet_eta.models import (
    EtaRequest,
    EtaResponse,
    ErrorPayload,
    LegacyDestination,
    LegacyEta,
    LegDestination,
    LegOrigin,
    LegResponse,
    OriginBlock,
    RouteSummary,
    VehicleLocation,
)
from fleet_eta.tools.base import Geocoder, GpsSource, Router, VehicleDirectory
from fleet_eta.tools.export import build_point_maps_url
from fleet_eta.tools.fleet import SamsaraClient
from fleet_eta.tools.routing import NominatimGeocoder, OsrmRouter
from fleet_eta.utils.units import to_iso_utc, utc_now

from .intent_parser import normalize_request
from .itinerary import Itinerary, build_itinerary
from .resolvers import OriginResolver, ResolvedOrigin, StopResolver

logger = logging.getLogger(__name__)

console = Console()


@dataclass
class EtaResult:
    """Outcome of one request: a response, or a tagged error."""
    success: bool
    response: Optional[EtaResponse] = None
    error: Optional[ErrorPayload] = None
    itinerary: Optional[Itinerary] = None

    @property
    def status(self) -> int:
        return 200 if self.success else self.error.status

    def to_payload(self) -> dict:
        if self.success:
            return self.response.to_payload()
        return self.error.model_dump()

    def format_summary(self, markdown: bool = True) -> str:
        """
        Format a human-readable reply.

        Args:
            markdown: emit Markdown headings and bold labels for the console;
                pass False for plain-text chat replies

        Returns:
            The summary text (or the error detail)
        """
        if not self.success:
            return f"❌ {self.error.detail}"

        def label(text: str) -> str:
            return f"**{text}:**" if markdown else f"{text}:"

        r = self.response
        if r.mode == "truck":
            title = f"🚚 Truck {r.truck_number}"
            if r.vehicle_name and r.vehicle_name != r.truck_number:
                title += f" ({r.vehicle_name})"
        else:
            title = f"🏙️ From {r.origin.label}"

        lines = [
            f"## {title}" if markdown else title,
            "",
            f"{label('Now at')} {r.origin.label}",
            "",
        ]

        for leg in r.legs:
            lines.append(f"{label(f'Stop {leg.index + 1}')} {leg.destination.label}")
            lines.append(f"  - Distance: {leg.distance_miles} mi ({leg.distance_km:.1f} km)")
            lines.append(f"  - Drive time: {leg.duration_human}")
            lines.append(f"  - ETA: {leg.arrival_iso}")
            lines.append(f"  - Route: {leg.maps_directions_url}")
            lines.append("")

        s = r.summary
        if len(r.legs) > 1:
            lines.append(
                f"{label('Total')} {s.total_distance_miles} mi ({s.total_distance_km:.1f} km), "
                f"{s.total_duration_human}"
            )
            lines.append(f"{label('Final ETA')} {s.final_arrival_iso}")
            lines.append("")

        lines.append(f"🗺️ {label('Full route')} {s.maps_directions_url}")

        return "\n".join(lines)


def assemble_response(origin: ResolvedOrigin, itinerary: Itinerary) -> EtaResponse:
    """Map an itinerary to the external response shape."""
    legs = [
        LegResponse(
            index=leg.index,
            origin=LegOrigin(
                label=leg.origin_label,
                lat=leg.origin_point.latitude,
                lng=leg.origin_point.longitude,
            ),
            destination=LegDestination(
                label=leg.destination_label,
                city=leg.destination_city,
                state=leg.destination_state,
                lat=leg.destination_point.latitude,
                lng=leg.destination_point.longitude,
            ),
            distance_km=leg.distance_km,
            distance_miles=leg.distance_miles,
            duration_seconds=leg.duration_seconds,
            duration_human=leg.duration_human,
            arrival_iso=to_iso_utc(leg.arrival),
            maps_directions_url=leg.directions_url,
        )
        for leg in itinerary.legs
    ]

    vehicle_location = None
    if origin.mode == "truck":
        vehicle_location = VehicleLocation(
            lat=origin.point.latitude,
            lng=origin.point.longitude,
            formatted_address=origin.snapshot.reverse_geo_label if origin.snapshot else None,
            maps_url=build_point_maps_url(origin.point),
        )

    response = EtaResponse(
        mode=origin.mode,
        truck_number=origin.truck_number,
        vehicle_name=origin.vehicle.name if origin.vehicle else None,
        vehicle_location=vehicle_location,
        origin=OriginBlock(
            label=origin.label,
            lat=origin.point.latitude,
            lng=origin.point.longitude,
            maps_url=build_point_maps_url(origin.point),
        ),
        legs=legs,
        summary=RouteSummary(
            total_distance_km=itinerary.total_distance_km,
            total_distance_miles=itinerary.total_distance_miles,
            total_duration_seconds=itinerary.total_duration_seconds,
            total_duration_human=itinerary.total_duration_human,
            final_arrival_iso=to_iso_utc(itinerary.final_arrival),
            maps_directions_url=itinerary.directions_url,
        ),
    )

    # Older single-stop clients read these flattened fields
    if len(legs) == 1:
        first = legs[0]
        response.eta = LegacyEta(
            distance_km=first.distance_km,
            distance_miles=first.distance_miles,
            duration_seconds=first.duration_seconds,
            duration_human=first.duration_human,
            arrival_iso=first.arrival_iso,
        )
        response.destination = LegacyDestination(
            city=first.destination.city,
            state=first.destination.state,
            lat=first.destination.lat,
            lng=first.destination.lng,
        )

    return response


class EtaPipeline:
    """
    Deterministic pipeline for ETA requests.

    Collaborators are injected; ``from_settings`` wires the HTTP clients.
    Every step fails fast: the first failing lookup aborts the request and
    no partial itinerary is returned.
    """

    def __init__(
        self,
        vehicles: VehicleDirectory,
        gps: GpsSource,
        geocoder: Geocoder,
        router: Router,
        clock: Callable[[], datetime] = utc_now,
        show_progress: bool = False,
    ):
        self.origin_resolver = OriginResolver(vehicles, gps, geocoder)
        self.stop_resolver = StopResolver(geocoder)
        self.router = router
        self.clock = clock
        self.show_progress = show_progress
        self._progress: Optional[Progress] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs,
    ) -> "EtaPipeline":
        samsara = SamsaraClient(settings, transport=transport)
        return cls(
            vehicles=samsara,
            gps=samsara,
            geocoder=NominatimGeocoder(settings, transport=transport),
            router=OsrmRouter(settings, transport=transport),
            **kwargs,
        )

    async def execute(self, request: EtaRequest) -> EtaResult:
        """
        Execute the full ETA pipeline.

        Args:
            request: Free-text query and/or structured fields

        Returns:
            EtaResult with the response, or the error kind and detail
        """
        try:
            if self.show_progress:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                    transient=True,
                ) as progress:
                    self._progress = progress
                    return await self._execute_steps(request)
            return await self._execute_steps(request)
        except EtaError as e:
            logger.warning("ETA request failed (%s): %s", e.kind.value, e)
            return EtaResult(
                success=False,
                error=ErrorPayload(error=e.kind.value, detail=str(e), status=e.status),
            )
        except Exception as e:
            logger.exception("Unexpected error while computing ETA")
            return EtaResult(
                success=False,
                error=ErrorPayload(
                    error=ErrorKind.INTERNAL.value,
                    detail=f"Internal error: {e}",
                    status=500,
                ),
            )
        finally:
            self._progress = None

    @contextmanager
    def _step(self, description: str) -> Iterator[None]:
        if self._progress is None:
            yield
            return
        task = self._progress.add_task(description, total=None)
        try:
            yield
        finally:
            self._progress.remove_task(task)

    async def _execute_steps(self, request: EtaRequest) -> EtaResult:
        departure = self.clock()

        # Step 1: Normalize
        normalized = normalize_request(request)

        # Step 2: Origin
        if normalized.truck_number:
            label = f"📡 Locating truck {normalized.truck_number}..."
        else:
            label = f"📍 Finding {normalized.origin_city}, {normalized.origin_state}..."
        with self._step(label):
            origin = await self.origin_resolver.resolve(
                truck_number=normalized.truck_number,
                origin_city=normalized.origin_city,
                origin_state=normalized.origin_state,
            )

        # Step 3: Stops
        with self._step(f"📍 Geocoding {len(normalized.stops)} stop(s)..."):
            stops = await self.stop_resolver.resolve_all(normalized.stops)

        # Step 4: Legs
        with self._step("🛣️ Calculating route..."):
            itinerary = await build_itinerary(
                self.router,
                origin.point,
                origin.label,
                stops,
                departure,
            )

        # Step 5: Response
        response = assemble_response(origin, itinerary)
        logger.info(
            "ETA computed: mode=%s legs=%d total=%.1f km",
            response.mode, len(response.legs), itinerary.total_distance_km,
        )
        return EtaResult(success=True, response=response, itinerary=itinerary)
