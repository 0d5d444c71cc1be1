"""Tests for leg chaining, unit helpers and map links."""

from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

import gpxpy
import pytest

from fleet_eta.errors import InvalidRequestError, NotFoundError
from fleet_eta.models import GeoPoint
from fleet_eta.pipeline.itinerary import build_itinerary
from fleet_eta.pipeline.resolvers import ResolvedStop
from fleet_eta.tools.base import RouteEstimate
from fleet_eta.tools.export import (
    build_directions_url,
    build_multi_stop_directions_url,
    build_point_maps_url,
)
from fleet_eta.utils import create_itinerary_gpx
from fleet_eta.utils.units import format_duration, km_to_miles, round_half_up, to_iso_utc

from conftest import CHICAGO, DALLAS, DEPARTURE, HOUSTON, TULSA, FakeRouter


class TestUnits:
    """Test unit conversion and formatting."""

    def test_km_to_miles(self):
        assert km_to_miles(100) == 62.1
        assert km_to_miles(0) == 0.0
        assert km_to_miles(1.609344) == 1.0

    def test_round_half_up(self):
        """Halves round up, unlike the built-in round."""
        assert round_half_up(12.5) == 13
        assert round_half_up(0.25, 1) == 0.3

    @pytest.mark.parametrize("seconds, expected", [
        (0, "0m"),
        (59, "0m"),
        (60, "1m"),
        (3599, "59m"),
        (3600, "1h 0m"),
        (3661, "1h 1m"),
        (90061, "25h 1m"),
    ])
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_to_iso_utc(self):
        moment = datetime(2024, 5, 1, 14, 30, 5, 123456, tzinfo=timezone(timedelta(hours=2)))
        assert to_iso_utc(moment) == "2024-05-01T12:30:05.123Z"

    def test_to_iso_utc_naive_is_utc(self):
        assert to_iso_utc(datetime(2024, 5, 1, 12, 0)) == "2024-05-01T12:00:00.000Z"


class TestMapLinks:
    """Test Google Maps link construction."""

    def test_point_link(self):
        url = build_point_maps_url(GeoPoint(latitude=41.5, longitude=-87.25))
        assert url == "https://www.google.com/maps/search/?api=1&query=41.5,-87.25"

    def test_directions_link(self):
        url = build_directions_url(CHICAGO, DALLAS)
        assert url.startswith("https://www.google.com/maps/dir/?api=1&origin=41.8781%2C-87.6298")
        query = parse_qs(urlparse(url).query)
        assert query["origin"] == ["41.8781,-87.6298"]
        assert query["destination"] == ["32.7767,-96.797"]
        assert query["travelmode"] == ["driving"]
        assert "waypoints" not in query

    def test_multi_stop_link_with_three_stops(self):
        """First two stops become waypoints, the third the destination."""
        url = build_multi_stop_directions_url(CHICAGO, [TULSA, DALLAS, HOUSTON])
        query = parse_qs(urlparse(url).query)
        assert query["origin"] == [CHICAGO.as_param()]
        assert query["destination"] == [HOUSTON.as_param()]
        assert query["waypoints"] == [f"{TULSA.as_param()}|{DALLAS.as_param()}"]

    def test_multi_stop_link_with_one_stop(self):
        assert build_multi_stop_directions_url(CHICAGO, [DALLAS]) == build_directions_url(CHICAGO, DALLAS)

    def test_multi_stop_link_without_stops(self):
        """No stops degenerates to origin -> origin."""
        assert build_multi_stop_directions_url(CHICAGO, []) == build_directions_url(CHICAGO, CHICAGO)


def _stops():
    return [
        ResolvedStop(point=TULSA, label="Tulsa, OK", city="Tulsa", state="OK"),
        ResolvedStop(point=DALLAS, label="Dallas, TX", city="Dallas", state="TX"),
        ResolvedStop(point=HOUSTON, label="1600 Main St, Houston, TX"),
    ]


@pytest.mark.asyncio
class TestBuildItinerary:
    """Test sequential leg chaining."""

    async def test_legs_are_chained(self):
        router = FakeRouter()
        stops = _stops()
        itinerary = await build_itinerary(router, CHICAGO, "Chicago, IL", stops, DEPARTURE)

        assert len(itinerary.legs) == len(stops)
        assert [leg.index for leg in itinerary.legs] == [0, 1, 2]
        assert itinerary.legs[0].origin_point == CHICAGO
        assert itinerary.legs[0].origin_label == "Chicago, IL"
        for prev, nxt in zip(itinerary.legs, itinerary.legs[1:]):
            assert prev.destination_point == nxt.origin_point
            assert prev.destination_label == nxt.origin_label

        assert router.calls == [(CHICAGO, TULSA), (TULSA, DALLAS), (DALLAS, HOUSTON)]

    async def test_leg_values(self):
        itinerary = await build_itinerary(FakeRouter(), CHICAGO, "Chicago, IL", _stops()[:1], DEPARTURE)
        leg = itinerary.legs[0]

        assert leg.distance_km == 100.0
        assert leg.distance_miles == 62.1
        assert leg.duration_seconds == 3661
        assert leg.duration_human == "1h 1m"
        assert leg.arrival == DEPARTURE + timedelta(seconds=3661)
        assert leg.destination_city == "Tulsa"
        assert leg.directions_url == build_directions_url(CHICAGO, TULSA)

    async def test_duration_rounds_half_up(self):
        router = FakeRouter(estimate=RouteEstimate(distance_meters=1500, duration_seconds=12.5))
        itinerary = await build_itinerary(router, CHICAGO, "Chicago, IL", _stops()[:1], DEPARTURE)
        assert itinerary.legs[0].duration_seconds == 13

    async def test_totals_and_arrivals(self):
        itinerary = await build_itinerary(FakeRouter(), CHICAGO, "Chicago, IL", _stops(), DEPARTURE)

        assert itinerary.total_distance_km == pytest.approx(sum(l.distance_km for l in itinerary.legs))
        assert itinerary.total_duration_seconds == 3 * 3661
        assert itinerary.total_distance_miles == 186.4
        assert itinerary.final_arrival == itinerary.legs[-1].arrival
        assert itinerary.final_arrival == DEPARTURE + timedelta(seconds=3 * 3661)
        assert itinerary.legs[1].arrival == itinerary.legs[0].arrival + timedelta(seconds=3661)
        assert itinerary.legs[-1].cumulative_duration_seconds == itinerary.total_duration_seconds
        assert itinerary.directions_url == build_multi_stop_directions_url(
            CHICAGO, [TULSA, DALLAS, HOUSTON]
        )

    async def test_missing_route_aborts(self):
        router = FakeRouter(missing=[DALLAS])
        with pytest.raises(NotFoundError, match="No route found from Tulsa, OK to Dallas, TX"):
            await build_itinerary(router, CHICAGO, "Chicago, IL", _stops(), DEPARTURE)
        # the third leg is never attempted
        assert len(router.calls) == 2

    async def test_empty_stop_list(self):
        with pytest.raises(InvalidRequestError):
            await build_itinerary(FakeRouter(), CHICAGO, "Chicago, IL", [], DEPARTURE)

    async def test_gpx_export(self):
        itinerary = await build_itinerary(FakeRouter(), CHICAGO, "Chicago, IL", _stops(), DEPARTURE)
        gpx = gpxpy.parse(create_itinerary_gpx(itinerary))

        assert [w.name for w in gpx.waypoints] == [
            "Chicago, IL", "Tulsa, OK", "Dallas, TX", "1600 Main St, Houston, TX",
        ]
        assert len(gpx.routes[0].points) == 4
        assert gpx.waypoints[-1].latitude == pytest.approx(HOUSTON.latitude)
