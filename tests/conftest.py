"""Shared fakes for the ETA pipeline tests."""

from datetime import datetime, timezone

import pytest

from fleet_eta.models import GeoPoint
from fleet_eta.pipeline import EtaPipeline
from fleet_eta.tools.base import GpsSnapshot, RouteEstimate, VehiclePage, VehicleRef


DEPARTURE = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

CHICAGO = GeoPoint(latitude=41.8781, longitude=-87.6298)
DALLAS = GeoPoint(latitude=32.7767, longitude=-96.7970)
TULSA = GeoPoint(latitude=36.1540, longitude=-95.9928)
HOUSTON = GeoPoint(latitude=29.7604, longitude=-95.3698)
TRUCK_FIX = GeoPoint(latitude=35.4676, longitude=-97.5164)

PLACES = {
    "Chicago, IL, USA": CHICAGO,
    "Dallas, TX, USA": DALLAS,
    "Tulsa, OK, USA": TULSA,
    "1600 Main St, Houston, TX": HOUSTON,
}


class FakeFleet:
    """Vehicle directory + GPS source backed by in-memory pages."""

    def __init__(self, pages=None, snapshots=None):
        self.pages = pages if pages is not None else [
            [VehicleRef(id="1", name="4040"), VehicleRef(id="2", name=" 5051 ")],
        ]
        self.snapshots = snapshots if snapshots is not None else {
            "2": GpsSnapshot(
                latitude=TRUCK_FIX.latitude,
                longitude=TRUCK_FIX.longitude,
                reverse_geo_label="I-35, Oklahoma City, OK",
            ),
        }
        self.cursors = []

    async def list_vehicles(self, cursor=None):
        self.cursors.append(cursor)
        idx = int(cursor) if cursor else 0
        next_cursor = str(idx + 1) if idx + 1 < len(self.pages) else None
        return VehiclePage(vehicles=self.pages[idx], next_cursor=next_cursor)

    async def get_snapshot(self, vehicle_id):
        return self.snapshots.get(vehicle_id)


class FakeGeocoder:
    def __init__(self, places=None):
        self.places = places if places is not None else PLACES
        self.queries = []

    async def geocode(self, text):
        self.queries.append(text)
        return self.places.get(text)


class FakeRouter:
    """Returns a fixed 100 km / 1 h 1 min 1 s leg unless told otherwise."""

    def __init__(self, estimate=None, missing=()):
        self.estimate = estimate or RouteEstimate(distance_meters=100_000, duration_seconds=3661.4)
        self.missing = set(missing)
        self.calls = []

    async def route(self, origin, destination):
        self.calls.append((origin, destination))
        if destination in self.missing:
            return None
        return self.estimate


class FakeNotifier:
    def __init__(self):
        self.sent = []

    async def send_message(self, chat_id, text):
        self.sent.append((chat_id, text))
        return True


@pytest.fixture
def fleet():
    return FakeFleet()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def router():
    return FakeRouter()


@pytest.fixture
def pipeline(fleet, geocoder, router):
    return EtaPipeline(
        vehicles=fleet,
        gps=fleet,
        geocoder=geocoder,
        router=router,
        clock=lambda: DEPARTURE,
    )
