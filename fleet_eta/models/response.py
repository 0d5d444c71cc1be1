"""Output models for ETA responses."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class GeoPoint(BaseModel):
    """GPS coordinates."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    class Config:
        frozen = True

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def as_param(self) -> str:
        """Format as a 'lat,lng' pair for map links."""
        return f"{self.latitude},{self.longitude}"

    @classmethod
    def from_tuple(cls, coords: tuple[float, float]) -> "GeoPoint":
        return cls(latitude=coords[0], longitude=coords[1])


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class VehicleLocation(_CamelModel):
    """Current position of the truck as reported by its GPS snapshot."""
    lat: float
    lng: float
    formatted_address: str | None = None
    maps_url: str


class OriginBlock(_CamelModel):
    label: str
    lat: float
    lng: float
    maps_url: str


class LegOrigin(_CamelModel):
    label: str
    lat: float
    lng: float


class LegDestination(_CamelModel):
    label: str
    city: str | None = None
    state: str | None = None
    lat: float
    lng: float


class LegResponse(_CamelModel):
    """A single origin-to-stop leg of the itinerary."""
    index: int = Field(..., ge=0)
    origin: LegOrigin
    destination: LegDestination
    distance_km: float = Field(..., ge=0)
    distance_miles: float = Field(..., ge=0)
    duration_seconds: int = Field(..., ge=0)
    duration_human: str
    arrival_iso: str
    maps_directions_url: str


class RouteSummary(_CamelModel):
    """Totals across all legs plus a link for the whole route."""
    total_distance_km: float = Field(..., ge=0)
    total_distance_miles: float = Field(..., ge=0)
    total_duration_seconds: int = Field(..., ge=0)
    total_duration_human: str
    final_arrival_iso: str
    maps_directions_url: str


class LegacyEta(_CamelModel):
    """Flattened ETA of a single-stop itinerary."""
    distance_km: float
    distance_miles: float
    duration_seconds: int
    duration_human: str
    arrival_iso: str


class LegacyDestination(_CamelModel):
    city: str | None = None
    state: str | None = None
    lat: float
    lng: float


class EtaResponse(_CamelModel):
    """Complete ETA response."""

    mode: Literal["truck", "city"]

    # truck mode only
    truck_number: str | None = None
    vehicle_name: str | None = None
    vehicle_location: VehicleLocation | None = None

    origin: OriginBlock
    legs: list[LegResponse] = Field(default_factory=list)
    summary: RouteSummary

    # single-stop itineraries only
    eta: LegacyEta | None = None
    destination: LegacyDestination | None = None

    def to_payload(self) -> dict:
        """Serialize with camelCase keys, omitting absent optional blocks."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorPayload(BaseModel):
    """Tagged error returned instead of an itinerary."""
    error: str = Field(..., description="Error kind, e.g. 'not_found'")
    detail: str
    status: int = Field(..., ge=400, le=599)
