"""Input models for ETA requests."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class StopInput(BaseModel):
    """A destination given as a free-form address or as a city/state pair."""

    city: str | None = None
    state: str | None = None
    address: str | None = Field(
        default=None,
        description="Free-form address; wins over city/state when both are given"
    )


class EtaRequest(BaseModel):
    """Request model for an ETA / itinerary computation.

    Accepts camelCase keys on the wire (``truckNumber``, ``originCity``...)
    as well as the snake_case field names.
    """

    query: str | None = Field(
        default=None,
        description="Free text such as 'ETA 5051 to Dallas TX' or 'Chicago IL to Dallas TX'"
    )

    # Vehicle-based origin
    truck_number: str | None = None

    # Single destination (kept for older single-stop clients)
    city: str | None = None
    state: str | None = None

    # City-based origin
    origin_city: str | None = None
    origin_state: str | None = None

    # Multiple stops, visited in order
    destinations: list[StopInput] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "truckNumber": "5051",
                "destinations": [
                    {"city": "Dallas", "state": "TX"},
                    {"address": "1600 Main St, Houston, TX"},
                ],
            }
        }
