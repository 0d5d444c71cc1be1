"""Data models for ETA requests and responses."""

from .request import EtaRequest, StopInput
from .response import (
    EtaResponse,
    ErrorPayload,
    GeoPoint,
    LegDestination,
    LegOrigin,
    LegResponse,
    LegacyDestination,
    LegacyEta,
    OriginBlock,
    RouteSummary,
    VehicleLocation,
)

__all__ = [
    "EtaRequest",
    "StopInput",
    "EtaResponse",
    "ErrorPayload",
    "GeoPoint",
    "LegDestination",
    "LegOrigin",
    "LegResponse",
    "LegacyDestination",
    "LegacyEta",
    "OriginBlock",
    "RouteSummary",
    "VehicleLocation",
]
