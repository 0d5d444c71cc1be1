"""Clients for the external services the pipeline depends on."""

from .chat import TelegramNotifier
from .fleet import SamsaraClient
from .routing import NominatimGeocoder, OsrmRouter

__all__ = [
    "TelegramNotifier",
    "SamsaraClient",
    "NominatimGeocoder",
    "OsrmRouter",
]
