"""Free-text query parser and request normalization.

Understands two shapes of chat message:

- "ETA 5051 to Dallas TX" / "5051 dallas tx": a truck number (the leftmost
  token containing a digit) with an optional destination.
- "Chicago IL to Dallas TX": origin city/state to destination city/state.

The last token on each side of a city pair is always the state code. A city
name containing a digit is read as a truck number; callers rely on that rule,
so it is kept as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

from fleet_eta.errors import InvalidRequestError
from fleet_eta.models import EtaRequest, StopInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VehicleIntent:
    """A truck number with an optional single destination."""
    truck_number: str
    city: Optional[str] = None
    state: Optional[str] = None
    mode: Literal["truck"] = "truck"


@dataclass(frozen=True)
class CityIntent:
    """Origin city/state to destination city/state."""
    origin_city: str
    origin_state: str
    city: Optional[str] = None
    state: Optional[str] = None
    mode: Literal["city"] = "city"


ParsedIntent = Union[VehicleIntent, CityIntent]


def _split_city_state(tokens: list[str]) -> tuple[str, str]:
    return " ".join(tokens[:-1]), tokens[-1]


def parse_freeform_query(text: str) -> Optional[ParsedIntent]:
    """
    Parse a chat message into a structured intent.

    Returns None when the text has neither shape; that is not an error,
    the caller falls back to the structured request fields.
    """
    tokens = text.split()
    if len(tokens) < 2:
        return None

    lower = [t.lower() for t in tokens]
    to_idx = lower.index("to") if "to" in lower else -1
    truck_idx = next(
        (i for i, t in enumerate(tokens) if any(c.isdigit() for c in t)),
        -1,
    )

    if truck_idx >= 0:
        truck_number = tokens[truck_idx]
        if truck_idx < to_idx < len(tokens) - 1:
            dest_tokens = tokens[to_idx + 1:]
        else:
            dest_tokens = tokens[truck_idx + 1:]

        if len(dest_tokens) >= 2:
            city, state = _split_city_state(dest_tokens)
            return VehicleIntent(truck_number=truck_number, city=city, state=state)
        return VehicleIntent(truck_number=truck_number)

    if 0 < to_idx < len(tokens) - 1:
        origin_tokens = tokens[:to_idx]
        dest_tokens = tokens[to_idx + 1:]
        if len(origin_tokens) >= 2 and len(dest_tokens) >= 2:
            origin_city, origin_state = _split_city_state(origin_tokens)
            city, state = _split_city_state(dest_tokens)
            return CityIntent(
                origin_city=origin_city,
                origin_state=origin_state,
                city=city,
                state=state,
            )

    return None


@dataclass(frozen=True)
class NormalizedRequest:
    """Request fields after applying the free-text query, plus the stop list."""
    truck_number: Optional[str]
    origin_city: Optional[str]
    origin_state: Optional[str]
    stops: tuple[StopInput, ...]


def normalize_request(request: EtaRequest) -> NormalizedRequest:
    """
    Merge a parsed free-text query into the structured fields.

    A parsed query overrides the truck number, the origin and the single
    destination it has values for. An explicit ``destinations`` list always
    wins over the query's destination.

    Raises:
        InvalidRequestError: when no destination can be determined
    """
    truck_number = request.truck_number
    city, state = request.city, request.state
    origin_city, origin_state = request.origin_city, request.origin_state

    if request.query and request.query.strip():
        parsed = parse_freeform_query(request.query)
        if parsed is None:
            logger.info("Could not parse query %r, using structured fields", request.query)
        elif isinstance(parsed, VehicleIntent):
            truck_number = parsed.truck_number
            city = parsed.city or city
            state = parsed.state or state
        else:
            origin_city = parsed.origin_city
            origin_state = parsed.origin_state
            city = parsed.city or city
            state = parsed.state or state

    if request.destinations:
        stops = tuple(request.destinations)
    elif city and state:
        stops = (StopInput(city=city, state=state),)
    else:
        raise InvalidRequestError("No destinations provided")

    return NormalizedRequest(
        truck_number=truck_number or None,
        origin_city=origin_city,
        origin_state=origin_state,
        stops=stops,
    )
