"""Tools exposed to the ETA assistant."""

import json
from typing import Annotated

from fleet_eta.config import settings
from fleet_eta.models import EtaRequest, StopInput
from fleet_eta.pipeline import EtaPipeline


async def eta_lookup(
    query: Annotated[str, "The user's request, e.g. 'ETA 5051 to Dallas TX' or 'Chicago IL to Dallas TX'"],
    destinations: Annotated[
        list[str] | None,
        "Optional ordered list of stop addresses or 'City, ST' strings for multi-stop trips",
    ] = None,
) -> str:
    """
    Compute when a truck (or a trip from an origin city) arrives at its destinations.

    Returns the itinerary as JSON: every leg with distance in km and miles,
    drive time, arrival time (UTC) and a Google Maps link, plus totals.
    On failure returns a JSON object with "error" and "detail".
    """
    stops = [StopInput(address=d) for d in destinations or [] if d.strip()]
    request = EtaRequest(query=query, destinations=stops)

    pipeline = EtaPipeline.from_settings(settings)
    result = await pipeline.execute(request)

    return json.dumps(result.to_payload())
