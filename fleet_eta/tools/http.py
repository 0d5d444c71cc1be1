"""Shared JSON-over-HTTP helper for collaborator clients."""

import logging
from typing import Any

import httpx

from fleet_eta.errors import UpstreamError

logger = logging.getLogger(__name__)


async def fetch_json(
    service: str,
    method: str,
    url: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = 30.0,
    accept_statuses: tuple[int, ...] = (),
    **kwargs: Any,
) -> Any:
    """
    Perform one request and decode its JSON body.

    Any transport failure, non-2xx status or undecodable body is raised as
    an UpstreamError tagged with ``service``. Statuses listed in
    ``accept_statuses`` are decoded like a success so the caller can read
    the error body itself.
    """
    logger.debug("%s %s %s", service, method, url)
    async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise UpstreamError(
                message=f"{service} request failed: {e}",
                cause=e,
                service=service,
            ) from e

    if response.status_code >= 400 and response.status_code not in accept_statuses:
        raise UpstreamError(
            message=f"{service} error HTTP {response.status_code}: {response.text[:500]}",
            service=service,
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(
            message=f"{service} returned a malformed body",
            cause=e,
            service=service,
            status_code=response.status_code,
        ) from e
