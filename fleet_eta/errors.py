"""Typed errors for ETA computation.

Every failure in the request pipeline is one of four kinds. Each kind maps
to an HTTP-style status so a transport layer can relay it unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional


class ErrorKind(str, Enum):
    """Taxonomy of request failures."""
    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    UPSTREAM_FAILURE = "upstream_failure"
    INTERNAL = "internal"


@dataclass
class EtaError(Exception):
    """Base error for the ETA domain.

    Attributes:
        message: Human-readable detail, shown verbatim to chat users
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    status: ClassVar[int] = 500

    def __str__(self) -> str:
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidRequestError(EtaError):
    """Missing or contradictory input, or a location that cannot be geocoded."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_REQUEST
    status: ClassVar[int] = 400


@dataclass
class NotFoundError(EtaError):
    """Unknown vehicle, vehicle without GPS data, or no route between points."""

    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND
    status: ClassVar[int] = 404


@dataclass
class UpstreamError(EtaError):
    """A collaborator answered with a non-success status or a malformed body.

    Attributes:
        service: Name of the failing collaborator (samsara, nominatim, ...)
        status_code: HTTP status returned by the collaborator, if any
    """

    service: str = ""
    status_code: Optional[int] = None

    kind: ClassVar[ErrorKind] = ErrorKind.UPSTREAM_FAILURE
    status: ClassVar[int] = 502


@dataclass
class InternalError(EtaError):
    """Anything unexpected, including missing server configuration."""
