"""Public interface for the Gandi adapter."""

from __future__ import annotations

from .client import GandiClient
from .gateways import (
    DomainGateway,
    EmailForwardGateway,
    LiveDNSRecordGateway,
    WebRedirectionGateway,
)
from .schema import (
    DomainPayload,
    ErrorResponse,
    ForwardPayload,
    RecordPayload,
    WebRedirectionPayload,
)

__all__ = [
    "DomainGateway",
    "DomainPayload",
    "EmailForwardGateway",
    "ErrorResponse",
    "ForwardPayload",
    "GandiClient",
    "LiveDNSRecordGateway",
    "RecordPayload",
    "WebRedirectionGateway",
    "WebRedirectionPayload",
]
