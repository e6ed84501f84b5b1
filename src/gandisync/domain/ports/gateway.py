"""Port for the remote service that owns the managed resources.

Gateways speak in domain records and compound keys. Every failure is raised as
``GatewayError`` carrying the status code the remote service reported, or
``None`` when no response was received at all.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class GatewayError(RuntimeError):
    """Raised by gateways when a remote call fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GatewayPayloadError(GatewayError):
    """Raised when the remote call succeeded but its payload could not be understood."""


@runtime_checkable
class ReadGateway[R, K](Protocol):
    """Read access to one resource variant."""

    def get(self, key: K) -> R: ...


@runtime_checkable
class RemoteGateway[R, K](ReadGateway[R, K], Protocol):
    """Full lifecycle access to one resource variant."""

    def create(self, key: K, resource: R) -> None: ...

    def update(self, key: K, resource: R) -> None: ...

    def delete(self, key: K) -> None: ...
