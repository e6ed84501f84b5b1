"""Ports implemented by adapters."""

from __future__ import annotations

from .gateway import GatewayError, GatewayPayloadError, ReadGateway, RemoteGateway

__all__ = ["GatewayError", "GatewayPayloadError", "ReadGateway", "RemoteGateway"]
