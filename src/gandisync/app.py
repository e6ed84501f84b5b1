"""Application wiring: reconcilers backed by the Gandi gateway."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from gandisync.adapters.gandi import (
    DomainGateway,
    EmailForwardGateway,
    GandiClient,
    LiveDNSRecordGateway,
    WebRedirectionGateway,
)
from gandisync.config import get_gandi_config
from gandisync.domain.identity import (
    DNSRecordCodec,
    DomainCodec,
    EmailForwardCodec,
    WebRedirectionCodec,
)
from gandisync.domain.model import ResourceKind
from gandisync.domain.reconciliation import Reconciler

if TYPE_CHECKING:
    from collections.abc import Callable

    from gandisync.adapters.http_resilience import ResilientClient
    from gandisync.config import GandiConfig, ResilienceConfig

log = getLogger(__name__)


def build_reconciler(
    kind: ResourceKind | str,
    *,
    config: GandiConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> Reconciler[Any, Any]:
    """Return a reconciler for ``kind`` talking to the Gandi API."""

    resource_kind = ResourceKind(kind)
    effective_config = config or get_gandi_config()
    client = GandiClient(config=effective_config, client_factory=client_factory)
    if effective_config.dry_run:
        log.info("Gandi dry-run mode: write requests are validated but not applied")

    match resource_kind:
        case ResourceKind.DOMAIN:
            return Reconciler(codec=DomainCodec(), gateway=DomainGateway(client))
        case ResourceKind.DNS_RECORD:
            return Reconciler(codec=DNSRecordCodec(), gateway=LiveDNSRecordGateway(client))
        case ResourceKind.WEB_REDIRECTION:
            return Reconciler(codec=WebRedirectionCodec(), gateway=WebRedirectionGateway(client))
        case ResourceKind.EMAIL_FORWARD:
            return Reconciler(codec=EmailForwardCodec(), gateway=EmailForwardGateway(client))
