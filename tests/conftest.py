from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gandisync.domain.identity import (
    DNSRecordCodec,
    DomainCodec,
    DomainKey,
    EmailForwardCodec,
    WebRedirectionCodec,
)
from gandisync.domain.model import Domain
from gandisync.domain.reconciliation import Reconciler
from tests.support.gateways import (
    FakeGateway,
    FakeReadOnlyGateway,
    observe_reversed,
    observe_web_redirection,
)

if TYPE_CHECKING:
    from gandisync.domain.identity import (
        DNSRecordKey,
        EmailForwardKey,
        WebRedirectionKey,
    )
    from gandisync.domain.model import DNSRecord, EmailForward, WebRedirection


@pytest.fixture
def record_gateway() -> FakeGateway[DNSRecord, DNSRecordKey]:
    return FakeGateway(observe=observe_reversed("values"))  # type: ignore[arg-type]


@pytest.fixture
def record_reconciler(
    record_gateway: FakeGateway[DNSRecord, DNSRecordKey],
) -> Reconciler[DNSRecord, DNSRecordKey]:
    return Reconciler(codec=DNSRecordCodec(), gateway=record_gateway)


@pytest.fixture
def redirection_gateway() -> FakeGateway[WebRedirection, WebRedirectionKey]:
    return FakeGateway(observe=observe_web_redirection)


@pytest.fixture
def redirection_reconciler(
    redirection_gateway: FakeGateway[WebRedirection, WebRedirectionKey],
) -> Reconciler[WebRedirection, WebRedirectionKey]:
    return Reconciler(codec=WebRedirectionCodec(), gateway=redirection_gateway)


@pytest.fixture
def forward_gateway() -> FakeGateway[EmailForward, EmailForwardKey]:
    return FakeGateway(observe=observe_reversed("destinations"))  # type: ignore[arg-type]


@pytest.fixture
def forward_reconciler(
    forward_gateway: FakeGateway[EmailForward, EmailForwardKey],
) -> Reconciler[EmailForward, EmailForwardKey]:
    return Reconciler(codec=EmailForwardCodec(), gateway=forward_gateway)


@pytest.fixture
def domain_gateway() -> FakeReadOnlyGateway[Domain, DomainKey]:
    return FakeReadOnlyGateway(
        {
            DomainKey("example.com"): Domain(
                fqdn="example.com",
                nameservers=("ns-2.gandi.net", "ns-1.gandi.net"),
            )
        }
    )


@pytest.fixture
def domain_reconciler(
    domain_gateway: FakeReadOnlyGateway[Domain, DomainKey],
) -> Reconciler[Domain, DomainKey]:
    return Reconciler(codec=DomainCodec(), gateway=domain_gateway)
