"""Public domain model surface."""

from __future__ import annotations

from gandisync.domain.model.enums import (
    DNS_RECORD_TYPES,
    CertificateStatus,
    RedirectionProtocol,
    RedirectionType,
    ResourceKind,
)
from gandisync.domain.model.resources import (
    DEFAULT_REDIRECTION_PROTOCOL,
    DEFAULT_REDIRECTION_TYPE,
    DNSRecord,
    Domain,
    EmailForward,
    ManagedResource,
    WebRedirection,
)

__all__ = [  # noqa: RUF022
    # resources
    "Domain",
    "DNSRecord",
    "WebRedirection",
    "EmailForward",
    "ManagedResource",
    # defaults
    "DEFAULT_REDIRECTION_PROTOCOL",
    "DEFAULT_REDIRECTION_TYPE",
    # enums
    "CertificateStatus",
    "DNS_RECORD_TYPES",
    "RedirectionProtocol",
    "RedirectionType",
    "ResourceKind",
]
