"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    DOMAIN = "domain"
    DNS_RECORD = "dns_record"
    WEB_REDIRECTION = "web_redirection"
    EMAIL_FORWARD = "email_forward"


class RedirectionProtocol(StrEnum):
    HTTP = "http"
    HTTPS = "https"
    HTTPS_ONLY = "httpsonly"


class RedirectionType(StrEnum):
    CLOAK = "cloak"
    HTTP301 = "http301"
    HTTP302 = "http302"


class CertificateStatus(StrEnum):
    NONE = "none"
    PENDING = "pending"
    ACTIVE = "active"
    ERROR = "error"


# Record types accepted by LiveDNS.
DNS_RECORD_TYPES: frozenset[str] = frozenset(
    {
        "A",
        "AAAA",
        "ALIAS",
        "CAA",
        "CDS",
        "CNAME",
        "DNAME",
        "DS",
        "KEY",
        "LOC",
        "MX",
        "NAPTR",
        "NS",
        "OPENPGPKEY",
        "PTR",
        "RP",
        "SPF",
        "SRV",
        "SSHFP",
        "TLSA",
        "TXT",
        "WKS",
    }
)
