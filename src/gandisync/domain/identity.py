"""Bidirectional codecs between compound remote keys and opaque identifiers.

Identifiers are persisted by the host as its only handle on a managed
resource, so the formats below must stay stable:

- domain: ``fqdn``
- DNS record: ``zone/name/type``
- web redirection: ``host`` (the domain is re-derived or taken from prior state)
- email forward: ``local_part@domain``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Protocol

from gandisync.domain.model import DNSRecord, Domain, EmailForward, WebRedirection
from gandisync.domain.validation import derive_domain

if TYPE_CHECKING:
    from gandisync.domain.model import ResourceKind

log = logging.getLogger(__name__)

RECORD_SEPARATOR = "/"
EMAIL_SEPARATOR = "@"


class IdentifierDecodeError(ValueError):
    """Raised when an identifier does not match its variant's format."""

    def __init__(self, message: str, *, field: str = "identifier") -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True, slots=True)
class DomainKey:
    fqdn: str


@dataclass(frozen=True, slots=True)
class DNSRecordKey:
    zone: str
    name: str
    type: str


@dataclass(frozen=True, slots=True)
class WebRedirectionKey:
    domain: str
    host: str


@dataclass(frozen=True, slots=True)
class EmailForwardKey:
    local_part: str
    domain: str


def changed_key_fields(current: object, desired: object) -> tuple[str, ...]:
    """Names of key fields whose values differ between two keys of the same type."""

    return tuple(
        field.name
        for field in fields(current)  # type: ignore[arg-type]
        if getattr(current, field.name) != getattr(desired, field.name)
    )


class IdentityCodec[R, K](Protocol):
    kind: ResourceKind

    def key_for(self, resource: R, *, prior: R | None = None) -> K: ...

    def encode(self, key: K) -> str: ...

    def decode(self, identifier: str, *, prior: R | None = None) -> K: ...


class DomainCodec:
    kind = Domain.KIND

    def key_for(self, resource: Domain, *, prior: Domain | None = None) -> DomainKey:
        del prior
        return DomainKey(resource.fqdn)

    def encode(self, key: DomainKey) -> str:
        return key.fqdn

    def decode(self, identifier: str, *, prior: Domain | None = None) -> DomainKey:
        del prior
        if not identifier:
            raise IdentifierDecodeError("empty domain identifier")
        return DomainKey(identifier)


class DNSRecordCodec:
    """``zone/name/type``.

    A zone or name containing ``/`` cannot round-trip; decoding such an
    identifier fails instead of guessing where the segments split.
    """

    kind = DNSRecord.KIND

    def key_for(self, resource: DNSRecord, *, prior: DNSRecord | None = None) -> DNSRecordKey:
        del prior
        return DNSRecordKey(zone=resource.zone, name=resource.name, type=resource.type)

    def encode(self, key: DNSRecordKey) -> str:
        return RECORD_SEPARATOR.join((key.zone, key.name, key.type))

    def decode(self, identifier: str, *, prior: DNSRecord | None = None) -> DNSRecordKey:
        del prior
        parts = identifier.split(RECORD_SEPARATOR)
        if len(parts) != 3 or not all(parts):  # noqa: PLR2004
            raise IdentifierDecodeError(
                f"{identifier!r} is not of the form zone{RECORD_SEPARATOR}name"
                f"{RECORD_SEPARATOR}type"
            )
        zone, name, record_type = parts
        return DNSRecordKey(zone=zone, name=name, type=record_type)


class WebRedirectionCodec:
    """The identifier is the host alone.

    The domain comes from, in order: the record itself, the prior state, or the
    last two labels of the host.
    """

    kind = WebRedirection.KIND

    def key_for(
        self, resource: WebRedirection, *, prior: WebRedirection | None = None
    ) -> WebRedirectionKey:
        domain = resource.domain or (prior.domain if prior is not None else None)
        if not domain:
            domain = self._derive(resource.host)
        return WebRedirectionKey(domain=domain, host=resource.host)

    def encode(self, key: WebRedirectionKey) -> str:
        return key.host

    def decode(
        self, identifier: str, *, prior: WebRedirection | None = None
    ) -> WebRedirectionKey:
        if not identifier:
            raise IdentifierDecodeError("empty web redirection identifier")
        domain = prior.domain if prior is not None and prior.domain else None
        if domain is None:
            domain = self._derive(identifier)
        return WebRedirectionKey(domain=domain, host=identifier)

    @staticmethod
    def _derive(host: str) -> str:
        try:
            domain = derive_domain(host)
        except ValueError as exc:
            raise IdentifierDecodeError(str(exc), field="domain") from exc
        log.warning(
            "Derived domain %s from host %s using its last two labels; "
            "set the domain explicitly for multi-label public suffixes",
            domain,
            host,
        )
        return domain


class EmailForwardCodec:
    kind = EmailForward.KIND

    def key_for(
        self, resource: EmailForward, *, prior: EmailForward | None = None
    ) -> EmailForwardKey:
        del prior
        return EmailForwardKey(local_part=resource.local_part, domain=resource.domain)

    def encode(self, key: EmailForwardKey) -> str:
        return f"{key.local_part}{EMAIL_SEPARATOR}{key.domain}"

    def decode(self, identifier: str, *, prior: EmailForward | None = None) -> EmailForwardKey:
        del prior
        local_part, sep, domain = identifier.partition(EMAIL_SEPARATOR)
        if not sep or not local_part or not domain:
            raise IdentifierDecodeError(f"{identifier!r} is not of the form local_part@domain")
        return EmailForwardKey(local_part=local_part, domain=domain)
