"""Typed records for every resource variant under management.

Records are frozen: reconciliation produces new values instead of mutating
the ones a caller holds. Unordered multi-valued fields are kept as tuples and
sorted by ``normalize_resource`` rather than on construction, so a record
still shows exactly what the caller or the remote service supplied until it is
normalized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .enums import RedirectionProtocol, RedirectionType, ResourceKind

DEFAULT_REDIRECTION_PROTOCOL = RedirectionProtocol.HTTPS
DEFAULT_REDIRECTION_TYPE = RedirectionType.HTTP301


@dataclass(frozen=True, slots=True, kw_only=True)
class Domain:
    """A registered domain. Read-only: it can be observed and imported only."""

    KIND: ClassVar[ResourceKind] = ResourceKind.DOMAIN
    COMPUTED_FIELDS: ClassVar[frozenset[str]] = frozenset({"nameservers"})
    LOCAL_FIELDS: ClassVar[frozenset[str]] = frozenset()

    fqdn: str
    nameservers: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class DNSRecord:
    """A LiveDNS resource record set addressed by ``zone``, ``name`` and ``type``."""

    KIND: ClassVar[ResourceKind] = ResourceKind.DNS_RECORD
    COMPUTED_FIELDS: ClassVar[frozenset[str]] = frozenset({"href"})
    LOCAL_FIELDS: ClassVar[frozenset[str]] = frozenset()

    zone: str
    name: str
    type: str
    values: tuple[str, ...] = ()
    ttl: int | None = None
    href: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class WebRedirection:
    """An HTTP redirection from ``host`` to ``url``.

    ``domain`` may be left empty, in which case it is derived from ``host``.
    """

    KIND: ClassVar[ResourceKind] = ResourceKind.WEB_REDIRECTION
    COMPUTED_FIELDS: ClassVar[frozenset[str]] = frozenset({"cert_status", "cert_uuid"})
    # not echoed back by the remote service
    LOCAL_FIELDS: ClassVar[frozenset[str]] = frozenset({"override"})

    host: str
    url: str
    domain: str | None = None
    override: bool = False
    protocol: str = DEFAULT_REDIRECTION_PROTOCOL
    type: str = DEFAULT_REDIRECTION_TYPE
    cert_status: str | None = None
    cert_uuid: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailForward:
    """Forwarding of ``local_part@domain`` to a set of destination addresses."""

    KIND: ClassVar[ResourceKind] = ResourceKind.EMAIL_FORWARD
    COMPUTED_FIELDS: ClassVar[frozenset[str]] = frozenset()
    LOCAL_FIELDS: ClassVar[frozenset[str]] = frozenset()

    local_part: str
    domain: str
    destinations: tuple[str, ...] = ()

    @property
    def source(self) -> str:
        return f"{self.local_part}@{self.domain}"

    @classmethod
    def from_source(
        cls, source: str, *, destinations: tuple[str, ...] | list[str] = ()
    ) -> EmailForward:
        """Build a forward from a full ``local@domain`` address (split on the first ``@``)."""

        local_part, sep, domain = source.partition("@")
        if not sep:
            raise ValueError(f"{source!r} is not an email address")
        return cls(local_part=local_part, domain=domain, destinations=tuple(destinations))


type ManagedResource = Domain | DNSRecord | WebRedirection | EmailForward
