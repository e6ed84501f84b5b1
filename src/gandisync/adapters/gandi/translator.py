"""Translate Gandi payloads into domain records and back."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gandisync.domain.model import DNSRecord, Domain, EmailForward, WebRedirection

from .schema import (
    DomainPayload,
    ForwardCreateRequest,
    ForwardPayload,
    ForwardUpdateRequest,
    RecordPayload,
    RecordWriteRequest,
    WebRedirectionCreateRequest,
    WebRedirectionPayload,
    WebRedirectionUpdateRequest,
)

if TYPE_CHECKING:
    from gandisync.domain.identity import (
        DNSRecordKey,
        EmailForwardKey,
        WebRedirectionKey,
    )


def parse_domain(payload: DomainPayload) -> Domain:
    return Domain(fqdn=payload.fqdn, nameservers=tuple(payload.nameservers))


def parse_record(payload: RecordPayload, key: DNSRecordKey) -> DNSRecord:
    return DNSRecord(
        zone=key.zone,
        name=payload.name,
        type=payload.type,
        ttl=payload.ttl,
        href=payload.href,
        values=tuple(payload.values),
    )


def parse_web_redirection(
    payload: WebRedirectionPayload, key: WebRedirectionKey
) -> WebRedirection:
    return WebRedirection(
        domain=key.domain,
        host=payload.host,
        url=payload.url,
        protocol=payload.protocol,
        type=payload.type,
        cert_status=payload.cert_status,
        cert_uuid=payload.cert_uuid,
    )


def parse_forward(payload: ForwardPayload, key: EmailForwardKey) -> EmailForward:
    return EmailForward(
        local_part=payload.source,
        domain=key.domain,
        destinations=tuple(payload.destinations),
    )


def record_request(record: DNSRecord) -> RecordWriteRequest:
    return RecordWriteRequest(rrset_values=list(record.values), rrset_ttl=record.ttl)


def web_redirection_create_request(redirection: WebRedirection) -> WebRedirectionCreateRequest:
    return WebRedirectionCreateRequest(
        host=redirection.host,
        url=redirection.url,
        override=redirection.override,
        protocol=str(redirection.protocol),
        type=str(redirection.type),
    )


def web_redirection_update_request(redirection: WebRedirection) -> WebRedirectionUpdateRequest:
    return WebRedirectionUpdateRequest(
        url=redirection.url,
        override=redirection.override,
        protocol=str(redirection.protocol),
        type=str(redirection.type),
    )


def forward_create_request(forward: EmailForward) -> ForwardCreateRequest:
    return ForwardCreateRequest(source=forward.local_part, destinations=list(forward.destinations))


def forward_update_request(forward: EmailForward) -> ForwardUpdateRequest:
    return ForwardUpdateRequest(destinations=list(forward.destinations))
