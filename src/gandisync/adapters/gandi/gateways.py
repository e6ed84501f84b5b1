"""Gandi implementations of the remote gateway port, one per resource variant."""

from __future__ import annotations

from http import HTTPStatus
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from gandisync.domain.ports.gateway import GatewayError, GatewayPayloadError

from .client import path_segment
from .schema import DomainPayload, ForwardPayload, RecordPayload, WebRedirectionPayload
from .translator import (
    forward_create_request,
    forward_update_request,
    parse_domain,
    parse_forward,
    parse_record,
    parse_web_redirection,
    record_request,
    web_redirection_create_request,
    web_redirection_update_request,
)

if TYPE_CHECKING:
    from gandisync.domain.identity import (
        DNSRecordKey,
        DomainKey,
        EmailForwardKey,
        WebRedirectionKey,
    )
    from gandisync.domain.model import DNSRecord, Domain, EmailForward, WebRedirection

    from .client import GandiClient, JsonPayload

log = getLogger(__name__)


def _validate[M: BaseModel](model: type[M], payload: JsonPayload | None, what: str) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise GatewayPayloadError(f"unexpected {what} payload: {exc}") from exc


def _dump(request: BaseModel) -> dict[str, object]:
    return request.model_dump(exclude_none=True)


class DomainGateway:
    """Registered domains are read-only."""

    def __init__(self, client: GandiClient) -> None:
        self._client = client

    def get(self, key: DomainKey) -> Domain:
        payload = self._client.call("GET", f"/v5/domain/domains/{path_segment(key.fqdn)}")
        return parse_domain(_validate(DomainPayload, payload, "domain"))


class LiveDNSRecordGateway:
    def __init__(self, client: GandiClient) -> None:
        self._client = client

    @staticmethod
    def _path(key: DNSRecordKey) -> str:
        return (
            f"/v5/livedns/domains/{path_segment(key.zone)}/records/"
            f"{path_segment(key.name)}/{path_segment(key.type)}"
        )

    def get(self, key: DNSRecordKey) -> DNSRecord:
        payload = self._client.call("GET", self._path(key))
        return parse_record(_validate(RecordPayload, payload, "record"), key)

    def create(self, key: DNSRecordKey, resource: DNSRecord) -> None:
        self._client.call("POST", self._path(key), body=_dump(record_request(resource)))

    def update(self, key: DNSRecordKey, resource: DNSRecord) -> None:
        self._client.call("PUT", self._path(key), body=_dump(record_request(resource)))

    def delete(self, key: DNSRecordKey) -> None:
        self._client.call("DELETE", self._path(key))


class WebRedirectionGateway:
    def __init__(self, client: GandiClient) -> None:
        self._client = client

    @staticmethod
    def _collection(key: WebRedirectionKey) -> str:
        return f"/v5/domain/domains/{path_segment(key.domain)}/webredirs"

    def _path(self, key: WebRedirectionKey) -> str:
        return f"{self._collection(key)}/{path_segment(key.host)}"

    def get(self, key: WebRedirectionKey) -> WebRedirection:
        payload = self._client.call("GET", self._path(key))
        return parse_web_redirection(
            _validate(WebRedirectionPayload, payload, "web redirection"), key
        )

    def create(self, key: WebRedirectionKey, resource: WebRedirection) -> None:
        self._client.call(
            "POST",
            self._collection(key),
            body=_dump(web_redirection_create_request(resource)),
        )

    def update(self, key: WebRedirectionKey, resource: WebRedirection) -> None:
        self._client.call(
            "PATCH", self._path(key), body=_dump(web_redirection_update_request(resource))
        )

    def delete(self, key: WebRedirectionKey) -> None:
        self._client.call("DELETE", self._path(key))


class EmailForwardGateway:
    """Email forwards are looked up by listing the domain's forwards.

    The list endpoint answers 200 with no match for a missing source; that case
    is reported as a 404 so it classifies like every other absence.
    """

    def __init__(self, client: GandiClient) -> None:
        self._client = client

    @staticmethod
    def _collection(key: EmailForwardKey) -> str:
        return f"/v5/email/forwards/{path_segment(key.domain)}"

    def _path(self, key: EmailForwardKey) -> str:
        return f"{self._collection(key)}/{path_segment(key.local_part)}"

    def get(self, key: EmailForwardKey) -> EmailForward:
        payload = self._client.call(
            "GET", self._collection(key), params={"source": key.local_part}
        )
        if not isinstance(payload, list):
            raise GatewayPayloadError("unexpected email forward listing payload")
        for item in payload:
            forward = _validate(ForwardPayload, item, "email forward")  # type: ignore[arg-type]
            if forward.source == key.local_part:
                return parse_forward(forward, key)
        log.debug("No forward with source %s on %s", key.local_part, key.domain)
        raise GatewayError(
            f"no forwarding found with source {key.local_part}",
            status_code=HTTPStatus.NOT_FOUND,
        )

    def create(self, key: EmailForwardKey, resource: EmailForward) -> None:
        self._client.call(
            "POST", self._collection(key), body=_dump(forward_create_request(resource))
        )

    def update(self, key: EmailForwardKey, resource: EmailForward) -> None:
        self._client.call("PUT", self._path(key), body=_dump(forward_update_request(resource)))

    def delete(self, key: EmailForwardKey) -> None:
        self._client.call("DELETE", self._path(key))
