from __future__ import annotations

from dataclasses import replace

import httpx
import pytest

from gandisync.adapters.gandi import (
    DomainGateway,
    EmailForwardGateway,
    GandiClient,
    LiveDNSRecordGateway,
    WebRedirectionGateway,
)
from gandisync.domain.identity import (
    DNSRecordKey,
    DomainKey,
    EmailForwardKey,
    WebRedirectionKey,
)
from gandisync.domain.model import DNSRecord, EmailForward, WebRedirection
from gandisync.domain.ports import GatewayError, GatewayPayloadError, RemoteGateway
from tests.support.http import Recorder, make_client_factory, make_config, request_json

RECORD_PATH = "/v5/livedns/domains/example.com/records/www/A"
WEBREDIRS_PATH = "/v5/domain/domains/example.com/webredirs"
FORWARDS_PATH = "/v5/email/forwards/example.com"

RECORD_KEY = DNSRecordKey(zone="example.com", name="www", type="A")
REDIRECTION_KEY = WebRedirectionKey(domain="example.com", host="shop.example.com")
FORWARD_KEY = EmailForwardKey(local_part="sales", domain="example.com")


def _client(recorder: Recorder) -> GandiClient:
    return GandiClient(config=make_config(), client_factory=make_client_factory(recorder))


def test_write_gateways_satisfy_remote_port() -> None:
    client = _client(Recorder({}))

    assert isinstance(LiveDNSRecordGateway(client), RemoteGateway)
    assert isinstance(WebRedirectionGateway(client), RemoteGateway)
    assert isinstance(EmailForwardGateway(client), RemoteGateway)
    assert not isinstance(DomainGateway(client), RemoteGateway)


def test_domain_get_tolerates_missing_nameservers() -> None:
    recorder = Recorder(
        {
            ("GET", "/v5/domain/domains/example.com"): httpx.Response(
                200, json={"fqdn": "example.com", "nameservers": None, "status": ["active"]}
            )
        }
    )

    domain = DomainGateway(_client(recorder)).get(DomainKey("example.com"))

    assert domain.fqdn == "example.com"
    assert domain.nameservers == ()


def test_record_get_parses_rrset() -> None:
    recorder = Recorder(
        {
            ("GET", RECORD_PATH): httpx.Response(
                200,
                json={
                    "rrset_name": "www",
                    "rrset_type": "A",
                    "rrset_ttl": 10800,
                    "rrset_values": ["192.0.2.2", "192.0.2.1"],
                    "rrset_href": f"https://api.gandi.net{RECORD_PATH}",
                },
            )
        }
    )

    record = LiveDNSRecordGateway(_client(recorder)).get(RECORD_KEY)

    assert record == DNSRecord(
        zone="example.com",
        name="www",
        type="A",
        values=("192.0.2.2", "192.0.2.1"),
        ttl=10800,
        href=f"https://api.gandi.net{RECORD_PATH}",
    )


def test_record_get_rejects_incomplete_payload() -> None:
    recorder = Recorder({("GET", RECORD_PATH): httpx.Response(200, json={"rrset_name": "www"})})

    with pytest.raises(GatewayPayloadError):
        LiveDNSRecordGateway(_client(recorder)).get(RECORD_KEY)


def test_record_writes() -> None:
    created = httpx.Response(201, json={"message": "DNS Record Created"})
    recorder = Recorder(
        {
            ("POST", RECORD_PATH): created,
            ("PUT", RECORD_PATH): created,
            ("DELETE", RECORD_PATH): httpx.Response(204),
        }
    )
    gateway = LiveDNSRecordGateway(_client(recorder))
    record = DNSRecord(zone="example.com", name="www", type="A", values=("192.0.2.1",))

    gateway.create(RECORD_KEY, record)
    gateway.update(RECORD_KEY, replace(record, ttl=600))
    gateway.delete(RECORD_KEY)

    assert [request.method for request in recorder.requests] == ["POST", "PUT", "DELETE"]
    assert request_json(recorder.requests[0]) == {"rrset_values": ["192.0.2.1"]}
    assert request_json(recorder.requests[1]) == {"rrset_values": ["192.0.2.1"], "rrset_ttl": 600}


def test_record_missing_is_a_404() -> None:
    with pytest.raises(GatewayError) as exc:
        LiveDNSRecordGateway(_client(Recorder({}))).get(RECORD_KEY)

    assert exc.value.status_code == 404


def test_web_redirection_round_trip_paths() -> None:
    recorder = Recorder(
        {
            ("POST", WEBREDIRS_PATH): httpx.Response(201, json={"message": "created"}),
            ("PATCH", f"{WEBREDIRS_PATH}/shop.example.com"): httpx.Response(
                202, json={"message": "updated"}
            ),
            ("GET", f"{WEBREDIRS_PATH}/shop.example.com"): httpx.Response(
                200,
                json={
                    "host": "shop.example.com",
                    "url": "https://example.com/new",
                    "type": "http302",
                    "protocol": "httpsonly",
                    "cert_status": "pending",
                    "cert_uuid": "cert-1",
                    "created_at": "2024-01-01T00:00:00Z",
                },
            ),
        }
    )
    gateway = WebRedirectionGateway(_client(recorder))
    desired = WebRedirection(
        host="shop.example.com",
        url="https://example.com/new",
        domain="example.com",
        override=True,
        type="http302",
        protocol="httpsonly",
    )

    gateway.create(REDIRECTION_KEY, desired)
    gateway.update(REDIRECTION_KEY, desired)
    observed = gateway.get(REDIRECTION_KEY)

    assert request_json(recorder.requests[0]) == {
        "host": "shop.example.com",
        "url": "https://example.com/new",
        "override": True,
        "protocol": "httpsonly",
        "type": "http302",
    }
    assert request_json(recorder.requests[1]) == {
        "url": "https://example.com/new",
        "override": True,
        "protocol": "httpsonly",
        "type": "http302",
    }
    assert observed.domain == "example.com"
    assert observed.override is False
    assert (observed.cert_status, observed.cert_uuid) == ("pending", "cert-1")


def test_email_forward_get_filters_listing_by_source() -> None:
    recorder = Recorder(
        {
            ("GET", FORWARDS_PATH): httpx.Response(
                200,
                json=[
                    {"source": "salesteam", "destinations": ["x@y.com"]},
                    {"source": "sales", "destinations": ["b@x.com", "a@x.com"]},
                ],
            )
        }
    )

    forward = EmailForwardGateway(_client(recorder)).get(FORWARD_KEY)

    assert recorder.last.url.params["source"] == "sales"
    assert forward == EmailForward(
        local_part="sales", domain="example.com", destinations=("b@x.com", "a@x.com")
    )


@pytest.mark.parametrize("listing", [[], [{"source": "salesteam", "destinations": ["x@y.com"]}]])
def test_email_forward_without_match_is_a_404(listing: list[object]) -> None:
    recorder = Recorder({("GET", FORWARDS_PATH): httpx.Response(200, json=listing)})

    with pytest.raises(GatewayError) as exc:
        EmailForwardGateway(_client(recorder)).get(FORWARD_KEY)

    assert exc.value.status_code == 404
    assert not isinstance(exc.value, GatewayPayloadError)


def test_email_forward_listing_must_be_a_list() -> None:
    recorder = Recorder({("GET", FORWARDS_PATH): httpx.Response(200, json={"source": "sales"})})

    with pytest.raises(GatewayPayloadError):
        EmailForwardGateway(_client(recorder)).get(FORWARD_KEY)


def test_email_forward_writes() -> None:
    recorder = Recorder(
        {
            ("POST", FORWARDS_PATH): httpx.Response(201, json={"message": "created"}),
            ("PUT", f"{FORWARDS_PATH}/sales"): httpx.Response(200, json={"message": "updated"}),
            ("DELETE", f"{FORWARDS_PATH}/sales"): httpx.Response(204),
        }
    )
    gateway = EmailForwardGateway(_client(recorder))
    forward = EmailForward(local_part="sales", domain="example.com", destinations=("a@x.com",))

    gateway.create(FORWARD_KEY, forward)
    gateway.update(FORWARD_KEY, forward)
    gateway.delete(FORWARD_KEY)

    assert request_json(recorder.requests[0]) == {"source": "sales", "destinations": ["a@x.com"]}
    assert request_json(recorder.requests[1]) == {"destinations": ["a@x.com"]}
    assert recorder.requests[2].url.path == f"{FORWARDS_PATH}/sales"


def test_record_delete_redirect_is_not_success() -> None:
    recorder = Recorder({("DELETE", RECORD_PATH): httpx.Response(302)})

    with pytest.raises(GatewayError) as exc:
        LiveDNSRecordGateway(_client(recorder)).delete(RECORD_KEY)

    assert exc.value.status_code == 302
