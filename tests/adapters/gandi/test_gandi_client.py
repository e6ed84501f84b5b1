from __future__ import annotations

import httpx
import pytest

from gandisync.adapters.gandi import GandiClient
from gandisync.adapters.gandi.client import path_segment
from gandisync.config import AuthScheme
from gandisync.domain.ports import GatewayError, GatewayPayloadError
from tests.support.http import Recorder, make_client_factory, make_config, request_json

RECORDS_PATH = "/v5/livedns/domains/example.com/records"


def _client(recorder: Recorder, **overrides: object) -> GandiClient:
    return GandiClient(
        config=make_config(**overrides), client_factory=make_client_factory(recorder)
    )


def test_call_sends_authorization_and_decodes_json() -> None:
    recorder = Recorder({("GET", RECORDS_PATH): httpx.Response(200, json=[{"rrset_name": "@"}])})

    payload = _client(recorder).call("GET", RECORDS_PATH)

    assert payload == [{"rrset_name": "@"}]
    request = recorder.last
    assert str(request.url) == f"https://api.gandi.net{RECORDS_PATH}"
    assert request.headers["Authorization"] == "Bearer secret"
    assert "Dry-Run" not in request.headers
    assert "sharing_id" not in request.url.params


def test_call_uses_api_key_scheme() -> None:
    recorder = Recorder({("GET", RECORDS_PATH): httpx.Response(200, json=[])})

    _client(recorder, auth_scheme=AuthScheme.APIKEY).call("GET", RECORDS_PATH)

    assert recorder.last.headers["Authorization"] == "Apikey secret"


def test_call_adds_sharing_id_and_dry_run() -> None:
    recorder = Recorder({("POST", RECORDS_PATH): httpx.Response(201, json={"message": "ok"})})

    _client(recorder, sharing_id="org-1", dry_run=True).call(
        "POST", RECORDS_PATH, body={"rrset_values": ["192.0.2.1"]}, params={"x": "1"}
    )

    request = recorder.last
    assert request.url.params["sharing_id"] == "org-1"
    assert request.url.params["x"] == "1"
    assert request.headers["Dry-Run"] == "1"
    assert request_json(request) == {"rrset_values": ["192.0.2.1"]}


def test_empty_body_decodes_to_none() -> None:
    recorder = Recorder({("DELETE", f"{RECORDS_PATH}/www/A"): httpx.Response(204)})

    assert _client(recorder).call("DELETE", f"{RECORDS_PATH}/www/A") is None


def test_error_response_carries_status_and_message() -> None:
    recorder = Recorder(
        {
            ("POST", RECORDS_PATH): httpx.Response(
                400,
                json={
                    "code": 400,
                    "message": "Validation error",
                    "object": "HTTPBadRequest",
                    "cause": "Bad Request",
                    "errors": [
                        {"location": "body", "name": "rrset_ttl", "description": "too small"}
                    ],
                },
            )
        }
    )

    with pytest.raises(GatewayError) as exc:
        _client(recorder).call("POST", RECORDS_PATH, body={})

    assert exc.value.status_code == 400
    assert exc.value.message == "Validation error; rrset_ttl: too small"


def test_error_response_without_json_uses_text() -> None:
    recorder = Recorder({("GET", RECORDS_PATH): httpx.Response(502, text="upstream down")})

    with pytest.raises(GatewayError) as exc:
        _client(recorder).call("GET", RECORDS_PATH)

    assert exc.value.status_code == 502
    assert exc.value.message == "upstream down"


def test_transport_failure_has_no_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = GandiClient(config=make_config(), client_factory=make_client_factory(handler))

    with pytest.raises(GatewayError) as exc:
        client.call("GET", RECORDS_PATH)

    assert exc.value.status_code is None
    assert not isinstance(exc.value, GatewayPayloadError)


@pytest.mark.parametrize(
    "response",
    [httpx.Response(200, text="<html></html>"), httpx.Response(200, json="just a string")],
)
def test_unexpected_success_payload(response: httpx.Response) -> None:
    recorder = Recorder({("GET", RECORDS_PATH): response})

    with pytest.raises(GatewayPayloadError) as exc:
        _client(recorder).call("GET", RECORDS_PATH)

    assert exc.value.status_code == 200


@pytest.mark.parametrize(
    ("value", "expected"),
    [("@", "@"), ("_dmarc", "_dmarc"), ("*.example.com", "*.example.com"), ("a b", "a%20b")],
)
def test_path_segment(value: str, expected: str) -> None:
    assert path_segment(value) == expected


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(302, headers={"Location": "https://example.com/"}),
        httpx.Response(304),
    ],
)
def test_non_2xx_without_error_status_is_a_failure(response: httpx.Response) -> None:
    recorder = Recorder({("DELETE", f"{RECORDS_PATH}/www/A"): response})

    with pytest.raises(GatewayError) as exc:
        _client(recorder).call("DELETE", f"{RECORDS_PATH}/www/A")

    assert exc.value.status_code == response.status_code
