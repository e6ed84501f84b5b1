from __future__ import annotations

import pytest

from gandisync.domain.errors import (
    ImmutableFieldError,
    NotFoundError,
    Operation,
    RejectedError,
    RemoteErrorKind,
    UnknownRemoteError,
    ValidationFailedError,
    classify,
    failure_for,
)
from gandisync.domain.model import ResourceKind
from gandisync.domain.ports import GatewayError
from gandisync.domain.validation import Violation


@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (404, RemoteErrorKind.NOT_FOUND),
        (400, RemoteErrorKind.REJECTED),
        (403, RemoteErrorKind.REJECTED),
        (409, RemoteErrorKind.REJECTED),
        (429, RemoteErrorKind.REJECTED),
        (500, RemoteErrorKind.UNKNOWN),
        (503, RemoteErrorKind.UNKNOWN),
        (None, RemoteErrorKind.UNKNOWN),
    ],
)
def test_classify_uses_status_code_only(status: int | None, kind: RemoteErrorKind) -> None:
    remote = classify(GatewayError("boom", status_code=status))

    assert remote.kind is kind
    assert remote.status_code == status
    assert remote.message == "boom"


def test_classify_foreign_exception_is_unknown() -> None:
    cause = OSError("connection reset")

    remote = classify(cause)

    assert remote.kind is RemoteErrorKind.UNKNOWN
    assert remote.status_code is None
    assert remote.cause is cause


@pytest.mark.parametrize(
    ("status", "expected"),
    [(404, NotFoundError), (422, RejectedError), (502, UnknownRemoteError)],
)
def test_failure_for_picks_subclass(status: int, expected: type[Exception]) -> None:
    failure = failure_for(
        classify(GatewayError("nope", status_code=status)),
        operation=Operation.READ,
        kind=ResourceKind.DNS_RECORD,
        identifier="example.com/www/A",
    )

    assert type(failure) is expected
    assert failure.remote.status_code == status
    assert str(failure) == "read dns_record example.com/www/A: nope"


def test_validation_error_lists_violations() -> None:
    error = ValidationFailedError(
        (Violation("host", "bad host"), Violation("url", "bad url")),
        operation=Operation.CREATE,
        kind=ResourceKind.WEB_REDIRECTION,
    )

    assert error.identifier is None
    assert str(error) == (
        "create web_redirection: invalid configuration (host: bad host; url: bad url)"
    )


def test_immutable_field_error_names_fields() -> None:
    error = ImmutableFieldError(
        ("zone", "type"),
        operation=Operation.UPDATE,
        kind=ResourceKind.DNS_RECORD,
        identifier="example.com/www/A",
    )

    assert error.fields == ("zone", "type")
    assert "cannot change zone, type in place" in str(error)
