"""Conversion between typed records and plain JSON-compatible documents.

Documents are how the command-line host stores desired and observed state.
The reconciler itself only ever sees typed records.
"""

from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING, Any

from gandisync.domain.model import DNSRecord, Domain, EmailForward, ResourceKind, WebRedirection
from gandisync.domain.reconciliation import ManagedState, ResourceState

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gandisync.domain.model import ManagedResource

RESOURCE_TYPES: dict[ResourceKind, type[ManagedResource]] = {
    ResourceKind.DOMAIN: Domain,
    ResourceKind.DNS_RECORD: DNSRecord,
    ResourceKind.WEB_REDIRECTION: WebRedirection,
    ResourceKind.EMAIL_FORWARD: EmailForward,
}


def to_document(resource: ManagedResource) -> dict[str, Any]:
    document: dict[str, Any] = {}
    for field in fields(resource):
        value = getattr(resource, field.name)
        document[field.name] = list(value) if isinstance(value, tuple) else value
    if isinstance(resource, EmailForward):
        document["source"] = resource.source
    return document


def from_document(kind: ResourceKind | str, document: Mapping[str, Any]) -> ManagedResource:
    """Build a record of ``kind`` from ``document``.

    Lists become tuples. Unknown keys are rejected so a typo never silently
    falls back to a default.
    """

    resource_type = RESOURCE_TYPES[ResourceKind(kind)]
    values = dict(document)
    if resource_type is EmailForward:
        values = _split_source(values)

    known = {field.name for field in fields(resource_type)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown {kind} field(s): {', '.join(unknown)}")

    converted = {
        name: tuple(value) if isinstance(value, list) else value for name, value in values.items()
    }
    try:
        return resource_type(**converted)
    except TypeError as exc:
        raise ValueError(f"Invalid {kind} document: {exc}") from exc


def state_to_document(kind: ResourceKind, state: ManagedState[Any]) -> dict[str, Any]:
    return {
        "kind": str(kind),
        "status": str(state.status),
        "identifier": state.identifier,
        "resource": to_document(state.resource) if state.resource is not None else None,
    }


def state_from_document(
    document: Mapping[str, Any], *, kind: ResourceKind | None = None
) -> ManagedState[Any]:
    document_kind = document.get("kind")
    if kind is not None and document_kind is not None and ResourceKind(document_kind) != kind:
        raise ValueError(f"State document is for {document_kind}, not {kind}")
    effective_kind = kind or document_kind
    if effective_kind is None:
        raise ValueError("State document does not name its resource kind")

    try:
        status = ResourceState(document.get("status", ResourceState.PRESENT))
    except ValueError as exc:
        raise ValueError(f"Unknown state status: {document.get('status')!r}") from exc

    raw_resource = document.get("resource")
    resource = from_document(effective_kind, raw_resource) if raw_resource is not None else None
    return ManagedState(status=status, identifier=document.get("identifier"), resource=resource)


def _split_source(values: dict[str, Any]) -> dict[str, Any]:
    source = values.pop("source", None)
    if source is None:
        return values
    local_part, sep, domain = str(source).partition("@")
    if not sep:
        raise ValueError(f"{source!r} is not an email address")
    for name, derived in (("local_part", local_part), ("domain", domain)):
        given = values.setdefault(name, derived)
        if given != derived:
            raise ValueError(f"source {source!r} disagrees with {name} {given!r}")
    return values
