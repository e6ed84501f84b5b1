"""Normalization and comparison of resource records.

Normalized records are what the reconciler stores and compares: unordered
multi-valued fields become sorted, de-duplicated tuples and enum-valued fields
become plain strings. Two reads of the same remote state therefore produce
equal records regardless of the order the service returned them in.
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from functools import singledispatch
from typing import TYPE_CHECKING

from gandisync.domain.model import (
    DEFAULT_REDIRECTION_PROTOCOL,
    DEFAULT_REDIRECTION_TYPE,
    DNSRecord,
    Domain,
    EmailForward,
    WebRedirection,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gandisync.domain.model import ManagedResource

log = logging.getLogger(__name__)


def sorted_unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(values)))


@singledispatch
def normalize_resource[R](resource: R) -> R:
    raise TypeError(f"No normalizer for {type(resource).__name__}")


@normalize_resource.register
def _(domain: Domain) -> Domain:
    return replace(domain, nameservers=sorted_unique(domain.nameservers))


@normalize_resource.register
def _(record: DNSRecord) -> DNSRecord:
    ttl = int(record.ttl) if record.ttl is not None else None
    return replace(record, values=sorted_unique(record.values), ttl=ttl)


@normalize_resource.register
def _(redirection: WebRedirection) -> WebRedirection:
    return replace(
        redirection,
        protocol=str(redirection.protocol or DEFAULT_REDIRECTION_PROTOCOL),
        type=str(redirection.type or DEFAULT_REDIRECTION_TYPE),
        override=bool(redirection.override),
        domain=redirection.domain or None,
    )


@normalize_resource.register
def _(forward: EmailForward) -> EmailForward:
    return replace(forward, destinations=sorted_unique(forward.destinations))


def with_key[R](resource: R, key: object) -> R:
    """Copy the compound key's fields onto ``resource``.

    Key dataclasses use the same field names as the records they address.
    """

    values = {field.name: getattr(key, field.name) for field in fields(key)}  # type: ignore[arg-type]
    return replace(resource, **values)  # type: ignore[type-var]


def carry_local_fields[R](observed: R, prior: R | None) -> R:
    """Keep fields the remote service never reports from the prior local state."""

    local_fields: frozenset[str] = getattr(observed, "LOCAL_FIELDS", frozenset())
    if prior is None or not local_fields:
        return observed
    return replace(observed, **{name: getattr(prior, name) for name in local_fields})  # type: ignore[type-var]


def diff_resources(desired: ManagedResource, observed: ManagedResource) -> tuple[str, ...]:
    """Names of fields whose normalized values differ.

    Computed fields are ignored, as are fields left unset (``None``) in the
    desired record, which defer to whatever the remote service chose.
    """

    if type(desired) is not type(observed):
        raise TypeError(
            f"Cannot compare {type(desired).__name__} with {type(observed).__name__}"
        )
    left = normalize_resource(desired)
    right = normalize_resource(observed)
    changed: list[str] = []
    for field in fields(left):
        if field.name in left.COMPUTED_FIELDS:
            continue
        wanted = getattr(left, field.name)
        if wanted is None:
            continue
        if wanted != getattr(right, field.name):
            changed.append(field.name)
    if changed:
        log.debug("Drift on %s: %s", type(desired).__name__, ", ".join(changed))
    return tuple(changed)


def comparable_fields(resource: ManagedResource) -> tuple[str, ...]:
    """Fields ``diff_resources`` would compare for ``resource``."""

    return tuple(
        field.name
        for field in fields(resource)
        if field.name not in resource.COMPUTED_FIELDS and getattr(resource, field.name) is not None
    )
