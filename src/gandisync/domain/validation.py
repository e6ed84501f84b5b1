"""Local, side-effect-free checks run before any remote call.

Every rule returns a complete ``ValidationResult`` for the field it checks.
Per-resource validators run all applicable rules and merge the results, so a
caller sees every violation at once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import singledispatch
from typing import TYPE_CHECKING

from gandisync.domain.model import (
    DNS_RECORD_TYPES,
    DNSRecord,
    Domain,
    EmailForward,
    RedirectionProtocol,
    RedirectionType,
    WebRedirection,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

_HOSTNAME_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*$"
)
_URL_PATTERN = re.compile(r"^(https?://)?([a-zA-Z0-9\-]+\.)+[a-zA-Z]{2,}(/.*)?$")
_RECORD_NAME_FORBIDDEN = re.compile(r"[/\s]")

MIN_DNS_TTL = 300
MAX_DNS_TTL = 2_592_000


@dataclass(frozen=True, slots=True)
class Violation:
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def valid(cls) -> ValidationResult:
        return cls()

    @classmethod
    def invalid(cls, field: str, message: str) -> ValidationResult:
        return cls((Violation(field, message),))

    @classmethod
    def merge(cls, results: Iterable[ValidationResult]) -> ValidationResult:
        return cls(tuple(violation for result in results for violation in result.violations))


def validate_hostname(value: str, *, field: str = "host") -> ValidationResult:
    if _HOSTNAME_PATTERN.fullmatch(value):
        return ValidationResult.valid()
    return ValidationResult.invalid(field, f"{value!r} is not a valid hostname")


def validate_url(value: str, *, field: str = "url") -> ValidationResult:
    # Syntactic sanity only; deliverability is the remote service's business.
    if _URL_PATTERN.fullmatch(value):
        return ValidationResult.valid()
    return ValidationResult.invalid(field, f"{value!r} is not a valid URL")


def validate_enum(value: str, allowed: Iterable[str], *, field: str) -> ValidationResult:
    if value in set(allowed):
        return ValidationResult.valid()
    return ValidationResult.invalid(field, f"{value!r} is not a valid {field}")


def validate_email_address(value: str, *, field: str) -> ValidationResult:
    local_part, sep, domain = value.partition("@")
    if not sep or not local_part or "@" in domain or not _HOSTNAME_PATTERN.fullmatch(domain):
        return ValidationResult.invalid(field, f"{value!r} is not a valid email address")
    return ValidationResult.valid()


def derive_domain(host: str) -> str:
    """Return the last two labels of ``host``.

    Wrong for multi-label public suffixes such as ``co.uk``; pass the domain
    explicitly for those.
    """

    labels = host.split(".")
    if len(labels) < 2 or not all(labels[-2:]):  # noqa: PLR2004
        raise ValueError(f"{host!r} is not a valid domain name")
    return f"{labels[-2]}.{labels[-1]}"


@singledispatch
def validate_resource(resource: object) -> ValidationResult:
    raise TypeError(f"No validator for {type(resource).__name__}")


@validate_resource.register
def _(domain: Domain) -> ValidationResult:
    return validate_hostname(domain.fqdn, field="fqdn")


@validate_resource.register
def _(record: DNSRecord) -> ValidationResult:
    results = [
        validate_hostname(record.zone, field="zone"),
        validate_enum(record.type, DNS_RECORD_TYPES, field="type"),
    ]
    if not record.name:
        results.append(ValidationResult.invalid("name", "record name must not be empty"))
    elif _RECORD_NAME_FORBIDDEN.search(record.name):
        results.append(
            ValidationResult.invalid("name", f"{record.name!r} must not contain '/' or spaces")
        )
    if record.ttl is not None and not MIN_DNS_TTL <= record.ttl <= MAX_DNS_TTL:
        results.append(
            ValidationResult.invalid(
                "ttl", f"{record.ttl} is outside {MIN_DNS_TTL}-{MAX_DNS_TTL} seconds"
            )
        )
    if not record.values:
        results.append(ValidationResult.invalid("values", "at least one value is required"))
    return ValidationResult.merge(results)


@validate_resource.register
def _(redirection: WebRedirection) -> ValidationResult:
    host_result = validate_hostname(redirection.host, field="host")
    results = [
        host_result,
        validate_url(redirection.url, field="url"),
        validate_enum(redirection.protocol, RedirectionProtocol, field="protocol"),
        validate_enum(redirection.type, RedirectionType, field="type"),
    ]
    if redirection.domain:
        domain_result = validate_hostname(redirection.domain, field="domain")
        results.append(domain_result)
        if domain_result and not _within_domain(redirection.host, redirection.domain):
            results.append(
                ValidationResult.invalid(
                    "host",
                    f"the hostname {redirection.host!r} does not end with "
                    f"the domain name {redirection.domain!r}",
                )
            )
    elif host_result:
        try:
            derive_domain(redirection.host)
        except ValueError as exc:
            results.append(ValidationResult.invalid("domain", f"cannot derive domain: {exc}"))
    return ValidationResult.merge(results)


@validate_resource.register
def _(forward: EmailForward) -> ValidationResult:
    results: list[ValidationResult] = []
    if not forward.local_part or "@" in forward.local_part:
        results.append(
            ValidationResult.invalid("local_part", f"{forward.local_part!r} is not a local part")
        )
    results.append(validate_hostname(forward.domain, field="domain"))
    if not forward.destinations:
        results.append(
            ValidationResult.invalid("destinations", "at least one destination is required")
        )
    results.extend(
        validate_email_address(destination, field="destinations")
        for destination in forward.destinations
    )
    return ValidationResult.merge(results)


def _within_domain(host: str, domain: str) -> bool:
    return host == domain or host.endswith(f".{domain}")
