"""Pydantic models describing the Gandi v5 API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_empty(value: object) -> object:
    return [] if value is None else value


class GandiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DomainPayload(GandiBaseModel):
    fqdn: str
    nameservers: list[str] = Field(default_factory=list)

    _normalize_nameservers = field_validator("nameservers", mode="before")(_none_to_empty)


class RecordPayload(GandiBaseModel):
    name: str = Field(alias="rrset_name")
    type: str = Field(alias="rrset_type")
    ttl: int | None = Field(default=None, alias="rrset_ttl")
    values: list[str] = Field(default_factory=list, alias="rrset_values")
    href: str | None = Field(default=None, alias="rrset_href")

    _normalize_values = field_validator("values", mode="before")(_none_to_empty)


class RecordWriteRequest(GandiBaseModel):
    rrset_values: list[str]
    rrset_ttl: int | None = None


class WebRedirectionPayload(GandiBaseModel):
    host: str
    url: str
    type: str
    protocol: str
    cert_status: str | None = None
    cert_uuid: str | None = None


class WebRedirectionCreateRequest(GandiBaseModel):
    host: str
    url: str
    override: bool
    protocol: str
    type: str


class WebRedirectionUpdateRequest(GandiBaseModel):
    url: str
    override: bool
    protocol: str
    type: str


class ForwardPayload(GandiBaseModel):
    source: str
    destinations: list[str] = Field(default_factory=list)

    _normalize_destinations = field_validator("destinations", mode="before")(_none_to_empty)


class ForwardCreateRequest(GandiBaseModel):
    source: str
    destinations: list[str]


class ForwardUpdateRequest(GandiBaseModel):
    destinations: list[str]


class ErrorDetail(GandiBaseModel):
    location: str | None = None
    name: str | None = None
    description: str | None = None


class ErrorResponse(GandiBaseModel):
    code: int | None = None
    message: str | None = None
    cause: str | None = None
    errors: list[ErrorDetail] = Field(default_factory=list)

    _normalize_errors = field_validator("errors", mode="before")(_none_to_empty)

    def describe(self) -> str:
        parts = [self.message or self.cause or "request failed"]
        parts.extend(
            f"{detail.name}: {detail.description}"
            for detail in self.errors
            if detail.name or detail.description
        )
        return "; ".join(parts)
