"""Health Check Response Format for HTTP APIs (draft-inadarei-api-health-check).

A health document has a single mandatory root field (``status``) and several
optional fields. Field names are camelCase on the wire, so the models use them
verbatim. Optional fields are omitted from the serialized document when they
are absent or empty strings; ``notes`` and ``links`` are also omitted when
empty. ``observedValue`` is opaque and only omitted when absent.

References:
* https://tools.ietf.org/id/draft-inadarei-api-health-check-02.html
* https://inadarei.github.io/rfc-healthcheck/
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)

HEALTH_MEDIA_TYPE = "application/health+json"

# Pre-defined componentType values.
COMPONENT = "component"
DATASTORE = "datastore"
SYSTEM = "system"

# Pre-defined measurement names for the second part of a details key.
UTILIZATION = "utilization"
RESPONSE_TIME = "responseTime"
CONNECTIONS = "connections"
UPTIME = "uptime"


class Status(StrEnum):
    PASS = "pass"  # healthy
    WARN = "warn"  # healthy, with some concerns
    FAIL = "fail"  # unhealthy


# Node's Terminus uses ok/error, Spring Boot uses up/down.
_STATUS_ALIASES: dict[str, Status] = {
    "ok": Status.PASS,
    "up": Status.PASS,
    "error": Status.FAIL,
    "down": Status.FAIL,
}


def parse_status(value: Any) -> Any:
    """Normalize a wire status: case-insensitive, with the accepted aliases."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        return _STATUS_ALIASES.get(lowered, lowered)
    return value


def _coerce_time(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


HealthStatus = Annotated[Status, BeforeValidator(parse_status)]
Timestamp = Annotated[str, BeforeValidator(_coerce_time)]

_OMIT_WHEN_EMPTY = frozenset({"notes", "links"})
# Opaque values: 0, false and "" are observations, not absence.
_KEEP_WHEN_EMPTY = frozenset({"observedValue"})


def _is_absent(key: str, value: Any) -> bool:
    if value is None:
        return True
    if key in _KEEP_WHEN_EMPTY:
        return False
    if key in _OMIT_WHEN_EMPTY:
        return not value
    return value == ""


def _omit_absent(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if not _is_absent(key, value)}


def validate_details_key(key: str) -> str:
    """Check a details key has the form ``componentName[:measurementName]``."""
    segments = key.split(":")
    if len(segments) > 2 or not all(segments):
        raise ValueError(
            f"details key {key!r} must be 'componentName' or "
            "'componentName:measurementName' with non-empty parts and no further colons"
        )
    return key


def details_key(component: str, measurement: str | None = None) -> str:
    """Build a details key from a component name and optional measurement name."""
    for part in (component, measurement):
        if part is not None and ":" in part:
            raise ValueError(f"details key part {part!r} must not contain a colon")
    if measurement is None:
        return validate_details_key(component)
    return validate_details_key(f"{component}:{measurement}")


class DetailEntry(BaseModel):
    """One observation about one downstream dependency, or one node of it."""

    componentId: str | None = None
    componentType: str | None = None
    observedValue: Any = None
    observedUnit: str | None = None
    status: HealthStatus = Status.PASS
    time: Timestamp | None = None
    output: str | None = None
    links: dict[str, str] | None = None

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _omit_absent(handler(self))


class HealthReport(BaseModel):
    """Top-level health document, one per response."""

    status: HealthStatus
    version: str | None = None
    releaseId: str | None = None
    notes: list[str] | None = None
    output: str | None = None
    details: dict[str, list[DetailEntry]] | None = None
    links: dict[str, str] | None = None
    serviceId: str | None = None
    description: str | None = None

    @field_validator("details")
    @classmethod
    def _check_details_keys(
        cls, details: dict[str, list[DetailEntry]] | None
    ) -> dict[str, list[DetailEntry]] | None:
        if details is not None:
            for key in details:
                validate_details_key(key)
        return details

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _omit_absent(handler(self))
