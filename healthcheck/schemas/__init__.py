from __future__ import annotations

from .health import (
    COMPONENT,
    CONNECTIONS,
    DATASTORE,
    HEALTH_MEDIA_TYPE,
    RESPONSE_TIME,
    SYSTEM,
    UPTIME,
    UTILIZATION,
    DetailEntry,
    HealthReport,
    Status,
    details_key,
    parse_status,
    validate_details_key,
)

__all__ = [
    # media type
    "HEALTH_MEDIA_TYPE",
    # component types
    "COMPONENT",
    "DATASTORE",
    "SYSTEM",
    # measurement names
    "CONNECTIONS",
    "RESPONSE_TIME",
    "UPTIME",
    "UTILIZATION",
    # documents
    "DetailEntry",
    "HealthReport",
    "Status",
    "details_key",
    "parse_status",
    "validate_details_key",
]
