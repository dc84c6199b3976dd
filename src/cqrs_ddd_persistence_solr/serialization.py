"""Python values <-> Solr field values (datetime, date, UUID, Decimal, Enum)."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

SOLR_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_datetime(value: date) -> str:
    """Render a date or datetime in the fixed UTC form Solr date fields expect.

    Naive datetimes are taken as UTC. Plain dates render at midnight.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(SOLR_DATETIME_FORMAT)
    return datetime(value.year, value.month, value.day).strftime(SOLR_DATETIME_FORMAT)


def serialize_value(value: Any) -> Any:
    """Convert a Python value to a JSON-safe Solr field value."""
    if isinstance(value, date):
        return format_datetime(value)
    if isinstance(value, Enum):
        return serialize_value(value.value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Mapping):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(v) for v in value]
    return value


def serialize_document(data: Mapping[str, Any]) -> dict[str, Any]:
    """Serialize every field of an extracted entity."""
    return {field: serialize_value(value) for field, value in data.items()}


def to_query_literal(value: Any) -> str:
    """Render a value as it appears inside a Solr query string."""
    value = serialize_value(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
