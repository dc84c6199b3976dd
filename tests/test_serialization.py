"""Tests for value serialization and query escaping."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

import pytest

from cqrs_ddd_persistence_solr.escaping import escape_phrase, escape_term
from cqrs_ddd_persistence_solr.serialization import (
    format_datetime,
    serialize_document,
    serialize_value,
    to_query_literal,
)


class Status(Enum):
    ACTIVE = "active"


class TestFormatDatetime:
    def test_naive_datetime_is_taken_as_utc(self):
        value = datetime(2024, 3, 1, 12, 30, 5)
        assert format_datetime(value) == "2024-03-01T12:30:05Z"

    def test_aware_datetime_is_converted_to_utc(self):
        value = datetime(2024, 3, 1, 0, 30, tzinfo=timezone(timedelta(hours=2)))
        assert format_datetime(value) == "2024-02-29T22:30:00Z"

    def test_date_renders_at_midnight(self):
        assert format_datetime(date(2024, 3, 1)) == "2024-03-01T00:00:00Z"


def test_serialize_value_handles_common_types() -> None:
    uid = UUID("12345678-1234-5678-1234-567812345678")
    assert serialize_value(Status.ACTIVE) == "active"
    assert serialize_value(uid) == str(uid)
    assert serialize_value(Decimal("1.50")) == "1.50"
    assert serialize_value(42) == 42
    assert serialize_value(None) is None


def test_serialize_document_recurses_into_containers() -> None:
    doc = serialize_document(
        {
            "id": "a",
            "tags": (Status.ACTIVE, "x"),
            "meta": {"at": date(2020, 1, 2)},
        }
    )
    assert doc == {
        "id": "a",
        "tags": ["active", "x"],
        "meta": {"at": "2020-01-02T00:00:00Z"},
    }


@pytest.mark.parametrize(
    ("value", "literal"),
    [
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (datetime(2024, 1, 1), "2024-01-01T00:00:00Z"),
        (Status.ACTIVE, "active"),
    ],
)
def test_to_query_literal(value, literal) -> None:
    assert to_query_literal(value) == literal


@pytest.mark.parametrize(
    ("raw", "escaped"),
    [
        ("plain", "plain"),
        ("a:b", "a\\:b"),
        ("1-2", "1\\-2"),
        ("two words", "two\\ words"),
        ("a&&b", "a\\&\\&b"),
        ("(x)", "\\(x\\)"),
        ("path/to", "path\\/to"),
    ],
)
def test_escape_term(raw, escaped) -> None:
    assert escape_term(raw) == escaped


def test_escape_phrase_quotes_and_escapes() -> None:
    assert escape_phrase("2024") == '"2024"'
    assert escape_phrase('say "hi"') == '"say \\"hi\\""'
    assert escape_phrase("a\\b") == '"a\\\\b"'
