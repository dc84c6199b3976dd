"""Parsed Solr responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import SolrQueryError


def _header(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise SolrQueryError("Malformed Solr response: expected a JSON object")
    header = payload.get("responseHeader") or {}
    return header if isinstance(header, dict) else {}


@dataclass(frozen=True)
class SolrResult:
    """Result of a select: total matches and the documents of this window."""

    num_found: int
    documents: list[dict[str, Any]] = field(default_factory=list)
    status: int = 0
    query_time: int | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, payload: Any) -> SolrResult:
        header = _header(payload)
        response = payload.get("response")
        if not isinstance(response, dict):
            raise SolrQueryError("Malformed Solr response: missing 'response'")
        return cls(
            num_found=int(response.get("numFound", 0)),
            documents=[dict(doc) for doc in response.get("docs", [])],
            status=int(header.get("status", 0)),
            query_time=header.get("QTime"),
            raw=payload,
        )


@dataclass(frozen=True)
class SolrUpdateResult:
    """Result of an update request."""

    status: int = 0
    query_time: int | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, payload: Any) -> SolrUpdateResult:
        header = _header(payload)
        return cls(
            status=int(header.get("status", 0)),
            query_time=header.get("QTime"),
            raw=payload,
        )
