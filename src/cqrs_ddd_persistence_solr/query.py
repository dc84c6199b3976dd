"""
Native Solr request objects: select queries, update commands and
arbitrary handler requests.

These are plain mutable builders. They carry no I/O; ``SolrClient``
renders them into HTTP requests.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .operators import SortDirection

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class SolrSelectQuery:
    """A ``/select`` query: main query, filter queries, sort and bounds."""

    DEFAULT_QUERY = "*:*"

    def __init__(self, query: str = DEFAULT_QUERY) -> None:
        self.query = query
        self.start: int | None = None
        self.rows: int | None = None
        self.fields: list[str] = []
        self._filter_queries: dict[str, str] = {}
        self._sorts: dict[str, SortDirection] = {}

    # -- filter queries -----------------------------------------------------

    def create_filter_query(self, key: str, query: str) -> SolrSelectQuery:
        """Add a filter query under *key*; an existing key is replaced."""
        self._filter_queries[key] = query
        return self

    def get_filter_query(self, key: str) -> str | None:
        return self._filter_queries.get(key)

    @property
    def filter_queries(self) -> dict[str, str]:
        return dict(self._filter_queries)

    # -- sorting ------------------------------------------------------------

    def add_sort(
        self, field: str, direction: SortDirection | str = SortDirection.ASC
    ) -> SolrSelectQuery:
        self._sorts[field] = SortDirection.parse(direction)
        return self

    @property
    def sorts(self) -> list[tuple[str, SortDirection]]:
        return list(self._sorts.items())

    # -- bounds -------------------------------------------------------------

    def set_start(self, start: int) -> SolrSelectQuery:
        self.start = start
        return self

    def set_rows(self, rows: int) -> SolrSelectQuery:
        self.rows = rows
        return self

    def set_fields(self, *fields: str) -> SolrSelectQuery:
        self.fields = list(fields)
        return self

    # -- rendering ----------------------------------------------------------

    def to_params(self) -> list[tuple[str, str]]:
        """Render as ordered ``(name, value)`` request parameters."""
        params: list[tuple[str, str]] = [("q", self.query)]
        params.extend(("fq", fq) for fq in self._filter_queries.values())
        if self._sorts:
            params.append(
                ("sort", ",".join(f"{f} {d.value}" for f, d in self._sorts.items()))
            )
        if self.start is not None:
            params.append(("start", str(self.start)))
        if self.rows is not None:
            params.append(("rows", str(self.rows)))
        if self.fields:
            params.append(("fl", ",".join(self.fields)))
        params.append(("wt", "json"))
        return params

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SolrSelectQuery):
            return NotImplemented
        return (
            self.query == other.query
            and self._filter_queries == other._filter_queries
            and list(self._sorts.items()) == list(other._sorts.items())
            and self.start == other.start
            and self.rows == other.rows
            and self.fields == other.fields
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SolrSelectQuery({self.to_params()!r})"


class SolrUpdateQuery:
    """An ordered list of JSON update commands (add, delete, commit)."""

    def __init__(self) -> None:
        self._commands: list[tuple[str, Any]] = []

    def add_document(self, document: Mapping[str, Any]) -> SolrUpdateQuery:
        self._commands.append(("add", {"doc": dict(document)}))
        return self

    def add_documents(self, documents: Iterable[Mapping[str, Any]]) -> SolrUpdateQuery:
        for document in documents:
            self.add_document(document)
        return self

    def add_delete_by_ids(self, ids: Iterable[Any]) -> SolrUpdateQuery:
        self._commands.append(("delete", [str(i) for i in ids]))
        return self

    def add_delete_query(self, query: str) -> SolrUpdateQuery:
        self._commands.append(("delete", {"query": query}))
        return self

    def add_commit(self) -> SolrUpdateQuery:
        self._commands.append(("commit", {}))
        return self

    @property
    def commands(self) -> list[tuple[str, Any]]:
        return list(self._commands)

    def count(self, command: str) -> int:
        """Number of commands of the given kind (``add``, ``delete``, ``commit``)."""
        return sum(1 for name, _ in self._commands if name == command)

    def is_empty(self) -> bool:
        return not self._commands

    def to_json(self) -> str:
        """Render the JSON update body.

        Solr accepts repeated keys in an update body, which ``json.dumps``
        on a dict cannot express, so the object is assembled by hand.
        """
        parts = [
            f"{json.dumps(name)}:{json.dumps(body, default=str)}"
            for name, body in self._commands
        ]
        return "{" + ",".join(parts) + "}"

    def __repr__(self) -> str:
        return f"SolrUpdateQuery({self._commands!r})"


@dataclass
class SolrRequest:
    """A raw request against an arbitrary request handler (e.g. ``dataimport``)."""

    handler: str
    params: dict[str, Any] = field(default_factory=dict)
    method: str = "GET"

    def add_param(self, name: str, value: Any) -> SolrRequest:
        self.params[name] = value
        return self
