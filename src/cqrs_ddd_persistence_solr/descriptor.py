"""
Result-set descriptor: the storage-neutral description of a fetch.

The descriptor says *what* to fetch (filters), in which order (sort) and
how much of it (page/page size or an absolute size). It is immutable;
every ``with``-style helper returns a modified copy. The gateway compiles
it into a Solr select query.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from .operators import FilterOperator, SortDirection


@dataclass(frozen=True)
class Filter:
    """A single ``(property, operator, value)`` condition.

    ``operator`` is kept as given; the compiler coerces it and treats
    anything it does not know as equality.
    """

    property: str
    value: Any
    operator: FilterOperator | str = FilterOperator.EQ


@dataclass(frozen=True)
class ResultSetDescriptor:
    """
    Immutable container for filters, ordering and pagination.

    Attributes:
        collection: Logical collection name (informational).
        filters: Filters in application order.
        sort: ``(property, direction)`` pairs in application order. A mapping
            is accepted and converted, keeping its insertion order.
        page: 1-based page number.
        page_size: Rows per page; the gateway default applies when unset.
        size: Absolute row cap. Takes precedence over paging.
    """

    collection: str | None = None
    filters: tuple[Filter, ...] = ()
    sort: tuple[tuple[str, SortDirection], ...] = field(default_factory=tuple)
    page: int | None = None
    page_size: int | None = None
    size: int | None = None

    def __post_init__(self) -> None:
        sort: Any = self.sort
        items = sort.items() if isinstance(sort, Mapping) else sort
        object.__setattr__(
            self,
            "sort",
            tuple((str(prop), SortDirection.parse(d)) for prop, d in items),
        )
        object.__setattr__(self, "filters", tuple(self.filters))

    @property
    def has_filters(self) -> bool:
        return bool(self.filters)

    @property
    def sort_spec(self) -> dict[str, SortDirection]:
        """Sort order as an ordered mapping."""
        return dict(self.sort)

    def add_filter(
        self,
        property: str,  # noqa: A002
        value: Any,
        operator: FilterOperator | str = FilterOperator.EQ,
    ) -> ResultSetDescriptor:
        """Return a copy with one more filter appended."""
        return replace(self, filters=(*self.filters, Filter(property, value, operator)))

    def sort_by(
        self,
        property: str,  # noqa: A002
        direction: SortDirection | str = SortDirection.ASC,
    ) -> ResultSetDescriptor:
        """Return a copy sorting on *property*.

        Re-sorting an already sorted property changes its direction but
        keeps its position.
        """
        order = self.sort_spec
        order[property] = SortDirection.parse(direction)
        return replace(self, sort=tuple(order.items()))

    def paginate(self, page: int, page_size: int | None = None) -> ResultSetDescriptor:
        """Return a copy requesting *page* (1-based)."""
        return replace(
            self,
            page=page,
            page_size=page_size if page_size is not None else self.page_size,
        )

    def with_size(self, size: int | None) -> ResultSetDescriptor:
        """Return a copy capped at *size* rows."""
        return replace(self, size=size)

    def effective_page_size(self, default: int) -> int:
        if self.page_size is not None and self.page_size > 0:
            return self.page_size
        return default

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        result: dict[str, Any] = {}
        if self.collection is not None:
            result["collection"] = self.collection
        if self.filters:
            result["filters"] = [
                {
                    "property": f.property,
                    "operator": str(getattr(f.operator, "value", f.operator)),
                    "value": f.value,
                }
                for f in self.filters
            ]
        if self.sort:
            result["sort"] = {prop: d.value for prop, d in self.sort}
        if self.page is not None:
            result["page"] = self.page
        if self.page_size is not None:
            result["page_size"] = self.page_size
        if self.size is not None:
            result["size"] = self.size
        return result
