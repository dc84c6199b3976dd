"""PaginationState — per-request pagination decision and offset/limit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .descriptor import ResultSetDescriptor
    from .query import SolrSelectQuery

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class PaginationState:
    """
    How one request is bounded and whether its result carries page metadata.

    Built by :func:`resolve_pagination` and handed from the compiler to the
    result mapper. Never stored on the gateway.
    """

    paginated: bool = False
    current_page: int | None = None
    page_size: int | None = None
    offset: int | None = None
    limit: int | None = None

    @classmethod
    def unbounded(cls) -> PaginationState:
        return cls()

    @classmethod
    def limited(cls, size: int) -> PaginationState:
        """Absolute size: one window of *size* rows, no page metadata."""
        return cls(paginated=False, offset=0, limit=size)

    @classmethod
    def paged(cls, page: int, page_size: int) -> PaginationState:
        page = max(1, page)
        return cls(
            paginated=True,
            current_page=page,
            page_size=page_size,
            offset=(page - 1) * page_size,
            limit=page_size,
        )

    @property
    def has_bounds(self) -> bool:
        return self.offset is not None and self.limit is not None

    def apply(self, query: SolrSelectQuery) -> SolrSelectQuery:
        """Set start/rows on *query* when this state carries bounds."""
        if self.has_bounds:
            query.set_start(self.offset).set_rows(self.limit)  # type: ignore[arg-type]
        return query


def resolve_pagination(
    descriptor: ResultSetDescriptor,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> PaginationState:
    """Decide between size-limited, paged and unbounded.

    An absolute size wins over page/page size. Pages are 1-based; page 1
    starts at offset 0.
    """
    if descriptor.size is not None and descriptor.size > 0:
        return PaginationState.limited(descriptor.size)
    if descriptor.page is not None:
        return PaginationState.paged(
            descriptor.page, descriptor.effective_page_size(default_page_size)
        )
    return PaginationState.unbounded()
