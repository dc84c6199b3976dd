"""Solr query compiler from result-set descriptors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .pagination import DEFAULT_PAGE_SIZE, PaginationState, resolve_pagination
from .range_merger import merge_filters

if TYPE_CHECKING:
    from .descriptor import ResultSetDescriptor
    from .query import SolrSelectQuery

logger = logging.getLogger(__name__)


class SolrQueryCompiler:
    """Populates an empty ``SolrSelectQuery`` from a ``ResultSetDescriptor``.

    Filters go through the range merger, sort pairs are added in the
    descriptor's order, and pagination is resolved last. Compilation never
    fails: unknown operators are compiled as equality.
    """

    def __init__(self, *, default_page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.default_page_size = default_page_size

    def compile(
        self, query: SolrSelectQuery, descriptor: ResultSetDescriptor
    ) -> PaginationState:
        """Mutate *query* in place and return the request's pagination state."""
        for clause in merge_filters(descriptor.filters):
            query.create_filter_query(clause.key, clause.query)

        for prop, direction in descriptor.sort:
            query.add_sort(prop, direction)

        pagination = resolve_pagination(
            descriptor, default_page_size=self.default_page_size
        )
        pagination.apply(query)

        logger.debug("Compiled %r into %r", descriptor, query)
        return pagination
