"""Apache Solr persistence for CQRS/DDD.

Compiles result-set descriptors (filters, sort, pagination) into Solr select
queries, maps documents back into entities or projection rows, and writes
entities with explicit commits.
"""

from __future__ import annotations

from .client import ISolrClient, SolrClient
from .compiler import SolrQueryCompiler
from .descriptor import Filter, ResultSetDescriptor
from .entity import IEntity, ProjectionEntity, SolrEntity, model_factory
from .escaping import escape_phrase, escape_term
from .exceptions import (
    EntityNotFoundError,
    MissingIdentifierError,
    NotFoundError,
    OperationNotSupportedError,
    SolrConnectionError,
    SolrGatewayError,
    SolrQueryError,
    UnsupportedModeError,
    WriteError,
)
from .gateway import SolrGateway
from .hydrator import (
    DenormalizedPydanticHydrator,
    IDenormalizedExtractor,
    IHydrator,
    PydanticHydrator,
)
from .mapper import SolrResultMapper
from .operators import FilterOperator, SortDirection
from .pagination import PaginationState, resolve_pagination
from .query import SolrRequest, SolrSelectQuery, SolrUpdateQuery
from .range_merger import FilterClause, merge_filters
from .response import SolrResult, SolrUpdateResult
from .results import FetchMode, ResultContainer, ResultKind, build_container
from .serialization import format_datetime, serialize_document, serialize_value
from .settings import SolrSettings
from .writer import CommitPolicy, SolrWriteCoordinator, WriteResult

__all__ = [
    # Gateway
    "SolrGateway",
    "FetchMode",
    "CommitPolicy",
    "WriteResult",
    # Client
    "ISolrClient",
    "SolrClient",
    "SolrSettings",
    "SolrSelectQuery",
    "SolrUpdateQuery",
    "SolrRequest",
    "SolrResult",
    "SolrUpdateResult",
    # Descriptor
    "ResultSetDescriptor",
    "Filter",
    "FilterOperator",
    "SortDirection",
    # Compilation
    "SolrQueryCompiler",
    "FilterClause",
    "merge_filters",
    "PaginationState",
    "resolve_pagination",
    # Mapping
    "SolrResultMapper",
    "ResultContainer",
    "ResultKind",
    "build_container",
    "IEntity",
    "SolrEntity",
    "ProjectionEntity",
    "model_factory",
    "IHydrator",
    "IDenormalizedExtractor",
    "PydanticHydrator",
    "DenormalizedPydanticHydrator",
    # Write path
    "SolrWriteCoordinator",
    # Utilities
    "escape_phrase",
    "escape_term",
    "format_datetime",
    "serialize_document",
    "serialize_value",
    # Exceptions
    "SolrGatewayError",
    "SolrConnectionError",
    "SolrQueryError",
    "UnsupportedModeError",
    "MissingIdentifierError",
    "NotFoundError",
    "EntityNotFoundError",
    "WriteError",
    "OperationNotSupportedError",
]
