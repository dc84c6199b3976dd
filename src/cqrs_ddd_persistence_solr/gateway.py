"""
SolrGateway[T] — descriptor-driven reads and entity writes over one Solr core.

Reads compile a ``ResultSetDescriptor`` into a ``SolrSelectQuery``, execute
it and map the documents into entities or projection rows::

    gateway = SolrGateway(client, entity_cls=Book)

    page = await gateway.fetch_all(
        ResultSetDescriptor()
        .add_filter("year", 2000, FilterOperator.GE)
        .sort_by("title")
        .paginate(2, 25)
    )
    page.total, page.current_page, list(page)

Pagination state is computed per call and passed along explicitly, so one
gateway instance can serve concurrent requests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

from .compiler import SolrQueryCompiler
from .entity import ProjectionEntity, model_factory
from .escaping import escape_term
from .exceptions import (
    EntityNotFoundError,
    OperationNotSupportedError,
    UnsupportedModeError,
)
from .hydrator import PydanticHydrator
from .mapper import SolrResultMapper
from .pagination import DEFAULT_PAGE_SIZE, PaginationState
from .results import FetchMode, ResultContainer
from .serialization import to_query_literal
from .writer import CommitPolicy, SolrWriteCoordinator, WriteResult

if TYPE_CHECKING:
    from .client import ISolrClient
    from .descriptor import ResultSetDescriptor
    from .entity import EntityFactory
    from .hydrator import IHydrator
    from .query import SolrSelectQuery

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SolrGateway(Generic[T]):
    """
    Read/write gateway over a Solr core.

    Args:
        client: Engine client (``SolrClient`` or any ``ISolrClient``).
        entity_cls: Pydantic model used to build entities; ignored when
            ``entity_factory`` is given.
        entity_factory: ``(fields) -> entity`` for ENTITIES-mode mapping.
        hydrator: Field-map <-> entity hydrator. Defaults to
            ``PydanticHydrator``.
        id_field: Identifier field of the Solr schema.
        commit_policy: Default commit policy for ``persist``.
        default_page_size: Page size used when a descriptor pages without one.
    """

    def __init__(
        self,
        client: ISolrClient,
        *,
        entity_cls: type[T] | None = None,
        entity_factory: EntityFactory | None = None,
        hydrator: IHydrator | None = None,
        id_field: str = "id",
        commit_policy: CommitPolicy = CommitPolicy.PER_ENTITY,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if entity_factory is None:
            if entity_cls is None:
                raise ValueError("Either entity_cls or entity_factory must be provided")
            entity_factory = model_factory(entity_cls)  # type: ignore[type-var]
        self._client = client
        self._id_field = id_field
        self._entity_name = getattr(entity_cls, "__name__", "Entity")
        self._hydrator = hydrator or PydanticHydrator()
        self._compiler = SolrQueryCompiler(default_page_size=default_page_size)
        self._mapper: SolrResultMapper[T] = SolrResultMapper(
            entity_factory, self._hydrator
        )
        self._writer = SolrWriteCoordinator(
            client, self._hydrator, id_field=id_field, commit_policy=commit_policy
        )

    @property
    def client(self) -> ISolrClient:
        return self._client

    @property
    def id_field(self) -> str:
        return self._id_field

    # -- reads --------------------------------------------------------------

    def compile(
        self, descriptor: ResultSetDescriptor
    ) -> tuple[SolrSelectQuery, PaginationState]:
        """Compile *descriptor* into a fresh select query and its pagination."""
        query = self._client.create_select()
        pagination = self._compiler.compile(query, descriptor)
        return query, pagination

    async def fetch(
        self, descriptor: ResultSetDescriptor
    ) -> ResultContainer[ProjectionEntity]:
        """Fetch projection rows matching *descriptor*."""
        query, pagination = self.compile(descriptor)
        return await self.query(query, FetchMode.PROJECTION, pagination)

    async def fetch_all(self, descriptor: ResultSetDescriptor) -> ResultContainer[T]:
        """Fetch entities matching *descriptor*."""
        query, pagination = self.compile(descriptor)
        return await self.query(query, FetchMode.ENTITIES, pagination)

    async def fetch_one(self, key: Any) -> T:
        """Load one entity by identifier.

        Raises:
            EntityNotFoundError: no document has this identifier.
        """
        query = self._client.create_select()
        query.create_filter_query(
            self._id_field, f"{self._id_field}:{escape_term(to_query_literal(key))}"
        )
        result = await self.query(query, FetchMode.ENTITIES)
        entity = result.first()
        if entity is None:
            raise EntityNotFoundError(self._entity_name, key)
        return entity

    async def query(
        self,
        query: SolrSelectQuery,
        mode: FetchMode | str = FetchMode.ENTITIES,
        pagination: PaginationState | None = None,
    ) -> ResultContainer[Any]:
        """Execute a select query and map its documents according to *mode*.

        Bounds carried by *pagination* are applied to the query first, so a
        raw query can be paged without going through a descriptor.

        Raises:
            UnsupportedModeError: *mode* is neither ENTITIES nor PROJECTION;
                raised before anything is sent.
        """
        try:
            fetch_mode = FetchMode(mode)
        except (ValueError, TypeError) as e:
            raise UnsupportedModeError(mode) from e

        pagination = pagination or PaginationState.unbounded()
        pagination.apply(query)
        result = await self._client.execute(query)
        logger.debug(
            "Solr matched %d documents, mapping %d as %s",
            result.num_found,
            len(result.documents),
            fetch_mode.value,
        )
        return self._mapper.map(result, fetch_mode, pagination)

    # -- writes -------------------------------------------------------------

    async def create(self, entity: T, *, identifier: Any = None) -> WriteResult:
        return await self._writer.create(entity, identifier=identifier)

    async def persist(
        self, *entities: T, commit_policy: CommitPolicy | None = None
    ) -> WriteResult:
        return await self._writer.persist(*entities, commit_policy=commit_policy)

    async def delete(self, *entities: T) -> WriteResult:
        return await self._writer.delete(*entities)

    async def purge(self, descriptor: ResultSetDescriptor | None = None) -> WriteResult:
        return await self._writer.purge(descriptor)

    async def update(
        self,
        descriptor: ResultSetDescriptor,  # noqa: ARG002
        data: Any,  # noqa: ARG002
    ) -> NoReturn:
        raise OperationNotSupportedError(
            "update() method is not handled by this gateway yet"
        )

    async def trigger_delta_import(self) -> None:
        await self._writer.trigger_delta_import()
