"""SolrResultMapper — raw Solr documents -> entities or projection rows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .entity import ProjectionEntity
from .exceptions import UnsupportedModeError
from .hydrator import PydanticHydrator
from .results import FetchMode, ResultContainer, build_container

if TYPE_CHECKING:
    from collections.abc import Callable

    from .entity import EntityFactory
    from .hydrator import IHydrator
    from .pagination import PaginationState
    from .response import SolrResult

T = TypeVar("T")

INTERNAL_FIELDS: tuple[str, ...] = ("score", "_version_")


class SolrResultMapper(Generic[T]):
    """
    Maps a ``SolrResult`` into a ``ResultContainer``.

    Entities are built by passing each document's whole field map to the
    entity factory. Projection rows get the engine-internal fields removed
    and are hydrated onto a fresh ``ProjectionEntity``. Rows keep engine
    order.
    """

    def __init__(
        self,
        entity_factory: EntityFactory,
        hydrator: IHydrator | None = None,
        *,
        internal_fields: tuple[str, ...] = INTERNAL_FIELDS,
        projection_factory: Callable[[], Any] = ProjectionEntity,
    ) -> None:
        self._entity_factory = entity_factory
        self._hydrator = hydrator or PydanticHydrator()
        self._internal_fields = frozenset(internal_fields)
        self._projection_factory = projection_factory

    def map(
        self,
        result: SolrResult,
        mode: FetchMode,
        pagination: PaginationState | None = None,
    ) -> ResultContainer[Any]:
        if mode == FetchMode.ENTITIES:
            return self.to_entities(result, pagination)
        if mode == FetchMode.PROJECTION:
            return self.to_projection(result, pagination)
        raise UnsupportedModeError(mode)

    def to_entities(
        self, result: SolrResult, pagination: PaginationState | None = None
    ) -> ResultContainer[T]:
        rows = [self._entity_factory(dict(doc)) for doc in result.documents]
        return build_container(FetchMode.ENTITIES, rows, pagination, result.num_found)

    def to_projection(
        self, result: SolrResult, pagination: PaginationState | None = None
    ) -> ResultContainer[Any]:
        rows = [
            self._hydrator.hydrate(self.strip_internal(doc), self._projection_factory())
            for doc in result.documents
        ]
        return build_container(FetchMode.PROJECTION, rows, pagination, result.num_found)

    def strip_internal(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Copy of *fields* without engine-internal keys."""
        return {k: v for k, v in fields.items() if k not in self._internal_fields}
