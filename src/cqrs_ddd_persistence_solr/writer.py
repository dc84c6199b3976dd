"""
Write path: entities -> Solr documents, add/delete commands and commits.

Write outcomes are returned as ``WriteResult`` values rather than raised.
A failed result carries a ``WriteError`` wrapping the original exception;
``raise_for_error()`` turns it back into an exception for callers that
prefer one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import MissingIdentifierError, WriteError
from .hydrator import IDenormalizedExtractor
from .query import SolrRequest
from .serialization import serialize_document

if TYPE_CHECKING:
    from .client import ISolrClient
    from .descriptor import ResultSetDescriptor
    from .hydrator import IHydrator

logger = logging.getLogger(__name__)

MATCH_ALL = "*:*"


class CommitPolicy(str, Enum):
    """How ``persist`` commits several entities.

    ``PER_ENTITY`` sends one add + commit per entity: a failure leaves the
    earlier entities written. ``BATCH`` extracts everything first and sends
    one request with a single commit.
    """

    PER_ENTITY = "per_entity"
    BATCH = "batch"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a write: identifiers written and the error, if any."""

    written: tuple[Any, ...] = ()
    error: WriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def success(cls, written: list[Any] | tuple[Any, ...] = ()) -> WriteResult:
        return cls(written=tuple(written))

    @classmethod
    def failure(
        cls, error: WriteError, written: list[Any] | tuple[Any, ...] = ()
    ) -> WriteResult:
        return cls(written=tuple(written), error=error)

    def raise_for_error(self) -> WriteResult:
        if self.error is not None:
            raise self.error
        return self

    def __bool__(self) -> bool:
        return self.ok


class SolrWriteCoordinator:
    """Create, persist, delete and purge documents with explicit commits."""

    def __init__(
        self,
        client: ISolrClient,
        hydrator: IHydrator,
        *,
        id_field: str = "id",
        commit_policy: CommitPolicy = CommitPolicy.PER_ENTITY,
    ) -> None:
        self._client = client
        self._hydrator = hydrator
        self._id_field = id_field
        self.commit_policy = CommitPolicy(commit_policy)

    def identifier_field(self, entity: Any) -> str:
        getter = getattr(entity, "get_identifier_field", None)
        return getter() if callable(getter) else self._id_field

    def extract_document(self, entity: Any) -> dict[str, Any]:
        """Extract field data (denormalized when supported) and serialize it."""
        if isinstance(self._hydrator, IDenormalizedExtractor):
            data = self._hydrator.extract_denormalized(entity)
        else:
            data = self._hydrator.extract(entity)
        return serialize_document(data)

    async def create(self, entity: Any, *, identifier: Any = None) -> WriteResult:
        """Write a new entity under a pre-assigned *identifier*.

        Raises:
            MissingIdentifierError: no identifier given; nothing is sent.
        """
        if identifier is None or identifier == "":
            raise MissingIdentifierError(
                f"create() requires an identifier for {type(entity).__name__}"
            )
        try:
            field = self.identifier_field(entity)
            setter = getattr(entity, "set_field", None)
            if callable(setter):
                setter(field, identifier)
            else:
                setattr(entity, field, identifier)
            document = self.extract_document(entity)
            update = self._client.create_update()
            update.add_document(document).add_commit()
            await self._client.update(update)
        except Exception as e:  # noqa: BLE001
            return self._failed("create", e)
        return WriteResult.success([identifier])

    async def persist(
        self, *entities: Any, commit_policy: CommitPolicy | None = None
    ) -> WriteResult:
        """Write *entities*; an empty call succeeds without contacting Solr."""
        if not entities:
            return WriteResult.success()
        policy = CommitPolicy(commit_policy or self.commit_policy)
        logger.debug("Persisting %d entities (%s)", len(entities), policy.value)
        if policy is CommitPolicy.BATCH:
            return await self._persist_batch(entities)
        return await self._persist_each(entities)

    async def _persist_each(self, entities: tuple[Any, ...]) -> WriteResult:
        written: list[Any] = []
        for entity in entities:
            try:
                document = self.extract_document(entity)
                update = self._client.create_update()
                update.add_document(document).add_commit()
                await self._client.update(update)
            except Exception as e:  # noqa: BLE001
                return self._failed("persist", e, written)
            written.append(self._read_identifier(entity))
        return WriteResult.success(written)

    async def _persist_batch(self, entities: tuple[Any, ...]) -> WriteResult:
        try:
            documents = [self.extract_document(entity) for entity in entities]
            update = self._client.create_update()
            update.add_documents(documents).add_commit()
            await self._client.update(update)
        except Exception as e:  # noqa: BLE001
            return self._failed("persist", e)
        return WriteResult.success([self._read_identifier(e) for e in entities])

    async def delete(self, *entities: Any) -> WriteResult:
        """Delete *entities* with one delete-by-id request and one commit."""
        if not entities:
            return WriteResult.success()
        try:
            ids = [self._identifier_of(entity) for entity in entities]
            update = self._client.create_update()
            update.add_delete_by_ids(ids).add_commit()
            await self._client.update(update)
        except Exception as e:  # noqa: BLE001
            return self._failed("delete", e)
        return WriteResult.success(ids)

    async def purge(self, descriptor: ResultSetDescriptor | None = None) -> WriteResult:
        """Delete every document of the core.

        The descriptor does not narrow the deletion; its filters are ignored.
        """
        if descriptor is not None and descriptor.has_filters:
            logger.warning(
                "purge() ignores descriptor filters; deleting all documents"
            )
        logger.info("Purging all documents")
        try:
            update = self._client.create_update()
            update.add_delete_query(MATCH_ALL).add_commit()
            await self._client.update(update)
        except Exception as e:  # noqa: BLE001
            return self._failed("purge", e)
        return WriteResult.success()

    async def trigger_delta_import(self) -> None:
        """Ask the ``dataimport`` handler for a delta import. Fire and forget."""
        request = SolrRequest(handler="dataimport").add_param("command", "delta-import")
        logger.info("Triggering Solr delta-import")
        await self._client.execute_request(request)

    def _read_identifier(self, entity: Any) -> Any:
        field = self.identifier_field(entity)
        getter = getattr(entity, "get_field", None)
        return getter(field) if callable(getter) else getattr(entity, field, None)

    def _identifier_of(self, entity: Any) -> Any:
        value = self._read_identifier(entity)
        if value is None:
            field = self.identifier_field(entity)
            raise ValueError(
                f"{type(entity).__name__} has no value for identifier field '{field}'"
            )
        return value

    @staticmethod
    def _failed(
        operation: str, exc: Exception, written: list[Any] | None = None
    ) -> WriteResult:
        error = WriteError.wrap(exc)
        logger.error("Solr %s failed: %s", operation, error.message)
        return WriteResult.failure(error, written or ())
