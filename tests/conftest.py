"""Test configuration for the Solr persistence package."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from cqrs_ddd_persistence_solr import (
    SolrEntity,
    SolrGateway,
    SolrResult,
    SolrSelectQuery,
    SolrUpdateQuery,
    SolrUpdateResult,
)
from cqrs_ddd_persistence_solr.query import SolrRequest


class Book(SolrEntity):
    """Entity used across gateway tests."""

    id: str | None = None
    title: str
    year: int = 0
    published_at: datetime | None = None


class RecordingSolrClient:
    """In-memory ``ISolrClient`` recording every call.

    ``results`` are returned by ``execute`` in order (the last one repeats).
    ``fail_on_update`` maps the 1-based update call number to the exception
    raised for it.
    """

    def __init__(self, results: list[SolrResult] | None = None) -> None:
        self.results = results or [SolrResult(num_found=0, documents=[])]
        self.executed: list[SolrSelectQuery] = []
        self.updates: list[SolrUpdateQuery] = []
        self.requests: list[SolrRequest] = []
        self.fail_on_update: dict[int, Exception] = {}

    def create_select(self) -> SolrSelectQuery:
        return SolrSelectQuery()

    def create_update(self) -> SolrUpdateQuery:
        return SolrUpdateQuery()

    async def execute(self, query: SolrSelectQuery) -> SolrResult:
        self.executed.append(query)
        index = min(len(self.executed), len(self.results)) - 1
        return self.results[index]

    async def update(self, update: SolrUpdateQuery) -> SolrUpdateResult:
        self.updates.append(update)
        failure = self.fail_on_update.get(len(self.updates))
        if failure is not None:
            raise failure
        return SolrUpdateResult(status=0)

    async def execute_request(self, request: SolrRequest) -> dict[str, Any]:
        self.requests.append(request)
        return {"responseHeader": {"status": 0}}


def make_result(docs: list[dict[str, Any]], num_found: int | None = None) -> SolrResult:
    return SolrResult(
        num_found=len(docs) if num_found is None else num_found, documents=docs
    )


@pytest.fixture
def solr_client() -> RecordingSolrClient:
    return RecordingSolrClient()


@pytest.fixture
def gateway(solr_client: RecordingSolrClient) -> SolrGateway[Book]:
    return SolrGateway(solr_client, entity_cls=Book)


@pytest.fixture
def book_docs() -> list[dict[str, Any]]:
    return [
        {"id": "b1", "title": "Dune", "year": 1965, "score": 1.5, "_version_": 11},
        {"id": "b2", "title": "Solaris", "year": 1961, "score": 1.2, "_version_": 12},
    ]

