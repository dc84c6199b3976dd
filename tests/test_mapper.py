"""Unit tests for SolrResultMapper and result containers."""

from __future__ import annotations

import pytest
from conftest import Book, make_result

from cqrs_ddd_persistence_solr.entity import ProjectionEntity, model_factory
from cqrs_ddd_persistence_solr.exceptions import UnsupportedModeError
from cqrs_ddd_persistence_solr.mapper import SolrResultMapper
from cqrs_ddd_persistence_solr.pagination import PaginationState
from cqrs_ddd_persistence_solr.results import (
    FetchMode,
    ResultKind,
    build_container,
)


@pytest.fixture
def mapper() -> SolrResultMapper[Book]:
    return SolrResultMapper(model_factory(Book))


class TestEntityMapping:
    """ENTITIES mode."""

    def test_documents_become_entities_in_engine_order(self, mapper, book_docs):
        container = mapper.to_entities(make_result(book_docs))

        assert container.kind is ResultKind.ENTITIES
        assert [b.id for b in container] == ["b1", "b2"]
        assert all(isinstance(b, Book) for b in container)

    def test_factory_receives_whole_field_map(self, book_docs):
        seen = []
        mapper = SolrResultMapper(lambda fields: seen.append(fields) or fields)
        mapper.to_entities(make_result(book_docs))
        assert seen == book_docs

    def test_paginated_entities_carry_metadata(self, mapper, book_docs):
        container = mapper.to_entities(
            make_result(book_docs, num_found=42), PaginationState.paged(3, 2)
        )

        assert container.kind is ResultKind.PAGINATED_ENTITIES
        assert container.current_page == 3
        assert container.per_page == 2
        assert container.total == 42
        assert container.page_count == 21

    def test_size_limited_is_not_paginated(self, mapper, book_docs):
        container = mapper.to_entities(
            make_result(book_docs, num_found=42), PaginationState.limited(2)
        )
        assert container.is_paginated is False
        assert container.total is None


class TestProjectionMapping:
    """PROJECTION mode."""

    def test_internal_fields_are_stripped(self, mapper, book_docs):
        container = mapper.to_projection(make_result(book_docs))

        assert container.kind is ResultKind.PROJECTION
        rows = [row.to_dict() for row in container]
        assert rows == [
            {"id": "b1", "title": "Dune", "year": 1965},
            {"id": "b2", "title": "Solaris", "year": 1961},
        ]
        assert all(isinstance(row, ProjectionEntity) for row in container)

    def test_source_documents_are_not_mutated(self, mapper, book_docs):
        mapper.to_projection(make_result(book_docs))
        assert "score" in book_docs[0]
        assert "_version_" in book_docs[0]

    def test_paginated_projection(self, mapper, book_docs):
        container = mapper.to_projection(
            make_result(book_docs, num_found=2), PaginationState.paged(1, 10)
        )
        assert container.kind is ResultKind.PAGINATED_PROJECTION
        assert (container.current_page, container.per_page, container.total) == (
            1,
            10,
            2,
        )

    def test_underscore_fields_survive(self, mapper):
        container = mapper.to_projection(
            make_result(
                [{"id": "b1", "_root_": "r", "_nest_path_": "/x", "score": 1.0}]
            )
        )
        row = container.first()
        assert row.to_dict() == {"id": "b1", "_root_": "r", "_nest_path_": "/x"}
        assert row.get_field("_root_") == "r"

    def test_field_named_like_class_attribute_is_plain_data(self, mapper):
        container = mapper.to_projection(
            make_result([{"id": "b1", "identifier_field": "x"}])
        )
        assert container.first().to_dict() == {"id": "b1", "identifier_field": "x"}
        assert ProjectionEntity.identifier_field == "id"

    def test_duplicates_are_kept(self, mapper, book_docs):
        container = mapper.to_projection(make_result([book_docs[0], book_docs[0]]))
        assert len(container) == 2


def test_map_dispatches_on_mode(mapper, book_docs) -> None:
    result = make_result(book_docs)
    assert mapper.map(result, FetchMode.ENTITIES).kind is ResultKind.ENTITIES
    assert mapper.map(result, FetchMode.PROJECTION).kind is ResultKind.PROJECTION


def test_map_rejects_unknown_mode(mapper, book_docs) -> None:
    with pytest.raises(UnsupportedModeError, match="facets"):
        mapper.map(make_result(book_docs), "facets")  # type: ignore[arg-type]


class TestBuildContainer:
    """The single constructor for all four container shapes."""

    @pytest.mark.parametrize(
        ("mode", "pagination", "kind"),
        [
            (FetchMode.ENTITIES, None, ResultKind.ENTITIES),
            (
                FetchMode.ENTITIES,
                PaginationState.paged(1, 5),
                ResultKind.PAGINATED_ENTITIES,
            ),
            (FetchMode.PROJECTION, PaginationState.limited(5), ResultKind.PROJECTION),
            (
                FetchMode.PROJECTION,
                PaginationState.paged(2, 5),
                ResultKind.PAGINATED_PROJECTION,
            ),
        ],
    )
    def test_kind_selection(self, mode, pagination, kind):
        assert build_container(mode, [], pagination, total=0).kind is kind

    def test_container_sequence_behaviour(self):
        container = build_container(FetchMode.ENTITIES, ["a", "b"])
        assert container[1] == "b"
        assert container.first() == "a"
        assert list(container) == ["a", "b"]
        assert build_container(FetchMode.ENTITIES, []).first() is None

    def test_to_dict(self):
        container = build_container(
            FetchMode.PROJECTION, ["a"], PaginationState.paged(2, 1), total=5
        )
        assert container.to_dict() == {
            "kind": "paginated_projection",
            "count": 1,
            "current_page": 2,
            "per_page": 1,
            "total": 5,
        }
