"""Tests for request builders and response parsing."""

from __future__ import annotations

import json

import pytest

from cqrs_ddd_persistence_solr.exceptions import SolrQueryError
from cqrs_ddd_persistence_solr.query import SolrSelectQuery, SolrUpdateQuery
from cqrs_ddd_persistence_solr.response import SolrResult, SolrUpdateResult


class TestSelectQuery:
    def test_default_params(self):
        assert SolrSelectQuery().to_params() == [("q", "*:*"), ("wt", "json")]

    def test_filter_key_is_replaced_in_place(self):
        query = (
            SolrSelectQuery()
            .create_filter_query("a", "a:1")
            .create_filter_query("b", "b:2")
            .create_filter_query("a", "a:3")
        )
        assert query.filter_queries == {"a": "a:3", "b": "b:2"}
        assert [v for k, v in query.to_params() if k == "fq"] == ["a:3", "b:2"]

    def test_full_params(self):
        query = (
            SolrSelectQuery("title:dune")
            .add_sort("year", "desc")
            .add_sort("title")
            .set_start(20)
            .set_rows(10)
            .set_fields("id", "title")
        )
        assert query.to_params() == [
            ("q", "title:dune"),
            ("sort", "year desc,title asc"),
            ("start", "20"),
            ("rows", "10"),
            ("fl", "id,title"),
            ("wt", "json"),
        ]

    def test_equality(self):
        assert SolrSelectQuery().set_rows(5) == SolrSelectQuery().set_rows(5)
        assert SolrSelectQuery().set_rows(5) != SolrSelectQuery().set_start(5)


class TestUpdateQuery:
    def test_repeated_commands_keep_their_order(self):
        update = (
            SolrUpdateQuery()
            .add_documents([{"id": "a"}, {"id": "b"}])
            .add_delete_query("*:*")
            .add_commit()
        )
        assert update.to_json() == (
            '{"add":{"doc": {"id": "a"}},"add":{"doc": {"id": "b"}},'
            '"delete":{"query": "*:*"},"commit":{}}'
        )
        assert update.count("add") == 2
        assert not update.is_empty()

    def test_ids_are_stringified(self):
        update = SolrUpdateQuery().add_delete_by_ids([1, "b"])
        assert json.loads(update.to_json()) == {"delete": ["1", "b"]}

    def test_empty(self):
        assert SolrUpdateQuery().is_empty()
        assert SolrUpdateQuery().to_json() == "{}"


class TestResponses:
    def test_select_response(self):
        result = SolrResult.from_response(
            {
                "responseHeader": {"status": 0, "QTime": 7},
                "response": {"numFound": 12, "docs": [{"id": "x"}]},
            }
        )
        assert result.num_found == 12
        assert result.documents == [{"id": "x"}]
        assert result.query_time == 7

    @pytest.mark.parametrize("payload", [None, [], {"responseHeader": {}}])
    def test_malformed_select_response(self, payload):
        with pytest.raises(SolrQueryError, match="Malformed"):
            SolrResult.from_response(payload)

    def test_update_response(self):
        result = SolrUpdateResult.from_response({"responseHeader": {"status": 0}})
        assert result.status == 0
        assert result.query_time is None
