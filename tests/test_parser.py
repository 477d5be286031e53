"""Tests for elastic_scroll.parser module."""

import json

import pytest

from elastic_scroll.exceptions import ParseError, ProtocolError
from elastic_scroll.parser import SearchResponse, parse_scroll_id, parse_search_response


class TestParseSearchResponse:
    """Tests for parse_search_response."""

    def test_parses_full_response(self):
        """Extracts hits, total, cursor, timing and aggregations."""
        payload = json.dumps({
            "_scroll_id": "abc==",
            "took": 12,
            "hits": {
                "total": 2,
                "hits": [
                    {"_id": "1", "_source": {"msg": "first"}},
                    {"_id": "2", "_source": {"msg": "second"}},
                ],
            },
            "aggregations": {"by_host": {"buckets": []}},
        })

        response = parse_search_response(payload)

        assert response.total_matched == 2
        assert [h["_id"] for h in response.hits] == ["1", "2"]
        assert response.cursor == "abc=="
        assert response.took_millis == 12
        assert response.aggregations == {"by_host": {"buckets": []}}

    def test_accepts_bytes(self):
        """Bytes payloads parse like text."""
        response = parse_search_response(b'{"hits": {"total": 0, "hits": []}}')

        assert response.total_matched == 0
        assert response.hits == ()

    def test_accepts_object_total(self):
        """hits.total in {"value": n} form is read as n."""
        payload = '{"hits": {"total": {"value": 42, "relation": "eq"}, "hits": []}}'

        assert parse_search_response(payload).total_matched == 42

    def test_missing_inner_hits_is_empty_page(self):
        """filter_path drops empty arrays, so absent hits.hits means no hits."""
        response = parse_search_response('{"took": 1, "hits": {"total": 7}}')

        assert response.hits == ()
        assert response.total_matched == 7

    def test_optional_fields_default_to_none(self):
        """cursor, took and aggregations are None when absent."""
        response = parse_search_response('{"hits": {"total": 0}}')

        assert response.cursor is None
        assert response.took_millis is None
        assert response.aggregations is None

    def test_parsing_twice_gives_equal_results(self):
        """The parser keeps no state between calls."""
        payload = '{"_scroll_id": "c", "hits": {"total": 1, "hits": [{"_id": "1"}]}}'

        assert parse_search_response(payload) == parse_search_response(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            "",
            "{\"hits\": ",
            "[]",
            "null",
            '{"took": 3}',
            '{"hits": []}',
            '{"hits": {"hits": []}}',
            '{"hits": {"total": -1, "hits": []}}',
            '{"hits": {"total": "10", "hits": []}}',
            '{"hits": {"total": 1, "hits": {"_id": "1"}}}',
        ],
    )
    def test_rejects_invalid_payloads(self, payload):
        """Malformed or structurally invalid payloads raise ParseError."""
        with pytest.raises(ParseError):
            parse_search_response(payload)

    def test_does_not_evaluate_payload(self):
        """Python expressions are not accepted as a response body."""
        with pytest.raises(ParseError):
            parse_search_response("{'hits': {'total': 0}}")


class TestParseScrollId:
    """Tests for parse_scroll_id."""

    def test_returns_cursor(self):
        """Returns the cursor when present."""
        response = SearchResponse(hits=(), total_matched=0, cursor="abc")

        assert parse_scroll_id(response) == "abc"

    @pytest.mark.parametrize("cursor", [None, ""])
    def test_missing_cursor_raises(self, cursor):
        """A missing or empty cursor raises ProtocolError."""
        response = SearchResponse(hits=(), total_matched=5, cursor=cursor)

        with pytest.raises(ProtocolError) as exc_info:
            parse_scroll_id(response)

        assert str(exc_info.value) == "no scroll id on scroll response"
