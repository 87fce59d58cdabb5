import pytest

from apidoc2har.oas.query import convert_query, query_pairs
from conftest import operation_spec


def _pairs(query):
    return [(q.name, q.value) for q in query]


class TestQueryPairs:
    def test_scalar(self):
        assert _pairs(query_pairs("limit", 10, explode=True)) == [("limit", "10")]

    def test_exploded_array(self):
        assert _pairs(query_pairs("id", [3, 4], explode=True)) == [("id", "3"), ("id", "4")]

    def test_joined_array(self):
        assert _pairs(query_pairs("id", [3, 4], explode=False, delimiter="|")) == [("id", "3|4")]

    def test_exploded_object(self):
        assert _pairs(query_pairs("color", {"R": 100, "G": 200}, explode=True)) == [("R", "100"), ("G", "200")]

    def test_joined_object(self):
        assert _pairs(query_pairs("color", {"R": 100, "G": 200}, explode=False)) == [("color", "R,100,G,200")]


class TestOas3Query:
    @pytest.mark.parametrize("param, expected", [
        ({"style": "form"}, [("id", "3"), ("id", "4")]),
        ({"style": "form", "explode": False}, [("id", "3,4")]),
        ({"style": "spaceDelimited", "explode": False}, [("id", "3 4")]),
        ({"style": "pipeDelimited", "explode": False}, [("id", "3|4")]),
    ])
    def test_array_styles(self, make_ctx, param, expected):
        spec = operation_spec({"parameters": [
            {"name": "id", "in": "query", "example": [3, 4], "schema": {"type": "array"}, **param},
        ]})
        assert _pairs(convert_query(make_ctx(spec))) == expected

    def test_deep_object(self, make_ctx):
        spec = operation_spec({"parameters": [
            {"name": "filter", "in": "query", "style": "deepObject", "explode": True,
             "schema": {"type": "object", "properties": {"kind": {"type": "string", "enum": ["dog"]}, "age": {"type": "integer", "minimum": 2}}}},
        ]})
        assert _pairs(convert_query(make_ctx(spec))) == [("filter[kind]", "dog"), ("filter[age]", "2")]

    def test_api_key_in_query(self, make_ctx):
        spec = operation_spec(
            {"parameters": [{"name": "q", "in": "query", "schema": {"type": "string"}}]},
            security=[{"key": []}],
            components={"securitySchemes": {"key": {"type": "apiKey", "in": "query", "name": "token"}}},
        )
        assert _pairs(convert_query(make_ctx(spec))) == [("q", "lorem"), ("token", "api_key")]

    def test_operation_security_overrides_document(self, make_ctx):
        spec = operation_spec(
            {"security": []},
            security=[{"key": []}],
            components={"securitySchemes": {"key": {"type": "apiKey", "in": "query", "name": "token"}}},
        )
        assert convert_query(make_ctx(spec)) == []


class TestOas2Query:
    @pytest.mark.parametrize("collection_format, expected", [
        ("csv", [("id", "3,4")]),
        ("ssv", [("id", "3 4")]),
        ("tsv", [("id", "3\t4")]),
        ("pipes", [("id", "3|4")]),
        ("multi", [("id", "3"), ("id", "4")]),
    ])
    def test_collection_formats(self, make_ctx, collection_format, expected):
        spec = operation_spec(
            {"parameters": [{"name": "id", "in": "query", "type": "array", "default": [3, 4], "collectionFormat": collection_format}]},
            swagger=True,
        )
        assert _pairs(convert_query(make_ctx(spec))) == expected

    def test_default_collection_format_is_csv(self, make_ctx):
        spec = operation_spec(
            {"parameters": [{"name": "id", "in": "query", "type": "array", "default": [3, 4]}]},
            swagger=True,
        )
        assert _pairs(convert_query(make_ctx(spec))) == [("id", "3,4")]
