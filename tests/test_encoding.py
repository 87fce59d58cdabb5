import json

import pytest

from apidoc2har.encoding import (
    MULTIPART_BOUNDARY,
    encode_body,
    encode_multipart,
    encode_urlencoded,
    encode_xml,
    to_text,
)
from apidoc2har.models import PostDataParam
from apidoc2har.pointer import compile_pointer, get_pointer
from apidoc2har.errors import InvalidDocumentError


class TestToText:
    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        (True, "true"),
        (False, "false"),
        ("abc", "abc"),
        (42, "42"),
        (1.5, "1.5"),
        ({"a": 1}, '{"a": 1}'),
        ([1, 2], "[1, 2]"),
    ])
    def test_to_text(self, value, expected):
        assert to_text(value) == expected


class TestEncodeBody:
    def test_json(self):
        post_data = encode_body("application/json", {"name": "doggie"})
        assert post_data.mime_type == "application/json"
        assert json.loads(post_data.text) == {"name": "doggie"}

    def test_vendor_json(self):
        post_data = encode_body("application/vnd.api+json", [1])
        assert post_data.text == "[1]"

    def test_urlencoded(self):
        post_data = encode_body("application/x-www-form-urlencoded", {"name": "big dog", "tags": ["a", "b"]})
        assert post_data.text == "name=big%20dog&tags=a&tags=b"
        assert [p.name for p in post_data.params] == ["name", "tags", "tags"]

    def test_multipart(self):
        post_data = encode_body("multipart/form-data", {"name": "doggie"})
        assert post_data.mime_type == f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"
        assert post_data.text == (
            f"--{MULTIPART_BOUNDARY}\r\n"
            'Content-Disposition: form-data; name="name"\r\n'
            "\r\n"
            "doggie\r\n"
            f"--{MULTIPART_BOUNDARY}--\r\n"
        )

    def test_xml(self):
        post_data = encode_body("application/xml", {"name": "doggie", "tags": ["a", "b"]})
        assert post_data.text.endswith("<root><name>doggie</name><tags>a</tags><tags>b</tags></root>")

    def test_plain_text(self):
        assert encode_body("text/plain", 42).text == "42"


class TestFormEncoders:
    def test_encode_urlencoded_keeps_params(self):
        post_data = encode_urlencoded([("a", "1"), ("b", "x&y")])
        assert post_data.text == "a=1&b=x%26y"
        assert post_data.params[1].value == "x&y"

    def test_multipart_file_part(self):
        post_data = encode_multipart([PostDataParam(name="file", value="", file_name="pet.png")])
        assert 'name="file"; filename="pet.png"' in post_data.text
        assert "Content-Type: application/octet-stream" in post_data.text

    def test_xml_list_root(self):
        assert encode_xml([1, 2]).endswith("<root><item>1</item><item>2</item></root>")


class TestPointer:
    def test_compile_escapes_tokens(self):
        assert compile_pointer(["paths", "/pets/{id}", "get", "parameters", 0]) == "/paths/~1pets~1{id}/get/parameters/0"

    def test_get_pointer(self):
        doc = {"paths": {"/pets": {"get": {"parameters": [{"name": "limit"}]}}}}
        assert get_pointer(doc, "/paths/~1pets/get/parameters/0/name") == "limit"

    def test_get_pointer_missing(self):
        with pytest.raises(InvalidDocumentError, match="Cannot resolve JSON pointer"):
            get_pointer({}, "/components/schemas/Pet")
