"""
Tests for mockweb messages

Tests MockResponse and RecordedRequest helpers including:
- Header handling and chaining
- JSON responses
- Body parsing with JSONPath
- Replaying JSON bodies with a modified field
"""

import json

import pytest

from mockweb import JsonMapper, MockResponse, json_response, response_with_body

from conftest import TestObject, make_request


class TestMockResponse:
    """Test MockResponse builder."""

    def test_defaults(self):
        response = MockResponse()

        assert response.status == 200
        assert response.headers == []
        assert response.body == b""

    def test_chaining(self):
        response = MockResponse().set_response_code(201).set_header("X-Id", 7).set_body("created")

        assert response.status == 201
        assert response.get_header("x-id") == "7"
        assert response.body_as_string() == "created"

    def test_set_header_replaces_case_insensitively(self):
        response = MockResponse().add_header("content-type", "text/plain").set_header("Content-Type", "application/json")

        assert response.headers == [("Content-Type", "application/json")]

    def test_copy_is_independent(self):
        original = MockResponse().add_header("A", "1")
        copy = original.copy().add_header("B", "2")

        assert original.headers == [("A", "1")]
        assert copy.headers == [("A", "1"), ("B", "2")]

    def test_missing_fixture_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MockResponse().set_json_file_as_body("missing.json", base_dir=tmp_path)

    def test_response_with_body(self):
        assert response_with_body("Yoda").body == b"Yoda"

    def test_set_body_rejects_other_types(self):
        with pytest.raises(TypeError, match="str or bytes"):
            MockResponse().set_body(3)

    def test_set_body_accepts_bytearray(self):
        assert MockResponse().set_body(bytearray(b"ab")).body == b"ab"


class TestJsonResponse:
    """Test json_response."""

    def test_empty(self):
        response = json_response()

        assert response.get_header("Content-Type") == "application/json"
        assert response.body == b""

    def test_string_body_verbatim(self):
        assert json_response('{"a": 1}').body_as_string() == '{"a": 1}'

    def test_object_body_serialized(self):
        assert json_response(TestObject("test")).body_as_string() == '{"value":"test"}'

    def test_custom_mapper(self):
        response = json_response({"b": 1, "a": 2}, mapper=JsonMapper(sort_keys=True))

        assert response.body_as_string() == '{"a":2,"b":1}'


class TestRecordedRequestBody:
    """Test body helpers on RecordedRequest."""

    def test_body_as_string(self):
        request = make_request("/", body="Grüß".encode("utf-8"))

        assert request.body_as_string() == "Grüß"

    def test_body_as_object_whole_document(self):
        request = make_request("/", body=b'{"value": "test"}')

        assert request.body_as_object() == {"value": "test"}
        assert request.body_as_object(into=TestObject) == TestObject("test")

    def test_body_as_object_at_path(self):
        request = make_request("/", body=b'{"items": [{"id": 1}, {"id": 2}], "meta": {"total": "2"}}')

        assert request.body_as_object("$.items[1].id") == 2
        assert request.body_as_object("$.meta.total", into=int) == 2

    def test_body_as_object_missing_path(self):
        request = make_request("/", body=b'{"value": "test"}')

        with pytest.raises(KeyError):
            request.body_as_object("$.missing")

    def test_body_as_object_malformed_json(self):
        request = make_request("/", body=b"not json")

        with pytest.raises(json.JSONDecodeError):
            request.body_as_object()

    def test_str_shows_request_line(self):
        assert str(make_request("/jedi", method="POST")) == "Request{line=POST /jedi HTTP/1.1}"


class TestReplayWithModification:
    """Test replay_request_json_with_modification."""

    def test_replace_nested_field(self):
        request = make_request("/test", method="POST", body=b'{"result":{"status":"Pending"}}')

        response = request.replay_request_json_with_modification(root_path="/result", key="status", new_value="Success")

        assert response.status == 200
        assert response.get_header("Content-Type") == "application/json"
        assert response.body_as_string() == '{"result":{"status":"Success"}}'

    def test_root_pointer_adds_field(self):
        request = make_request("/", body=b'{"a":1}')

        response = request.replay_request_json_with_modification(root_path="", key="b", new_value={"c": True})

        assert json.loads(response.body) == {"a": 1, "b": {"c": True}}

    def test_array_index_pointer(self):
        request = make_request("/", body=b'{"items":[{"state":"old"}]}')

        response = request.replay_request_json_with_modification("/items/0", "state", "new")

        assert json.loads(response.body) == {"items": [{"state": "new"}]}

    def test_missing_pointer_raises(self):
        request = make_request("/", body=b'{"result":{}}')

        with pytest.raises(KeyError):
            request.replay_request_json_with_modification("/other", "status", "Success")

    def test_non_object_target_raises(self):
        request = make_request("/", body=b'{"result":"done"}')

        with pytest.raises(TypeError):
            request.replay_request_json_with_modification("/result", "status", "Success")
