"""
Tests for mockweb common utilities

Tests shared helpers including:
- JSON mapping and the process-wide mapper
- JSON Pointer resolution
- Fixture file lookup
"""

import pytest

from mockweb.common import (
    JsonMapper,
    JsonMapperConfigurer,
    default_mapper,
    read_fixture,
    resolve_json_pointer,
    split_json_pointer
)

from conftest import TestObject


class TestJsonMapper:
    """Test JsonMapper."""

    def test_compact_output(self):
        assert JsonMapper().write_value_as_string({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_dataclass_serialization(self):
        assert JsonMapper().write_value_as_string([TestObject("x")]) == '[{"value":"x"}]'

    def test_unserializable_raises(self):
        with pytest.raises(TypeError):
            JsonMapper().write_value_as_string(object())

    def test_convert_value(self):
        mapper = JsonMapper()

        assert mapper.convert_value({"value": "x", "extra": 1}, TestObject) == TestObject("x")
        assert mapper.convert_value("5", int) == 5
        assert mapper.convert_value({"a": 1}, dict) == {"a": 1}
        assert mapper.convert_value([1], None) == [1]

    def test_configurer_reset(self):
        JsonMapperConfigurer.mapper = JsonMapper(indent=2)
        try:
            assert default_mapper().dumps_kwargs['indent'] == 2
        finally:
            JsonMapperConfigurer.reset()

        assert 'indent' not in default_mapper().dumps_kwargs


class TestJsonPointer:
    """Test JSON Pointer helpers."""

    def test_split(self):
        assert split_json_pointer("") == []
        assert split_json_pointer("/") == []
        assert split_json_pointer("/a~1b/c~0d") == ["a/b", "c~d"]

    def test_split_invalid(self):
        with pytest.raises(ValueError):
            split_json_pointer("result")

    def test_resolve(self):
        document = {"result": {"items": [{"id": 1}]}}

        assert resolve_json_pointer(document, "/result/items/0") == {"id": 1}
        assert resolve_json_pointer(document, "") is document

    def test_resolve_missing(self):
        with pytest.raises(KeyError):
            resolve_json_pointer({"a": {}}, "/a/b")
        with pytest.raises(KeyError):
            resolve_json_pointer({"a": [1]}, "/a/3")
        with pytest.raises(KeyError):
            resolve_json_pointer({"a": 1}, "/a/b")


class TestReadFixture:
    """Test fixture lookup."""

    def test_relative_to_base_dir(self, resources_dir):
        assert read_fixture("test.json", resources_dir) == '{"key":"test123"}'

    def test_leading_slash_ignored(self, resources_dir):
        assert read_fixture("/test.json", resources_dir) == '{"key":"test123"}'

    def test_absolute_path(self, resources_dir):
        assert read_fixture(str(resources_dir / "test.json")) == '{"key":"test123"}'

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_fixture("nope.json", tmp_path)
