"""
mockweb Messages

MockResponse is what dispatchers hand back to the server; RecordedRequest is
the snapshot of an incoming request that rules, dispatchers and assertions
see.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from jsonpath_ng.ext import parse as jsonpath_parse

from ..common.config import MockWebConfig
from ..common.json_mapper import JsonMapper, default_mapper
from ..common.utils import read_fixture, resolve_json_pointer

CONTENT_TYPE = "Content-Type"
APPLICATION_JSON = "application/json"


@dataclass
class MockResponse:
    """
    Scripted HTTP response.

    All setters return the response itself so calls can be chained:

        MockResponse().set_response_code(201).set_body('{"id": 1}')
    """

    status: int = 200
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    def set_response_code(self, status: int) -> 'MockResponse':
        self.status = status
        return self

    def set_header(self, name: str, value: Any) -> 'MockResponse':
        """Replace every header called ``name`` (case-insensitive) with one value."""
        self.remove_header(name)
        return self.add_header(name, value)

    def add_header(self, name: str, value: Any) -> 'MockResponse':
        self.headers.append((name, str(value)))
        return self

    def remove_header(self, name: str) -> 'MockResponse':
        lowered = name.lower()
        self.headers = [(k, v) for k, v in self.headers if k.lower() != lowered]
        return self

    def get_header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def set_body(self, body: Union[str, bytes]) -> 'MockResponse':
        if isinstance(body, str):
            self.body = body.encode('utf-8')
        elif isinstance(body, (bytes, bytearray)):
            self.body = bytes(body)
        else:
            raise TypeError(f"Body must be str or bytes, not {type(body).__name__}")
        return self

    def set_json_file_as_body(
        self,
        file_name: str,
        base_dir: Optional[Union[str, Path]] = None
    ) -> 'MockResponse':
        """
        Use a fixture file's contents as a JSON body.

        Args:
            file_name: Fixture file name, relative to ``base_dir``
            base_dir: Directory to look in (defaults to the configured fixtures_dir)
        """
        if base_dir is None:
            base_dir = MockWebConfig.load().fixtures_dir

        self.add_header(CONTENT_TYPE, APPLICATION_JSON)
        return self.set_body(read_fixture(file_name, base_dir))

    def body_as_string(self) -> str:
        return self.body.decode('utf-8')

    def copy(self) -> 'MockResponse':
        return replace(self, headers=list(self.headers))


@dataclass
class RecordedRequest:
    """
    Snapshot of a request received by a MockWebServer.

    ``path`` includes the query string, e.g. ``/users?page=2``.
    """

    method: str
    path: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    sequence_number: int = 0
    http_version: str = "1.1"

    @property
    def request_line(self) -> str:
        return f"{self.method} {self.path} HTTP/{self.http_version}"

    def get_header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def body_as_string(self) -> str:
        return self.body.decode('utf-8')

    def body_as_object(
        self,
        path: str = "$",
        into: Optional[Callable[..., Any]] = None,
        mapper: Optional[JsonMapper] = None
    ) -> Any:
        """
        Parse the body as JSON and extract the value at a JSONPath.

        Args:
            path: JSONPath expression (default: the whole document)
            into: Optional type or callable to convert the value into
            mapper: JsonMapper to use (defaults to the configured mapper)

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
            KeyError: If nothing matches ``path``
        """
        data = json.loads(self.body_as_string())
        matches = jsonpath_parse(path).find(data)
        if not matches:
            raise KeyError(f"No value at JSON path '{path}'")

        return (mapper or default_mapper()).convert_value(matches[0].value, into)

    def replay_request_json_with_modification(
        self,
        root_path: str,
        key: str,
        new_value: Any
    ) -> MockResponse:
        """
        Echo the JSON body back with one field replaced.

        Args:
            root_path: JSON Pointer to the object holding ``key`` (e.g. "/result")
            key: Field to replace
            new_value: Replacement value

        Returns:
            200 MockResponse with the modified JSON body
        """
        mapper = JsonMapper()
        document = mapper.read_tree(self.body_as_string())
        target = resolve_json_pointer(document, root_path)
        if not isinstance(target, dict):
            raise TypeError(f"Node at '{root_path}' is {type(target).__name__}, not an object")

        target[key] = new_value

        return (
            MockResponse()
            .set_response_code(200)
            .set_body(mapper.write_value_as_string(document))
            .set_header(CONTENT_TYPE, APPLICATION_JSON)
        )

    def __str__(self) -> str:
        return f"Request{{line={self.request_line}}}"


def response_with_body(body: Union[str, bytes]) -> MockResponse:
    return MockResponse().set_body(body)


def json_response(body: Any = None, mapper: Optional[JsonMapper] = None) -> MockResponse:
    """
    Create a JSON response.

    Strings are used as the body verbatim; other values are serialized.
    """
    response = MockResponse().set_header(CONTENT_TYPE, APPLICATION_JSON)
    if body is None:
        return response
    if isinstance(body, (str, bytes)):
        return response.set_body(body)
    return response.set_body((mapper or default_mapper()).write_value_as_string(body))
