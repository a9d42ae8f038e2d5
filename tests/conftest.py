"""Shared fixtures for mockweb tests."""

import socket
from dataclasses import dataclass
from pathlib import Path

import pytest

from mockweb import MockWebServer, RecordedRequest


@dataclass
class TestObject:
    __test__ = False  # not a test class

    value: str


@pytest.fixture
def resources_dir():
    """Directory holding fixture files."""
    return Path(__file__).parent / "resources"


@pytest.fixture
def server():
    """Started queue-backed server, shut down after the test."""
    mock_server = MockWebServer()
    mock_server.start()
    yield mock_server
    mock_server.shutdown()


@pytest.fixture
def free_port():
    """A TCP port that was free a moment ago."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def make_request(path: str, method: str = "GET", body: bytes = b"", headers=None) -> RecordedRequest:
    """Build a RecordedRequest without going through a server."""
    return RecordedRequest(method=method, path=path, headers=list((headers or {}).items()), body=body)
