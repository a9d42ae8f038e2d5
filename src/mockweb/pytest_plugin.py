"""
mockweb pytest plugin

Registered through the ``pytest11`` entry point. Clears every http mock
server after each test and provides server fixtures.
"""

import pytest

from .common.config import MockWebConfig
from .httpmock.lifecycle import ServerRegistry, clear_all_http_mocks, default_registry
from .server.mock_web_server import MockWebServer


@pytest.fixture(autouse=True)
def _clear_http_mocks():
    """Stop every server started through HttpMock once the test is done."""
    yield
    clear_all_http_mocks()


@pytest.fixture
def mockweb_config():
    """Configuration from MOCKWEB_CONFIG / MOCKWEB_* environment variables."""
    return MockWebConfig.load()


@pytest.fixture
def http_mock_registry():
    """The process-wide registry used by HttpMock by default."""
    return default_registry()


@pytest.fixture
def isolated_http_mock_registry():
    """A private registry, cleared when the test ends."""
    registry = ServerRegistry()
    yield registry
    registry.clear_all()


@pytest.fixture
def mock_web_server(mockweb_config):
    """A started, queue-backed MockWebServer, shut down after the test."""
    server = MockWebServer(config=mockweb_config)
    server.start()
    yield server
    server.shutdown()
