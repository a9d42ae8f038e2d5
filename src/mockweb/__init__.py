"""
mockweb - HTTP server mocking for tests

This package provides:
- MockWebServer, an in-process HTTP server with a response queue
- HttpMock, rule-based dispatching with first-match-wins semantics
- Request/response helpers for JSON bodies and fixtures
- Assertion helpers over recorded requests
"""

from .exceptions import MockWebError, RuleNotFoundError, NoMatchError, StartupError, ShutdownError
from .common import MockWebConfig, JsonMapper, JsonMapperConfigurer
from .server import (
    MockWebServer,
    MockResponse,
    RecordedRequest,
    Dispatcher,
    QueueDispatcher,
    ConnectionHeaderTransformer,
    json_response,
    response_with_body
)
from .httpmock import (
    HttpMock,
    Rule,
    RuleSet,
    Verdict,
    ServerRegistry,
    clear_all_http_mocks,
    http_mock_server,
    init_http_mock_server
)
from .extensions import RecordedRequests, assert_requests, enqueue_json, execute

__all__ = [
    # Errors
    'MockWebError',
    'RuleNotFoundError',
    'NoMatchError',
    'StartupError',
    'ShutdownError',

    # Config
    'MockWebConfig',
    'JsonMapper',
    'JsonMapperConfigurer',

    # Server
    'MockWebServer',
    'MockResponse',
    'RecordedRequest',
    'Dispatcher',
    'QueueDispatcher',
    'ConnectionHeaderTransformer',
    'json_response',
    'response_with_body',

    # HttpMock
    'HttpMock',
    'Rule',
    'RuleSet',
    'Verdict',
    'ServerRegistry',
    'clear_all_http_mocks',
    'http_mock_server',
    'init_http_mock_server',

    # Extensions
    'RecordedRequests',
    'assert_requests',
    'enqueue_json',
    'execute',
]

__version__ = '1.0.0'
