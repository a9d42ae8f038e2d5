"""
mockweb HttpMock Module

Rule-based dispatching for mock web servers.

This module provides:
- Ordered, first-match-wins rules
- A dispatcher binding rules to a MockWebServer
- HttpMock builder and server lifecycle helpers
- A registry of started servers for teardown between tests
"""

from .rules import Rule, RuleSet, Verdict, MockFlag, MockRule, always, path_ends_with, path_contains
from .dispatcher import RuleDispatcher
from .lifecycle import (
    HttpMock,
    Outcome,
    ServerRegistry,
    best_effort,
    clear_all_http_mocks,
    default_registry,
    http_mock_server,
    init_http_mock_server
)

__all__ = [
    # Rules
    'Rule',
    'RuleSet',
    'Verdict',
    'MockFlag',
    'MockRule',
    'always',
    'path_ends_with',
    'path_contains',

    # Dispatcher
    'RuleDispatcher',

    # Lifecycle
    'HttpMock',
    'Outcome',
    'ServerRegistry',
    'best_effort',
    'clear_all_http_mocks',
    'default_registry',
    'http_mock_server',
    'init_http_mock_server',
]
