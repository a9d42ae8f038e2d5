"""
mockweb exceptions

Errors raised by the rule dispatcher and the mock web server.
"""

from typing import Any


class MockWebError(Exception):
    """Base class for all mockweb errors."""


class RuleNotFoundError(MockWebError, LookupError):
    """Raised when updating a rule by an id that is not in the rule set."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"No rule with id {rule_id} was found")


class NoMatchError(MockWebError, LookupError):
    """Raised when no rule produces a response for an incoming request."""

    def __init__(self, request: Any):
        self.request = request
        super().__init__(f"No rule matches request={request}")


class StartupError(MockWebError):
    """Raised when the mock web server cannot start listening."""


class ShutdownError(MockWebError):
    """Raised when the mock web server does not stop cleanly."""
