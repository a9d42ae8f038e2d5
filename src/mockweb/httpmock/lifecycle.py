"""
mockweb HttpMock

Rule-based mock HTTP servers and their lifecycle.

HttpMock collects rules, binds them to MockWebServer instances through a
RuleDispatcher, and tracks every server it starts in a ServerRegistry so a
single clear_all_http_mocks() call can stop them all after a test.

Start and stop calls made on behalf of the caller are best-effort: failures
are logged and returned as an Outcome, never raised, so teardown code cannot
mask the real test failure.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, TypeVar, Union

from ..common.config import MockWebConfig
from ..server.mock_web_server import MockWebServer
from .dispatcher import RuleDispatcher
from .rules import MockFlag, MockRule, Rule, RuleSet, always, path_contains, path_ends_with

logger = logging.getLogger("mockweb.httpmock")

T = TypeVar('T')


@dataclass
class Outcome:
    """Result of a best-effort operation. Safe to discard."""

    ok: bool
    error: Optional[BaseException] = None


def best_effort(action: Callable[..., Any], *args: Any) -> Outcome:
    """Run ``action`` and report instead of raise on failure."""
    try:
        action(*args)
        return Outcome(ok=True)
    except Exception as e:
        logger.debug(f"Ignoring failure in {getattr(action, '__qualname__', action)}: {e}")
        return Outcome(ok=False, error=e)


class ServerRegistry:
    """
    Tracks listening servers for bulk teardown.

    Thread-safe; servers are kept in registration order and registered at
    most once.
    """

    def __init__(self):
        self._servers: List[MockWebServer] = []
        self._lock = threading.Lock()

    def register(self, server: MockWebServer) -> MockWebServer:
        with self._lock:
            if not any(s is server for s in self._servers):
                self._servers.append(server)
        return server

    def clear_all(self) -> List[Outcome]:
        """Stop every tracked server, ignoring stop failures, and forget them."""
        with self._lock:
            servers, self._servers = self._servers, []

        outcomes = [best_effort(server.shutdown) for server in servers]
        if servers:
            logger.debug(f"Cleared {len(servers)} http mock server(s)")
        return outcomes

    @property
    def servers(self) -> List[MockWebServer]:
        with self._lock:
            return list(self._servers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._servers)

    def __contains__(self, server: object) -> bool:
        with self._lock:
            return any(s is server for s in self._servers)

    def __iter__(self) -> Iterator[MockWebServer]:
        return iter(self.servers)


_default_registry = ServerRegistry()


def default_registry() -> ServerRegistry:
    return _default_registry


def clear_all_http_mocks(registry: Optional[ServerRegistry] = None) -> List[Outcome]:
    """Stop and forget every server in ``registry`` (default: the process-wide one)."""
    return (registry if registry is not None else _default_registry).clear_all()


class HttpMock:
    """
    Builder for a rule-driven mock server.

    The ordering of the rules matters: the first rule whose check passes and
    whose function returns a response answers the request. A function that
    returns None is skipped, as is a check that returns None.

    Example:
        mock = HttpMock()
        mock.rule_path_ends_with("/jedi", lambda r: MockResponse().set_body("Yoda"))

        @mock.rule(check=lambda r: r.method == "POST")
        def created(request):
            return MockResponse().set_response_code(201)

        server = mock.start()
        requests.get(server.url("/jedi")).text  # "Yoda"
    """

    def __init__(
        self,
        registry: Optional[ServerRegistry] = None,
        config: Optional[MockWebConfig] = None
    ):
        self.rules = RuleSet()
        self.registry = registry if registry is not None else _default_registry
        self.config = config
        self.server: Optional[MockWebServer] = None

    # Rule building

    def add(self, check: MockFlag, fn: MockRule, id: Optional[str] = None) -> 'HttpMock':
        self.rules.add(check, fn, id)
        return self

    def rule(
        self,
        fn: Union[MockRule, Rule, None] = None,
        *,
        check: Optional[MockFlag] = None,
        id: Optional[str] = None
    ) -> Any:
        """
        Add a rule, or a prebuilt Rule.

        Without ``fn`` this returns a decorator that registers the decorated
        function and hands it back unchanged.
        """
        if isinstance(fn, Rule):
            self.rules.append(fn)
            return self

        if fn is None:
            def decorator(func: MockRule) -> MockRule:
                self.add(check or always, func, id)
                return func
            return decorator

        return self.add(check or always, fn, id)

    def rule_path_ends_with(self, ends_with: str, fn: Optional[MockRule] = None) -> Any:
        """Rule for paths ending with ``ends_with``; the suffix doubles as the rule id."""
        return self.rule(fn, check=path_ends_with(ends_with), id=ends_with)

    def rule_path_contains(self, contains: str, fn: Optional[MockRule] = None) -> Any:
        """Rule for paths containing ``contains``; the substring doubles as the rule id."""
        return self.rule(fn, check=path_contains(contains), id=contains)

    def remove_rule(self, rule_id: str) -> Optional[Rule]:
        return self.rules.remove_by_id(rule_id)

    def update_rule(self, rule_id: str, fn: MockRule) -> 'HttpMock':
        """
        Replace the function of the rule with ``rule_id``.

        The updated rule moves to the end of the rule list.

        Raises:
            RuleNotFoundError: If no rule has this id
        """
        self.rules.replace_by_id(rule_id, fn)
        return self

    # Lifecycle

    def _new_server(self) -> MockWebServer:
        server = MockWebServer(config=self.config)
        server.dispatcher = RuleDispatcher(self.rules)
        server.on_listening.append(self.registry.register)
        self.server = server
        return server

    def start(self, port: Optional[int] = None) -> MockWebServer:
        """Create and start a server bound to these rules; it is registered once listening."""
        server = self._new_server()
        server.start(port)
        return server

    def init(self) -> MockWebServer:
        """
        Create a server bound to these rules without starting it.

        The server joins the registry only when it starts listening.
        """
        return self._new_server()

    def execute_rules(
        self,
        fn: Callable[[MockWebServer], T],
        port: Optional[int] = None
    ) -> T:
        """
        Run ``fn`` against the server, starting it first if needed.

        Rules are kept afterwards, so this can be called repeatedly.
        """
        server = self.server or self.init()
        if not server.started:
            best_effort(server.start, port)
        return fn(server)

    def execute_rules_and_clear_mocks(
        self,
        fn: Callable[[MockWebServer], T],
        port: Optional[int] = None
    ) -> T:
        """Run ``fn`` against the server, then clear every registered server."""
        server = self.server or self.init()
        best_effort(server.start, port)
        try:
            return fn(server)
        finally:
            self.registry.clear_all()


def http_mock_server(
    port: Union[int, str, None, Callable[[HttpMock], Any]] = None,
    block: Optional[Callable[[HttpMock], Any]] = None,
    *,
    registry: Optional[ServerRegistry] = None,
    config: Optional[MockWebConfig] = None
) -> MockWebServer:
    """
    Build an HttpMock with ``block`` and start it.

    Args:
        port: Port to listen on (int or numeric string); omit for ephemeral.
            A callable here is taken as ``block``.
        block: Function that adds rules to the HttpMock

    Example:
        server = http_mock_server(8282, lambda mock: mock.rule(
            lambda request: MockResponse().set_body("Yoda")
        ))
    """
    if callable(port) and block is None:
        port, block = None, port

    mock = HttpMock(registry=registry, config=config)
    if block is not None:
        block(mock)
    return mock.start(int(port) if port is not None else None)


def init_http_mock_server(
    block: Optional[Callable[[HttpMock], Any]] = None,
    *,
    registry: Optional[ServerRegistry] = None,
    config: Optional[MockWebConfig] = None
) -> HttpMock:
    """Build an HttpMock with ``block`` and an unstarted server."""
    mock = HttpMock(registry=registry, config=config)
    if block is not None:
        block(mock)
    mock.init()
    return mock
