"""
mockweb Extensions

Helpers for driving a queue-backed MockWebServer from tests: enqueue JSON
responses, run a block of client code and collect the requests it made, and
assert on what the server received.
"""

from typing import Any, Callable, List, Optional

from .common.json_mapper import JsonMapper
from .server.messages import APPLICATION_JSON, CONTENT_TYPE, MockResponse, RecordedRequest, json_response
from .server.mock_web_server import MockWebServer


class RecordedRequests(list):
    """List of recorded requests with chainable assertions."""

    def contains_request(self, method: Any, path: str) -> 'RecordedRequests':
        """
        Assert that some request has this method and path.

        Args:
            method: HTTP method name (or an enum such as http.HTTPMethod)
            path: Exact request path, including any query string

        Raises:
            AssertionError: If no request matches
        """
        method_name = str(getattr(method, 'value', method)).upper()
        if any(r.method == method_name and r.path == path for r in self):
            return self
        raise AssertionError(
            f"Expected {method_name} request with {path} but was {[str(r) for r in self]}"
        )


def enqueue_json(server: MockWebServer, *responses: MockResponse) -> None:
    """Enqueue responses with a JSON content type."""
    for response in responses:
        response.set_header(CONTENT_TYPE, APPLICATION_JSON)
        server.enqueue(response)


def assert_requests(server: MockWebServer, timeout_ms: Optional[int] = None) -> RecordedRequests:
    """
    Drain every request the server has received so far.

    Each take waits up to ``timeout_ms`` (default: config.assert_timeout_ms),
    so draining ends one timeout after the last request.
    """
    if timeout_ms is None:
        timeout_ms = server.config.assert_timeout_ms

    requests = RecordedRequests()
    while True:
        request = server.take_request(timeout=timeout_ms / 1000)
        if request is None:
            return requests
        requests.append(request)


def _to_mock_response(response: Any, mapper: Optional[JsonMapper]) -> MockResponse:
    if isinstance(response, MockResponse):
        return response
    if isinstance(response, tuple) and len(response) == 2 and isinstance(response[0], int):
        status, body = response
        return json_response(body, mapper=mapper).set_response_code(status)
    return json_response(response, mapper=mapper)


def execute(
    server: MockWebServer,
    *responses: Any,
    fn: Callable[[], Any],
    timeout_ms: Optional[int] = None,
    mapper: Optional[JsonMapper] = None
) -> List[Optional[RecordedRequest]]:
    """
    Enqueue responses, run ``fn``, and take one request per response.

    Args:
        server: Queue-backed server
        responses: MockResponse (sent as-is), (status, body) tuple (JSON with
            that status) or any other object (JSON, status 200)
        fn: Client code that talks to the server
        timeout_ms: Wait per request (default: config.take_request_timeout_ms)
        mapper: JsonMapper for object bodies (default: the configured mapper)

    Returns:
        Recorded requests in arrival order; None where a request never came

    If ``fn`` raises, outstanding requests are drained before the error
    propagates.
    """
    if timeout_ms is None:
        timeout_ms = server.config.take_request_timeout_ms

    def take_requests() -> List[Optional[RecordedRequest]]:
        return [server.take_request(timeout=timeout_ms / 1000) for _ in responses]

    try:
        for response in responses:
            server.enqueue(_to_mock_response(response, mapper))
        fn()
        return take_requests()
    except BaseException:
        take_requests()
        raise


__all__ = [
    'RecordedRequests',
    'assert_requests',
    'enqueue_json',
    'execute',
]
