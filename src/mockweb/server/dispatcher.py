"""
mockweb Dispatchers

A Dispatcher decides which MockResponse answers each RecordedRequest. The
server calls ``dispatch`` once per request, from a worker thread.
"""

import logging
import queue
from typing import Optional

from .messages import MockResponse, RecordedRequest

logger = logging.getLogger("mockweb.server")


class Dispatcher:
    """Base class for request dispatchers."""

    def dispatch(self, request: RecordedRequest) -> MockResponse:
        raise NotImplementedError

    def shutdown(self) -> None:
        """Release any waiters; called when the server shuts down."""


class QueueDispatcher(Dispatcher):
    """
    Serves enqueued responses in FIFO order.

    When the queue is empty the dispatcher waits up to ``timeout`` seconds for
    a response, then answers 404.
    """

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout
        self.responses: "queue.Queue[Optional[MockResponse]]" = queue.Queue()

    def enqueue_response(self, response: MockResponse) -> None:
        self.responses.put(response)

    def dispatch(self, request: RecordedRequest) -> MockResponse:
        try:
            response = self.responses.get(timeout=self.timeout)
        except queue.Empty:
            logger.warning(f"No response enqueued for {request.request_line}")
            return MockResponse().set_response_code(404).set_body("No response enqueued")

        if response is None:
            # Shutdown sentinel: put it back for any other waiter
            self.responses.put(None)
            return MockResponse().set_response_code(503).set_body("Server shutting down")

        return response

    def shutdown(self) -> None:
        self.responses.put(None)
