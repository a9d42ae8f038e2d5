"""
mockweb MockWebServer

In-process HTTP server for tests. A FastAPI application with a single
catch-all route records every request and asks the current Dispatcher for a
response; uvicorn serves the application on a background thread.

Features:
- Ephemeral or fixed ports
- FIFO response queue (default) or custom dispatchers
- Recorded requests with bounded take_request()
- Response transformers applied to every response
"""

import logging
import queue
import threading
import time
from typing import Any, Callable, Iterable, List, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from starlette.concurrency import run_in_threadpool

from ..common.config import MockWebConfig
from ..exceptions import ShutdownError, StartupError
from .dispatcher import Dispatcher, QueueDispatcher
from .messages import MockResponse, RecordedRequest
from .transformers import ResponseTransformer, default_extensions

HTTP_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE"]

# Computed by the HTTP layer, never copied from a MockResponse
HEADERS_TO_SKIP = {'content-length', 'transfer-encoding'}


class MockWebServer:
    """
    Scriptable HTTP server for tests.

    Example:
        server = MockWebServer()
        server.enqueue(MockResponse().set_body("hello"))
        server.start()

        requests.get(server.url("/greeting"))

        recorded = server.take_request(timeout=1)
        assert recorded.path == "/greeting"
        server.shutdown()

        # Or as a context manager
        with MockWebServer() as server:
            ...
    """

    def __init__(
        self,
        config: Optional[MockWebConfig] = None,
        transformers: Optional[Iterable[ResponseTransformer]] = None
    ):
        """
        Initialize mock web server.

        Args:
            config: Optional MockWebConfig for server behavior
            transformers: Response transformers to apply, in order. Defaults to
                the Connection header transformer when config.connection_close
                is set, otherwise none.
        """
        self.config = config or MockWebConfig()

        self.logger = logging.getLogger("mockweb.server")
        self.logger.setLevel(getattr(logging, self.config.log_level.upper()))

        self.dispatcher: Dispatcher = QueueDispatcher(timeout=self.config.dispatch_timeout)

        if transformers is not None:
            self.transformers: List[ResponseTransformer] = list(transformers)
        elif self.config.connection_close:
            self.transformers = default_extensions()
        else:
            self.transformers = []

        self._requests: "queue.Queue[RecordedRequest]" = queue.Queue()
        self._request_count = 0
        self._count_lock = threading.Lock()

        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None
        self._port: Optional[int] = None
        self._started = False
        self._shut_down = False

        # Called with the server once it is listening
        self.on_listening: List[Callable[['MockWebServer'], Any]] = []

        self.app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application with the catch-all route."""
        app = FastAPI(
            title="mockweb MockWebServer",
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )

        @app.api_route("/{path:path}", methods=HTTP_METHODS)
        async def mock_request(request: Request, path: str):
            """Record the request and answer it through the dispatcher."""
            return await self._handle_request(request)

        return app

    async def _handle_request(self, request: Request) -> Response:
        body = await request.body()

        raw_path = request.scope.get('raw_path')
        target = raw_path.decode('latin-1') if raw_path else request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        recorded = RecordedRequest(
            method=request.method,
            path=target,
            headers=list(request.headers.items()),
            body=body,
            sequence_number=self._next_sequence_number(),
            http_version=request.scope.get('http_version', '1.1')
        )
        self._requests.put(recorded)

        self.logger.debug(f"Incoming: {recorded.request_line}")

        try:
            response = await run_in_threadpool(self.dispatcher.dispatch, recorded)
        except Exception as e:
            self.logger.warning(f"Dispatch failed for {recorded.request_line}: {e}")
            response = MockResponse().set_response_code(500).set_body(f"Dispatch failed: {e}")

        if response is None:
            self.logger.warning(f"Dispatcher returned no response for {recorded.request_line}")
            response = MockResponse().set_response_code(500).set_body("Dispatcher returned no response")

        for transformer in self.transformers:
            response = transformer.transform(recorded, response)

        return self._to_http_response(response)

    def _to_http_response(self, response: MockResponse) -> Response:
        http_response = Response(content=response.body, status_code=response.status)
        for name, value in response.headers:
            if name.lower() in HEADERS_TO_SKIP:
                continue
            http_response.headers.append(name, value)
        return http_response

    def _next_sequence_number(self) -> int:
        with self._count_lock:
            sequence_number = self._request_count
            self._request_count += 1
        return sequence_number

    def start(self, port: Optional[int] = None) -> 'MockWebServer':
        """
        Start listening.

        Args:
            port: Port to bind to (overrides config; 0 or None = ephemeral)

        Raises:
            StartupError: If already started, shut down, or the bind fails
        """
        if self._shut_down:
            raise StartupError("MockWebServer was shut down and cannot be restarted")
        if self._started:
            raise StartupError("start() already called")

        bind_port = self.config.port if port is None else int(port)

        server = uvicorn.Server(uvicorn.Config(
            self.app,
            host=self.config.host,
            port=bind_port,
            log_level=self.config.log_level,
            log_config=None,
            access_log=False,
            lifespan="off",
            timeout_graceful_shutdown=1
        ))
        thread = threading.Thread(
            target=server.run,
            name=f"mockweb-{self.config.host}:{bind_port}",
            daemon=True
        )
        thread.start()

        deadline = time.monotonic() + self.config.start_timeout
        while not server.started:
            if not thread.is_alive():
                raise StartupError(f"Failed to start mock web server on {self.config.host}:{bind_port}")
            if time.monotonic() > deadline:
                server.should_exit = True
                thread.join(timeout=self.config.shutdown_timeout)
                raise StartupError(f"Mock web server did not start within {self.config.start_timeout}s")
            time.sleep(0.01)

        self._port = server.servers[0].sockets[0].getsockname()[1]
        self._server = server
        self._thread = thread
        self._started = True

        self.logger.info(f"Mock web server listening on {self.base_url}")
        for callback in self.on_listening:
            callback(self)
        return self

    def shutdown(self) -> None:
        """
        Stop listening. A server that was never started is left untouched.

        Raises:
            ShutdownError: If the server thread does not stop in time
        """
        if not self._started:
            return

        self._started = False
        self._shut_down = True
        self.dispatcher.shutdown()
        self._server.should_exit = True
        self._thread.join(timeout=self.config.shutdown_timeout)

        if self._thread.is_alive():
            self._server.force_exit = True
            raise ShutdownError(f"Mock web server on port {self._port} did not stop within "
                                f"{self.config.shutdown_timeout}s")

        self.logger.info(f"Mock web server on port {self._port} stopped")

    def enqueue(self, response: MockResponse) -> None:
        """Queue a response for the default QueueDispatcher."""
        if not isinstance(self.dispatcher, QueueDispatcher):
            raise TypeError(
                f"enqueue() requires a QueueDispatcher, not {type(self.dispatcher).__name__}"
            )
        self.dispatcher.enqueue_response(response)

    def take_request(self, timeout: Optional[float] = None) -> Optional[RecordedRequest]:
        """
        Return the next recorded request, in arrival order.

        Args:
            timeout: Seconds to wait; None blocks until a request arrives

        Returns:
            The request, or None if none arrived within the timeout
        """
        try:
            return self._requests.get(timeout=timeout)
        except queue.Empty:
            return None

    @property
    def request_count(self) -> int:
        with self._count_lock:
            return self._request_count

    @property
    def started(self) -> bool:
        return self._started

    @property
    def hostname(self) -> str:
        return self.config.host

    @property
    def port(self) -> int:
        if self._port is None:
            raise StartupError("MockWebServer is not started")
        return self._port

    def url(self, path: str = "/") -> str:
        """Absolute URL for ``path`` on this server."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"http://{self.hostname}:{self.port}{path}"

    @property
    def base_url(self) -> str:
        return self.url("/")

    def __enter__(self) -> 'MockWebServer':
        if not self._started:
            self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return f"MockWebServer[{self._port if self._port is not None else 'unstarted'}]"
