"""
mockweb Server Module

In-process HTTP server used as the transport for mocks in tests.

This module provides:
- FastAPI/uvicorn based MockWebServer
- Queue and custom dispatchers
- Recorded request snapshots and scripted responses
- Response transformers
"""

from .messages import MockResponse, RecordedRequest, json_response, response_with_body
from .dispatcher import Dispatcher, QueueDispatcher
from .transformers import ResponseTransformer, ConnectionHeaderTransformer, default_extensions
from .mock_web_server import MockWebServer

__all__ = [
    # Server
    'MockWebServer',

    # Messages
    'MockResponse',
    'RecordedRequest',
    'json_response',
    'response_with_body',

    # Dispatchers
    'Dispatcher',
    'QueueDispatcher',

    # Transformers
    'ResponseTransformer',
    'ConnectionHeaderTransformer',
    'default_extensions',
]
