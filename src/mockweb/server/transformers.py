"""
mockweb Response Transformers

Post-processing applied by the server to every response it sends.
"""

from typing import List, Optional

from .messages import MockResponse, RecordedRequest

CONNECTION = "Connection"


class ResponseTransformer:
    """Base class for response transformers."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def transform(self, request: Optional[RecordedRequest], response: MockResponse) -> MockResponse:
        raise NotImplementedError


class ConnectionHeaderTransformer(ResponseTransformer):
    """Adds "Connection: Close" so clients never reuse the mock's connections."""

    def transform(self, request: Optional[RecordedRequest], response: MockResponse) -> MockResponse:
        return response.copy().add_header(CONNECTION, "Close")


def default_extensions() -> List[ResponseTransformer]:
    return [ConnectionHeaderTransformer()]
