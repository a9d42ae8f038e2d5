"""
mockweb Rule Dispatcher

Bridges MockWebServer's per-request callback to a RuleSet.
"""

import logging

from ..exceptions import NoMatchError
from ..server.dispatcher import Dispatcher
from ..server.messages import MockResponse, RecordedRequest
from .rules import RuleSet

logger = logging.getLogger("mockweb.httpmock")


class RuleDispatcher(Dispatcher):
    """
    Answers every request from a RuleSet.

    Unmatched requests raise NoMatchError; the server turns that into a 500
    response so the test fails loudly instead of getting an empty answer.
    """

    def __init__(self, rules: RuleSet):
        self.rules = rules

    def dispatch(self, request: RecordedRequest) -> MockResponse:
        logger.debug(f"Dispatcher called for {request.path}, rules size: {len(self.rules)}")
        try:
            return self.rules.evaluate(request)
        except NoMatchError:
            logger.debug(f"No rule matches request={request}")
            raise
