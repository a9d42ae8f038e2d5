"""
mockweb Rules

Ordered, first-match-wins rule matching for HttpMock.

A rule pairs a check (does this rule care about the request?) with a
response function. Checks may answer True, False or None; None abstains and is
treated like False. A response function may return None to decline, in which
case evaluation moves on to the next rule.
"""

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

from ..exceptions import NoMatchError, RuleNotFoundError
from ..server.messages import MockResponse, RecordedRequest

logger = logging.getLogger("mockweb.httpmock")


class Verdict(Enum):
    """Result of a rule check."""

    MATCH = "match"
    NO_MATCH = "no_match"
    ABSTAIN = "abstain"

    @classmethod
    def of(cls, value: Any) -> 'Verdict':
        """Normalize a check's return value (bool, None or Verdict)."""
        if isinstance(value, Verdict):
            return value
        if value is None:
            return cls.ABSTAIN
        return cls.MATCH if value else cls.NO_MATCH


MockFlag = Callable[[RecordedRequest], Union[bool, Verdict, None]]
MockRule = Callable[[RecordedRequest], Optional[MockResponse]]


def always(request: RecordedRequest) -> bool:
    return True


def path_ends_with(suffix: str) -> MockFlag:
    def check(request: RecordedRequest) -> Optional[bool]:
        return request.path.endswith(suffix) if request.path is not None else None
    return check


def path_contains(substring: str) -> MockFlag:
    def check(request: RecordedRequest) -> Optional[bool]:
        return substring in request.path if request.path is not None else None
    return check


@dataclass(frozen=True)
class Rule:
    """A check, a response function and an optional id."""

    check: MockFlag
    fn: MockRule
    id: Optional[str] = None

    def verdict(self, request: RecordedRequest) -> Verdict:
        return Verdict.of(self.check(request))

    def with_fn(self, fn: MockRule) -> 'Rule':
        return replace(self, fn=fn)


class RuleSet:
    """
    Ordered, mutable collection of rules.

    Insertion order is evaluation order. Mutation and evaluation may happen
    on different threads: evaluation works on a snapshot of the list taken
    under the lock.

    Example:
        rules = RuleSet()
        rules.add(path_ends_with("/jedi"), lambda r: MockResponse().set_body("Yoda"), id="jedi")
        response = rules.evaluate(request)
    """

    def __init__(self, rules: Optional[List[Rule]] = None):
        self._rules: List[Rule] = list(rules or [])
        self._lock = threading.RLock()

    def append(self, rule: Rule) -> 'RuleSet':
        with self._lock:
            self._rules.append(rule)
        return self

    def add(self, check: MockFlag, fn: MockRule, id: Optional[str] = None) -> 'RuleSet':
        """Append a rule. Duplicate ids are allowed; lookups use the first."""
        return self.append(Rule(check=check, fn=fn, id=id))

    def remove_by_id(self, rule_id: str) -> Optional[Rule]:
        """Remove and return the first rule with this id, or None."""
        if rule_id is None:
            return None

        with self._lock:
            for index, rule in enumerate(self._rules):
                if rule.id == rule_id:
                    return self._rules.pop(index)
        return None

    def replace_by_id(self, rule_id: str, fn: MockRule) -> Rule:
        """
        Swap the response function of the rule with this id.

        The updated rule is re-appended at the END of the list, so it loses its
        original position.

        Raises:
            RuleNotFoundError: If no rule has this id
        """
        with self._lock:
            removed = self.remove_by_id(rule_id)
            if removed is None:
                raise RuleNotFoundError(rule_id)
            updated = removed.with_fn(fn)
            self._rules.append(updated)
        return updated

    def clear(self) -> None:
        with self._lock:
            self._rules.clear()

    def snapshot(self) -> Tuple[Rule, ...]:
        with self._lock:
            return tuple(self._rules)

    def ids(self) -> List[Optional[str]]:
        return [rule.id for rule in self.snapshot()]

    def evaluate(self, request: RecordedRequest) -> MockResponse:
        """
        Return the response of the first rule that matches and does not decline.

        Raises:
            NoMatchError: If no rule produces a response
        """
        for rule in self.snapshot():
            if rule.verdict(request) is not Verdict.MATCH:
                continue

            response = rule.fn(request)
            if response is not None:
                return response

            logger.debug(f"Rule {rule.id or '<anonymous>'} declined {request.request_line}")

        raise NoMatchError(request)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"RuleSet({self.ids()})"
