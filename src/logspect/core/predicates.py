"""Predicate evaluation for expected field and attribute values.

Every expected value is one of three kinds:

* a compiled regular expression, matched with ``search`` semantics against
  the textual form of the actual value;
* a matcher object exposing ``matches(value) -> bool`` (PyHamcrest matchers
  fit this shape);
* anything else, compared by equality.

The kind is resolved once by :func:`as_predicate`, and :meth:`Predicate.evaluate`
is the single place that switches on it.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, cast, runtime_checkable


@runtime_checkable
class ValueMatcher(Protocol):
    """Anything that can test a single value."""

    def matches(self, item: object) -> bool:
        """Return True when ``item`` satisfies this matcher."""
        ...


class PredicateKind(str, Enum):
    """Supported predicate kinds."""

    LITERAL = "literal"
    PATTERN = "pattern"
    MATCHER = "matcher"


@dataclass(frozen=True)
class Predicate:
    """An expected value tagged with how it is evaluated."""

    kind: PredicateKind
    expected: object

    def matches(self, item: object) -> bool:
        """Alias of :meth:`evaluate` so a Predicate is itself a ValueMatcher."""
        return self.evaluate(item)

    def evaluate(self, actual: object) -> bool:
        """Return True when ``actual`` satisfies the expected value."""
        if self.kind == PredicateKind.PATTERN:
            if actual is None:
                return False
            pattern = cast(re.Pattern[Any], self.expected)
            return pattern.search(_searchable(pattern, actual)) is not None
        if self.kind == PredicateKind.MATCHER:
            return bool(cast(ValueMatcher, self.expected).matches(actual))
        return bool(self.expected == actual)


def _searchable(pattern: re.Pattern[Any], actual: object) -> str | bytes:
    """Textual form of ``actual`` in the pattern's own string type."""
    if isinstance(pattern.pattern, bytes):
        if isinstance(actual, bytes | bytearray):
            return bytes(actual)
        return str(actual).encode("utf-8")
    return str(actual)


def as_predicate(expected: object) -> Predicate:
    """Tag an expected value with its predicate kind."""
    if isinstance(expected, Predicate):
        return expected
    if isinstance(expected, re.Pattern):
        return Predicate(kind=PredicateKind.PATTERN, expected=expected)
    if isinstance(expected, ValueMatcher):
        return Predicate(kind=PredicateKind.MATCHER, expected=expected)
    return Predicate(kind=PredicateKind.LITERAL, expected=expected)


def satisfies(expected: object, actual: object) -> bool:
    """Return True when ``actual`` satisfies ``expected``.

    Example:
        >>> satisfies(re.compile("logged"), "User logged in")
        True
        >>> satisfies(123, "123")
        False
    """
    return as_predicate(expected).evaluate(actual)
