"""Matcher for asserting that a log capture includes an entry."""

from collections.abc import Iterable, Mapping
from typing import Any

from hamcrest.core.base_matcher import BaseMatcher
from hamcrest.core.core.isnone import IsNone
from hamcrest.core.description import Description

from logspect.core.attributes import MISSING, lookup_attribute
from logspect.core.expectation import Expectation
from logspect.core.formatting import (
    describe,
    render_failure,
    render_negated_failure,
    wrong_source_message,
)
from logspect.core.models import LogEntry
from logspect.core.ports import (
    ClosestMatchPort,
    InvalidLogSourceError,
    LogCapturePort,
    resolve_capture,
)
from logspect.core.predicates import as_predicate


def entry_satisfies(entry: LogEntry, expectation: Expectation) -> bool:
    """Return True when every specified field and attribute is satisfied."""
    for name, expected in expectation.fields().items():
        if not as_predicate(expected).evaluate(getattr(entry, name)):
            return False
    return attributes_satisfy(entry.attributes, expectation.flat_attributes())


def attributes_satisfy(
    attributes: Mapping[str, object], expected: Mapping[str, object]
) -> bool:
    """Return True when each expected dotted path resolves and is satisfied.

    An expected ``None`` or PyHamcrest ``none()`` also accepts an absent key.
    Any other expected value fails against an absent key without being
    evaluated.
    """
    for path, expected_value in expected.items():
        actual = lookup_attribute(attributes, path)
        if actual is MISSING:
            if _represents_absence(expected_value):
                continue
            return False
        if not as_predicate(expected_value).evaluate(actual):
            return False
    return True


def _represents_absence(expected: object) -> bool:
    return expected is None or isinstance(expected, IsNone)


def find_entry(
    entries: Iterable[LogEntry], expectation: Expectation
) -> LogEntry | None:
    """Return the first entry, in capture order, satisfying the expectation."""
    for entry in entries:
        if entry_satisfies(entry, expectation):
            return entry
    return None


def find(source: object, expectation: Expectation) -> LogEntry | None:
    """Find the first matching entry in a capture or a capture's owner.

    Raises:
        InvalidLogSourceError: ``source`` is not a log capture and does not
            own one.
    """
    capture = resolve_capture(source)
    if capture is None:
        raise InvalidLogSourceError(source)
    return find_entry(capture.entries, expectation)


class IncludeLogEntryMatcher(BaseMatcher[Any]):
    """Matches log captures that include an entry with the expected values.

    Works with ``hamcrest.assert_that`` and directly::

        matcher = include_log_entry(severity="info", message="User logged in")
        if not matcher.matches(capture):
            raise AssertionError(matcher.failure_message())

    Failure messages describe the candidate passed to the latest
    :meth:`matches` call.
    """

    def __init__(self, expectation: Expectation) -> None:
        self.expectation = expectation
        self._candidate: object = None

    def _matches(self, item: Any) -> bool:
        self._candidate = item
        try:
            return find(item, self.expectation) is not None
        except InvalidLogSourceError:
            return False

    def _capture(self) -> LogCapturePort | None:
        return resolve_capture(self._candidate)

    def failure_message(self) -> str:
        """Explain why the last candidate did not include the entry."""
        capture = self._capture()
        if capture is None:
            return wrong_source_message(self._candidate)
        closest = None
        if isinstance(capture, ClosestMatchPort):
            closest = capture.closest_match(**self.expectation.constraints())
        return render_failure(self.expectation, closest, capture.entries)

    def negated_failure_message(self) -> str:
        """Explain why the last candidate unexpectedly included the entry."""
        capture = self._capture()
        if capture is None:
            return wrong_source_message(self._candidate)
        found = find_entry(capture.entries, self.expectation)
        return render_negated_failure(self.expectation, found)

    def description(self) -> str:
        """One-line summary of the expectation."""
        return describe(self.expectation)

    def describe_to(self, description: Description) -> None:
        description.append_text(self.description())

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        self._matches(item)
        mismatch_description.append_text(self.failure_message())
