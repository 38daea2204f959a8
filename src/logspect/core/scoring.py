"""Nearest-match scoring for entries that do not satisfy an expectation.

Used by captures to answer ``closest_match``. Each specified field scores
between 0 and 1 and the field scores are combined as a weighted average.
"""

from collections.abc import Iterable
from difflib import SequenceMatcher

from logspect.core.expectation import Expectation
from logspect.core.matcher import attributes_satisfy
from logspect.core.models import LogEntry, Severity
from logspect.core.predicates import as_predicate

FIELD_WEIGHTS = {"message": 4.0, "severity": 2.0, "attributes": 2.0, "progname": 1.0}

# Entries scoring below this are not worth showing
MIN_SCORE = 0.5

_SEVERITY_RANKS = {member: rank for rank, member in enumerate(Severity)}


def _field_score(name: str, expected: object, actual: object) -> float:
    if as_predicate(expected).evaluate(actual):
        return 1.0
    if isinstance(expected, str) and isinstance(actual, str):
        return SequenceMatcher(None, expected, actual).ratio()
    if name == "severity":
        expected_level = Severity.coerce(expected)
        actual_level = Severity.coerce(actual)
        if isinstance(expected_level, Severity) and isinstance(actual_level, Severity):
            distance = abs(
                _SEVERITY_RANKS[expected_level] - _SEVERITY_RANKS[actual_level]
            )
            return max(0.0, 1.0 - distance / 4)
    return 0.0


def _attributes_score(entry: LogEntry, expected: dict[str, object]) -> float:
    satisfied = sum(
        1
        for path, value in expected.items()
        if attributes_satisfy(entry.attributes, {path: value})
    )
    return satisfied / len(expected)


def score_entry(entry: LogEntry, expectation: Expectation) -> float:
    """Score how closely an entry satisfies an expectation.

    Returns:
        A value between 0 and 1. An empty expectation scores 0.
    """
    total = 0.0
    weight = 0.0
    for name, expected in expectation.fields().items():
        total += FIELD_WEIGHTS[name] * _field_score(name, expected, getattr(entry, name))
        weight += FIELD_WEIGHTS[name]

    expected_attributes = expectation.flat_attributes()
    if expected_attributes:
        total += FIELD_WEIGHTS["attributes"] * _attributes_score(
            entry, expected_attributes
        )
        weight += FIELD_WEIGHTS["attributes"]

    if weight == 0:
        return 0.0
    return total / weight


def closest_entry(
    entries: Iterable[LogEntry],
    expectation: Expectation,
    min_score: float = MIN_SCORE,
) -> LogEntry | None:
    """Return the best-scoring entry, earliest first on ties.

    Args:
        entries: Candidate entries in capture order.
        expectation: The unmet expectation.
        min_score: Lowest score worth reporting.

    Returns:
        The closest entry, or None when nothing reaches ``min_score``.
    """
    best: LogEntry | None = None
    best_score = min_score
    for entry in entries:
        score = score_entry(entry, expectation)
        if score > best_score or (best is None and score >= best_score and score > 0):
            best, best_score = entry, score
    return best
