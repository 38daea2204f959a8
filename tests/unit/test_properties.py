"""Property-based tests for matching invariants."""

import re
import string

import pytest
from hypothesis import given
from hypothesis import strategies as st

from logspect.core.attributes import flatten_attributes
from logspect.core.expectation import Expectation
from logspect.core.formatting import render_failure
from logspect.core.matcher import entry_satisfies, find_entry
from logspect.core.models import LogEntry, Severity

keys = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=8)
scalars = st.one_of(st.integers(), st.text(max_size=10), st.booleans())
attribute_trees = st.recursive(
    scalars,
    lambda children: st.dictionaries(keys, children, min_size=1, max_size=3),
    max_leaves=8,
)
attribute_maps = st.dictionaries(keys, attribute_trees, max_size=4)
severities = st.sampled_from(list(Severity))
messages = st.text(max_size=20)


@st.composite
def entries(draw: st.DrawFn) -> LogEntry:
    return LogEntry(
        timestamp=draw(st.floats(min_value=0, max_value=2e9)),
        severity=draw(severities),
        message=draw(messages),
        progname=draw(st.one_of(st.none(), keys)),
        attributes=draw(attribute_maps),
    )


class TestMatchingProperties:
    """Property-based tests for the entry matcher."""

    @pytest.mark.core
    @given(entry=entries())
    def test_entry_matches_its_own_fields(self, entry: LogEntry) -> None:
        """An expectation built from an entry always matches that entry."""
        expectation = Expectation(
            severity=entry.severity,
            message=entry.message,
            progname=entry.progname,
            attributes=entry.attributes,
        )
        assert entry_satisfies(entry, expectation)

    @pytest.mark.core
    @given(entry=entries(), nested=attribute_maps)
    def test_dotted_and_nested_forms_agree(
        self, entry: LogEntry, nested: dict[str, object]
    ) -> None:
        """Nested and flattened attribute expectations give the same answer."""
        nested_result = entry_satisfies(entry, Expectation(attributes=nested))
        dotted_result = entry_satisfies(
            entry, Expectation(attributes=flatten_attributes(nested))
        )
        assert nested_result == dotted_result

    @pytest.mark.core
    @given(entry=entries(), data=st.data())
    def test_removing_a_field_never_breaks_a_match(
        self, entry: LogEntry, data: st.DataObject
    ) -> None:
        """Dropping a constraint only weakens the expectation."""
        full = {
            "severity": entry.severity,
            "message": entry.message,
            "progname": entry.progname,
            "attributes": entry.attributes,
        }
        dropped = data.draw(st.sampled_from(sorted(full)))
        partial = {name: value for name, value in full.items() if name != dropped}

        assert entry_satisfies(entry, Expectation(**full))
        assert entry_satisfies(entry, Expectation(**partial))

    @pytest.mark.core
    @given(captured=st.lists(entries(), max_size=6), target=messages)
    def test_find_returns_first_satisfying_entry(
        self, captured: list[LogEntry], target: str
    ) -> None:
        """find_entry returns the earliest entry with the message, or None."""
        expectation = Expectation(message=target)
        expected = next((e for e in captured if e.message == target), None)
        assert find_entry(captured, expectation) is expected

    @pytest.mark.core
    @given(captured=st.lists(entries(), max_size=6), word=keys)
    def test_pattern_is_substring_search(self, captured: list[LogEntry], word: str) -> None:
        """Pattern message expectations match any entry containing the text."""
        expectation = Expectation(message=re.compile(re.escape(word)))
        expected = next((e for e in captured if word in str(e.message)), None)
        assert find_entry(captured, expectation) is expected

    @pytest.mark.core
    @given(captured=st.lists(entries(), max_size=4))
    def test_failure_count_line_is_pluralised(self, captured: list[LogEntry]) -> None:
        """Exactly one entry reads 'entry'; any other count reads 'entries'."""
        message = render_failure(Expectation(message="x"), None, captured)
        noun = "entry" if len(captured) == 1 else "entries"
        assert f"Logged {len(captured)} {noun}" in message
