"""Shared test fixtures for all test modules."""

from collections.abc import Callable, Mapping

import pytest

from logspect.adapters.storage.in_memory import InMemoryLogCapture
from logspect.core.models import LogEntry, Severity

EntryFactory = Callable[..., LogEntry]


@pytest.fixture
def make_entry() -> EntryFactory:
    """Factory fixture for building LogEntry objects with sensible defaults."""

    def _entry(
        message: object = "test message",
        severity: Severity = Severity.INFO,
        progname: str | None = None,
        attributes: Mapping[str, object] | None = None,
        timestamp: float = 1702300000.0,
    ) -> LogEntry:
        return LogEntry(
            timestamp=timestamp,
            severity=severity,
            message=message,
            progname=progname,
            attributes=dict(attributes or {}),
        )

    return _entry


@pytest.fixture
def capture() -> InMemoryLogCapture:
    """Fixture providing an empty in-memory log capture."""
    return InMemoryLogCapture()


@pytest.fixture
def populated_capture(
    capture: InMemoryLogCapture, make_entry: EntryFactory
) -> InMemoryLogCapture:
    """Capture holding an info, an error and a debug entry, in that order."""
    capture.write(make_entry("test message", Severity.INFO))
    capture.write(make_entry("error message", Severity.ERROR))
    capture.write(make_entry("debug message", Severity.DEBUG))
    return capture
