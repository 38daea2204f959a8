"""In-memory log capture for tests."""

from collections.abc import Iterator, Mapping

from logspect.core.expectation import Expectation
from logspect.core.matcher import find_entry
from logspect.core.models import LogEntry
from logspect.core.scoring import closest_entry


class InMemoryLogCapture:
    """In-memory implementation of LogCapturePort and ClosestMatchPort.

    Stores log entries in a list, in the order they were written. The
    capture is shared across every assertion made against it, so call
    :meth:`clear` between independent test cases.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to the capture."""
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        """Snapshot of captured entries, in capture order."""
        return tuple(self._entries)

    def clear(self) -> None:
        """Discard all captured entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    def match(
        self,
        *,
        severity: object = None,
        message: object = None,
        progname: object = None,
        attributes: Mapping[str, object] | None = None,
    ) -> LogEntry | None:
        """Return the first entry satisfying the given values, if any."""
        expectation = Expectation(
            severity=severity, message=message, progname=progname, attributes=attributes
        )
        return find_entry(self._entries, expectation)

    def include(
        self,
        *,
        severity: object = None,
        message: object = None,
        progname: object = None,
        attributes: Mapping[str, object] | None = None,
    ) -> bool:
        """Return True when some entry satisfies the given values."""
        return (
            self.match(
                severity=severity,
                message=message,
                progname=progname,
                attributes=attributes,
            )
            is not None
        )

    def closest_match(
        self,
        *,
        severity: object = None,
        message: object = None,
        progname: object = None,
        attributes: Mapping[str, object] | None = None,
    ) -> LogEntry | None:
        """Return the entry nearest to satisfying the given values.

        Returns None when no entry scores high enough to be worth reporting.
        """
        expectation = Expectation(
            severity=severity, message=message, progname=progname, attributes=attributes
        )
        return closest_entry(self._entries, expectation)
