"""Assert on structured log entries captured during tests."""

from collections.abc import Mapping

from logspect.adapters.logging import CaptureHandler, ContextProvider
from logspect.adapters.storage.in_memory import InMemoryLogCapture
from logspect.core.attributes import flatten_attributes
from logspect.core.expectation import Expectation
from logspect.core.matcher import IncludeLogEntryMatcher, find
from logspect.core.models import LogEntry, Severity
from logspect.core.ports import (
    ClosestMatchPort,
    InvalidLogSourceError,
    LogCaptureOwner,
    LogCapturePort,
)

__version__ = "0.1.0"


def include_log_entry(
    *,
    severity: object = None,
    message: object = None,
    progname: object = None,
    attributes: Mapping[str, object] | None = None,
) -> IncludeLogEntryMatcher:
    """Create a matcher for a log capture that includes an entry.

    Each value may be a literal, a compiled pattern (matched with search
    semantics) or a matcher object such as a PyHamcrest matcher. Values
    left as None are not checked.

    Args:
        severity: Expected severity, e.g. ``"info"`` or ``Severity.INFO``.
        message: Expected message.
        progname: Expected program name.
        attributes: Expected attributes, nested or keyed by dotted path.

    Returns:
        An IncludeLogEntryMatcher.

    Example:
        >>> assert_that(capture, include_log_entry(severity="info", message="User logged in"))
        >>> assert_that(capture, include_log_entry(message=re.compile("error", re.I),
        ...                                        attributes={"user_id": 123}))
    """
    return IncludeLogEntryMatcher(
        Expectation(
            severity=severity, message=message, progname=progname, attributes=attributes
        )
    )


__all__ = [
    "CaptureHandler",
    "ClosestMatchPort",
    "ContextProvider",
    "Expectation",
    "IncludeLogEntryMatcher",
    "InMemoryLogCapture",
    "InvalidLogSourceError",
    "LogCaptureOwner",
    "LogCapturePort",
    "LogEntry",
    "Severity",
    "find",
    "flatten_attributes",
    "include_log_entry",
]
