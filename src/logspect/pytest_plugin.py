"""pytest integration for logspect.

Registered through the ``pytest11`` entry point. Provides the
``log_capture`` fixture, its ini options, and plain assertion helpers.
"""

import logging
from collections.abc import Generator, Mapping

import pytest

from logspect.adapters.logging import CaptureHandler
from logspect.adapters.storage.in_memory import InMemoryLogCapture
from logspect.core.expectation import Expectation
from logspect.core.matcher import IncludeLogEntryMatcher
from logspect.core.models import Severity
from logspect.core.ports import resolve_capture


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "logspect_level",
        "Minimum level captured by the log_capture fixture.",
        default="DEBUG",
    )
    parser.addini(
        "logspect_include_attrs",
        "LogRecord attributes copied into captured entry attributes.",
        type="linelist",
        default=[],
    )


def capture_level(config: pytest.Config) -> int:
    """Return the configured capture level as a stdlib level number.

    Raises:
        ValueError: The ``logspect_level`` ini value is not a level name.
    """
    raw = config.getini("logspect_level")
    level = Severity.coerce(raw)
    if not isinstance(level, Severity):
        raise ValueError(f"logspect_level: unknown level {raw!r}")
    return int(level)


@pytest.fixture
def log_capture(
    pytestconfig: pytest.Config,
) -> Generator[InMemoryLogCapture, None, None]:
    """Capture records logged through the root logger during a test.

    Yields a fresh InMemoryLogCapture. The handler is detached and the
    capture cleared when the test finishes.
    """
    level = capture_level(pytestconfig)
    handler = CaptureHandler(
        include_attrs=list(pytestconfig.getini("logspect_include_attrs")),
        level=level,
    )
    root = logging.getLogger()
    previous_level = root.level
    root.addHandler(handler)
    if not previous_level or previous_level > level:
        root.setLevel(level)
    try:
        yield handler.capture
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)
        handler.capture.clear()


def assert_logged(
    source: object,
    *,
    severity: object = None,
    message: object = None,
    progname: object = None,
    attributes: Mapping[str, object] | None = None,
) -> None:
    """Fail unless ``source`` includes an entry with the given values."""
    matcher = IncludeLogEntryMatcher(
        Expectation(
            severity=severity, message=message, progname=progname, attributes=attributes
        )
    )
    if not matcher.matches(source):
        raise AssertionError(matcher.failure_message())


def assert_not_logged(
    source: object,
    *,
    severity: object = None,
    message: object = None,
    progname: object = None,
    attributes: Mapping[str, object] | None = None,
) -> None:
    """Fail if ``source`` includes an entry with the given values.

    An invalid source fails as well, naming the type received.
    """
    matcher = IncludeLogEntryMatcher(
        Expectation(
            severity=severity, message=message, progname=progname, attributes=attributes
        )
    )
    matched = matcher.matches(source)
    if matched or resolve_capture(source) is None:
        raise AssertionError(matcher.negated_failure_message())
