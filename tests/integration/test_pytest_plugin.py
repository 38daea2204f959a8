"""Integration tests for the logspect pytest plugin."""

import logging
import re

import pytest
from hamcrest import assert_that, greater_than

from logspect import CaptureHandler, include_log_entry
from logspect.adapters.storage.in_memory import InMemoryLogCapture
from logspect.core.models import Severity
from logspect.pytest_plugin import assert_logged, assert_not_logged, capture_level


class _FakeConfig:
    def __init__(self, **ini: object) -> None:
        self._ini = ini

    def getini(self, name: str) -> object:
        return self._ini[name]


@pytest.mark.plugin
class TestLogCaptureFixture:
    """Tests for the log_capture fixture."""

    def test_yields_empty_capture(self, log_capture: InMemoryLogCapture) -> None:
        assert isinstance(log_capture, InMemoryLogCapture)
        assert log_capture.entries == ()

    def test_captures_stdlib_logging(self, log_capture: InMemoryLogCapture) -> None:
        logging.getLogger("app.auth").info("User logged in", extra={"user_id": 123})

        assert_logged(
            log_capture,
            severity="info",
            message="User logged in",
            progname="app.auth",
            attributes={"user_id": 123},
        )

    def test_captures_debug_by_default(self, log_capture: InMemoryLogCapture) -> None:
        logging.getLogger("app").debug("details")

        assert_logged(log_capture, severity=Severity.DEBUG, message="details")

    def test_handler_removed_after_test(self, log_capture: InMemoryLogCapture) -> None:
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, CaptureHandler)]
        assert len(handlers) == 1
        assert handlers[0].capture is log_capture

    def test_works_with_hamcrest(self, log_capture: InMemoryLogCapture) -> None:
        logging.getLogger("orders").warning(
            "Order flagged", extra={"order": {"id": 456, "total": 10}}
        )

        assert_that(
            log_capture,
            include_log_entry(
                severity="warn", attributes={"order": {"total": greater_than(0)}}
            ),
        )


@pytest.mark.plugin
class TestPluginSetup:
    """Tests for how the plugin and package are loaded."""

    def test_registers_no_extra_markers(self, pytestconfig: pytest.Config) -> None:
        markers = [line.split(":")[0] for line in pytestconfig.getini("markers")]
        assert "logspect" not in markers
        assert {"core", "storage", "plugin"} <= set(markers)


@pytest.mark.plugin
class TestCaptureLevel:
    """Tests for the logspect_level ini option."""

    def test_default_level(self, pytestconfig: pytest.Config) -> None:
        assert capture_level(pytestconfig) == logging.DEBUG

    def test_accepts_level_names(self) -> None:
        assert capture_level(_FakeConfig(logspect_level="warning")) == logging.WARNING  # type: ignore[arg-type]

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="unknown level 'loud'"):
            capture_level(_FakeConfig(logspect_level="loud"))  # type: ignore[arg-type]


@pytest.mark.plugin
class TestAssertLogged:
    """Tests for assert_logged()."""

    def test_passes_when_logged(self, capture: InMemoryLogCapture, make_entry) -> None:
        capture.write(make_entry("User 123 logged in successfully"))

        assert_logged(capture, severity="info", message=re.compile(r"User \d+ logged in"))

    def test_fails_with_failure_message(self, capture: InMemoryLogCapture, make_entry) -> None:
        capture.write(make_entry("actual message"))

        with pytest.raises(AssertionError) as excinfo:
            assert_logged(capture, severity="info", message="expected message")

        message = str(excinfo.value)
        assert "expected logs to include entry" in message
        assert "expected message" in message
        assert "Logged 1 entry" in message
        assert "actual message" in message

    def test_fails_for_invalid_source(self) -> None:
        with pytest.raises(AssertionError, match="Expected a log capture, but received a NoneType"):
            assert_logged(None, severity="info", message="test")


@pytest.mark.plugin
class TestAssertNotLogged:
    """Tests for assert_not_logged()."""

    def test_passes_when_not_logged(self, capture: InMemoryLogCapture, make_entry) -> None:
        capture.write(make_entry("test message"))

        assert_not_logged(capture, severity="error", message="test message")
        assert_not_logged(capture, severity="info", message="different message")

    def test_fails_with_found_entry(self, capture: InMemoryLogCapture, make_entry) -> None:
        capture.write(make_entry("test message"))

        with pytest.raises(AssertionError) as excinfo:
            assert_not_logged(capture, severity="info", message="test message")

        message = str(excinfo.value)
        assert "expected logs not to include entry:" in message
        assert "Found entry:" in message

    def test_fails_for_invalid_source(self) -> None:
        with pytest.raises(AssertionError, match="Expected a log capture, but received a str"):
            assert_not_logged("not a logger", severity="info")

    def test_accepts_handler(self, make_entry) -> None:
        handler = CaptureHandler()
        handler.capture.write(make_entry("test message"))

        assert_not_logged(handler, severity="error")
