"""Python logging handler adapter for logspect.

This adapter bridges Python's standard library logging module to a log
capture, so entries logged through ``logging`` can be asserted on.
"""

import logging
import traceback
from collections.abc import Callable, Mapping

from logspect.adapters.storage.in_memory import InMemoryLogCapture
from logspect.core.models import LogEntry, Severity

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# LogRecord attributes that may be copied into entry attributes on request
RECORD_ATTRS = ("module", "funcName", "lineno", "pathname")

# Returns attributes merged into every entry, e.g. request-scoped context
ContextProvider = Callable[[], Mapping[str, object]]


class CaptureHandler(logging.Handler):
    """Logging handler that writes log records to a log capture.

    The handler owns its capture, so it can be passed straight to the
    ``include_log_entry`` matcher.

    Example:
        ```python
        from logspect import CaptureHandler, include_log_entry
        from hamcrest import assert_that

        handler = CaptureHandler()
        logging.getLogger().addHandler(handler)
        logging.getLogger("auth").info("User logged in", extra={"user_id": 123})
        assert_that(handler, include_log_entry(progname="auth", attributes={"user_id": 123}))
        ```
    """

    def __init__(
        self,
        capture: InMemoryLogCapture | None = None,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
        context_provider: ContextProvider | None = None,
    ) -> None:
        """Initialize the handler with a log capture.

        Args:
            capture: Capture to write to. A new InMemoryLogCapture by default.
            include_attrs: LogRecord attributes to copy into entry attributes,
                taken from ``RECORD_ATTRS``. None by default.
            level: Minimum level handled.
            context_provider: Callable returning attributes added to every
                entry. Extra fields from the logging call take precedence.
        """
        super().__init__(level=level)
        self.capture = capture if capture is not None else InMemoryLogCapture()
        unknown = set(include_attrs or ()) - set(RECORD_ATTRS)
        if unknown:
            raise ValueError(f"unsupported record attributes: {sorted(unknown)}")
        self._include_attrs = list(include_attrs or ())
        self._context_provider = context_provider

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the capture.

        Args:
            record: The log record to emit.
        """
        attributes: dict[str, object] = {
            key: getattr(record, key) for key in self._include_attrs
        }

        if self._context_provider is not None:
            attributes.update(self._context_provider())

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and not key.startswith("_"):
                attributes[key] = value

        # Extract exception info if present
        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                attributes["exc_type"] = exc_type.__name__
            if exc_value is not None:
                attributes["exc_message"] = str(exc_value)
            if exc_tb is not None:
                attributes["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        entry = LogEntry(
            timestamp=record.created,
            severity=Severity.from_levelno(record.levelno),
            message=_record_message(record),
            progname=record.name,
            attributes=attributes,
        )
        self.capture.write(entry)


def _record_message(record: logging.LogRecord) -> object:
    """Keep non-string messages as-is unless they need formatting."""
    if not isinstance(record.msg, str) and not record.args:
        return record.msg
    return record.getMessage()
