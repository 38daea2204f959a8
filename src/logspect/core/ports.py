"""Port interfaces for log capture sources.

The matcher accepts either a capture directly or an object that owns one.
These protocols define both contracts; resolution goes at most one hop
from owner to capture.

Captures are shared, externally-owned state. Matching and rendering only
read from them, so callers are responsible for clearing a capture between
independent assertions.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from logspect.core.models import LogEntry


class InvalidLogSourceError(TypeError):
    """Raised when an object is neither a log capture nor owns one."""

    def __init__(self, candidate: object) -> None:
        self.candidate = candidate
        super().__init__(
            f"{type(candidate).__name__} is not a log capture or log capture owner"
        )


@runtime_checkable
class LogCapturePort(Protocol):
    """Port for reading captured log entries.

    Adapters implementing this protocol expose entries in capture order.
    Examples: InMemoryLogCapture.
    """

    @property
    def entries(self) -> Sequence[LogEntry]:
        """Captured entries, in capture order."""
        ...


@runtime_checkable
class ClosestMatchPort(Protocol):
    """Optional port for captures that can rank entries for diagnostics.

    Captures without it are still searchable; failure messages then omit
    the closest match.
    """

    def closest_match(
        self,
        *,
        severity: object = None,
        message: object = None,
        progname: object = None,
        attributes: Mapping[str, object] | None = None,
    ) -> LogEntry | None:
        """Return the entry nearest to satisfying the constraints, if any."""
        ...


@runtime_checkable
class LogCaptureOwner(Protocol):
    """Port for objects that hold a log capture, such as a logging handler."""

    @property
    def capture(self) -> object:
        """The owned capture."""
        ...


def resolve_capture(candidate: object) -> LogCapturePort | None:
    """Return the capture behind ``candidate``, or None when there is none."""
    if isinstance(candidate, LogCapturePort):
        return candidate
    if isinstance(candidate, LogCaptureOwner):
        owned = candidate.capture
        if isinstance(owned, LogCapturePort):
            return owned
    return None
