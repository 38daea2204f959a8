"""One-line rendering of captured log entries."""

from datetime import datetime

from logspect.core.attributes import flatten_attributes
from logspect.core.models import LogEntry


class EntryLineTemplate:
    """Render a log entry as a single line.

    Lines look like::

        [2024-03-01T12:00:00.000] INFO  auth: User logged in user_id=123

    The ``progname:`` part is left out when the entry has no progname.
    """

    def __init__(self, timespec: str = "milliseconds") -> None:
        self._timespec = timespec

    def __call__(self, entry: LogEntry) -> str:
        timestamp = datetime.fromtimestamp(entry.timestamp).isoformat(
            timespec=self._timespec
        )
        line = f"[{timestamp}] {str(entry.severity):<5} "
        if entry.progname is not None:
            line += f"{entry.progname}: "
        line += str(entry.message)
        if entry.attributes:
            line += " " + " ".join(
                f"{key}={value}"
                for key, value in flatten_attributes(entry.attributes).items()
            )
        return line
