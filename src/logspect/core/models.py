"""Core domain models for captured log entries."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum

# Level names accepted in addition to the canonical member names
_SEVERITY_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL"}


class Severity(IntEnum):
    """Ordered log severity.

    Values line up with the standard library ``logging`` levels so that
    integer levels and ``logging.INFO``-style constants compare naturally.
    """

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    UNKNOWN = 60

    def __str__(self) -> str:
        return self.name

    @classmethod
    def coerce(cls, value: object) -> object:
        """Coerce a level name, number or member to a Severity.

        Args:
            value: A Severity, a level number, or a case-insensitive level name
                (WARNING and CRITICAL are accepted as aliases).

        Returns:
            The matching Severity, or ``value`` unchanged when it does not
            name a level (patterns and matcher objects pass through).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return value
        if isinstance(value, str):
            name = value.strip().upper()
            name = _SEVERITY_ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]
        return value

    @classmethod
    def from_levelno(cls, levelno: int) -> "Severity":
        """Map a stdlib level number to the highest Severity at or below it."""
        found = cls.DEBUG
        for member in cls:
            if member <= levelno:
                found = member
        return found


@dataclass(frozen=True)
class LogEntry:
    """A captured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        severity: Log severity.
        message: The logged message. Usually text, but any value is allowed.
        progname: Name of the component that logged the entry, if any.
        attributes: Structured fields. Values may be nested mappings.
    """

    timestamp: float
    severity: Severity
    message: object
    progname: str | None = None
    attributes: Mapping[str, object] = field(default_factory=dict)
