"""Partial log entry expectations."""

from collections.abc import Mapping
from dataclasses import dataclass

from logspect.core.attributes import flatten_attributes
from logspect.core.models import Severity

# Fields compared directly on LogEntry, in rendering order
ENTRY_FIELDS = ("severity", "message", "progname")


@dataclass(frozen=True)
class Expectation:
    """Expected values for a log entry.

    A field left as ``None`` imposes no constraint. Each value is a literal,
    a compiled pattern or a matcher object.

    Attributes:
        severity: Expected severity, coerced to Severity where possible.
        message: Expected message.
        progname: Expected program name.
        attributes: Expected attributes, nested or keyed by dotted path.
    """

    severity: object = None
    message: object = None
    progname: object = None
    attributes: Mapping[str, object] | None = None

    def __post_init__(self) -> None:
        if self.attributes is not None and not isinstance(self.attributes, Mapping):
            raise TypeError("attributes must be a mapping")
        object.__setattr__(self, "severity", Severity.coerce(self.severity))

    def fields(self) -> dict[str, object]:
        """Return the specified entry fields in rendering order."""
        return {
            name: getattr(self, name)
            for name in ENTRY_FIELDS
            if getattr(self, name) is not None
        }

    def flat_attributes(self) -> dict[str, object]:
        """Return expected attributes keyed by dotted path."""
        if not self.attributes:
            return {}
        return flatten_attributes(self.attributes)

    def constraints(self) -> dict[str, object]:
        """Return keyword arguments for a capture's ``match``/``closest_match``."""
        constraints = self.fields()
        if self.attributes:
            constraints["attributes"] = self.attributes
        return constraints

    def is_empty(self) -> bool:
        """Return True when no field or attribute is constrained."""
        return not self.fields() and not self.attributes
