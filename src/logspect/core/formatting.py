"""Diagnostic rendering for log entry expectations.

All functions here are pure: they only read the expectation and entries
they are given.
"""

from collections.abc import Callable, Sequence

from hamcrest.core.matcher import Matcher

from logspect.core.attributes import flatten_attributes
from logspect.core.expectation import ENTRY_FIELDS, Expectation
from logspect.core.models import LogEntry, Severity
from logspect.core.ports import LogCaptureOwner
from logspect.core.predicates import Predicate
from logspect.core.template import EntryLineTemplate

_SEPARATOR = "----------------------"


def format_value(value: object) -> str:
    """Render an expected or actual value for diagnostics.

    Severities render by name and PyHamcrest matchers by their description;
    everything else uses ``repr``.
    """
    if isinstance(value, Predicate):
        return format_value(value.expected)
    if isinstance(value, Severity):
        return str(value)
    if isinstance(value, Matcher):
        return str(value)
    return repr(value)


def formatted_expectation(subject: Expectation | LogEntry, indent: int = 2) -> str:
    """Render an expectation or an entry as an indented block.

    The same layout is used for expectations and entries so the two can be
    compared line by line in failure output.
    """
    pad = " " * indent
    lines = []
    for name in ENTRY_FIELDS:
        value = getattr(subject, name)
        if value is not None:
            lines.append(f"{pad}{name}: {format_value(value)}")

    attributes = subject.attributes
    if attributes:
        lines.append(f"{pad}attributes:")
        for key, value in flatten_attributes(attributes).items():
            lines.append(f"{pad}  {key}: {format_value(value)}")
    return "\n".join(lines)


def render_failure(
    expectation: Expectation,
    closest: LogEntry | None,
    entries: Sequence[LogEntry],
    template: Callable[[LogEntry], str] | None = None,
) -> str:
    """Render the message for an expected entry that was not logged.

    Args:
        expectation: What the assertion looked for.
        closest: Nearest captured entry, if the capture found one.
        entries: Every captured entry, in capture order.
        template: One-line entry renderer. Defaults to EntryLineTemplate.

    Returns:
        The expected block, the closest match when present, the entry count
        and, when anything was logged, one line per captured entry.
    """
    message = "expected logs to include entry:\n" + formatted_expectation(expectation)

    if closest is not None:
        message += "\n\nClosest match found:\n" + formatted_expectation(closest)

    count = len(entries)
    message += f"\n\nLogged {count} {'entry' if count == 1 else 'entries'}"
    if count > 0:
        template = template or EntryLineTemplate()
        message += f"\n{_SEPARATOR}\n"
        message += "".join(f"{template(entry)}\n" for entry in entries)
    return message


def render_negated_failure(expectation: Expectation, found: LogEntry | None) -> str:
    """Render the message for an entry that was logged but should not be."""
    message = "expected logs not to include entry:\n" + formatted_expectation(
        expectation
    )
    if found is not None:
        message += "\n\nFound entry:\n" + formatted_expectation(found)
    return message


def describe(expectation: Expectation) -> str:
    """Summarise an expectation on one line."""
    info = [
        f"{name}: {format_value(value)}"
        for name, value in expectation.fields().items()
    ]
    if expectation.attributes:
        pairs = ", ".join(
            f"{key}={format_value(value)}"
            for key, value in flatten_attributes(expectation.attributes).items()
        )
        info.append(f"attributes: {pairs}")
    return "have logged entry with " + ", ".join(info)


def wrong_source_message(candidate: object) -> str:
    """Name the type of an object that cannot be searched for log entries."""
    if not isinstance(candidate, LogCaptureOwner):
        return f"Expected a log capture, but received a {type(candidate).__name__}."
    owned = candidate.capture
    return (
        "Expected the log capture owner to hold a log capture, "
        f"but it holds a {type(owned).__name__}."
    )
