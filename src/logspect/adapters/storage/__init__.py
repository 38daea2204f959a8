"""Log capture storage adapters."""

from logspect.adapters.storage.in_memory import InMemoryLogCapture

__all__ = ["InMemoryLogCapture"]
