"""Timeline error taxonomy."""

from __future__ import annotations


class TimelineError(Exception):
    """Base class for timeline engine failures."""


class InvalidItemError(TimelineError, ValueError):
    """Raised when an item violates its construction contract."""


class InvalidKindError(TimelineError, ValueError):
    """Raised when an append names an unknown item variant."""


class EngineDisposedError(TimelineError, RuntimeError):
    """Raised when a disposed engine is used."""


class BackendUnavailableError(RuntimeError):
    """Raised by a playback backend that is not mounted (or already closed)."""
