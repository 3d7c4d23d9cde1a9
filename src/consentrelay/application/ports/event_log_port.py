from __future__ import annotations

from typing import Protocol, runtime_checkable

from consentrelay.application.events.schema import RelayEvent


@runtime_checkable
class EventLogPort(Protocol):
    """Receives the lifecycle events of every message the pipeline handles."""

    def append(self, event: RelayEvent) -> None:
        """Record one event; must not raise."""
