from __future__ import annotations

from typing import Dict, List, Optional

from consentrelay.application.events import RelayEvent
from consentrelay.application.ports.event_log_port import EventLogPort


class InMemoryEventLog(EventLogPort):
    """Keeps every event in arrival order; used by tests to follow a message through the pipeline."""

    def __init__(self) -> None:
        self.events: List[dict] = []

    def append(self, event: RelayEvent) -> None:
        self.events.append(event.to_dict())

    def stages(self, run_id: Optional[str] = None) -> List[str]:
        return [e["stage"] for e in self.events if run_id is None or e["run_id"] == run_id]

    def for_request(self, request_id: str) -> List[dict]:
        """Events of every run that parsed to ``request_id``, including the run's ``received`` event."""
        runs = {e["run_id"] for e in self.events if e["request_id"] == request_id}
        return [e for e in self.events if e["run_id"] in runs]

    def by_run(self) -> Dict[str, List[str]]:
        runs: Dict[str, List[str]] = {}
        for e in self.events:
            runs.setdefault(e["run_id"], []).append(e["stage"])
        return runs
