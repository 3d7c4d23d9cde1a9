from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from consentrelay.application.events import RelayEvent
from consentrelay.application.ports.event_log_port import EventLogPort

# Stages that mean a message produced no usable result.
STAGE_LEVELS: Dict[str, int] = {
    "parse_failed": logging.WARNING,
    "publish_failed": logging.WARNING,
}


class LoggingEventLog(EventLogPort):
    """
    Write relay events as one line each to the ``consentrelay.eventlog`` logger.

    Line shape::

        <stage> run=<run_id> key=<correlation key> request=<request id or -> <payload json>

    Failure stages and dispatches that never reached the registry are logged
    at WARNING; everything else at ``level``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self._logger = logger or logging.getLogger("consentrelay.eventlog")
        self._level = level

    def level_for(self, event: RelayEvent) -> int:
        if event.stage == "dispatched" and event.payload.get("reachable") is False:
            return logging.WARNING
        return STAGE_LEVELS.get(event.stage, self._level)

    def format(self, event: RelayEvent) -> str:
        payload = json.dumps(event.payload, ensure_ascii=False, separators=(",", ":"), default=str)
        return (
            f"{event.stage} run={event.run_id} key={event.correlation_key} "
            f"request={event.request_id or '-'} {payload}"
        )

    def append(self, event: RelayEvent) -> None:
        self._logger.log(self.level_for(event), self.format(event))
