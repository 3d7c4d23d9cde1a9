from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_run_id() -> str:
    return uuid.uuid4().hex


@dataclass
class RelayEvent:
    """
    Lifecycle event for one inbound message.

    ``run_id`` is generated per message; ``request_id`` is only known once the
    envelope has been parsed.
    """

    run_id: str
    stage: str = ""  # received/parse_failed/dispatched/published/publish_failed
    correlation_key: str = ""
    request_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    ts: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "stage": self.stage,
            "correlation_key": self.correlation_key,
            "request_id": self.request_id,
            "payload": self.payload,
            "ts": self.ts.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


def make_event(
    *,
    run_id: str,
    stage: str,
    correlation_key: str,
    request_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> RelayEvent:
    return RelayEvent(
        run_id=run_id,
        stage=stage,
        correlation_key=correlation_key,
        request_id=request_id,
        payload=payload or {},
    )
