from __future__ import annotations

import json
from typing import Any, Dict

from consentrelay.domain import DispatchOutcome, ResponseEnvelope, Success

# Outside every real HTTP status range; consumers use it to tell "no answer" apart.
NO_CONNECTION_STATUS = 900


def no_connection_body() -> Dict[str, Any]:
    return {"issues": [{"severity": "error", "message": "No HTTP connection"}]}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-JSON constant {name}")


def _parse_body(text: str) -> Any:
    if not text or not text.strip():
        return {}
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return {}


def compose(request_id: str, outcome: DispatchOutcome) -> ResponseEnvelope:
    """Build the single response for a dispatched request. Never fails."""
    if isinstance(outcome, Success):
        return ResponseEnvelope(
            request_id=request_id,
            status_code=outcome.status_code,
            status_body=_parse_body(outcome.status_body),
        )
    return ResponseEnvelope(
        request_id=request_id,
        status_code=NO_CONNECTION_STATUS,
        status_body=no_connection_body(),
    )
