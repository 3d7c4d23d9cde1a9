"""
下游调用结果与响应信封
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Success:
    """The downstream exchange completed, whatever the status class."""

    status_code: int
    status_body: str = ""


@dataclass(frozen=True)
class Unreachable:
    """The downstream call could not complete; no status is available."""


DispatchOutcome = Union[Success, Unreachable]


@dataclass
class ResponseEnvelope:
    request_id: str
    status_code: int
    status_body: Any = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_id": self.request_id,
            "status_code": self.status_code,
            "status_body": self.status_body,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, allow_nan=False, separators=(",", ":"))
