"""
入站请求与同意状态模型
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConsentStatus(str, Enum):
    ACTIVE = "active"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ConsentRecord:
    """Consent judgement decoded from an MTB file."""

    status: ConsentStatus
    subject_id: str  # the consent object's "patient" field

    @property
    def is_active(self) -> bool:
        return self.status is ConsentStatus.ACTIVE


@dataclass(frozen=True)
class Request:
    """Identity and payload extracted from one inbound message."""

    request_id: str
    content: Any

    def __post_init__(self):
        if not self.request_id:
            raise ValueError("Request ID cannot be empty")
