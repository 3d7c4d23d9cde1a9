"""
领域模型：请求、同意状态、下游结果与响应信封。
"""

from .request import ConsentStatus, ConsentRecord, Request
from .outcome import Success, Unreachable, DispatchOutcome, ResponseEnvelope

__all__ = [
    "ConsentStatus",
    "ConsentRecord",
    "Request",
    "Success",
    "Unreachable",
    "DispatchOutcome",
    "ResponseEnvelope",
]
