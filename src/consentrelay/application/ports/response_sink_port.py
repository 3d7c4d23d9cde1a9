from __future__ import annotations

from typing import Protocol, runtime_checkable

from consentrelay.domain import ResponseEnvelope


@runtime_checkable
class ResponseSink(Protocol):
    """
    Best-effort side channel for composed responses.

    At most one attempt per call. Implementations log their own failures and
    report them through the return value instead of raising.
    """

    async def publish(self, key: str, envelope: ResponseEnvelope) -> bool:
        """Publish one response keyed by the inbound correlation key."""
