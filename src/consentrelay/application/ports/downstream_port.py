from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    status_body: str = ""


@runtime_checkable
class DownstreamClient(Protocol):
    """
    The REST registry the relay writes to.

    Implementations enforce a bounded timeout, return an ``HttpResponse`` for
    every completed exchange regardless of status class, and raise
    ``TransportError`` when the exchange cannot complete.
    """

    async def submit(self, content: Any) -> HttpResponse:
        """Upsert a full MTB file."""

    async def delete(self, subject_id: str) -> HttpResponse:
        """Remove all data held for a subject."""
