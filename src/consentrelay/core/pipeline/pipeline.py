"""
单条消息的同意门控分发流水线。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from loguru import logger

from consentrelay.application.dispatch import compose, route
from consentrelay.application.events import make_event, new_run_id
from consentrelay.application.parsing import extract_consent, parse
from consentrelay.application.parsing.envelope import RawMessage
from consentrelay.application.ports import DownstreamClient, EventLogPort, ResponseSink
from consentrelay.domain import ResponseEnvelope, Unreachable


@dataclass(frozen=True)
class Dispatched:
    envelope: ResponseEnvelope
    correlation_key: str
    published: Optional[bool] = None  # None when no sink is attached


@dataclass(frozen=True)
class ParseFailed:
    reason: str


PipelineResult = Union[Dispatched, ParseFailed]


class DispatchPipeline:
    """
    Received -> Parsed -> ConsentKnown -> Dispatched -> Composed.

    Holds only collaborators built at startup, so one instance may serve
    concurrent messages.
    """

    def __init__(
        self,
        downstream: DownstreamClient,
        sink: Optional[ResponseSink] = None,
        event_log: Optional[EventLogPort] = None,
    ):
        self.downstream = downstream
        self.sink = sink
        self.event_log = event_log

    def _emit(self, run_id: str, stage: str, key: str, request_id: Optional[str] = None, **payload: Any) -> None:
        if self.event_log is None:
            return
        self.event_log.append(
            make_event(
                run_id=run_id,
                stage=stage,
                correlation_key=key,
                request_id=request_id,
                payload=dict(payload),
            )
        )

    async def handle(self, raw: RawMessage, correlation_key: str) -> PipelineResult:
        run_id = new_run_id()
        self._emit(run_id, "received", correlation_key, size=len(raw))

        parsed = parse(raw)
        if not parsed.is_ok():
            return self._fail(run_id, correlation_key, None, str(parsed.error()))
        request = parsed.unwrap()

        consent = extract_consent(request.content)
        if not consent.is_ok():
            return self._fail(run_id, correlation_key, request.request_id, str(consent.error()))
        record = consent.unwrap()

        outcome = await route(request, record, self.downstream)
        envelope = compose(request.request_id, outcome)
        self._emit(
            run_id,
            "dispatched",
            correlation_key,
            request.request_id,
            operation="submit" if record.is_active else "delete",
            status_code=envelope.status_code,
            reachable=not isinstance(outcome, Unreachable),
        )
        logger.debug(f"Request {request.request_id} dispatched with status {envelope.status_code}")

        published = None
        if self.sink is not None:
            published = await self.sink.publish(correlation_key, envelope)
            self._emit(
                run_id,
                "published" if published else "publish_failed",
                correlation_key,
                request.request_id,
            )

        return Dispatched(envelope=envelope, correlation_key=correlation_key, published=published)

    def _fail(self, run_id: str, key: str, request_id: Optional[str], reason: str) -> ParseFailed:
        self._emit(run_id, "parse_failed", key, request_id, reason=reason)
        return ParseFailed(reason=reason)

    def describe(self) -> Dict[str, Any]:
        return {
            "downstream": type(self.downstream).__name__,
            "sink": type(self.sink).__name__ if self.sink else None,
            "event_log": type(self.event_log).__name__ if self.event_log else None,
        }
