from __future__ import annotations

from loguru import logger

from consentrelay.application.ports.downstream_port import DownstreamClient
from consentrelay.core.errors import TransportError
from consentrelay.domain import ConsentRecord, DispatchOutcome, Request, Success, Unreachable


async def route(request: Request, consent: ConsentRecord, downstream: DownstreamClient) -> DispatchOutcome:
    """
    Invoke exactly one downstream operation for a request.

    Active consent forwards the whole MTB file; anything else deletes by
    subject id without sending the payload. Status codes are the registry's
    business, so every completed exchange is a ``Success``.
    """
    try:
        if consent.is_active:
            response = await downstream.submit(request.content)
        else:
            response = await downstream.delete(consent.subject_id)
    except TransportError as e:
        logger.warning(f"Registry unreachable for request {request.request_id}: {e}")
        return Unreachable()

    return Success(status_code=response.status_code, status_body=response.status_body)
