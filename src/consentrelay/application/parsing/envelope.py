from __future__ import annotations

import json
from typing import Union

from pydantic import ValidationError

from consentrelay.application.parsing.consent import extract_consent
from consentrelay.application.parsing.schemas import RequestEnvelopeModel, describe_validation_error
from consentrelay.core.errors import ParseError, Result
from consentrelay.domain import Request

RawMessage = Union[bytes, bytearray, str]


def _reject_constant(name: str):
    raise ValueError(f"non-JSON constant {name}")


def parse(raw: RawMessage) -> Result[Request, ParseError]:
    """
    Decode a raw message body into a ``Request``.

    Expected shape::

        {"request_id" | "requestId": "<id>", "content": {...}}

    When both id spellings are present, ``request_id`` is used.
    NaN and Infinity are not JSON and are rejected like any other syntax error.
    """
    try:
        doc = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        return Result.err(ParseError(message=f"Message is not valid JSON: {e}"))

    if not isinstance(doc, dict):
        return Result.err(ParseError(message="Message is not a JSON object"))

    try:
        model = RequestEnvelopeModel.model_validate(doc)
    except ValidationError as e:
        issues = describe_validation_error(e)
        return Result.err(
            ParseError(message=f"Invalid request: {'; '.join(issues)}", context={"issues": issues})
        )

    return Result.ok(Request(request_id=model.request_id, content=model.content))


def can_dispatch(raw: RawMessage) -> bool:
    """True iff the message parses and its content carries a valid consent."""
    parsed = parse(raw)
    if not parsed.is_ok():
        return False
    return extract_consent(parsed.unwrap().content).is_ok()
