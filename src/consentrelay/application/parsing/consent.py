from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from consentrelay.application.parsing.schemas import ConsentDocumentModel, describe_validation_error
from consentrelay.core.errors import ParseError, Result
from consentrelay.domain import ConsentRecord


def extract_consent(payload: Any) -> Result[ConsentRecord, ParseError]:
    """
    Decode the consent judgement embedded in an MTB file.

    A missing consent object is a failure, never an implicit rejection.
    """
    if not isinstance(payload, dict):
        return Result.err(ParseError(message="MTB file is not a JSON object"))

    try:
        doc = ConsentDocumentModel.model_validate(payload)
    except ValidationError as e:
        issues = describe_validation_error(e)
        return Result.err(
            ParseError(message=f"Invalid consent: {'; '.join(issues)}", context={"issues": issues})
        )

    return Result.ok(ConsentRecord(status=doc.consent.status, subject_id=doc.consent.patient))
