"""
Wire schemas for inbound messages.

Validation happens here, at a single point; everything downstream works with
the domain dataclasses.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from consentrelay.domain import ConsentStatus


class RequestEnvelopeModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # AliasChoices is tried in order, so "request_id" wins over "requestId".
    request_id: str = Field(
        validation_alias=AliasChoices("request_id", "requestId"),
        min_length=1,
        strict=True,
    )
    content: Any


class ConsentModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: ConsentStatus
    patient: str = Field(min_length=1, strict=True)


class ConsentDocumentModel(BaseModel):
    """An MTB file, reduced to the part the relay needs."""

    model_config = ConfigDict(extra="ignore")

    consent: ConsentModel


def describe_validation_error(exc: ValidationError) -> List[str]:
    """Flatten pydantic errors into ``loc: msg`` strings for logs and error context."""
    out: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        out.append(f"{loc}: {err.get('msg', 'invalid')}")
    return out
