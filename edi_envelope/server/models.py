"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: One request model for encoding, one response model per endpoint,
and a shared ErrorResponse. Separator overrides reuse the field names of
core.separators.SeparatorOverride so they convert with model_dump().

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Separator values are single characters; the distinctness check stays
  in the core so the API and the library report the same error
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class DialectName(str, Enum):
    """Available dialect identifiers.

    RULES:
    - Values match keys in edi_envelope.dialects.PIPELINES exactly
    """

    edifact = "edifact"
    x12 = "x12"


class SeparatorFields(BaseModel):
    """Optional separator overrides; omitted fields keep the dialect default."""

    component: Optional[str] = Field(
        default=None, min_length=1, max_length=1,
        description="Component data element separator.",
    )
    data: Optional[str] = Field(
        default=None, min_length=1, max_length=1,
        description="Data element separator.",
    )
    release: Optional[str] = Field(
        default=None, min_length=1, max_length=1,
        description="Release indicator (X12: repetition separator).",
    )
    terminator: Optional[str] = Field(
        default=None, min_length=1, max_length=1,
        description="Segment terminator.",
    )


class EncodeRequest(BaseModel):
    """Interchange XML plus encoding options.

    WHY: Clients post the interchange tree they built and get the EDI
    back in one round trip.
    """

    xml: str = Field(description="Interchange XML document (root: Interchange).")
    dialect: Optional[DialectName] = Field(
        default=None,
        description="Dialect to encode; defaults to the server's EDI_DEFAULT_DIALECT.",
    )
    separators: Optional[SeparatorFields] = Field(
        default=None,
        description="Separator overrides merged onto the dialect defaults.",
    )
    newline: bool = Field(
        default=False,
        description="Add a line break after each segment in the rendered EDI.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "xml": "<Interchange><UNB>...</UNB><UNZ>...</UNZ></Interchange>",
                "dialect": "edifact",
                "separators": {"data": ";"},
            }
        ]
    }}


class EncodeResponse(BaseModel):
    """Encoded interchange."""

    dialect: str = Field(description="Dialect the interchange was encoded with.")
    separator_advice: bool = Field(
        description="True when the first entry of segments is the separator advice string.",
    )
    segments: List[str] = Field(description="Encoded entries in stream order, without terminators.")
    edi: str = Field(description="Rendered EDI text.")


class DialectInfo(BaseModel):
    """Description of an available dialect and its default separators."""

    key: str = Field(description="Dialect identifier used in requests.")
    component: str = Field(description="Default component separator.")
    data: str = Field(description="Default data element separator.")
    release: str = Field(description="Default release indicator.")
    terminator: str = Field(description="Default segment terminator.")
    advice_tag: Optional[str] = Field(description="Separator advice tag, if the dialect has one.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
