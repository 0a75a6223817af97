"""FastAPI application exposing the envelope encoder over HTTP.

WHY: Services that build interchanges in other languages (or in n8n
flows, or with curl) need the encoder without embedding Python. FastAPI
gives request validation and OpenAPI docs for free.

HOW: A single FastAPI app with three endpoints: POST
/v1/interchanges/encode runs the same code path as the CLI (context,
encode, render), GET /v1/dialects lists dialects and their default
separators, GET /health is the liveness probe.

RULES:
- Error responses use the ErrorResponse schema
- Invalid configuration, invalid XML, missing mandatory segments and
  malformed segments are all client errors (422)
- Encoding is synchronous and in-memory; no background tasks, no state
"""

from __future__ import annotations

import logging
from typing import List
from xml.etree import ElementTree

from fastapi import FastAPI, HTTPException

from edi_envelope import __version__
from edi_envelope.config import API_HOST, API_PORT
from edi_envelope.core.separators import DIALECTS, SeparatorOverride, build_separator_context
from edi_envelope.encoder import encode_with_context, has_separator_advice, render_interchange
from edi_envelope.errors import ConfigurationError, SegmentFormatError, SegmentNotFoundError
from edi_envelope.server.models import (
    DialectInfo,
    EncodeRequest,
    EncodeResponse,
    ErrorResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="EDI Envelope Encoder API",
    description=(
        "REST API for encoding interchange XML trees into EDIFACT or X12 "
        "text, with optional custom separators."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Endpoints: Interchanges
# ---------------------------------------------------------------------------


@app.post(
    "/v1/interchanges/encode",
    response_model=EncodeResponse,
    tags=["interchanges"],
    summary="Encode an interchange",
    description=(
        "Merges the separator overrides onto the dialect defaults, encodes "
        "the envelope and messages of the posted XML tree, and returns both "
        "the segment list and the rendered EDI."
    ),
    responses={422: {"model": ErrorResponse, "description": "Invalid configuration or tree."}},
)
async def encode_interchange_endpoint(request: EncodeRequest) -> EncodeResponse:
    separators = request.separators.model_dump(exclude_none=True) if request.separators else {}
    dialect = request.dialect.value if request.dialect else None

    try:
        context = build_separator_context(
            dialect=dialect,
            override=SeparatorOverride(**separators),
        )
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    try:
        tree = ElementTree.fromstring(request.xml)
    except ElementTree.ParseError as exc:
        raise HTTPException(status_code=422, detail="Invalid XML: {}".format(exc))

    try:
        segments = encode_with_context(tree, context)
    except (SegmentNotFoundError, SegmentFormatError) as exc:
        logger.info("Encode rejected (%s): %s", context.dialect, exc)
        raise HTTPException(status_code=422, detail=str(exc))

    return EncodeResponse(
        dialect=context.dialect,
        separator_advice=has_separator_advice(context),
        segments=segments,
        edi=render_interchange(segments, context, newline=request.newline),
    )


# ---------------------------------------------------------------------------
# Endpoints: Dialects
# ---------------------------------------------------------------------------


@app.get(
    "/v1/dialects",
    response_model=List[DialectInfo],
    tags=["dialects"],
    summary="List available dialects",
    description="Returns every supported dialect with its default separators.",
)
async def list_dialects() -> List[DialectInfo]:
    return [
        DialectInfo(
            key=key,
            component=dialect.component,
            data=dialect.data,
            release=dialect.release,
            terminator=dialect.terminator,
            advice_tag=dialect.advice_tag,
        )
        for key, dialect in sorted(DIALECTS.items())
    ]


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the edi-envelope-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
