"""FastAPI app module providing the report parsing endpoints."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import Response

from auditlens.core.config import API_PREFIX
from auditlens.core.errors import ReportFormatError, UpstreamAuditError
from auditlens.services.engine import AuditReportParser
from auditlens.services.envelope import audit_text_from_envelope
from auditlens.services.reporting import MEDIA_TYPES, render_report

from .schemas import (
    AuditEnvelope,
    DialectResponse,
    ParseResponse,
    ReportRequest,
)

app = FastAPI(title="auditlens")


@lru_cache(maxsize=1)
def get_parser() -> AuditReportParser:
    return AuditReportParser()


@app.get(f"{API_PREFIX}/dialects", response_model=List[DialectResponse])
def list_dialects(parser: AuditReportParser = Depends(get_parser)) -> List[DialectResponse]:
    return [
        DialectResponse(name=dialect.name, header=dialect.header.pattern)
        for dialect in parser.table.dialects
    ]


@app.post(f"{API_PREFIX}/audits/parse", response_model=ParseResponse)
def parse_audit(
    payload: AuditEnvelope,
    parser: AuditReportParser = Depends(get_parser),
) -> ParseResponse:
    try:
        text = audit_text_from_envelope(payload.model_dump())
    except UpstreamAuditError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    report = parser.parse(text)
    return ParseResponse.model_validate({**report.to_dict(), "dialect": report.dialect})


@app.post(f"{API_PREFIX}/audits/report")
def create_report(
    payload: ReportRequest,
    parser: AuditReportParser = Depends(get_parser),
) -> Response:
    report = parser.parse(payload.audit)
    try:
        body = render_report(report, payload.format.value)
    except ReportFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return Response(content=body, media_type=MEDIA_TYPES[payload.format.value])
