"""Envelope module that reads the audit text out of an upstream response."""

from __future__ import annotations

from typing import Any, Mapping

from auditlens.core.errors import UpstreamAuditError


def audit_text_from_envelope(payload: Mapping[str, Any]) -> str:
    # Upstream answers {success, audit} on success or {error, details} on failure.
    if not payload.get("success", True):
        message = payload.get("error") or "Audit request failed"
        if payload.get("details"):
            message = f"{message}: {payload['details']}"
        raise UpstreamAuditError(message)
    audit = payload.get("audit")
    if not isinstance(audit, str):
        raise UpstreamAuditError("Upstream response carried no audit text")
    return audit
