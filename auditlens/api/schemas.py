"""API schema module defining the request and response models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from auditlens.core.types import OverallRisk, Severity


class ReportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    TXT = "txt"


class AuditEnvelope(BaseModel):
    # Same shape the upstream audit service answers with.
    success: bool = True
    audit: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None


class ReportRequest(BaseModel):
    audit: str
    format: ReportFormat = ReportFormat.TXT


class FindingResponse(BaseModel):
    # Field names follow the camelCase JSON contract consumed by the UI.
    vulnerability_name: str = Field(..., alias="vulnerabilityName")
    severity: Severity
    impact: str = ""
    vulnerable_code: str = Field("", alias="vulnerableCode")
    explanation: str
    proof_of_concept: str = Field("", alias="proofOfConcept")
    remediation: str = ""
    references: str = ""
    cve_id: Optional[str] = Field(None, alias="cveId")
    swc_id: Optional[str] = Field(None, alias="swcId")

    model_config = ConfigDict(populate_by_name=True)


class SummaryResponse(BaseModel):
    total_findings: int = Field(..., alias="totalFindings", ge=0)
    critical_count: int = Field(..., alias="criticalCount", ge=0)
    high_count: int = Field(..., alias="highCount", ge=0)
    medium_count: int = Field(..., alias="mediumCount", ge=0)
    low_count: int = Field(..., alias="lowCount", ge=0)
    informational_count: int = Field(..., alias="informationalCount", ge=0)
    risk_score: int = Field(..., alias="riskScore", ge=0)
    overall_risk: OverallRisk = Field(..., alias="overallRisk")
    contract_name: Optional[str] = Field(None, alias="contractName")
    additional_observations: List[str] = Field(default_factory=list, alias="additionalObservations")
    conclusion: str = ""

    model_config = ConfigDict(populate_by_name=True)


class ParseResponse(BaseModel):
    findings: List[FindingResponse]
    summary: SummaryResponse
    dialect: Optional[str] = None


class DialectResponse(BaseModel):
    name: str
    header: str
