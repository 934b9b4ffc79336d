"""Type definitions module providing the finding, summary and report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Severity(str, Enum):
    # Ordered from most to least severe; the order drives keyword precedence.
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    INFORMATIONAL = "Informational"


class OverallRisk(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    MINIMAL = "Minimal"


@dataclass(frozen=True)
class Identifiers:
    # First CVE / SWC identifiers seen in a block, each independently optional.
    cve_id: Optional[str] = None
    swc_id: Optional[str] = None


@dataclass(frozen=True)
class Finding:
    # One security issue recovered from the report text.
    vulnerability_name: str
    severity: Severity
    explanation: str
    impact: str = ""
    # Code keeps its original formatting; every other field is normalized text.
    vulnerable_code: str = ""
    proof_of_concept: str = ""
    remediation: str = ""
    references: str = ""
    cve_id: Optional[str] = None
    swc_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vulnerabilityName": self.vulnerability_name,
            "severity": self.severity.value,
            "impact": self.impact,
            "vulnerableCode": self.vulnerable_code,
            "explanation": self.explanation,
            "proofOfConcept": self.proof_of_concept,
            "remediation": self.remediation,
            "references": self.references,
            "cveId": self.cve_id,
            "swcId": self.swc_id,
        }


@dataclass(frozen=True)
class ReportMetadata:
    # Report-level sections that sit outside the individual findings.
    contract_name: Optional[str] = None
    additional_observations: Tuple[str, ...] = ()
    conclusion: str = ""


@dataclass(frozen=True)
class Summary:
    total_findings: int
    critical_count: int
    high_count: int
    medium_count: int
    low_count: int
    informational_count: int
    risk_score: int
    overall_risk: OverallRisk
    metadata: ReportMetadata = field(default_factory=ReportMetadata)

    def count_for(self, severity: Severity) -> int:
        return {
            Severity.CRITICAL: self.critical_count,
            Severity.HIGH: self.high_count,
            Severity.MEDIUM: self.medium_count,
            Severity.LOW: self.low_count,
            Severity.INFORMATIONAL: self.informational_count,
        }[severity]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFindings": self.total_findings,
            "criticalCount": self.critical_count,
            "highCount": self.high_count,
            "mediumCount": self.medium_count,
            "lowCount": self.low_count,
            "informationalCount": self.informational_count,
            "riskScore": self.risk_score,
            "overallRisk": self.overall_risk.value,
            "contractName": self.metadata.contract_name,
            "additionalObservations": list(self.metadata.additional_observations),
            "conclusion": self.metadata.conclusion,
        }


@dataclass(frozen=True)
class ParsedReport:
    # Engine output: findings in source order plus exactly one summary.
    findings: Tuple[Finding, ...]
    summary: Summary
    dialect: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "findings": [item.to_dict() for item in self.findings],
            "summary": self.summary.to_dict(),
        }
