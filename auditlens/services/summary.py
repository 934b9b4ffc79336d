"""Summary aggregation module that computes counters, risk score and overall risk."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping, Optional, Tuple

from auditlens.core.types import Finding, OverallRisk, ReportMetadata, Severity, Summary

DEFAULT_WEIGHTS: Mapping[Severity, int] = {
    Severity.CRITICAL: 10,
    Severity.HIGH: 7,
    Severity.MEDIUM: 4,
    Severity.LOW: 2,
    Severity.INFORMATIONAL: 1,
}

# Ordered rules, first match wins. A rule fires when any (severity, threshold)
# pair has more than `threshold` findings.
RiskRule = Tuple[Tuple[Tuple[Severity, int], ...], OverallRisk]
DEFAULT_RULES: Tuple[RiskRule, ...] = (
    (((Severity.CRITICAL, 0),), OverallRisk.CRITICAL),
    (((Severity.HIGH, 0),), OverallRisk.HIGH),
    (((Severity.MEDIUM, 2),), OverallRisk.HIGH),
    (((Severity.MEDIUM, 0), (Severity.LOW, 3)), OverallRisk.MEDIUM),
    (((Severity.LOW, 0),), OverallRisk.LOW),
)


class SummaryAggregator:
    def __init__(
        self,
        weights: Optional[Mapping[Severity, int]] = None,
        rules: Optional[Tuple[RiskRule, ...]] = None,
        default_risk: OverallRisk = OverallRisk.MINIMAL,
    ) -> None:
        self.weights = dict(weights or DEFAULT_WEIGHTS)
        self.rules = rules or DEFAULT_RULES
        self.default_risk = default_risk

    def risk_score(self, counts: Mapping[Severity, int]) -> int:
        return sum(self.weights.get(severity, 0) * count for severity, count in counts.items())

    def overall_risk(self, counts: Mapping[Severity, int]) -> OverallRisk:
        for conditions, risk in self.rules:
            if any(counts.get(severity, 0) > threshold for severity, threshold in conditions):
                return risk
        return self.default_risk

    def summarize(
        self,
        findings: Iterable[Finding],
        metadata: Optional[ReportMetadata] = None,
    ) -> Summary:
        findings = list(findings)
        counts = Counter(finding.severity for finding in findings)
        return Summary(
            total_findings=len(findings),
            critical_count=counts[Severity.CRITICAL],
            high_count=counts[Severity.HIGH],
            medium_count=counts[Severity.MEDIUM],
            low_count=counts[Severity.LOW],
            informational_count=counts[Severity.INFORMATIONAL],
            risk_score=self.risk_score(counts),
            overall_risk=self.overall_risk(counts),
            metadata=metadata or ReportMetadata(),
        )
