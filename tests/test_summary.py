"""Summary aggregation tests for counters, score and overall risk."""

from typing import List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from auditlens.core.types import Finding, OverallRisk, ReportMetadata, Severity
from auditlens.services.summary import DEFAULT_WEIGHTS, SummaryAggregator


def _findings(*severities: Severity) -> List[Finding]:
    return [Finding(f"Finding {i}", severity, "text") for i, severity in enumerate(severities, start=1)]


@pytest.mark.parametrize(
    "severities, expected",
    [
        ((Severity.CRITICAL, Severity.LOW), OverallRisk.CRITICAL),
        ((Severity.HIGH,), OverallRisk.HIGH),
        ((Severity.MEDIUM,) * 3, OverallRisk.HIGH),
        ((Severity.MEDIUM,) * 2, OverallRisk.MEDIUM),
        ((Severity.LOW,) * 4, OverallRisk.MEDIUM),
        ((Severity.LOW,) * 3, OverallRisk.LOW),
        ((Severity.INFORMATIONAL,) * 5, OverallRisk.MINIMAL),
        ((), OverallRisk.MINIMAL),
    ],
)
def test_overall_risk_rules(severities, expected: OverallRisk) -> None:
    summary = SummaryAggregator().summarize(_findings(*severities))
    assert summary.overall_risk == expected


def test_counts_and_score() -> None:
    summary = SummaryAggregator().summarize(
        _findings(Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW, Severity.INFORMATIONAL)
    )
    assert summary.total_findings == 5
    assert summary.critical_count == 1
    assert summary.informational_count == 1
    assert summary.risk_score == 24


def test_empty_summary() -> None:
    summary = SummaryAggregator().summarize([])
    assert summary.total_findings == 0
    assert summary.risk_score == 0
    assert summary.overall_risk == OverallRisk.MINIMAL
    assert summary.metadata == ReportMetadata()


def test_metadata_is_carried() -> None:
    metadata = ReportMetadata(contract_name="Vault", conclusion="Done.")
    summary = SummaryAggregator().summarize(_findings(Severity.LOW), metadata)
    assert summary.to_dict()["contractName"] == "Vault"
    assert summary.to_dict()["conclusion"] == "Done."


@given(st.lists(st.sampled_from(list(Severity)), max_size=30))
def test_summary_invariants(severities: List[Severity]) -> None:
    summary = SummaryAggregator().summarize(_findings(*severities))
    counts = [summary.count_for(severity) for severity in Severity]
    assert sum(counts) == summary.total_findings == len(severities)
    assert summary.risk_score == sum(DEFAULT_WEIGHTS[severity] for severity in severities)
    if summary.critical_count:
        assert summary.overall_risk == OverallRisk.CRITICAL
    if not severities:
        assert summary.overall_risk == OverallRisk.MINIMAL
