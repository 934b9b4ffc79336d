"""Reporting module that renders parsed audits as JSON, CSV or plain text."""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from auditlens.core.errors import ReportFormatError
from auditlens.core.storage import ensure_reports_dir
from auditlens.core.types import Finding, ParsedReport, Severity

SUPPORTED_FORMATS = {"json", "csv", "txt"}
MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
    "txt": "text/plain",
}
CSV_FIELDS = [
    "index",
    "vulnerabilityName",
    "severity",
    "cveId",
    "swcId",
    "impact",
    "explanation",
    "vulnerableCode",
    "proofOfConcept",
    "remediation",
    "references",
]


def normalize_format(report_format: str) -> str:
    normalized = (report_format or "").strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        raise ReportFormatError(f"Unsupported format: {report_format}")
    return normalized


def render_report(
    report: ParsedReport,
    report_format: str,
    generated_at: Optional[datetime] = None,
) -> str:
    # Check the format first, then dispatch to the matching renderer.
    normalized = normalize_format(report_format)
    generated_at = generated_at or datetime.now(timezone.utc)
    if normalized == "json":
        return json.dumps(build_json_payload(report, generated_at), ensure_ascii=False, indent=2)
    if normalized == "csv":
        return _render_csv(report.findings)
    return render_text(report, generated_at)


def generate_report(
    report: ParsedReport,
    report_format: str,
    output_dir: Optional[Path] = None,
) -> Path:
    # Render first so an unsupported format never creates the directory.
    normalized = normalize_format(report_format)
    body = render_report(report, normalized)
    file_path = ensure_reports_dir(output_dir) / f"report.{normalized}"
    file_path.write_text(body, encoding="utf-8")
    return file_path


def build_json_payload(report: ParsedReport, generated_at: datetime) -> Dict[str, Any]:
    payload = report.to_dict()
    return {
        "generated_at": generated_at.isoformat(),
        "summary": payload["summary"],
        "findings": payload["findings"],
    }


def _render_csv(findings: Iterable[Finding]) -> str:
    # Fixed header; one row per finding in source order.
    handle = io.StringIO()
    writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for index, finding in enumerate(findings, start=1):
        row = finding.to_dict()
        row["index"] = index
        writer.writerow(row)
    return handle.getvalue()


def render_text(report: ParsedReport, generated_at: datetime) -> str:
    summary = report.summary
    lines = [
        "SMART CONTRACT SECURITY AUDIT REPORT",
        f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
    ]
    if summary.metadata.contract_name:
        lines.append(f"Contract: {summary.metadata.contract_name}")
    lines += [
        "",
        "EXECUTIVE SUMMARY",
        f"Overall Risk Level: {summary.overall_risk.value}",
        f"Total Findings: {summary.total_findings}",
        f"Risk Score: {summary.risk_score}",
        "",
        "FINDINGS BREAKDOWN",
    ]
    lines += [f"- {severity.value}: {summary.count_for(severity)}" for severity in Severity]
    lines += ["", "DETAILED FINDINGS"]
    for index, finding in enumerate(report.findings, start=1):
        lines.append("")
        lines.extend(_finding_lines(index, finding))
    if summary.metadata.additional_observations:
        lines += ["", "ADDITIONAL OBSERVATIONS"]
        lines += [f"- {item}" for item in summary.metadata.additional_observations]
    if summary.metadata.conclusion:
        lines += ["", "CONCLUSION", summary.metadata.conclusion]
    lines += ["", "END OF REPORT"]
    return "\n".join(lines) + "\n"


def _finding_lines(index: int, finding: Finding) -> List[str]:
    lines = [f"{index}. {finding.vulnerability_name}", f"   Severity: {finding.severity.value}"]
    if finding.cve_id:
        lines.append(f"   CVE ID: {finding.cve_id}")
    if finding.swc_id:
        lines.append(f"   SWC ID: {finding.swc_id}")
    sections = (
        ("Impact", finding.impact),
        ("Vulnerable Code", finding.vulnerable_code),
        ("Explanation", finding.explanation),
        ("Proof of Concept", finding.proof_of_concept),
        ("Remediation", finding.remediation),
        ("References", finding.references),
    )
    for label, value in sections:
        if not value:
            continue
        lines.append(f"   {label}:")
        lines.extend(f"      {line}" if line else "" for line in value.splitlines())
    return lines
