"""Demo script that parses a bundled sample report and prints the findings."""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from auditlens.core.logging import setup_logging
from auditlens.services.engine import parse_audit_report

SAMPLE_REPORT = """#### Contract: `Vault`

### Vulnerability 1: Reentrancy in withdraw
- **Severity**: Critical
- **SWC ID**: SWC-107
- **Detailed Explanation**: `withdraw` sends ether before zeroing the balance.
- **Impact**: An attacker can drain every deposit.
```solidity
function withdraw() external {
    (bool ok, ) = msg.sender.call{value: balances[msg.sender]}("");
    balances[msg.sender] = 0;
}
```
- **Recommended Remediation**: Apply checks-effects-interactions or a reentrancy guard.

### Vulnerability 2: Floating pragma
- **Severity**: Low
- **Detailed Explanation**: The pragma allows any 0.8.x compiler.

### Conclusion
The contract must not be deployed until the reentrancy issue is fixed.
"""


def main() -> None:
    setup_logging()
    report = parse_audit_report(SAMPLE_REPORT)
    summary = report.summary

    print(f"Dialect: {report.dialect}")
    print(f"Findings: {summary.total_findings} | risk score {summary.risk_score} | {summary.overall_risk.value}")
    for finding in report.findings:
        print(f"- {finding.severity.value} | {finding.vulnerability_name} | {finding.swc_id or '-'}")


if __name__ == "__main__":
    main()
