"""Test setup module that puts the repository root on the import path."""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from auditlens.core.dialects import DialectTable  # noqa: E402
from auditlens.services.engine import AuditReportParser  # noqa: E402


@pytest.fixture(scope="session")
def table() -> DialectTable:
    return DialectTable.from_default()


@pytest.fixture(scope="session")
def parser(table: DialectTable) -> AuditReportParser:
    return AuditReportParser(table=table)


VAULT_REPORT = """\
#### Contract: `Vault`

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
- **Detailed Explanation**: The pragma accepts any 0.8.x compiler.

### Additional Observations
- Events are missing for owner changes.
- Consider a two-step ownership transfer.

### Conclusion
Do not deploy until the reentrancy bug is fixed.
"""


@pytest.fixture
def vault_report() -> str:
    return VAULT_REPORT.strip()
