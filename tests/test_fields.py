"""Field extractor tests for labelled sections and their fallbacks."""

import pytest

from auditlens.core.dialects import DialectTable
from auditlens.core.types import Severity
from auditlens.services.fields import (
    EXPLANATION_PLACEHOLDER,
    FieldExtractor,
    first_sentence,
    remediation_hint,
)

FULL_BLOCK = """
**Severity**: High
**Description**: The withdraw function sends ether before updating balances.
**Impact**: Attackers can drain the vault.
```solidity
function withdraw() public {
    msg.sender.call{value: bal}("");
}
```
**Proof of Concept**: Deploy an attacker contract that re-enters withdraw.
**Recommendation**: Apply checks-effects-interactions.
**References**: https://swcregistry.io/docs/SWC-107
"""


@pytest.fixture
def extractor(table: DialectTable) -> FieldExtractor:
    return FieldExtractor(
        table.get("markdown-headers"),
        table.all_field_labels(),
        metadata_labels=table.metadata_labels,
    )


def test_extracts_every_labelled_field(extractor: FieldExtractor) -> None:
    finding = extractor.extract(FULL_BLOCK, 1, "Reentrancy")
    assert finding.vulnerability_name == "Reentrancy"
    assert finding.severity == Severity.HIGH
    assert finding.explanation == "The withdraw function sends ether before updating balances."
    assert finding.impact == "Attackers can drain the vault."
    assert finding.proof_of_concept == "Deploy an attacker contract that re-enters withdraw."
    assert finding.remediation == "Apply checks-effects-interactions."
    assert finding.references == "https://swcregistry.io/docs/SWC-107"
    assert finding.swc_id == "SWC-107"
    assert finding.cve_id is None


def test_code_is_kept_verbatim(extractor: FieldExtractor) -> None:
    finding = extractor.extract(FULL_BLOCK, 1, "Reentrancy")
    assert finding.vulnerable_code == 'function withdraw() public {\n    msg.sender.call{value: bal}("");\n}'
    assert "withdraw() public" not in finding.explanation


def test_heading_style_labels(extractor: FieldExtractor) -> None:
    block = "\n#### Impact\nUsers lose funds.\n#### Recommendation\nUse a mutex.\n"
    finding = extractor.extract(block, 1, "Reentrancy")
    assert finding.impact == "Users lose funds."
    assert finding.remediation == "Use a mutex."


def test_labels_inside_code_do_not_split(extractor: FieldExtractor) -> None:
    block = "\n**Impact**: Loss of funds.\n```solidity\n// Remediation: later\nfoo();\n```\n"
    finding = extractor.extract(block, 1, "A")
    assert finding.impact == "Loss of funds."
    assert finding.remediation == ""
    assert "// Remediation: later" in finding.vulnerable_code


def test_placeholder_explanation_keeps_labelled_impact(extractor: FieldExtractor) -> None:
    finding = extractor.extract("\n**Impact**: Funds can be drained.\n", 1, "A")
    assert finding.explanation == EXPLANATION_PLACEHOLDER
    assert finding.impact == "Funds can be drained."


def test_impact_falls_back_to_first_sentence(extractor: FieldExtractor) -> None:
    finding = extractor.extract("\nThe contract trusts tx.origin for auth. Phishing is possible.\n", 1, "A")
    assert finding.impact == "The contract trusts tx.origin for auth."
    assert finding.explanation.endswith("Phishing is possible.")


def test_remediation_hint_without_label(extractor: FieldExtractor) -> None:
    block = "\nReentrancy exists in withdraw. To fix this, update balances before the external call.\n"
    finding = extractor.extract(block, 1, "A")
    assert finding.remediation == "To fix this, update balances before the external call."


def test_labelled_code_used_without_fence(extractor: FieldExtractor) -> None:
    block = "\n**Description**: State is updated late.\n**Location**: Vault.withdraw()\n"
    finding = extractor.extract(block, 1, "A")
    assert finding.vulnerable_code == "Vault.withdraw()"
    assert finding.explanation == "State is updated late."


def test_missing_title_gets_placeholder(extractor: FieldExtractor) -> None:
    finding = extractor.extract("\nSomething is off.\n", 3)
    assert finding.vulnerability_name == "Security Finding 3"


def test_metadata_lines_are_dropped_from_explanation(extractor: FieldExtractor) -> None:
    block = "\n- **Severity**: Low\n- **SWC ID**: SWC-103\n- **Detailed Explanation**: Pragma is floating.\n"
    finding = extractor.extract(block, 1, "Floating pragma")
    assert finding.explanation == "Pragma is floating."
    assert finding.severity == Severity.LOW
    assert finding.swc_id == "SWC-103"


def test_step_returns_body_and_remaining(extractor: FieldExtractor) -> None:
    step = extractor.steps[0]
    working = "intro\n**PoC**: call twice\n**Impact**: bad"
    body, remaining = step.apply(working)
    assert step.field_name == "proof_of_concept"
    assert body == "call twice"
    assert "call twice" not in remaining
    assert "**Impact**: bad" in remaining


def test_helpers() -> None:
    assert first_sentence("One. Two.") == "One."
    assert first_sentence("no terminator here") == "no terminator here"
    assert remediation_hint("Nothing to do here.") == ""


def test_remediation_hint_reads_the_whole_block(extractor: FieldExtractor) -> None:
    # The advice sits inside the Impact body, which an earlier pass already consumed.
    block = "\n**Impact**: Funds are lost. To fix this, update balances first.\n"
    finding = extractor.extract(block, 1, "A")
    assert finding.impact.startswith("Funds are lost.")
    assert finding.remediation == "To fix this, update balances first."


def test_severity_keyword_inside_code_counts(extractor: FieldExtractor) -> None:
    block = "\nThe call result is ignored.\n```solidity\n// critical: funds at risk\nfoo.call(data);\n```"
    assert extractor.extract(block, 1, "A").severity == Severity.CRITICAL
