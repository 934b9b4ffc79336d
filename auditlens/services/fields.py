"""Field extraction module that splits one finding block into labelled fields."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from auditlens.core.dialects import FIELD_ORDER, Dialect
from auditlens.core.types import Finding

from .identifiers import extract_identifiers
from .labels import declaration_line_pattern, label_line_pattern, section_pattern
from .markdown import normalize, split_code
from .severity import SeverityClassifier

logger = logging.getLogger(__name__)

EXPLANATION_PLACEHOLDER = "No detailed explanation was provided for this finding."
TITLE_PLACEHOLDER = "Security Finding {index}"

# "To fix this, ..." style advice used when no remediation label is present.
REMEDIATION_HINT = re.compile(
    r"(?<!\w)to[ \t]+(?:fix|resolve|address|mitigate)\b[^\n]*(?:\n(?![ \t]*\n)[^\n]*)*",
    re.IGNORECASE,
)
SENTENCE_BREAK = re.compile(r"[.!?][ \t]+|\n")
FIRST_SENTENCE = re.compile(r"^(.+?[.!?])(?=\s|$)", re.DOTALL)


@dataclass(frozen=True)
class ExtractionStep:
    """One extract-and-remove pass: find a labelled section, cut it out."""

    field_name: str
    matchers: Tuple[re.Pattern, ...]

    def apply(self, working: str) -> Tuple[str, str]:
        # Returns (body, remaining); the input string is never modified.
        for matcher in self.matchers:
            match = matcher.search(working)
            if match is None:
                continue
            body = match.group("body").strip()
            working = working[: match.start()] + "\n" + working[match.end():]
            if body:
                return body, working
        return "", working


def remediation_hint(prose: str) -> str:
    # Widen the hit back to the start of its sentence so the advice reads whole.
    match = REMEDIATION_HINT.search(prose)
    if match is None:
        return ""
    start = 0
    for brk in SENTENCE_BREAK.finditer(prose, 0, match.start()):
        start = brk.end()
    return normalize(prose[start: match.end()])


def first_sentence(text: str) -> str:
    match = FIRST_SENTENCE.match(text.strip())
    if match:
        return match.group(1).strip()
    return text.strip().split("\n", 1)[0]


class FieldExtractor:
    def __init__(
        self,
        dialect: Dialect,
        boundary_labels: Iterable[str],
        metadata_labels: Iterable[str] = (),
        classifier: Optional[SeverityClassifier] = None,
    ) -> None:
        self.dialect = dialect
        self.classifier = classifier or SeverityClassifier()
        boundaries = tuple(boundary_labels) + tuple(metadata_labels)
        # Every field except the explanation gets a pass, in the fixed order.
        self.steps = tuple(
            ExtractionStep(
                field_name,
                tuple(section_pattern(label, boundaries) for label in dialect.labels_for(field_name)),
            )
            for field_name in FIELD_ORDER
            if field_name != "explanation"
        )
        self._metadata_lines = declaration_line_pattern(metadata_labels)
        self._leftover_labels = label_line_pattern(boundary_labels)

    def run_steps(self, prose: str) -> Tuple[Dict[str, str], str]:
        fields: Dict[str, str] = {}
        working = prose
        for step in self.steps:
            fields[step.field_name], working = step.apply(working)
        return fields, working

    def extract(self, block: str, index: int, title: str = "") -> Finding:
        """Build a finding from one block of report text.

        Fenced code is set aside before the label passes run, so labels inside
        code never split a section. The code itself becomes the vulnerable
        code; a labelled "Code:" section is only used when there is none.
        """
        split = split_code(block)
        fields, remainder = self.run_steps(split.prose)

        vulnerable_code = split.code or fields["vulnerable_code"].strip("\n")

        remediation = normalize(fields["remediation"])
        if not remediation:
            remediation = remediation_hint(split.prose)

        explanation = normalize(self._clean_remainder(remainder))
        from_source = bool(explanation)
        if not explanation:
            explanation = EXPLANATION_PLACEHOLDER

        impact = normalize(fields["impact"])
        if not impact and from_source:
            impact = first_sentence(explanation)

        identifiers = extract_identifiers(block)
        finding = Finding(
            vulnerability_name=title or TITLE_PLACEHOLDER.format(index=index),
            severity=self.classifier.classify(block),
            impact=impact,
            vulnerable_code=vulnerable_code,
            explanation=explanation,
            proof_of_concept=normalize(fields["proof_of_concept"]),
            remediation=remediation,
            references=normalize(fields["references"]),
            cve_id=identifiers.cve_id,
            swc_id=identifiers.swc_id,
        )
        logger.debug("Extracted finding %d (%s) with dialect %s", index, finding.severity.value, self.dialect.name)
        return finding

    def _clean_remainder(self, remainder: str) -> str:
        # Drop declaration lines and the bare labels of already-consumed sections.
        remainder = self._metadata_lines.sub("", remainder)
        return self._leftover_labels.sub("", remainder)
