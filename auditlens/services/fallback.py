"""Fallback module that builds findings from reports without header structure."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from auditlens.core.config import FALLBACK_MIN_LENGTH, MAX_TITLE_LENGTH
from auditlens.core.types import Finding, Severity

from .fields import EXPLANATION_PLACEHOLDER, TITLE_PLACEHOLDER, remediation_hint
from .identifiers import extract_identifiers
from .markdown import CodeSplit, normalize, normalize_title, split_code
from .severity import SeverityClassifier

logger = logging.getLogger(__name__)

REPORT_TITLE = "Smart Contract Security Analysis"

# Loose mentions; the rest of the line becomes the title.
MENTION_PATTERN = re.compile(
    r"(?<!\w)(?:vulnerabilit(?:y|ies)|issues?|problems?|flaws?|weakness(?:es)?)(?!\w)"
    r"[ \t]*#?\d*[ \t]*[:\-–—]?[ \t]*(?P<title>[^\n]*)",
    re.IGNORECASE,
)
PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")


class FallbackBuilder:
    """Builds findings when no header dialect matched.

    Documents no longer than ``min_length`` (after trimming) produce nothing.
    Otherwise every loose mention of a vulnerability word yields one finding;
    failing that, the whole document becomes a single finding. Mention findings
    all share the document's severity and code, which is a known limitation.
    """

    def __init__(
        self,
        classifier: Optional[SeverityClassifier] = None,
        min_length: int = FALLBACK_MIN_LENGTH,
        max_title_length: int = MAX_TITLE_LENGTH,
    ) -> None:
        self.classifier = classifier or SeverityClassifier()
        self.min_length = min_length
        self.max_title_length = max_title_length

    def build(self, text: str) -> List[Finding]:
        if len(text.strip()) <= self.min_length:
            logger.debug("Unstructured report below %d characters; no findings", self.min_length)
            return []

        split = split_code(text)
        # Severity reads the whole document, code included.
        severity = self.classifier.classify(text)
        findings = self.from_mentions(split, severity)
        if findings:
            logger.debug("Built %d finding(s) from loose mentions", len(findings))
            return findings

        explanation = normalize(split.prose) or EXPLANATION_PLACEHOLDER
        identifiers = extract_identifiers(text)
        return [
            Finding(
                vulnerability_name=REPORT_TITLE,
                severity=severity,
                explanation=explanation,
                vulnerable_code=split.code,
                remediation=remediation_hint(split.prose),
                cve_id=identifiers.cve_id,
                swc_id=identifiers.swc_id,
            )
        ]

    def from_mentions(self, split: CodeSplit, severity: Severity) -> List[Finding]:
        prose = split.prose
        findings: List[Finding] = []
        for index, match in enumerate(MENTION_PATTERN.finditer(prose), start=1):
            paragraph = _paragraph_at(prose, match.start(), match.end())
            identifiers = extract_identifiers(paragraph)
            findings.append(
                Finding(
                    vulnerability_name=self._title(match.group("title")) or TITLE_PLACEHOLDER.format(index=index),
                    severity=severity,
                    explanation=normalize(paragraph) or EXPLANATION_PLACEHOLDER,
                    vulnerable_code=split.code,
                    remediation=remediation_hint(paragraph),
                    cve_id=identifiers.cve_id,
                    swc_id=identifiers.swc_id,
                )
            )
        return findings

    def _title(self, raw: str) -> str:
        title = normalize_title(raw)
        if len(title) <= self.max_title_length:
            return title
        # Cut on a word boundary so the title stays readable.
        cut = title[: self.max_title_length - 3].rsplit(" ", 1)[0]
        return cut.rstrip(",;:") + "..."


def _paragraph_at(prose: str, start: int, end: int) -> str:
    begin = 0
    for brk in PARAGRAPH_BREAK.finditer(prose, 0, start):
        begin = brk.end()
    after = PARAGRAPH_BREAK.search(prose, end)
    return prose[begin: after.start() if after else len(prose)]
