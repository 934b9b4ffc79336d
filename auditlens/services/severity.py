"""Severity classifier module that maps a text span onto one of five levels."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence, Tuple

from auditlens.core.types import Severity

# Checked in this order; the first level whose keyword appears wins.
DEFAULT_KEYWORDS: Tuple[Tuple[Severity, Tuple[str, ...]], ...] = (
    (Severity.CRITICAL, ("critical",)),
    (Severity.HIGH, ("high",)),
    (Severity.MEDIUM, ("medium",)),
    (Severity.LOW, ("low",)),
    (Severity.INFORMATIONAL, ("info",)),
)
DEFAULT_DECLARATION_LABELS = ("severity", "risk level", "priority")


def _declaration_pattern(labels: Iterable[str]) -> re.Pattern:
    # "Severity: High", "**Severity**: High", "**Severity:** High", "Priority - Low"
    names = "|".join(r"[ \t]+".join(re.escape(part) for part in label.split()) for label in labels)
    return re.compile(
        rf"(?<!\w)(?:{names})[ \t]*(?:\*\*|__)?[ \t]*(?:[:：]|[-–—](?=[ \t]))"
        r"[ \t]*(?:\*\*|__)?[ \t]*(?P<value>[^\n]*)",
        re.IGNORECASE,
    )


class SeverityClassifier:
    """Two-tier lookup: an explicit declaration first, then a keyword scan.

    Matching is plain substring containment in a fixed order, so a negated
    mention such as "not critical" still reads as Critical and "allows"
    contains "low". Both are accepted limitations of the heuristic.
    """

    def __init__(
        self,
        keywords: Optional[Sequence[Tuple[Severity, Tuple[str, ...]]]] = None,
        declaration_labels: Optional[Iterable[str]] = None,
        default: Severity = Severity.MEDIUM,
    ) -> None:
        self.keywords = tuple(keywords or DEFAULT_KEYWORDS)
        self.default = default
        self._declaration = _declaration_pattern(declaration_labels or DEFAULT_DECLARATION_LABELS)

    def scan(self, text: Optional[str]) -> Optional[Severity]:
        if not text:
            return None
        lowered = text.lower()
        for severity, words in self.keywords:
            if any(word in lowered for word in words):
                return severity
        return None

    def declared(self, text: Optional[str]) -> Optional[Severity]:
        # A declaration whose value names no level does not count as a match.
        if not text:
            return None
        for match in self._declaration.finditer(text):
            severity = self.scan(match.group("value"))
            if severity is not None:
                return severity
        return None

    def classify(self, text: Optional[str]) -> Severity:
        return self.declared(text) or self.scan(text) or self.default
