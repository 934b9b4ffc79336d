"""Label pattern module that turns label phrases into section regexes."""

from __future__ import annotations

import re
from typing import Iterable

LINE_PREFIX = r"[ \t]*(?:[-*+•][ \t]+|\d+[.)][ \t]+)?"
EMPHASIS = r"(?:\*\*|__)"


def label_alternation(labels: Iterable[str]) -> str:
    # Longest phrases first so "Proof of Concept" wins over a shorter prefix.
    phrases = sorted({label for label in labels if label}, key=len, reverse=True)
    if not phrases:
        # An empty table must never match.
        return r"(?!)"
    return "|".join(r"[ \t]+".join(re.escape(part) for part in phrase.split()) for phrase in phrases)


def label_forms(labels: Iterable[str]) -> str:
    """Regex for a label written as a heading, in bold, or plain with a colon.

    ``#### Impact``, ``**Impact**:``, ``**Impact:**`` and ``Impact:`` all match;
    a plain ``Impact`` only matches when it stands alone on its line, so prose
    that merely starts with the word is left alone.
    """
    names = label_alternation(labels)
    return (
        r"(?:"
        rf"#{{1,6}}[ \t]*{EMPHASIS}?(?:{names})[ \t]*{EMPHASIS}?[ \t]*(?::|(?=\n|\Z))"
        rf"|{EMPHASIS}(?:{names})[ \t]*:?[ \t]*{EMPHASIS}[ \t]*:?"
        rf"|(?:{names})[ \t]*(?::|(?=\n|\Z))"
        r")"
        rf"(?:[ \t]*{EMPHASIS}(?=[ \t]*(?:\n|\Z)))?"
    )


def boundary_lookahead(labels: Iterable[str]) -> str:
    # Stops a section body at the start of the next labelled line.
    return rf"(?=\n{LINE_PREFIX}{label_forms(labels)})"


def section_pattern(label: str, boundaries: Iterable[str]) -> re.Pattern:
    # Matches one labelled section and captures its body up to the next label.
    return re.compile(
        rf"(?:^|\n){LINE_PREFIX}{label_forms([label])}[ \t]*\n?"
        rf"(?P<body>.*?)(?:{boundary_lookahead(boundaries)}|\Z)",
        re.IGNORECASE | re.DOTALL,
    )


def label_line_pattern(labels: Iterable[str]) -> re.Pattern:
    # The label token at the start of a line, without its body.
    return re.compile(
        rf"^{LINE_PREFIX}{label_forms(labels)}[ \t]*",
        re.IGNORECASE | re.MULTILINE,
    )


def declaration_line_pattern(labels: Iterable[str]) -> re.Pattern:
    # A whole single-line declaration such as "**Severity**: High".
    return re.compile(
        rf"^{LINE_PREFIX}{label_forms(labels)}[^\n]*$",
        re.IGNORECASE | re.MULTILINE,
    )


def heading_pattern(labels: Iterable[str]) -> re.Pattern:
    # A heading line ("## Conclusion", "**Conclusion**") that opens a report-level section.
    names = label_alternation(labels)
    return re.compile(
        rf"^[ \t]*(?:#{{1,6}}[ \t]*{EMPHASIS}?|{EMPHASIS})(?:{names})"
        rf"[ \t]*:?[ \t]*{EMPHASIS}?[ \t]*:?[ \t]*$",
        re.IGNORECASE | re.MULTILINE,
    )
