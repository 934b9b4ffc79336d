"""Markdown normalizer module that strips decoration and sets fenced code aside."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

# ```lang\n ... ``` with an optional info string.
FENCE_PATTERN = re.compile(r"```[\w+#.\-]*[ \t]*\n?(.*?)\n?[ \t]*```", re.DOTALL)
STRAY_FENCE = re.compile(r"^[ \t]*```[^\n]*$", re.MULTILINE)
DOCUMENT_FENCE = re.compile(r"\A\s*```(?:markdown|md|text)?[ \t]*\n(.*)\n[ \t]*```\s*\Z", re.DOTALL | re.IGNORECASE)

# Applied in order; each rule only ever deletes characters.
_RULES = (
    (re.compile(r"^[ \t]*(?:[-*_][ \t]*){3,}$", re.MULTILINE), ""),
    # Quote, heading, bullet and number markers, however deeply stacked.
    (
        re.compile(r"^[ \t]*(?:(?:>|#+(?!#))[ \t]*|(?:[-*+•]|\d+[.)])[ \t]+)+", re.MULTILINE),
        "",
    ),
    (re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*"), r"\1"),
    (re.compile(r"__(?=\S)(.+?)(?<=\S)__"), r"\1"),
    (re.compile(r"(?<![\w*])\*(?=\S)(.+?)(?<=\S)\*(?![\w*])"), r"\1"),
    (re.compile(r"(?<![\w_])_(?=\S)(.+?)(?<=\S)_(?![\w_])"), r"\1"),
    (re.compile(r"`([^`\n]+)`"), r"\1"),
    (re.compile(r"!?\[([^\]\n]*)\]\([^)\n]*\)"), r"\1"),
    (re.compile(r"[ \t]+$", re.MULTILINE), ""),
    (re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+"), "\n\n"),
)


@dataclass(frozen=True)
class CodeSplit:
    # Fenced code bodies in source order, and the prose left around them.
    blocks: Tuple[str, ...]
    prose: str

    @property
    def code(self) -> str:
        return "\n\n".join(self.blocks)


def split_code(text: Optional[str]) -> CodeSplit:
    if not text:
        return CodeSplit((), "")
    blocks = []
    for match in FENCE_PATTERN.finditer(text):
        body = match.group(1).strip("\r\n")
        if body.strip():
            blocks.append(body)
    return CodeSplit(tuple(blocks), FENCE_PATTERN.sub("\n", text))


def unwrap_document_fence(text: str) -> str:
    # Some responses arrive wrapped in one ```markdown fence around the whole report.
    match = DOCUMENT_FENCE.match(text)
    if match and "```" not in match.group(1):
        return match.group(1)
    return text


def _normalize_once(text: str) -> str:
    text = FENCE_PATTERN.sub("\n", text)
    text = STRAY_FENCE.sub("", text)
    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def normalize(text: Optional[str]) -> str:
    """Return ``text`` as plain prose with markdown decoration removed.

    Fenced code is dropped (use :func:`split_code` to keep it). Every rule only
    removes characters, so repeating the pass until nothing changes always
    terminates, and the result is stable under a second application.
    """
    if not text:
        return ""
    current = text
    while True:
        updated = _normalize_once(current)
        if updated == current:
            return updated
        current = updated


def normalize_title(text: Optional[str]) -> str:
    # Titles are single-line: drop leftover emphasis marks and trailing colons.
    title = " ".join(normalize(text).split())
    return title.strip("*_:#- \t").strip()
