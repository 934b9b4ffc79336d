"""Identifier extraction module for CVE and SWC catalogue references."""

from __future__ import annotations

import re
from typing import Optional

from auditlens.core.types import Identifiers

CVE_PATTERN = re.compile(r"\bCVE-\d{4}-\d{4,}\b", re.IGNORECASE)
SWC_PATTERN = re.compile(r"\bSWC-\d{3}\b", re.IGNORECASE)


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(0).upper() if match else None


def extract_identifiers(text: Optional[str]) -> Identifiers:
    # Only the first occurrence of each kind is kept; both are optional.
    if not text:
        return Identifiers()
    return Identifiers(cve_id=_first(CVE_PATTERN, text), swc_id=_first(SWC_PATTERN, text))
