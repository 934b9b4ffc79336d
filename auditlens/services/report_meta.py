"""Report metadata module for the contract name and report-level sections."""

from __future__ import annotations

import re
from typing import List, Optional

from auditlens.core.types import ReportMetadata

from .markdown import normalize, normalize_title
from .segmenter import mask_code

CONTRACT_NAME = re.compile(
    r"^[ \t]*(?:#{1,6}[ \t]*)?(?:\*\*)?Contract(?:[ \t]+Name)?(?:\*\*)?[ \t]*:[ \t]*(?:\*\*)?[ \t]*"
    r"`?(?P<name>[^`\n*]+)`?",
    re.IGNORECASE | re.MULTILINE,
)
NEXT_HEADING = r"(?=^[ \t]*#{1,6}[ \t]|\Z)"
OBSERVATIONS = re.compile(
    r"^[ \t]*#{1,6}[ \t]*(?:\*\*)?Additional[ \t]+Observations(?:\*\*)?[ \t]*:?[ \t]*$"
    rf"(?P<body>.*?){NEXT_HEADING}",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
CONCLUSION = re.compile(
    r"^[ \t]*#{1,6}[ \t]*(?:\*\*)?Conclusions?(?:\*\*)?[ \t]*:?[ \t]*$"
    rf"(?P<body>.*?){NEXT_HEADING}",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
BULLET = re.compile(r"^[ \t]*[-*+•][ \t]+(?P<item>[^\n]+)$", re.MULTILINE)


def _contract_name(text: str) -> Optional[str]:
    match = CONTRACT_NAME.search(text)
    if match is None:
        return None
    return normalize_title(match.group("name")) or None


def _observations(text: str) -> List[str]:
    match = OBSERVATIONS.search(text)
    if match is None:
        return []
    items = (normalize(bullet.group("item")) for bullet in BULLET.finditer(match.group("body")))
    return [item for item in items if item]


def _conclusion(text: str) -> str:
    match = CONCLUSION.search(text)
    return normalize(match.group("body")) if match else ""


def extract_metadata(text: str) -> ReportMetadata:
    # Section lookups run on code-masked text so code comments never match.
    masked = mask_code(text)
    return ReportMetadata(
        contract_name=_contract_name(masked),
        additional_observations=tuple(_observations(masked)),
        conclusion=_conclusion(masked),
    )
