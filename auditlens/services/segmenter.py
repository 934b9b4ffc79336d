"""Section segmenter module that splits a report into per-finding blocks."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from auditlens.core.dialects import Dialect, DialectTable

from .labels import heading_pattern
from .markdown import FENCE_PATTERN, normalize_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    # Raw text between one header and the next; the header line itself is excluded.
    title: str
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class Segmentation:
    dialect: Optional[Dialect]
    blocks: Tuple[Block, ...]

    @property
    def structured(self) -> bool:
        return bool(self.blocks)


def mask_code(text: str) -> str:
    # Blank out fenced code but keep offsets, so headers inside code are ignored.
    return FENCE_PATTERN.sub(lambda match: re.sub(r"[^\n]", " ", match.group(0)), text)


class SectionSegmenter:
    def __init__(self, table: DialectTable) -> None:
        self.table = table
        self._trailer = heading_pattern(table.trailer_headings)

    def segment(self, text: str) -> Segmentation:
        masked = mask_code(text)
        for dialect in self.table.dialects:
            matches = list(dialect.header.finditer(masked))
            if not matches:
                continue
            # The first dialect with any header wins; dialects are never mixed.
            blocks = self._blocks(text, masked, matches)
            logger.debug("Dialect %s matched %d header(s)", dialect.name, len(blocks))
            return Segmentation(dialect, tuple(blocks))
        logger.debug("No header dialect matched; report is unstructured")
        return Segmentation(None, ())

    def _blocks(self, text: str, masked: str, matches: List[re.Match]) -> List[Block]:
        blocks: List[Block] = []
        for position, match in enumerate(matches):
            start = match.end()
            end = matches[position + 1].start() if position + 1 < len(matches) else len(text)
            # A report-level heading (Conclusion, Additional Observations) closes the block.
            trailer = self._trailer.search(masked, start, end)
            if trailer is not None:
                end = trailer.start()
            blocks.append(Block(title=_title(match), text=text[start:end], start=start, end=end))
        return blocks


def _title(match: re.Match) -> str:
    title = match.group("title") or ""
    if not title.strip() and "rest" in match.re.groupindex:
        title = match.group("rest") or ""
    return normalize_title(title)
