"""Engine module that runs the full report interpretation pipeline."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, List, Optional

from auditlens.core.config import FALLBACK_MIN_LENGTH
from auditlens.core.dialects import Dialect, DialectTable
from auditlens.core.types import Finding, ParsedReport

from .fallback import FallbackBuilder
from .fields import FieldExtractor
from .markdown import unwrap_document_fence
from .report_meta import extract_metadata
from .segmenter import SectionSegmenter
from .severity import SeverityClassifier
from .summary import SummaryAggregator

logger = logging.getLogger(__name__)


class AuditReportParser:
    """Turns one model-generated audit report into findings and a summary.

    The parser is a pure function of its input: it keeps no per-call state,
    performs no I/O and never raises for malformed text. Structured reports go
    through the segmenter and field extractor; anything else takes the
    fallback path, which may legitimately return no findings.
    """

    def __init__(
        self,
        table: Optional[DialectTable] = None,
        classifier: Optional[SeverityClassifier] = None,
        aggregator: Optional[SummaryAggregator] = None,
        fallback_min_length: int = FALLBACK_MIN_LENGTH,
    ) -> None:
        self.table = table or DialectTable.from_default()
        self.classifier = classifier or SeverityClassifier()
        self.aggregator = aggregator or SummaryAggregator()
        self.segmenter = SectionSegmenter(self.table)
        self.fallback = FallbackBuilder(self.classifier, min_length=fallback_min_length)
        # Extractors compile a regex per label, so build them once per dialect.
        boundary_labels = self.table.all_field_labels()
        self._extractors: Dict[str, FieldExtractor] = {
            dialect.name: FieldExtractor(
                dialect,
                boundary_labels,
                metadata_labels=self.table.metadata_labels,
                classifier=self.classifier,
            )
            for dialect in self.table.dialects
        }

    def extractor_for(self, dialect: Dialect) -> FieldExtractor:
        return self._extractors[dialect.name]

    def parse(self, text: Optional[str]) -> ParsedReport:
        document = unwrap_document_fence((text or "").strip())
        segmentation = self.segmenter.segment(document)

        findings: List[Finding]
        if segmentation.structured:
            extractor = self.extractor_for(segmentation.dialect)
            findings = [
                extractor.extract(block.text, index, block.title)
                for index, block in enumerate(segmentation.blocks, start=1)
            ]
        else:
            logger.debug("Falling back to unstructured interpretation")
            findings = self.fallback.build(document)

        summary = self.aggregator.summarize(findings, extract_metadata(document))
        logger.info(
            "Parsed %d finding(s); overall risk %s",
            summary.total_findings,
            summary.overall_risk.value,
        )
        return ParsedReport(
            findings=tuple(findings),
            summary=summary,
            dialect=segmentation.dialect.name if segmentation.dialect else None,
        )


@lru_cache(maxsize=1)
def default_parser() -> AuditReportParser:
    return AuditReportParser()


def parse_audit_report(text: Optional[str]) -> ParsedReport:
    return default_parser().parse(text)
