"""Dialect module that loads the header and label tables from YAML."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple

import yaml

from .config import DEFAULT_DIALECT_FILE
from .config_validation import (
    DIALECT_SCHEMA,
    TABLE_SCHEMA,
    raise_for_errors,
    validate_label_table,
    validate_table,
)

logger = logging.getLogger(__name__)

# Field extraction order matters: narrow fields go first so later passes
# cannot swallow their text.
FIELD_ORDER = (
    "proof_of_concept",
    "remediation",
    "references",
    "impact",
    "vulnerable_code",
    "explanation",
)

HEADER_FLAGS = re.IGNORECASE | re.MULTILINE


def normalize_label(label: Optional[str]) -> str:
    # Collapse internal whitespace so "Proof  of Concept" and "Proof of Concept" agree.
    if not label:
        return ""
    return " ".join(label.split())


@dataclass(frozen=True)
class Dialect:
    # One header convention plus the field labels used under it.
    name: str
    header: Pattern[str]
    fields: Mapping[str, Tuple[str, ...]]

    def labels_for(self, field_name: str) -> Tuple[str, ...]:
        return self.fields.get(field_name, ())


class DialectTable:
    def __init__(
        self,
        dialects: List[Dialect],
        metadata_labels: Tuple[str, ...] = (),
        trailer_headings: Tuple[str, ...] = (),
    ):
        # Dialects are kept in priority order; the first one that matches wins.
        self.dialects = tuple(dialects)
        self.metadata_labels = metadata_labels
        self.trailer_headings = trailer_headings

    @classmethod
    def from_file(cls, path: Path) -> "DialectTable":
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "DialectTable":
        # Validate the whole table first so every problem is reported at once.
        errors = validate_table(TABLE_SCHEMA, data)
        if not errors:
            errors.extend(validate_label_table(data["fields"], "fields"))
            errors.extend(_unknown_fields(data["fields"], "fields"))
            for index, entry in enumerate(data["dialects"]):
                where = f"dialects[{index}]"
                entry_errors = validate_table(DIALECT_SCHEMA, entry, where)
                if not entry_errors and "fields" in entry:
                    entry_errors.extend(validate_label_table(entry["fields"], f"{where}.fields"))
                    entry_errors.extend(_unknown_fields(entry["fields"], f"{where}.fields"))
                errors.extend(entry_errors)
        raise_for_errors(errors)

        shared = _label_table(data["fields"])
        dialects: List[Dialect] = []
        seen = set()
        for entry in data["dialects"]:
            name = str(entry["name"]).strip()
            if name in seen:
                raise_for_errors([f"duplicate dialect name '{name}'"])
            seen.add(name)
            # Per-dialect labels replace the shared list for that field only.
            fields = dict(shared)
            fields.update(_label_table(entry.get("fields") or {}))
            dialects.append(
                Dialect(
                    name=name,
                    header=re.compile(entry["header"], HEADER_FLAGS),
                    fields=fields,
                )
            )

        return cls(
            dialects,
            metadata_labels=_labels(data.get("metadata_labels") or []),
            trailer_headings=_labels(data.get("trailer_headings") or []),
        )

    @classmethod
    def from_default(cls) -> "DialectTable":
        # Without a table every report goes down the unstructured path.
        if DEFAULT_DIALECT_FILE.exists():
            return cls.from_file(DEFAULT_DIALECT_FILE)
        logger.warning("Dialect table not found at %s", DEFAULT_DIALECT_FILE)
        return cls([])

    def names(self) -> List[str]:
        return [dialect.name for dialect in self.dialects]

    def get(self, name: str) -> Dialect:
        for dialect in self.dialects:
            if dialect.name == name:
                return dialect
        raise KeyError(f"Dialect not found: {name}")

    def all_field_labels(self) -> Tuple[str, ...]:
        # Union of every field label across dialects, used as section boundaries.
        labels: List[str] = []
        for dialect in self.dialects:
            for field_name in FIELD_ORDER:
                for label in dialect.labels_for(field_name):
                    if label not in labels:
                        labels.append(label)
        return tuple(labels)


def _labels(values: List[str]) -> Tuple[str, ...]:
    labels = [normalize_label(value) for value in values]
    return tuple(label for label in labels if label)


def _label_table(table: Dict[str, List[str]]) -> Dict[str, Tuple[str, ...]]:
    return {name: _labels(labels) for name, labels in table.items()}


def _unknown_fields(table: Dict[str, Any], where: str) -> List[str]:
    return [f"{where}.{name} is not a known field" for name in table if name not in FIELD_ORDER]
