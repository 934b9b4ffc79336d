"""Schema validation module for the YAML dialect tables."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from .errors import DialectConfigError


_TYPE_MAP = {
    # Map schema type names onto Python types.
    "string": str,
    "integer": int,
    "object": dict,
    "array": list,
}

# Top-level layout of dialects.yml.
TABLE_SCHEMA: Dict[str, Any] = {
    "properties": {
        "fields": {"type": "object"},
        "metadata_labels": {"type": "array", "items": "string"},
        "trailer_headings": {"type": "array", "items": "string"},
        "dialects": {"type": "array", "items": "object", "min_items": 1},
    },
    "required": ["fields", "dialects"],
}

# One entry of the ordered dialect list.
DIALECT_SCHEMA: Dict[str, Any] = {
    "properties": {
        "name": {"type": "string", "min_length": 1},
        "header": {"type": "string", "min_length": 1, "regex": True, "groups": ["title"]},
        "fields": {"type": "object"},
    },
    "required": ["name", "header"],
}


def validate_table(schema: Dict[str, Any], data: Any, where: str = "table") -> List[str]:
    # Collect every problem instead of stopping at the first one.
    if not isinstance(data, dict):
        return [f"{where} must be a mapping"]

    props = schema.get("properties", {})
    errors: List[str] = []

    for key in schema.get("required", []):
        if key not in data:
            errors.append(f"{where}: missing required key '{key}'")

    for key, value in data.items():
        spec = props.get(key)
        if not spec:
            continue
        expected = _TYPE_MAP.get(spec.get("type", ""))
        if expected is not None and not isinstance(value, expected):
            errors.append(f"{where}.{key} must be {spec['type']}")
            continue
        if isinstance(value, str):
            errors.extend(_check_string(value, spec, f"{where}.{key}"))
        if isinstance(value, list):
            errors.extend(_check_items(value, spec, f"{where}.{key}"))

    return errors


def _check_string(value: str, spec: Dict[str, Any], where: str) -> List[str]:
    errors: List[str] = []
    if "min_length" in spec and len(value.strip()) < spec["min_length"]:
        errors.append(f"{where} must not be empty")
    if spec.get("regex"):
        # Header patterns are compiled up front so a bad table fails on load.
        try:
            compiled = re.compile(value)
        except re.error as exc:
            errors.append(f"{where} is not a valid regular expression: {exc}")
            return errors
        for group in spec.get("groups", []):
            if group not in compiled.groupindex:
                errors.append(f"{where} must define a '{group}' group")
    return errors


def _check_items(value: List[Any], spec: Dict[str, Any], where: str) -> List[str]:
    errors: List[str] = []
    if "min_items" in spec and len(value) < spec["min_items"]:
        errors.append(f"{where} must have at least {spec['min_items']} item(s)")
    item_type = _TYPE_MAP.get(spec.get("items", ""))
    if item_type is not None:
        for index, item in enumerate(value):
            if not isinstance(item, item_type):
                errors.append(f"{where}[{index}] must be {spec['items']}")
    return errors


def validate_label_table(table: Any, where: str) -> List[str]:
    # A label table maps a field name to an ordered list of label phrases.
    if not isinstance(table, dict):
        return [f"{where} must be a mapping"]
    errors: List[str] = []
    for name, labels in table.items():
        if not isinstance(labels, list) or not labels:
            errors.append(f"{where}.{name} must be a non-empty list")
            continue
        for index, label in enumerate(labels):
            if not isinstance(label, str) or not label.strip():
                errors.append(f"{where}.{name}[{index}] must be a non-empty string")
    return errors


def raise_for_errors(errors: Optional[List[str]]) -> None:
    if errors:
        # Report all accumulated problems as a single exception.
        raise DialectConfigError("; ".join(errors))
