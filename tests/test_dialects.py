"""Dialect table tests: the bundled YAML table and table validation on load."""

from pathlib import Path

import pytest
import yaml

from auditlens.core.dialects import DialectTable
from auditlens.core.errors import DialectConfigError

HEADER = r"^##[ \t]*(?P<title>[^\n]+)$"


def _table(**overrides):
    data = {
        "fields": {"impact": ["Impact"], "remediation": ["Fix"]},
        "dialects": [{"name": "simple", "header": HEADER}],
    }
    data.update(overrides)
    return data


def test_default_table_order(table: DialectTable) -> None:
    assert table.names() == ["markdown-headers", "numbered-headers", "bold-labels", "bare-labels"]
    assert "Severity" in table.metadata_labels
    assert "Conclusion" in table.trailer_headings


def test_default_labels(table: DialectTable) -> None:
    labels = table.all_field_labels()
    assert labels.index("Proof of Concept") < labels.index("Impact")
    assert "Risk" not in labels
    assert table.get("bold-labels").labels_for("remediation")[0] == "Recommended Remediation"


def test_unknown_dialect(table: DialectTable) -> None:
    with pytest.raises(KeyError):
        table.get("nope")


def test_from_mapping() -> None:
    table = DialectTable.from_mapping(_table())
    dialect = table.get("simple")
    assert dialect.labels_for("impact") == ("Impact",)
    assert dialect.labels_for("references") == ()
    assert dialect.header.search("intro\n## Title here").group("title") == "Title here"


def test_dialect_fields_override_shared_labels() -> None:
    table = DialectTable.from_mapping(
        _table(dialects=[{"name": "simple", "header": HEADER, "fields": {"impact": ["Effect"]}}])
    )
    dialect = table.get("simple")
    assert dialect.labels_for("impact") == ("Effect",)
    assert dialect.labels_for("remediation") == ("Fix",)


def test_labels_are_whitespace_normalized() -> None:
    table = DialectTable.from_mapping(_table(fields={"proof_of_concept": ["  Proof   of Concept "]}))
    assert table.get("simple").labels_for("proof_of_concept") == ("Proof of Concept",)


def test_missing_dialects() -> None:
    data = _table()
    del data["dialects"]
    with pytest.raises(DialectConfigError, match="missing required key 'dialects'"):
        DialectTable.from_mapping(data)


def test_header_needs_title_group() -> None:
    with pytest.raises(DialectConfigError, match="must define a 'title' group"):
        DialectTable.from_mapping(_table(dialects=[{"name": "simple", "header": r"^## .+$"}]))


def test_invalid_regex() -> None:
    with pytest.raises(DialectConfigError, match="not a valid regular expression"):
        DialectTable.from_mapping(_table(dialects=[{"name": "simple", "header": "(?P<title>"}]))


def test_unknown_field() -> None:
    with pytest.raises(DialectConfigError, match="fields.severity is not a known field"):
        DialectTable.from_mapping(_table(fields={"severity": ["Severity"]}))


def test_duplicate_names() -> None:
    entry = {"name": "simple", "header": HEADER}
    with pytest.raises(DialectConfigError, match="duplicate dialect name 'simple'"):
        DialectTable.from_mapping(_table(dialects=[entry, dict(entry)]))


def test_all_errors_reported_together() -> None:
    bad = [{"name": "", "header": r"^## .+$"}, {"header": HEADER}]
    try:
        DialectTable.from_mapping(_table(dialects=bad))
    except DialectConfigError as exc:
        message = str(exc)
        assert "dialects[0].name must not be empty" in message
        assert "dialects[0].header must define a 'title' group" in message
        assert "dialects[1]: missing required key 'name'" in message
    else:
        raise AssertionError("DialectConfigError not raised")


def test_config_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        DialectTable.from_mapping({"fields": {}, "dialects": []})


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "dialects.yml"
    path.write_text(yaml.safe_dump(_table()), encoding="utf-8")
    assert DialectTable.from_file(path).names() == ["simple"]


def test_empty_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "dialects.yml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(DialectConfigError):
        DialectTable.from_file(path)
