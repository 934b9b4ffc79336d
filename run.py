"""Command-line entry point that parses an audit report file and renders it."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from auditlens.core.errors import UpstreamAuditError
from auditlens.core.logging import setup_logging
from auditlens.services.engine import AuditReportParser
from auditlens.services.envelope import audit_text_from_envelope
from auditlens.services.reporting import SUPPORTED_FORMATS, generate_report, render_report


def read_audit(source: str) -> str:
    # "-" reads stdin; a JSON file is treated as an upstream response envelope.
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    if source.endswith(".json"):
        return audit_text_from_envelope(json.loads(raw))
    return raw


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Interpret an AI-generated smart-contract audit report.")
    parser.add_argument("source", help="report file, upstream JSON envelope, or - for stdin")
    parser.add_argument("--format", default="txt", choices=sorted(SUPPORTED_FORMATS))
    parser.add_argument("--output", type=Path, help="write report.<format> into this directory")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    try:
        text = read_audit(args.source)
    except UpstreamAuditError as exc:
        print(f"Audit failed: {exc}", file=sys.stderr)
        return 2

    report = AuditReportParser().parse(text)
    if args.output:
        print(generate_report(report, args.format, args.output))
    else:
        print(render_report(report, args.format), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
