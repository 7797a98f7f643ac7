"""Flatten checker findings into a single CSV report.

Reads a results JSON written by ``run_audit.py lint-guides`` (``snippets``)
or ``run_audit.py check --json`` (``files``), normalizes every finding
into flat CSV rows, and writes ``report_<timestamp>.csv`` next to it.

Usage:
    python scripts/generate_report.py --results results/20250101_120000_lint_guides.json
    python scripts/generate_report.py --results results/run.json --report-dir ./reports
"""

from __future__ import annotations

import argparse
import csv
import json
import sys
from dataclasses import dataclass, fields
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from audit_checks.reference import WCAG_CRITERIA  # noqa: E402


# ── CSV schema ──────────────────────────────────────────────────────────────

@dataclass
class ReportRow:
    """One row in the CSV report."""

    ID: int = 0
    element_name: str = ""
    source: str = ""
    line: str = ""
    rule_id: str = ""
    issue_title: str = ""
    description: str = ""
    wcag_sc: str = ""
    level: str = ""
    severity: str = ""
    checklist: str = ""


CSV_COLUMNS = [f.name for f in fields(ReportRow)]


# ── Helpers ─────────────────────────────────────────────────────────────────

def element_name(location: dict | None) -> str:
    """``<img id="logo">`` / ``<div class="card">`` / CSS selector / empty."""
    if not location:
        return ""
    if location.get("selector"):
        return location["selector"]
    tag = location.get("tag") or ""
    if location.get("id"):
        return f"<{tag} id=\"{location['id']}\">"
    classes = location.get("class")
    if classes:
        class_str = " ".join(classes) if isinstance(classes, list) else str(classes)
        return f"<{tag} class=\"{class_str}\">"
    return f"<{tag}>" if tag else ""


def strictest_level(wcag: list[str]) -> str:
    """Lowest conformance level among the criteria (A before AA before AAA)."""
    levels = [WCAG_CRITERIA[sc].level for sc in wcag if sc in WCAG_CRITERIA]
    return min(levels, key=len) if levels else ""


def finding_row(finding: dict, source: str, base_line: int | None = None) -> ReportRow:
    location = finding.get("location") or {}
    line = location.get("line")
    if base_line is not None:
        # snippet findings point at the fence; CSS rule lines are relative to the block
        line = base_line + line if line else base_line
    wcag = finding.get("wcag") or []
    return ReportRow(
        element_name=element_name(location),
        source=source,
        line="" if line is None else str(line),
        rule_id=finding.get("rule_id", ""),
        issue_title=finding.get("rule_name", ""),
        description=finding.get("description", ""),
        wcag_sc=", ".join(wcag),
        level=strictest_level(wcag),
        severity=finding.get("severity", ""),
        checklist=finding.get("checklist", ""),
    )


# ── Normalizer ──────────────────────────────────────────────────────────────

def normalize_findings(payload: dict) -> list[ReportRow]:
    """Convert a results payload to numbered ReportRow objects."""
    rows: list[ReportRow] = []
    for snippet in payload.get("snippets", []):
        for finding in snippet.get("issues", []):
            rows.append(finding_row(finding, snippet.get("file", ""), snippet.get("line")))
    for entry in payload.get("files", []):
        for finding in entry.get("issues", []):
            rows.append(finding_row(finding, entry.get("source", "")))
    for i, row in enumerate(rows, start=1):
        row.ID = i
    return rows


def write_csv_report(rows: list[ReportRow], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow({col: getattr(row, col) for col in CSV_COLUMNS})
    return path


def generate_report(results_path: Path, report_dir: Path | None = None) -> Path:
    """Generate a CSV report from one results JSON; returns the CSV path."""
    results_path = Path(results_path)
    if not results_path.exists():
        raise FileNotFoundError(f"Results file not found: {results_path}")
    with open(results_path, encoding="utf-8") as f:
        payload = json.load(f)

    rows = normalize_findings(payload)
    stamp = (payload.get("run") or {}).get("timestamp") or results_path.stem
    report_dir = Path(report_dir or results_path.parent)
    report_path = write_csv_report(rows, report_dir / f"report_{stamp}.csv")

    print(f"Report generated: {report_path}")
    print(f"  Findings: {len(rows)}")
    return report_path


# ── CLI ─────────────────────────────────────────────────────────────────────

def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a CSV report from checker results.")
    parser.add_argument("--results", type=Path, required=True,
                        help="Results JSON from run_audit.py lint-guides or check --json")
    parser.add_argument("--report-dir", type=Path, default=None,
                        help="Directory to write the CSV report (default: next to the results file)")
    args = parser.parse_args()
    try:
        generate_report(args.results, args.report_dir)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
