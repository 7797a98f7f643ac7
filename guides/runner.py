"""
Lint every code snippet in the guide corpus with the rule checker.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from audit_checks import run_checklists
from audit_checks.keyboard_checklist_05 import audit_stylesheet

from .config import MARKUP_LANGUAGES, RESULTS_DIR, STYLESHEET_LANGUAGES
from .corpus import Guide, load_corpus


@dataclass
class SnippetResult:
    """Findings for one fenced code block."""
    file: str
    topic: str
    line: int  # line of the opening fence in the guide file
    language: str
    heading: str | None
    verdict: str | None  # label from the guide text: "bad" | "good" | None
    code: str
    issues: list[dict] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


def audit_snippet(language: str, code: str, checklists=None) -> list[dict] | None:
    """Run the matching checks for one snippet; None when the language is not audited."""
    language = (language or "").lower()
    if language in MARKUP_LANGUAGES:
        return run_checklists(code, checklists, fragment=True)
    if language in STYLESHEET_LANGUAGES:
        return audit_stylesheet(code)
    return None


def lint_guide(guide: Guide, checklists=None) -> list[SnippetResult]:
    results = []
    for block in guide.code_blocks:
        issues = audit_snippet(block.language, block.code, checklists)
        if issues is None:
            continue
        results.append(SnippetResult(
            file=guide.relative_path,
            topic=guide.topic,
            line=block.line + guide.body_offset,
            language=block.language,
            heading=block.heading,
            verdict=block.verdict,
            code=block.code,
            issues=issues,
        ))
    return results


def lint_guides(root: Path | None = None, checklists=None, *, verbose: bool = True) -> list[SnippetResult]:
    """Audit HTML-like and CSS snippets across the corpus under *root*."""
    corpus = load_corpus(root)
    results: list[SnippetResult] = []
    for i, guide in enumerate(corpus, 1):
        found = lint_guide(guide, checklists)
        results.extend(found)
        if verbose:
            flagged = sum(1 for r in found if r.has_issues)
            print(f"  [{i}/{len(corpus)}] {guide.relative_path}: {len(found)} snippets, {flagged} flagged")
    return results


def write_lint_results(
    results: list[SnippetResult],
    output_dir: Path | None = None,
    *,
    label: str = "guides",
) -> tuple[Path, Path]:
    """
    Write snippet findings to a results folder (JSON + TXT).
    Returns (json_path, txt_path).
    """
    output_dir = Path(output_dir or RESULTS_DIR)
    output_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    safe = re.sub(r"[^\w\-]", "_", f"lint_{label}")[:80]
    base_name = f"{stamp}_{safe}"

    rows = []
    for r in results:
        rows.append({
            "file": r.file,
            "topic": r.topic,
            "line": r.line,
            "language": r.language,
            "heading": r.heading,
            "verdict": r.verdict,
            "has_issues": r.has_issues,
            "code": r.code,
            "issues": r.issues,
        })

    flagged = sum(1 for r in rows if r["has_issues"])
    total_issues = sum(len(r["issues"]) for r in rows)
    by_rule: dict[str, int] = {}
    for r in rows:
        for i in r["issues"]:
            by_rule[i["rule_id"]] = by_rule.get(i["rule_id"], 0) + 1

    payload = {
        "run": {"label": label, "timestamp": stamp},
        "summary": {
            "total_snippets": len(rows),
            "flagged_snippets": flagged,
            "total_issues": total_issues,
            "issues_by_rule": dict(sorted(by_rule.items())),
        },
        "snippets": rows,
    }

    json_path = output_dir / f"{base_name}.json"
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    txt_path = output_dir / f"{base_name}.txt"
    with open(txt_path, "w", encoding="utf-8") as f:
        f.write(f"Snippets: {len(rows)}  Flagged: {flagged}  Issues: {total_issues}\n\n")
        f.write("-" * 80 + "\n")
        for r in rows:
            if not r["has_issues"]:
                continue
            f.write(f"File: {r['file']}:{r['line']}  language={r['language']}  label={r['verdict']}\n")
            if r["heading"]:
                f.write(f"  Heading: {r['heading']}\n")
            for i in r["issues"]:
                f.write(f"  [{i['rule_id']}] {i['description']}\n")
            f.write("\n")

    return json_path, txt_path
