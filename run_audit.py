#!/usr/bin/env python3
"""
Accessibility study-guide toolkit: check markup against the guide rules,
lint every snippet in the guide corpus, and work with the corpus itself.

Usage (from repo root):
  pip install -e .
  python run_audit.py check page.html [--checklist forms aria] [--json]
  python run_audit.py check https://example.org --review   # needs ANTHROPIC_API_KEY
  python run_audit.py lint-guides data/guides --score
  python run_audit.py manifest data/guides
  python run_audit.py search data/guides "aria-label"
  python run_audit.py cards data/guides --topic aria
  python run_audit.py progress --correct
  python run_audit.py contrast "#777" white --large
  python run_audit.py rules --criterion 1.4.3

Exit status: 0 clean, 2 issues found (check), 1 usage/file errors.
"""
from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

# Ensure repo root on path
REPO_ROOT = Path(__file__).resolve().parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from audit_checks import CHECKLISTS, format_issue, run_checklists
from audit_checks.color_checklist_06 import contrast_ratio, passes_contrast
from audit_checks.keyboard_checklist_05 import audit_stylesheet
from audit_checks.reference import RULES, criterion, rules_for_criterion
from guides.config import DEFAULT_MODEL, DEFAULT_PROVIDER, GUIDES_DIR, MANIFEST_NAME
from guides.corpus import build_manifest, load_corpus, write_manifest
from guides.progress import ProgressStore
from guides.runner import lint_guides, write_lint_results
from guides.search import highlight, search
from scoring.score import f1_binary, score_binary

EXIT_OK, EXIT_ERROR, EXIT_ISSUES = 0, 1, 2


# ==========================================================
# check
# ==========================================================

def _is_url(target: str) -> bool:
    return target.startswith(("http://", "https://"))


def audit_target(target: str, checklists=None, *, fragment=None, verbose=False) -> tuple[str, str, list[dict]]:
    """Audit one file or URL; returns (source, markup, issues)."""
    if _is_url(target):
        from ingestion.pull_html import download_html

        path = download_html(target, verbose=verbose)
        source = target
    else:
        path = Path(target)
        source = str(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    markup = path.read_text(encoding="utf-8", errors="replace")
    if path.suffix.lower() in (".css", ".scss"):
        return source, markup, audit_stylesheet(markup)
    return source, markup, run_checklists(markup, checklists, fragment=fragment)


def cmd_check(args) -> int:
    fragment = True if args.fragment else None
    entries = []
    for target in args.targets:
        source, markup, issues = audit_target(target, args.checklist, fragment=fragment, verbose=not args.json)
        entries.append({"source": source, "markup": markup, "issues": issues})

    if args.review:
        from guides.llm import get_llm, review_findings

        llm = get_llm(args.provider, model=args.model)
        for entry in entries:
            if entry["issues"]:
                suggestions, resp = review_findings(llm, entry["markup"], entry["issues"])
                entry["suggestions"] = suggestions
                if not args.json:
                    print(f"Review by {resp.provider}/{resp.model} "
                          f"(tokens: in={resp.input_tokens} out={resp.output_tokens})")

    total = sum(len(e["issues"]) for e in entries)
    if args.json:
        payload = {
            "run": {"timestamp": datetime.now().strftime("%Y%m%d_%H%M%S"), "checklists": args.checklist or list(CHECKLISTS)},
            "files": [{k: v for k, v in e.items() if k != "markup"} for e in entries],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        for entry in entries:
            print(f"\n{entry['source']}: {len(entry['issues'])} issue(s)")
            for found in entry["issues"]:
                print(format_issue(found))
                print()
            for s in entry.get("suggestions", []):
                print(f"  Fix [{s.get('rule_id')}] {s.get('explanation', '')}")
                if s.get("fixed_markup"):
                    print(f"    {s['fixed_markup']}")
        print(f"\nTotal: {total} issue(s) in {len(entries)} file(s)")
    return EXIT_ISSUES if total else EXIT_OK


# ==========================================================
# corpus commands
# ==========================================================

def cmd_lint_guides(args) -> int:
    root = Path(args.root or GUIDES_DIR)
    print(f"Linting guide snippets under {root}")
    results = lint_guides(root, args.checklist, verbose=not args.quiet)
    json_path, txt_path = write_lint_results(results, args.output_dir)
    flagged = sum(1 for r in results if r.has_issues)
    print(f"\nSnippets: {len(results)}  Flagged: {flagged}")
    print(f"Results: {json_path}\n         {txt_path}")

    if args.score:
        metrics = score_binary(results)
        print()
        print("Agreement with guide labels (binary: good vs bad)")
        print(f"  Accuracy: {metrics.accuracy:.2%}")
        print(f"  F1 (has_issues): {f1_binary(metrics):.2%}")
        print(f"  TP={metrics.tp} TN={metrics.tn} FP={metrics.fp} FN={metrics.fn}  unlabeled={metrics.unlabeled}")
    return EXIT_OK


def cmd_manifest(args) -> int:
    root = Path(args.root or GUIDES_DIR)
    manifest = build_manifest(root)
    path = write_manifest(manifest, args.out or root / MANIFEST_NAME)
    for topic in manifest.values():
        print(f"  {topic.icon} {topic.name:<32} {topic.count:>3} guide(s)")
    print(f"Manifest written: {path}")
    return EXIT_OK


def cmd_search(args) -> int:
    results = search(load_corpus(args.root), args.query, limit=args.limit)
    if not results:
        print(f"No results for \"{args.query}\"")
        return EXIT_OK
    for r in results:
        print(f"{r.title}  ({r.file}, score {r.score})")
        print(f"  {highlight(r.snippet, args.query)}")
    return EXIT_OK


def cmd_cards(args) -> int:
    count = 0
    for guide in load_corpus(args.root):
        if args.topic and args.topic.lower() not in guide.topic.lower():
            continue
        for card in guide.flashcards:
            count += 1
            print(f"[{guide.relative_path} #{card.number}] {card.title}")
            print(f"  Q: {card.question}")
            print(f"  A: {card.answer}\n")
    print(f"{count} flashcard(s)")
    return EXIT_OK


def cmd_progress(args) -> int:
    store = ProgressStore(args.store)
    if args.reset_session:
        store.clear_session()
    if args.correct or args.incorrect:
        progress, session = store.record_answer(correct=args.correct)
    else:
        progress, session = store.get_progress(), store.get_session()
    print(f"Streak: {progress.streak} day(s)  Last studied: {progress.last_studied or 'never'}")
    print(f"Cards: {progress.total_cards} total, {progress.mastered_cards} mastered")
    if session:
        print(f"Session: {session.cards_studied} studied, {session.correct} correct, "
              f"{session.incorrect} incorrect ({session.accuracy:.0%})")
    return EXIT_OK


# ==========================================================
# reference commands
# ==========================================================

def cmd_contrast(args) -> int:
    ratio = contrast_ratio(args.fg, args.bg)
    size = "large" if args.large else "normal"
    print(f"Contrast {args.fg} on {args.bg}: {ratio:.2f}:1 ({size} text)")
    for level in ("AA", "AAA"):
        verdict = "pass" if passes_contrast(ratio, level=level, large=args.large) else "fail"
        print(f"  {level}: {verdict}")
    return EXIT_OK


def cmd_rules(args) -> int:
    if args.criterion:
        sc = criterion(args.criterion)
        print(f"{sc.id} {sc.name} (Level {sc.level}, {sc.principle})")
        rules = rules_for_criterion(sc.id)
    else:
        rules = list(RULES.values())
    for r in rules:
        if args.checklist and r.checklist != args.checklist:
            continue
        print(f"  {r.id:<20} {r.severity:<8} {r.checklist:<9} WCAG {', '.join(r.wcag):<14} {r.name}")
    return EXIT_OK


# ==========================================================
# CLI
# ==========================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Accessibility study-guide toolkit")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("check", help="Audit HTML/CSS files or URLs")
    p.add_argument("targets", nargs="+", help="HTML, JSX or CSS file(s), or http(s) URLs")
    p.add_argument("--checklist", nargs="+", choices=list(CHECKLISTS), default=None,
                   help="Checklists to run (default: all)")
    p.add_argument("--fragment", action="store_true", help="Skip page-level rules (title, lang, landmarks)")
    p.add_argument("--json", action="store_true", help="Print findings as JSON")
    p.add_argument("--review", action="store_true", help="Ask an LLM for a fix per finding")
    p.add_argument("--provider", choices=["anthropic", "openai"], default=DEFAULT_PROVIDER)
    p.add_argument("--model", type=str, default=None, help=f"Model name (default: {DEFAULT_MODEL})")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("lint-guides", help="Lint every code snippet in the guide corpus")
    p.add_argument("root", nargs="?", type=Path, default=None, help="Guide directory (default: data/guides)")
    p.add_argument("--checklist", nargs="+", choices=list(CHECKLISTS), default=None)
    p.add_argument("--output-dir", type=Path, default=None, help="Results directory (default: results/)")
    p.add_argument("--score", action="store_true", help="Score findings against the guides' good/bad labels")
    p.add_argument("--quiet", action="store_true", help="No per-guide progress")
    p.set_defaults(func=cmd_lint_guides)

    p = sub.add_parser("manifest", help="Build the topic manifest.json")
    p.add_argument("root", nargs="?", type=Path, default=None)
    p.add_argument("--out", type=Path, default=None, help="Output file (default: ROOT/manifest.json)")
    p.set_defaults(func=cmd_manifest)

    p = sub.add_parser("search", help="Full-text search over the guides")
    p.add_argument("root", type=Path)
    p.add_argument("query")
    p.add_argument("--limit", type=int, default=20)
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("cards", help="List flashcards extracted from the guides")
    p.add_argument("root", type=Path)
    p.add_argument("--topic", type=str, default=None, help="Only topics whose folder contains this text")
    p.set_defaults(func=cmd_cards)

    p = sub.add_parser("progress", help="Show or record study progress")
    p.add_argument("--store", type=Path, default=None, help="Progress file (default: ~/.a11y-guides/progress.json)")
    answer = p.add_mutually_exclusive_group()
    answer.add_argument("--correct", action="store_true", help="Record a correct flashcard answer")
    answer.add_argument("--incorrect", action="store_true", help="Record an incorrect flashcard answer")
    p.add_argument("--reset-session", action="store_true", help="Start a new study session")
    p.set_defaults(func=cmd_progress)

    p = sub.add_parser("contrast", help="WCAG contrast ratio of two colors")
    p.add_argument("fg")
    p.add_argument("bg")
    p.add_argument("--large", action="store_true", help="Large text (24px, or 18.66px bold)")
    p.set_defaults(func=cmd_contrast)

    p = sub.add_parser("rules", help="Print the rule catalogue")
    p.add_argument("--criterion", type=str, default=None, help="Only rules for this success criterion, e.g. 1.4.3")
    p.add_argument("--checklist", choices=list(CHECKLISTS), default=None)
    p.set_defaults(func=cmd_rules)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except KeyError as e:
        print(f"Error: {e.args[0] if e.args else e}", file=sys.stderr)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
