"""
audit_checks: programmatic accessibility checklists.

Usage
-----
    from audit_checks import run_checklists

    issues = run_checklists(Path("page.html"))
    issues = run_checklists('<img src="x.png">', names=["nontext"])
"""
from __future__ import annotations

from .aria_checklist_04 import audit_aria
from .color_checklist_06 import audit_color, contrast_ratio, parse_color, passes_contrast
from .common import dedupe, format_issue, prepare
from .forms_checklist_02 import audit_forms
from .keyboard_checklist_05 import audit_keyboard, audit_stylesheet
from .nontext_checklist_03 import audit_nontext
from .semantic_checklist_01 import audit_semantics


CHECKLISTS = {
    "semantic": audit_semantics,
    "forms": audit_forms,
    "nontext": audit_nontext,
    "aria": audit_aria,
    "keyboard": audit_keyboard,
    "color": audit_color,
}


def run_checklists(source, names=None, *, fragment=None) -> list[dict]:
    """Run the selected checklists (all by default) over one parse of *source*."""
    names = list(names or CHECKLISTS)
    unknown = [n for n in names if n not in CHECKLISTS]
    if unknown:
        raise KeyError(f"Unknown checklist(s): {', '.join(unknown)}. Available: {', '.join(CHECKLISTS)}")

    soup, fragment = prepare(source, fragment)
    results = []
    for name in names:
        if name == "semantic":
            results.extend(audit_semantics(soup, fragment=fragment))
        else:
            results.extend(CHECKLISTS[name](soup))
    return dedupe(results)


__all__ = [
    "CHECKLISTS",
    "run_checklists",
    "audit_semantics",
    "audit_forms",
    "audit_nontext",
    "audit_aria",
    "audit_keyboard",
    "audit_color",
    "audit_stylesheet",
    "contrast_ratio",
    "parse_color",
    "passes_contrast",
    "format_issue",
]
