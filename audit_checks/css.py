"""Minimal CSS reading for the focus and color checklists.

Only what the rules need: rule blocks (selector + declarations) and inline
``style`` declarations. Nested at-rules are flattened; their innermost rule
blocks are returned.
"""
from __future__ import annotations

import re
from dataclasses import dataclass


_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_RULE_RE = re.compile(r"([^{}]+)\{([^{}]*)\}")


@dataclass
class CssRule:
    selector: str
    declarations: dict[str, str]
    line: int


def parse_declarations(text: str) -> dict[str, str]:
    """``"color: red; outline: none !important"`` -> ``{"color": "red", "outline": "none"}``."""
    out = {}
    for part in (text or "").split(";"):
        if ":" not in part:
            continue
        prop, value = part.split(":", 1)
        prop = prop.strip().lower()
        value = re.sub(r"\s*!important\s*$", "", value.strip(), flags=re.IGNORECASE)
        if prop:
            out[prop] = value.strip()
    return out


def parse_rules(css: str) -> list[CssRule]:
    css = _COMMENT_RE.sub(lambda m: "\n" * m.group(0).count("\n"), css or "")
    rules = []
    for match in _RULE_RE.finditer(css):
        selector = " ".join(match.group(1).split())
        if selector.startswith("@"):
            continue
        raw = match.group(1)
        start = match.start(1) + len(raw) - len(raw.lstrip())
        line = css.count("\n", 0, start) + 1
        rules.append(CssRule(selector, parse_declarations(match.group(2)), line))
    return rules


def stylesheet_text(soup) -> str:
    """Concatenate every <style> element in the document."""
    return "\n".join(style.get_text() for style in soup.find_all("style"))


def css_location(rule: CssRule) -> dict:
    return {"selector": rule.selector, "line": rule.line, "css_path": None}


# ==========================================================
# FOCUS INDICATORS
# ==========================================================

_NO_OUTLINE = {"none", "0", "0px", "0 none", "none 0"}


def removes_outline(decls: dict[str, str]) -> bool:
    outline = decls.get("outline", "").lower()
    if outline in _NO_OUTLINE:
        return True
    if decls.get("outline-style", "").lower() == "none":
        return True
    return decls.get("outline-width", "").lower() in ("0", "0px")


def provides_indicator(decls: dict[str, str]) -> bool:
    """True when a declaration block draws some visible focus indicator."""
    for prop, value in decls.items():
        value = value.lower()
        if prop == "outline" and value not in _NO_OUTLINE:
            return True
        if prop in ("outline-style", "outline-width", "outline-color") and value not in ("none", "0", "0px"):
            return True
        if prop == "box-shadow" and value != "none":
            return True
        if prop.startswith("border") and value not in ("none", "0", "0px"):
            return True
        if prop.startswith("background") or prop == "text-decoration":
            return True
    return False
