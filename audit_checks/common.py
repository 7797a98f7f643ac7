"""Shared helpers for the programmatic checklists: parsing, locations, issue records."""
from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup

from .reference import RULES


_DOCUMENT_RE = re.compile(r"<(?:!doctype|html|body)[\s>]", re.IGNORECASE)

SKIP_INPUT_TYPES = {"hidden", "submit", "reset", "button", "image"}

NATIVE_INTERACTIVE = {"a", "button", "input", "select", "textarea", "summary", "option"}


# ==========================================================
# PARSING
# ==========================================================

def read_markup(source) -> str:
    """Return markup text for a Path (read from disk) or a markup string."""
    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"File not found: {source}")
        return source.read_text(encoding="utf-8", errors="replace")
    return source


def load_soup(source) -> BeautifulSoup:
    """Parse *source* with lxml.

    *source* may be a ``Path``, a markup string, or an already parsed
    ``BeautifulSoup`` (returned unchanged so several checklists can share one
    parse).
    """
    if isinstance(source, BeautifulSoup):
        return source
    return BeautifulSoup(read_markup(source), "lxml")


def is_full_document(markup: str) -> bool:
    """True when the markup is a whole page rather than a snippet."""
    return bool(_DOCUMENT_RE.search(markup or ""))


def clean(text):
    return re.sub(r"\s+", " ", text.strip()) if text else ""


def attr_text(el, name: str) -> str:
    """Attribute value as a string (bs4 returns lists for multi-valued attrs)."""
    value = el.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def attr_lower(el, name: str):
    """Attribute lookup that ignores case (JSX snippets use onClick, tabIndex...)."""
    return {k.lower(): v for k, v in el.attrs.items()}.get(name.lower())


def parse_tabindex(el) -> int | None:
    value = attr_lower(el, "tabindex")
    if value is None:
        return None
    value = str(value).strip().strip("{}")
    try:
        return int(value)
    except ValueError:
        return None


def is_natively_focusable(el) -> bool:
    if el.has_attr("disabled"):
        return False
    if el.name == "a" or el.name == "area":
        return el.has_attr("href")
    if el.name == "input":
        return (el.get("type") or "text").lower() != "hidden"
    if el.name in ("audio", "video"):
        return el.has_attr("controls")
    if el.name in ("button", "select", "textarea", "summary", "iframe"):
        return True
    if el.has_attr("contenteditable"):
        return attr_text(el, "contenteditable").lower() in ("", "true", "plaintext-only")
    return False


def is_focusable(el) -> bool:
    """Focusable by keyboard or script (any tabindex counts)."""
    return is_natively_focusable(el) or parse_tabindex(el) is not None


def in_tab_order(el) -> bool:
    tabindex = parse_tabindex(el)
    if tabindex is not None:
        return tabindex >= 0 and not el.has_attr("disabled")
    return is_natively_focusable(el)


def has_attr_ci(el, name: str) -> bool:
    return any(k.lower() == name.lower() for k in el.attrs)


# ==========================================================
# LOCATIONS AND ISSUES
# ==========================================================

def css_path(el):
    """
    Generate a CSS-like DOM path for an element.
    """
    path = []
    while el and el.name and el.name != "[document]":
        sibling_index = 1
        sibling = el
        while sibling.previous_sibling:
            sibling = sibling.previous_sibling
            if getattr(sibling, "name", None) == el.name:
                sibling_index += 1

        if sibling_index > 1:
            path.append(f"{el.name}:nth-of-type({sibling_index})")
        else:
            path.append(el.name)

        el = el.parent

    return " > ".join(reversed(path))


def element_location(element):
    """
    Build structured location metadata for an element.
    """
    if element is None:
        return None

    attrs = dict(element.attrs)

    return {
        "tag": element.name,
        "id": attrs.get("id"),
        "class": attrs.get("class"),
        "css_path": css_path(element),
        "attributes": attrs,
        "text_preview": element.get_text(strip=True)[:80],
        "line": getattr(element, "sourceline", None),
    }


def issue(rule_id, element, description, *, rule_name=None, location=None):
    """
    Create a standardized issue object.

    Severity and WCAG criteria come from the rule catalogue; an unknown
    rule id raises KeyError. ``location`` overrides the element location
    (used for stylesheet findings, which have no element).
    """
    meta = RULES[rule_id]
    return {
        "rule_id": rule_id,
        "rule_name": rule_name or meta.name,
        "checklist": meta.checklist,
        "severity": meta.severity,
        "wcag": list(meta.wcag),
        "location": location if location is not None else element_location(element),
        "description": description,
    }


def dedupe(issues: list[dict]) -> list[dict]:
    seen = set()
    out = []
    for found in issues:
        loc = found.get("location") or {}
        key = (found["rule_id"], loc.get("css_path") or loc.get("selector"), found["description"])
        if key in seen:
            continue
        seen.add(key)
        out.append(found)
    return out


def format_issue(r: dict) -> str:
    """Render an issue the way the checklist CLIs print it."""
    lines = [f"[{r['rule_id']}] {r['rule_name']} ({r['severity']}, WCAG {', '.join(r['wcag'])})"]
    location = r.get("location")
    if location:
        if location.get("css_path"):
            lines.append(f"  Location: {location['css_path']}")
        if location.get("selector"):
            lines.append(f"  Selector: {location['selector']}")
        if location.get("id"):
            lines.append(f"  ID: {location['id']}")
        if location.get("line"):
            lines.append(f"  Line: {location['line']}")
        if location.get("text_preview"):
            lines.append(f"  Text Preview: \"{location['text_preview']}\"")
    lines.append(f"  Description: {r['description']}")
    return "\n".join(lines)


def prepare(source, fragment=None):
    """Parse *source* and decide whether page-level rules apply.

    Returns ``(soup, fragment)``. With ``fragment=None`` a markup string or
    file is inspected for ``<html>``/``<body>``; an already parsed soup is
    treated as a full document.
    """
    if isinstance(source, BeautifulSoup):
        return source, bool(fragment)
    markup = read_markup(source)
    if fragment is None:
        fragment = not is_full_document(markup)
    return BeautifulSoup(markup, "lxml"), fragment
