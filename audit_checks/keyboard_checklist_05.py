from .accessible_name import explicit_role
from .common import (
    NATIVE_INTERACTIVE,
    attr_text,
    has_attr_ci,
    is_focusable,
    is_natively_focusable,
    issue,
    load_soup,
    parse_tabindex,
)
from .color_checklist_06 import audit_css_color
from .css import css_location, parse_declarations, parse_rules, provides_indicator, removes_outline, stylesheet_text
from .reference import ARIA_ROLES


KEY_HANDLERS = ("onkeydown", "onkeyup", "onkeypress")


# ==========================================================
# FOCUS VISIBILITY (CSS)
# ==========================================================

def _focus_visible_replacement(rules) -> bool:
    return any(
        ":focus-visible" in rule.selector
        and not removes_outline(rule.declarations)
        and provides_indicator(rule.declarations)
        for rule in rules
    )


def audit_focus_css(css: str, inline_styles=()):
    """FOCUS_002 over a stylesheet plus (element, declarations) pairs from style attributes."""
    results = []
    rules = parse_rules(css)
    replaced = _focus_visible_replacement(rules)

    for rule in rules:
        decls = rule.declarations
        if not removes_outline(decls) or replaced:
            continue
        # the same rule draws another indicator (box-shadow, border...)
        if provides_indicator({k: v for k, v in decls.items() if not k.startswith("outline")}):
            continue
        results.append(issue(
            "FOCUS_002",
            None,
            f"'{rule.selector}' removes the focus outline and no :focus-visible rule restores an indicator.",
            location=css_location(rule),
        ))

    for el, decls in inline_styles:
        if removes_outline(decls) and not replaced:
            results.append(issue(
                "FOCUS_002",
                el,
                "Inline style removes the focus outline and no :focus-visible rule restores an indicator."
            ))
    return results


def audit_stylesheet(css: str):
    """Rules that apply to a standalone CSS file or snippet."""
    return audit_focus_css(css) + audit_css_color(css)


# ==========================================================
# MAIN AUDIT FUNCTION
# ==========================================================

def audit_keyboard(source):

    soup = load_soup(source)
    results = []

    for el in soup.find_all(True):
        native = el.name in NATIVE_INTERACTIVE
        clickable = has_attr_ci(el, "onclick")

        # ==========================================================
        # CLICK HANDLERS
        # ==========================================================

        if clickable and not native:
            if not is_focusable(el):
                results.append(issue(
                    "KEY_001",
                    el,
                    f"<{el.name}> has a click handler but cannot receive keyboard focus; add tabindex=\"0\" or use a <button>."
                ))
            if not any(has_attr_ci(el, h) for h in KEY_HANDLERS):
                results.append(issue(
                    "KEY_002",
                    el,
                    f"<{el.name}> handles clicks but not Enter/Space key presses."
                ))

        # ==========================================================
        # WIDGET ROLES
        # ==========================================================

        role = explicit_role(el)
        widget = ARIA_ROLES.get(role or "")
        if widget is not None and widget.widget and role not in ("dialog", "alertdialog", "progressbar", "option"):
            if not is_focusable(el) and not el.has_attr("disabled") and attr_text(el, "aria-disabled") != "true":
                results.append(issue(
                    "KEY_003",
                    el,
                    f"role=\"{role}\" on <{el.name}> is not focusable; add tabindex=\"0\"."
                ))

        # ==========================================================
        # LINKS AS BUTTONS
        # ==========================================================

        if el.name == "a":
            href = (el.get("href") or "").strip()
            if href.lower().startswith("javascript:") or (href == "#" and clickable):
                results.append(issue(
                    "KEY_004",
                    el,
                    f"Link with href=\"{href}\" performs an action; use a <button> for actions."
                ))

        # ==========================================================
        # NATIVE CONTROLS REMOVED FROM TAB ORDER
        # ==========================================================

        tabindex = parse_tabindex(el)
        if tabindex is not None and tabindex < 0 and is_natively_focusable(el):
            if attr_text(el, "aria-hidden").lower() != "true":
                results.append(issue(
                    "FOCUS_003",
                    el,
                    f"<{el.name}> is a native control but tabindex=\"{tabindex}\" removes it from the tab order."
                ))

    # ==========================================================
    # FOCUS VISIBLE
    # ==========================================================

    inline = [
        (el, parse_declarations(attr_text(el, "style")))
        for el in soup.find_all(attrs={"style": True})
    ]
    results.extend(audit_focus_css(stylesheet_text(soup), inline))

    return results
