import re

from .accessible_name import accessible_name, implicit_role
from .common import attr_text, in_tab_order, issue, load_soup
from .reference import ARIA_ATTRIBUTES, ARIA_ROLES


# ==========================================================
# CONSTANTS
# ==========================================================

_INT_RE = re.compile(r"^-?\d+$")
_NUMBER_RE = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?$")

# JSX expressions ({value}) and template placeholders are not checked
_DYNAMIC_RE = re.compile(r"^\s*(\{.*\}|\{\{.*\}\}|\$\{.*\})\s*$")


def _valid_value(attr, value: str) -> bool:
    value = value.strip()
    kind = attr.value_type
    if kind == "bool":
        return value in ("true", "false", "undefined")
    if kind == "tristate":
        return value in ("true", "false", "mixed", "undefined")
    if kind == "token":
        return value in attr.values
    if kind == "tokens":
        return bool(value) and all(token in attr.values for token in value.split())
    if kind == "int":
        return bool(_INT_RE.match(value))
    if kind == "number":
        return bool(_NUMBER_RE.match(value))
    if kind in ("idref", "idrefs"):
        return bool(value)
    return True


# ==========================================================
# MAIN AUDIT FUNCTION
# ==========================================================

def audit_aria(source):

    soup = load_soup(source)
    results = []

    for el in soup.find_all(True):

        # ==========================================================
        # ROLES
        # ==========================================================

        role = None
        if el.has_attr("role"):
            tokens = attr_text(el, "role").lower().split()
            for token in tokens:
                known = ARIA_ROLES.get(token)
                if known is None:
                    if _DYNAMIC_RE.match(token):
                        continue
                    results.append(issue(
                        "ARIA_001",
                        el,
                        f"role=\"{token}\" is not a WAI-ARIA role."
                    ))
                elif known.abstract:
                    results.append(issue(
                        "ARIA_002",
                        el,
                        f"role=\"{token}\" is an abstract role and must not be used in content."
                    ))
                elif role is None:
                    role = token

            if role and role == implicit_role(el):
                results.append(issue(
                    "ARIA_008",
                    el,
                    f"<{el.name}> already has the implicit role '{role}'; role=\"{role}\" is redundant."
                ))

        # ==========================================================
        # STATES AND PROPERTIES
        # ==========================================================

        for attr_name in list(el.attrs):
            if not attr_name.startswith("aria-"):
                continue
            value = attr_text(el, attr_name)
            spec = ARIA_ATTRIBUTES.get(attr_name)
            if spec is None:
                results.append(issue(
                    "ARIA_003",
                    el,
                    f"'{attr_name}' is not a WAI-ARIA state or property."
                ))
                continue
            if _DYNAMIC_RE.match(value):
                continue
            if not _valid_value(spec, value):
                results.append(issue(
                    "ARIA_004",
                    el,
                    f"{attr_name}=\"{value}\" is not a valid {spec.value_type} value."
                ))
                continue
            # form controls get FORM_INSTR_001 for aria-describedby instead
            covered = attr_name == "aria-describedby" and el.name in ("input", "select", "textarea")
            if spec.value_type in ("idref", "idrefs") and not covered:
                for ref_id in value.split():
                    if not soup.find(id=ref_id):
                        results.append(issue(
                            "ARIA_005",
                            el,
                            f"{attr_name} references missing ID '{ref_id}'."
                        ))

        # ==========================================================
        # REQUIRED STATES
        # ==========================================================

        if role:
            for required in ARIA_ROLES[role].required:
                if el.has_attr(required):
                    continue
                # native elements supply their own state
                if role in ("checkbox", "radio", "switch") and el.name == "input":
                    continue
                if role == "heading" and re.match(r"^h[1-6]$", el.name):
                    continue
                if role in ("slider", "meter") and el.name in ("input", "meter"):
                    continue
                results.append(issue(
                    "ARIA_006",
                    el,
                    f"role=\"{role}\" requires {required}."
                ))

        # ==========================================================
        # HIDDEN FOCUSABLE CONTENT
        # ==========================================================

        if attr_text(el, "aria-hidden").lower() == "true":
            focusable = [el] if in_tab_order(el) else []
            focusable += [d for d in el.find_all(True) if in_tab_order(d)]
            if focusable:
                results.append(issue(
                    "ARIA_007",
                    el,
                    f"aria-hidden=\"true\" hides {len(focusable)} focusable element(s) that keyboard users can still reach."
                ))

        # ==========================================================
        # WIDGET NAMES
        # ==========================================================

        # native form controls and links are reported by the forms/semantic checklists
        if role and ARIA_ROLES[role].widget:
            name, _ = accessible_name(el, soup)
            if not name:
                results.append(issue(
                    "ARIA_009",
                    el,
                    f"Element with role \"{role}\" has no accessible name."
                ))
        elif el.name == "button":
            name, _ = accessible_name(el, soup)
            if not name:
                results.append(issue(
                    "ARIA_009",
                    el,
                    "<button> has no text content, aria-label or aria-labelledby."
                ))

    return results
