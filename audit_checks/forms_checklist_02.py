import re

from .accessible_name import accessible_name, label_for, label_target
from .common import SKIP_INPUT_TYPES, NATIVE_INTERACTIVE, attr_text, has_attr_ci, issue, load_soup


ERROR_CLASS_RE = re.compile(r"(^|[-_\s])(error|invalid|has-error|is-invalid)($|[-_\s])", re.IGNORECASE)


# ==========================================================
# MAIN AUDIT FUNCTION
# ==========================================================

def form_controls(soup):
    """Interactive form controls (hidden and button-like inputs excluded)."""
    controls = []
    for control in soup.find_all(["input", "select", "textarea"]):
        if control.name == "input":
            input_type = (control.get("type") or "text").lower()
            if input_type in SKIP_INPUT_TYPES:
                continue
        controls.append(control)
    return controls


def audit_forms(source):

    soup = load_soup(source)
    results = []
    controls = form_controls(soup)

    # ==========================================================
    # INPUT LABEL ASSOCIATION
    # ==========================================================

    for control in controls:
        name, name_source = accessible_name(control, soup)

        if name_source == "placeholder_only":
            results.append(issue(
                "FORM_LABEL_003",
                control,
                "Placeholder text is used without a programmatically associated label; it disappears on input."
            ))
        elif not name:
            results.append(issue(
                "FORM_LABEL_001",
                control,
                "Form control does not have an associated label."
            ))

    for label in soup.find_all("label"):
        target = label_target(label)
        if target and not soup.find(id=target):
            results.append(issue(
                "FORM_LABEL_002",
                label,
                f"Label target '{target}' does not match any element id."
            ))

    # ==========================================================
    # FIELDSET / LEGEND
    # ==========================================================

    for fieldset in soup.find_all("fieldset"):
        legend = fieldset.find("legend")
        if not legend or not legend.get_text(strip=True):
            if not fieldset.get("aria-label") and not fieldset.get("aria-labelledby"):
                results.append(issue(
                    "FORM_GROUP_001",
                    fieldset,
                    "Fieldset does not contain a legend element."
                ))

    radio_groups = {}
    for radio in soup.find_all("input", attrs={"type": re.compile("^radio$", re.I)}):
        if radio.get("name"):
            radio_groups.setdefault(radio["name"], []).append(radio)

    for group_name, radios in radio_groups.items():
        if len(radios) < 2:
            continue
        first = radios[0]
        grouped = first.find_parent("fieldset") or first.find_parent(
            attrs={"role": re.compile(r"^(radiogroup|group)$", re.I)}
        )
        if not grouped:
            results.append(issue(
                "FORM_GROUP_002",
                first,
                f"Radio buttons named '{group_name}' are not grouped in a <fieldset> or role=\"radiogroup\"."
            ))

    # ==========================================================
    # REQUIRED FIELDS
    # ==========================================================

    for control in controls:
        if "required" in control.attrs or attr_text(control, "aria-required").lower() == "true":
            continue

        label = label_for(soup, control.get("id")) or control.find_parent("label")
        if label and "*" in label.get_text():
            results.append(issue(
                "FORM_REQUIRED_001",
                control,
                "Field appears visually required but lacks 'required' or aria-required=\"true\"."
            ))

    # ==========================================================
    # ARIA-DESCRIBEDBY VALIDATION
    # ==========================================================

    for control in controls:
        for ref_id in attr_text(control, "aria-describedby").split():
            if not soup.find(id=ref_id):
                results.append(issue(
                    "FORM_INSTR_001",
                    control,
                    f"aria-describedby references missing ID '{ref_id}'."
                ))

    # ==========================================================
    # ERROR MESSAGE ASSOCIATION
    # ==========================================================

    for control in controls:
        invalid = attr_text(control, "aria-invalid").lower() == "true"

        if invalid:
            if not control.get("aria-describedby") and not control.get("aria-errormessage"):
                results.append(issue(
                    "FORM_ERROR_001",
                    control,
                    "Invalid form control lacks aria-describedby or aria-errormessage linking to an error message."
                ))
            continue

        classes = " ".join(control.get("class") or attr_text(control, "classname").split())
        if classes and ERROR_CLASS_RE.search(classes):
            results.append(issue(
                "FORM_ERROR_002",
                control,
                f"Control is styled as an error (class=\"{classes}\") but not marked aria-invalid=\"true\"; "
                "the error is conveyed by color alone."
            ))

    # ==========================================================
    # CUSTOM INTERACTIVE CONTROLS
    # ==========================================================

    for el in soup.find_all(True):
        if has_attr_ci(el, "onclick") and el.name not in NATIVE_INTERACTIVE:
            if not el.get("role"):
                results.append(issue(
                    "FORM_CUSTOM_001",
                    el,
                    f"<{el.name}> has a click handler but no semantic role; use a <button>."
                ))

    return results
