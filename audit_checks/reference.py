"""Static reference data: WCAG success criteria, ARIA roles and attributes, rule catalogue.

Nothing in here is mutated at runtime; the checklists and the CLI only look
things up.
"""
from __future__ import annotations

from dataclasses import dataclass, field


PRINCIPLES = {
    "1": "Perceivable",
    "2": "Operable",
    "3": "Understandable",
    "4": "Robust",
}


@dataclass(frozen=True)
class Criterion:
    """One WCAG 2.x success criterion."""
    id: str
    name: str
    level: str  # "A" | "AA" | "AAA"

    @property
    def principle(self) -> str:
        return PRINCIPLES[self.id.split(".")[0]]


def _criteria(*rows: tuple[str, str, str]) -> dict[str, Criterion]:
    return {sc: Criterion(sc, name, level) for sc, name, level in rows}


WCAG_CRITERIA: dict[str, Criterion] = _criteria(
    ("1.1.1", "Non-text Content", "A"),
    ("1.2.2", "Captions (Prerecorded)", "A"),
    ("1.3.1", "Info and Relationships", "A"),
    ("1.3.2", "Meaningful Sequence", "A"),
    ("1.3.5", "Identify Input Purpose", "AA"),
    ("1.4.1", "Use of Color", "A"),
    ("1.4.3", "Contrast (Minimum)", "AA"),
    ("1.4.6", "Contrast (Enhanced)", "AAA"),
    ("1.4.11", "Non-text Contrast", "AA"),
    ("2.1.1", "Keyboard", "A"),
    ("2.1.2", "No Keyboard Trap", "A"),
    ("2.4.1", "Bypass Blocks", "A"),
    ("2.4.2", "Page Titled", "A"),
    ("2.4.3", "Focus Order", "A"),
    ("2.4.4", "Link Purpose (In Context)", "A"),
    ("2.4.6", "Headings and Labels", "AA"),
    ("2.4.7", "Focus Visible", "AA"),
    ("2.4.9", "Link Purpose (Link Only)", "AAA"),
    ("2.4.11", "Focus Not Obscured (Minimum)", "AA"),
    ("2.5.3", "Label in Name", "A"),
    ("3.1.1", "Language of Page", "A"),
    ("3.1.2", "Language of Parts", "AA"),
    ("3.3.1", "Error Identification", "A"),
    ("3.3.2", "Labels or Instructions", "A"),
    ("3.3.3", "Error Suggestion", "AA"),
    ("4.1.1", "Parsing", "A"),
    ("4.1.2", "Name, Role, Value", "A"),
    ("4.1.3", "Status Messages", "AA"),
)


# ── ARIA ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Role:
    name: str
    abstract: bool = False
    name_from_content: bool = False
    required: tuple[str, ...] = ()
    widget: bool = False


def _roles(*specs: Role) -> dict[str, Role]:
    return {r.name: r for r in specs}


ARIA_ROLES: dict[str, Role] = _roles(
    # abstract
    *(Role(n, abstract=True) for n in (
        "command", "composite", "input", "landmark", "range", "roletype",
        "section", "sectionhead", "select", "structure", "widget", "window",
    )),
    # widgets
    Role("button", name_from_content=True, widget=True),
    Role("checkbox", name_from_content=True, widget=True, required=("aria-checked",)),
    Role("combobox", widget=True, required=("aria-expanded",)),
    Role("gridcell", name_from_content=True),
    Role("link", name_from_content=True, widget=True),
    Role("listbox", widget=True),
    Role("menuitem", name_from_content=True, widget=True),
    Role("menuitemcheckbox", name_from_content=True, widget=True, required=("aria-checked",)),
    Role("menuitemradio", name_from_content=True, widget=True, required=("aria-checked",)),
    Role("option", name_from_content=True, widget=True),
    Role("progressbar", widget=True),
    Role("radio", name_from_content=True, widget=True, required=("aria-checked",)),
    Role("scrollbar", widget=True, required=("aria-controls", "aria-valuenow")),
    Role("searchbox", widget=True),
    Role("separator"),
    Role("slider", widget=True, required=("aria-valuenow",)),
    Role("spinbutton", widget=True),
    Role("switch", name_from_content=True, widget=True, required=("aria-checked",)),
    Role("tab", name_from_content=True, widget=True),
    Role("tabpanel"),
    Role("textbox", widget=True),
    Role("treeitem", name_from_content=True, widget=True),
    # composite
    Role("grid"), Role("menu"), Role("menubar"), Role("radiogroup"),
    Role("tablist"), Role("tree"), Role("treegrid"),
    # document structure
    Role("application"), Role("article"), Role("blockquote"),
    Role("caption", name_from_content=True), Role("cell", name_from_content=True),
    Role("code"), Role("columnheader", name_from_content=True),
    Role("definition"), Role("deletion"), Role("directory"), Role("document"),
    Role("emphasis"), Role("feed"), Role("figure"), Role("generic"), Role("group"),
    Role("heading", name_from_content=True, required=("aria-level",)),
    Role("img"), Role("image"), Role("insertion"), Role("list"), Role("listitem"),
    Role("math"), Role("meter", required=("aria-valuenow",)), Role("none"),
    Role("note"), Role("paragraph"), Role("presentation"),
    Role("row", name_from_content=True), Role("rowgroup"),
    Role("rowheader", name_from_content=True), Role("strong"),
    Role("subscript"), Role("superscript"), Role("table"), Role("term"),
    Role("time"), Role("toolbar"), Role("tooltip", name_from_content=True),
    # landmarks
    Role("banner"), Role("complementary"), Role("contentinfo"), Role("form"),
    Role("main"), Role("navigation"), Role("region"), Role("search"),
    # live regions and windows
    Role("alert"), Role("log"), Role("marquee"), Role("status"), Role("timer"),
    Role("alertdialog", widget=True), Role("dialog", widget=True),
)

LANDMARK_ROLES = frozenset({
    "banner", "navigation", "main", "contentinfo", "complementary",
    "search", "form", "region",
})


@dataclass(frozen=True)
class AriaAttribute:
    name: str
    value_type: str  # bool | tristate | token | tokens | idref | idrefs | int | number | string
    values: tuple[str, ...] = field(default_factory=tuple)


def _attrs(*rows: tuple) -> dict[str, AriaAttribute]:
    return {row[0]: AriaAttribute(*row) for row in rows}


ARIA_ATTRIBUTES: dict[str, AriaAttribute] = _attrs(
    ("aria-activedescendant", "idref"),
    ("aria-atomic", "bool"),
    ("aria-autocomplete", "token", ("inline", "list", "both", "none")),
    ("aria-braillelabel", "string"),
    ("aria-brailleroledescription", "string"),
    ("aria-busy", "bool"),
    ("aria-checked", "tristate"),
    ("aria-colcount", "int"),
    ("aria-colindex", "int"),
    ("aria-colindextext", "string"),
    ("aria-colspan", "int"),
    ("aria-controls", "idrefs"),
    ("aria-current", "token", ("page", "step", "location", "date", "time", "true", "false")),
    ("aria-describedby", "idrefs"),
    ("aria-description", "string"),
    ("aria-details", "idrefs"),
    ("aria-disabled", "bool"),
    ("aria-dropeffect", "tokens", ("copy", "execute", "link", "move", "none", "popup")),
    ("aria-errormessage", "idrefs"),
    ("aria-expanded", "bool"),
    ("aria-flowto", "idrefs"),
    ("aria-grabbed", "bool"),
    ("aria-haspopup", "token", ("false", "true", "menu", "listbox", "tree", "grid", "dialog")),
    ("aria-hidden", "bool"),
    ("aria-invalid", "token", ("grammar", "false", "spelling", "true")),
    ("aria-keyshortcuts", "string"),
    ("aria-label", "string"),
    ("aria-labelledby", "idrefs"),
    ("aria-level", "int"),
    ("aria-live", "token", ("assertive", "off", "polite")),
    ("aria-modal", "bool"),
    ("aria-multiline", "bool"),
    ("aria-multiselectable", "bool"),
    ("aria-orientation", "token", ("horizontal", "undefined", "vertical")),
    ("aria-owns", "idrefs"),
    ("aria-placeholder", "string"),
    ("aria-posinset", "int"),
    ("aria-pressed", "tristate"),
    ("aria-readonly", "bool"),
    ("aria-relevant", "tokens", ("additions", "all", "removals", "text")),
    ("aria-required", "bool"),
    ("aria-roledescription", "string"),
    ("aria-rowcount", "int"),
    ("aria-rowindex", "int"),
    ("aria-rowindextext", "string"),
    ("aria-rowspan", "int"),
    ("aria-selected", "bool"),
    ("aria-setsize", "int"),
    ("aria-sort", "token", ("ascending", "descending", "none", "other")),
    ("aria-valuemax", "number"),
    ("aria-valuemin", "number"),
    ("aria-valuenow", "number"),
    ("aria-valuetext", "string"),
)

# Native element -> implicit ARIA role (context-free approximation)
IMPLICIT_ROLES = {
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "dialog": "dialog",
    "fieldset": "group",
    "figure": "figure",
    "footer": "contentinfo",
    "form": "form",
    "h1": "heading", "h2": "heading", "h3": "heading",
    "h4": "heading", "h5": "heading", "h6": "heading",
    "header": "banner",
    "hr": "separator",
    "li": "listitem",
    "main": "main",
    "meter": "meter",
    "nav": "navigation",
    "ol": "list",
    "option": "option",
    "output": "status",
    "progress": "progressbar",
    "table": "table",
    "td": "cell",
    "textarea": "textbox",
    "th": "columnheader",
    "tr": "row",
    "ul": "list",
}

INPUT_ROLES = {
    "button": "button",
    "checkbox": "checkbox",
    "email": "textbox",
    "image": "button",
    "number": "spinbutton",
    "radio": "radio",
    "range": "slider",
    "reset": "button",
    "search": "searchbox",
    "submit": "button",
    "tel": "textbox",
    "text": "textbox",
    "url": "textbox",
}


# ── Rule catalogue ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    checklist: str
    wcag: tuple[str, ...]
    severity: str = "error"


def _rules(checklist: str, *rows: tuple) -> list[Rule]:
    out = []
    for row in rows:
        rule_id, name, wcag = row[:3]
        severity = row[3] if len(row) > 3 else "error"
        out.append(Rule(rule_id, name, checklist, tuple(wcag), severity))
    return out


RULES: dict[str, Rule] = {r.id: r for r in [
    *_rules(
        "semantic",
        ("PAGE_TITLE_001", "Missing <title>", ["2.4.2"]),
        ("PAGE_TITLE_002", "Multiple <title> elements", ["2.4.2"]),
        ("PAGE_TITLE_003", "Empty <title>", ["2.4.2"]),
        ("LANG_001", "Missing primary language", ["3.1.1"]),
        ("LANG_002", "Invalid primary language code", ["3.1.1"]),
        ("LANG_003", "Invalid inline language code", ["3.1.2"]),
        ("LAND_001", "Missing main landmark", ["1.3.1", "2.4.1"]),
        ("LAND_002", "Multiple main landmarks", ["1.3.1"]),
        ("LAND_003", "Multiple banner landmarks", ["1.3.1"]),
        ("LAND_004", "Multiple contentinfo landmarks", ["1.3.1"]),
        ("LAND_005", "Repeated landmarks without accessible labels", ["1.3.1"], "warning"),
        ("LAND_006", "Content outside landmark regions", ["1.3.1"], "warning"),
        ("HEAD_001", "Skipped heading level", ["1.3.1"], "warning"),
        ("HEAD_002", "Multiple <h1> elements", ["1.3.1"], "warning"),
        ("HEAD_003", "Missing <h1> element", ["1.3.1", "2.4.6"], "warning"),
        ("HEAD_004", "Empty heading", ["1.3.1", "2.4.6"]),
        ("LINK_001", "Link without accessible name", ["2.4.4", "4.1.2"]),
        ("LINK_002", "Anchor without href", ["2.1.1"], "warning"),
        ("LINK_003", "Ambiguous link text", ["2.4.4"], "warning"),
        ("NAV_001", "Skip link not present", ["2.4.1"], "warning"),
        ("NAV_002", "Skip link target does not exist", ["2.4.1"]),
        ("NAV_003", "Skip link is not first focusable element", ["2.4.1"], "warning"),
        ("FOCUS_001", "Positive tabindex used", ["2.4.3"]),
        ("TABLE_001", "Missing table caption", ["1.3.1"], "warning"),
        ("TABLE_002", "Missing table headers", ["1.3.1"]),
        ("TABLE_003", "Header cells without scope", ["1.3.1"], "warning"),
        ("IFRAME_001", "Missing iframe title", ["4.1.2"]),
        ("IFRAME_002", "Empty iframe title", ["4.1.2"]),
        ("PARSE_001", "Duplicate ID", ["4.1.1"]),
    ),
    *_rules(
        "forms",
        ("FORM_LABEL_001", "Form control missing programmatic label", ["1.3.1", "3.3.2", "4.1.2"]),
        ("FORM_LABEL_002", "Label references a missing control", ["1.3.1"]),
        ("FORM_LABEL_003", "Placeholder used as only label", ["3.3.2"]),
        ("FORM_GROUP_001", "Fieldset missing legend", ["1.3.1"]),
        ("FORM_GROUP_002", "Radio group not grouped", ["1.3.1"], "warning"),
        ("FORM_REQUIRED_001", "Required field not programmatically designated", ["3.3.2"]),
        ("FORM_INSTR_001", "aria-describedby reference not found", ["1.3.1"]),
        ("FORM_ERROR_001", "Error message not programmatically associated", ["3.3.1"]),
        ("FORM_ERROR_002", "Error indicated by styling only", ["1.4.1", "3.3.1"]),
        ("FORM_CUSTOM_001", "Custom interactive element missing role", ["4.1.2"]),
    ),
    *_rules(
        "nontext",
        ("NON_TEXT_001", "Image missing alt attribute", ["1.1.1"]),
        ("NON_TEXT_002", "Actionable image missing alt text", ["1.1.1", "2.4.4"]),
        ("NON_TEXT_003", "Image input missing alt text", ["1.1.1"]),
        ("NON_TEXT_004", "Image map area missing alt text", ["1.1.1"]),
        ("NON_TEXT_005", "SVG embedded via object or iframe", ["1.1.1"], "warning"),
        ("NON_TEXT_006", "Canvas missing fallback text", ["1.1.1"]),
        ("NON_TEXT_007", "Object missing alternative text", ["1.1.1"]),
        ("NON_TEXT_008", "SVG image without accessible name", ["1.1.1"]),
        ("NON_TEXT_009", "Redundant or file-name alt text", ["1.1.1"], "warning"),
        ("NON_TEXT_010", "Decorative image with a name", ["1.1.1"], "warning"),
    ),
    *_rules(
        "aria",
        ("ARIA_001", "Unknown ARIA role", ["4.1.2"]),
        ("ARIA_002", "Abstract ARIA role used", ["4.1.2"]),
        ("ARIA_003", "Unknown ARIA attribute", ["4.1.2"]),
        ("ARIA_004", "Invalid ARIA attribute value", ["4.1.2"]),
        ("ARIA_005", "ARIA reference to missing ID", ["1.3.1", "4.1.2"]),
        ("ARIA_006", "Required ARIA state or property missing", ["4.1.2"]),
        ("ARIA_007", "aria-hidden on focusable content", ["4.1.2"]),
        ("ARIA_008", "Redundant ARIA role", ["4.1.2"], "warning"),
        ("ARIA_009", "Widget without accessible name", ["4.1.2"]),
    ),
    *_rules(
        "keyboard",
        ("KEY_001", "Click handler on non-focusable element", ["2.1.1"]),
        ("KEY_002", "Click handler without keyboard handler", ["2.1.1"]),
        ("KEY_003", "Widget role on non-focusable element", ["2.1.1", "4.1.2"]),
        ("KEY_004", "Link used as a button", ["2.1.1", "4.1.2"], "warning"),
        ("FOCUS_002", "Focus outline removed without :focus-visible replacement", ["2.4.7"]),
        ("FOCUS_003", "Native control removed from tab order", ["2.1.1"], "warning"),
    ),
    *_rules(
        "color",
        ("CONTRAST_001", "Insufficient text contrast (inline style)", ["1.4.3"]),
        ("CONTRAST_002", "Insufficient text contrast (stylesheet)", ["1.4.3"]),
        ("COLOR_001", "Color used as the only error indicator", ["1.4.1"]),
    ),
]}


def criterion(sc_id: str) -> Criterion:
    """Look up a success criterion; raises KeyError for unknown ids."""
    return WCAG_CRITERIA[sc_id]


def rule(rule_id: str) -> Rule:
    """Look up a rule; raises KeyError for unknown ids."""
    return RULES[rule_id]


def rules_for_criterion(sc_id: str) -> list[Rule]:
    return [r for r in RULES.values() if sc_id in r.wcag]


def is_valid_role(token: str) -> bool:
    role = ARIA_ROLES.get(token)
    return role is not None and not role.abstract
