"""Accessible name computation (simplified accname).

Priority: aria-labelledby > aria-label > native label (label/alt/legend/
caption/value) > element contents for roles named from content > title >
placeholder. The source tells callers *where* the name came from, so the
forms checklist can tell a real label from a placeholder-only one.
"""
from __future__ import annotations

from bs4 import Comment, NavigableString, Tag

from .common import attr_text, clean
from .reference import ARIA_ROLES, IMPLICIT_ROLES, INPUT_ROLES


_SKIP_CONTENT = {"script", "style", "template", "noscript"}


def explicit_role(el) -> str | None:
    """First role token from the role attribute (ARIA fallback lists)."""
    tokens = attr_text(el, "role").split()
    return tokens[0].lower() if tokens else None


def implicit_role(el) -> str | None:
    name = el.name
    if name == "a":
        return "link" if el.has_attr("href") else None
    if name == "area":
        return "link" if el.has_attr("href") else None
    if name == "input":
        return INPUT_ROLES.get((el.get("type") or "text").lower())
    if name == "select":
        size = attr_text(el, "size")
        if el.has_attr("multiple") or (size.isdigit() and int(size) > 1):
            return "listbox"
        return "combobox"
    if name == "img":
        if el.get("alt") == "":
            return "presentation"
        return "img"
    if name == "section":
        if el.get("aria-label") or el.get("aria-labelledby"):
            return "region"
        return None
    return IMPLICIT_ROLES.get(name)


def get_role(el) -> str | None:
    return explicit_role(el) or implicit_role(el)


def is_hidden(el) -> bool:
    return (
        attr_text(el, "aria-hidden").lower() == "true"
        or el.has_attr("hidden")
        or el.name in _SKIP_CONTENT
    )


def text_alternative(el) -> str:
    """Text contributed by *el*'s subtree, honouring aria-hidden and alt."""
    parts = []
    for child in el.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
            continue
        if not isinstance(child, Tag) or is_hidden(child) or child.name in ("select", "textarea"):
            continue
        if child.get("aria-label") and child.get("aria-label").strip():
            parts.append(child["aria-label"])
        elif child.name in ("img", "area") or (child.name == "input" and (child.get("type") or "").lower() == "image"):
            parts.append(child.get("alt") or "")
        else:
            parts.append(text_alternative(child))
    return clean(" ".join(parts))


def resolve_ids(soup, id_string):
    """Resolve a space-separated list of IDs to their combined text content."""
    if not id_string:
        return None
    texts = [
        text_alternative(el)
        for ref_id in id_string.split()
        if (el := soup.find(id=ref_id.strip()))
    ]
    texts = [t for t in texts if t]
    return " ".join(texts) if texts else None


def label_target(label):
    """The id a <label> points at, from `for` or JSX `htmlFor`."""
    return label.get("for") or label.get("htmlfor")


def label_for(soup, el_id):
    if not el_id:
        return None
    return soup.find(lambda tag: tag.name == "label" and label_target(tag) == el_id)


def _native_name(el, soup) -> tuple[str, str] | None:
    name = el.name
    if name in ("input", "select", "textarea", "meter", "progress", "output"):
        input_type = (el.get("type") or "text").lower() if name == "input" else ""
        if input_type == "image":
            alt = clean(el.get("alt", ""))
            if alt:
                return alt, "alt"
        if input_type in ("submit", "reset", "button"):
            value = clean(el.get("value", ""))
            if value:
                return value, "value"
            if input_type != "button":
                return input_type.capitalize(), "value"
        label = label_for(soup, el.get("id"))
        if label is not None:
            text = text_alternative(label)
            if text:
                return text, "label_for"
        wrapping = el.find_parent("label")
        if wrapping is not None:
            text = text_alternative(wrapping)
            if text:
                return text, "wrapping_label"
        return None
    if name in ("img", "area"):
        alt = clean(el.get("alt", ""))
        return (alt, "alt") if alt else None
    if name == "fieldset":
        legend = el.find("legend")
        text = text_alternative(legend) if legend else ""
        return (text, "legend") if text else None
    if name in ("table", "figure"):
        caption = el.find("caption" if name == "table" else "figcaption")
        text = text_alternative(caption) if caption else ""
        return (text, "caption") if text else None
    if name == "svg":
        title = el.find("title")
        text = clean(title.get_text()) if title else ""
        return (text, "title") if text else None
    return None


def accessible_name(el, soup) -> tuple[str, str]:
    """Return ``(name, source)`` for *el*; ``("", "none")`` when it has none."""
    labelled = resolve_ids(soup, attr_text(el, "aria-labelledby"))
    if labelled:
        return labelled, "aria_labelledby"

    aria_label = clean(attr_text(el, "aria-label"))
    if aria_label:
        return aria_label, "aria_label"

    native = _native_name(el, soup)
    if native:
        return native

    role = ARIA_ROLES.get(get_role(el) or "")
    from_content = (role is not None and role.name_from_content) or el.name in ("summary", "label", "legend", "caption")
    if from_content:
        text = text_alternative(el)
        if text:
            return text, "contents"

    title = clean(attr_text(el, "title"))
    if title:
        return title, "title"

    placeholder = clean(attr_text(el, "placeholder"))
    if placeholder:
        return placeholder, "placeholder_only"

    return "", "none"
