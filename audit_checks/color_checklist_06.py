import re

from .common import attr_text, issue, load_soup
from .css import css_location, parse_declarations, parse_rules, stylesheet_text


# ==========================================================
# CONSTANTS
# ==========================================================

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA_NORMAL = 7.0
AAA_LARGE = 4.5

NAMED_COLORS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "blue": (0, 0, 255),
    "navy": (0, 0, 128),
    "yellow": (255, 255, 0),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "fuchsia": (255, 0, 255),
    "magenta": (255, 0, 255),
    "aqua": (0, 255, 255),
    "cyan": (0, 255, 255),
    "teal": (0, 128, 128),
    "olive": (128, 128, 0),
    "maroon": (128, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "gainsboro": (220, 220, 220),
    "whitesmoke": (245, 245, 245),
    "dimgray": (105, 105, 105),
    "dimgrey": (105, 105, 105),
    "darkblue": (0, 0, 139),
    "darkred": (139, 0, 0),
    "darkgreen": (0, 100, 0),
    "lightblue": (173, 216, 230),
    "lightgreen": (144, 238, 144),
    "pink": (255, 192, 203),
    "gold": (255, 215, 0),
    "crimson": (220, 20, 60),
    "tomato": (255, 99, 71),
}

_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
_NUM = r"(?:\d+(?:\.\d+)?|\.\d+)"
_RGB_RE = re.compile(
    rf"^rgba?\(\s*({_NUM}%?)\s*[, ]\s*({_NUM}%?)\s*[, ]\s*({_NUM}%?)\s*(?:[,/]\s*{_NUM}%?\s*)?\)$",
    re.IGNORECASE,
)
_SIZE_RE = re.compile(rf"^({_NUM})\s*(px|pt|em|rem)?$", re.IGNORECASE)

ERROR_SELECTOR_RE = re.compile(r":(user-)?invalid|\[aria-invalid|\.(error|invalid|is-invalid|has-error)(?![-\w])", re.IGNORECASE)
COLOR_ONLY_PROPS = re.compile(r"^(color|fill|stroke|outline-color|background-color|border(-(top|right|bottom|left))?-color)$")


# ==========================================================
# COLOR MATH (WCAG 2)
# ==========================================================

def _channel(token: str) -> int:
    if token.endswith("%"):
        return round(float(token[:-1]) * 255 / 100)
    return int(round(float(token)))


def parse_color(value):
    """Parse a CSS color into an (r, g, b) tuple; None when it is not a solid color."""
    if not value:
        return None
    value = value.strip().lower()
    if value in NAMED_COLORS:
        return NAMED_COLORS[value]
    m = _HEX_RE.match(value)
    if m:
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits[:3])
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
    m = _RGB_RE.match(value)
    if m:
        rgb = tuple(_channel(t) for t in m.groups())
        if all(0 <= c <= 255 for c in rgb):
            return rgb
    return None


def _linear(c: int) -> float:
    c = c / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color) -> float:
    r, g, b = parse_color(color) if isinstance(color, str) else color
    return 0.2126 * _linear(r) + 0.7152 * _linear(g) + 0.0722 * _linear(b)


def contrast_ratio(fg, bg) -> float:
    """WCAG contrast ratio between two colors (strings or rgb tuples), 1.0 - 21.0."""
    for c in (fg, bg):
        if isinstance(c, str) and parse_color(c) is None:
            raise ValueError(f"Unsupported color value: {c!r}")
    la = relative_luminance(fg)
    lb = relative_luminance(bg)
    lighter, darker = max(la, lb), min(la, lb)
    return (lighter + 0.05) / (darker + 0.05)


def passes_contrast(ratio: float, *, level: str = "AA", large: bool = False) -> bool:
    if level == "AA":
        return ratio >= (AA_LARGE if large else AA_NORMAL)
    if level == "AAA":
        return ratio >= (AAA_LARGE if large else AAA_NORMAL)
    raise ValueError(f"Unknown conformance level: {level}")


def font_size_px(value):
    m = _SIZE_RE.match((value or "").strip())
    if not m:
        return None
    size = float(m.group(1))
    unit = (m.group(2) or "px").lower()
    if unit == "pt":
        return size * 4 / 3
    if unit in ("em", "rem"):
        return size * 16
    return size


def is_large_text(decls: dict) -> bool:
    """WCAG large text: at least 24px, or 18.66px (14pt) and bold."""
    size = font_size_px(decls.get("font-size"))
    if size is None:
        return False
    weight = decls.get("font-weight", "").lower()
    bold = weight in ("bold", "bolder") or (weight.isdigit() and int(weight) >= 700)
    return size >= 24 or (bold and size >= 18.66)


def _background(decls: dict):
    if "background-color" in decls:
        return parse_color(decls["background-color"])
    background = decls.get("background", "")
    # shorthand: accept only a lone color value
    return parse_color(background) if background and " " not in background.strip() else None


def _contrast_problem(decls: dict):
    fg = parse_color(decls.get("color"))
    bg = _background(decls)
    if fg is None or bg is None:
        return None
    ratio = contrast_ratio(fg, bg)
    large = is_large_text(decls)
    if passes_contrast(ratio, large=large):
        return None
    needed = AA_LARGE if large else AA_NORMAL
    return ratio, needed


# ==========================================================
# MAIN AUDIT FUNCTIONS
# ==========================================================

def audit_css_color(css: str):
    """Color rules for a plain stylesheet."""
    results = []
    for rule in parse_rules(css):
        problem = _contrast_problem(rule.declarations)
        if problem:
            ratio, needed = problem
            results.append(issue(
                "CONTRAST_002",
                None,
                f"'{rule.selector}' has a contrast ratio of {ratio:.2f}:1 (needs {needed}:1).",
                location=css_location(rule),
            ))

        if ERROR_SELECTOR_RE.search(rule.selector) and rule.declarations:
            if all(COLOR_ONLY_PROPS.match(prop) for prop in rule.declarations):
                results.append(issue(
                    "COLOR_001",
                    None,
                    f"'{rule.selector}' signals an error only by changing color; add text, an icon or a border style.",
                    location=css_location(rule),
                ))
    return results


def audit_color(source):

    soup = load_soup(source)
    results = []

    # ==========================================================
    # INLINE STYLES
    # ==========================================================

    for el in soup.find_all(attrs={"style": True}):
        problem = _contrast_problem(parse_declarations(attr_text(el, "style")))
        if problem:
            ratio, needed = problem
            results.append(issue(
                "CONTRAST_001",
                el,
                f"Text contrast is {ratio:.2f}:1; WCAG AA requires {needed}:1."
            ))

    # ==========================================================
    # <style> BLOCKS
    # ==========================================================

    results.extend(audit_css_color(stylesheet_text(soup)))

    return results
