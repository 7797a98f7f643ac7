import re

from .accessible_name import accessible_name, explicit_role
from .common import attr_text, clean, issue, load_soup


REDUNDANT_ALT_RE = re.compile(r"^(an?\s+)?(image|picture|photo|graphic|icon|logo image)\s+(of|showing)\b", re.IGNORECASE)
FILENAME_ALT_RE = re.compile(r"^[\w\-. ]+\.(png|jpe?g|gif|svg|webp|bmp|avif)$", re.IGNORECASE)


# ==========================================================
# MAIN AUDIT FUNCTION
# ==========================================================

def audit_nontext(source):

    soup = load_soup(source)
    results = []

    # ==========================================================
    # Image Alt Text
    # ==========================================================

    # Images that convey content MUST have programmatically-discernible alternative text.
    for img in soup.find_all("img"):
        if img.get("alt") is None:
            if img.get("aria-label") or img.get("aria-labelledby"):
                continue
            if (explicit_role(img) or "") in ("presentation", "none"):
                continue
            results.append(issue(
                "NON_TEXT_001",
                img,
                "<img> element does not contain an alt attribute."
            ))
            continue

        alt = clean(img.get("alt"))
        if alt and (REDUNDANT_ALT_RE.match(alt) or FILENAME_ALT_RE.match(alt)):
            results.append(issue(
                "NON_TEXT_009",
                img,
                f"alt=\"{alt}\" repeats what screen readers already announce or is a file name; describe the content."
            ))

        if img.get("alt") == "" and (img.get("title") or img.get("aria-label")):
            results.append(issue(
                "NON_TEXT_010",
                img,
                "Image is marked decorative (alt=\"\") but also has a title or aria-label."
            ))

    # All actionable images MUST have alternative text.
    for a in soup.find_all("a"):
        img = a.find("img")
        if img and not a.get_text(strip=True):
            name, _ = accessible_name(a, soup)
            if not name:
                results.append(issue(
                    "NON_TEXT_002",
                    img,
                    "Image inside a link must have non-empty alt text describing the link destination."
                ))

    # Form inputs with type="image" MUST have alternative text.
    for inp in soup.find_all("input", attrs={"type": re.compile("^image$", re.I)}):
        alt = inp.get("alt")
        if alt is None or alt.strip() == "":
            results.append(issue(
                "NON_TEXT_003",
                inp,
                "Form input type='image' must have non-empty alt text."
            ))

    # ==========================================================
    # Image Maps
    # ==========================================================

    for area in soup.find_all("area"):
        alt = area.get("alt")
        if alt is None or alt.strip() == "":
            results.append(issue(
                "NON_TEXT_004",
                area,
                "<area> element must have non-empty alt text."
            ))

    # ==========================================================
    # SVG
    # ==========================================================

    # SVG SHOULD NOT be embedded via <object> or <iframe>.
    for obj in soup.find_all(["object", "iframe"]):
        src = obj.get("data") or obj.get("src")
        if src and src.lower().endswith(".svg"):
            results.append(issue(
                "NON_TEXT_005",
                obj,
                "SVG should not be embedded using <object> or <iframe>."
            ))

    # Inline SVG exposed as an image MUST have a name.
    for svg in soup.find_all("svg"):
        if attr_text(svg, "aria-hidden").lower() == "true":
            continue
        if (explicit_role(svg) or "") not in ("img", "image"):
            continue
        name, _ = accessible_name(svg, soup)
        if not name:
            results.append(issue(
                "NON_TEXT_008",
                svg,
                "<svg role=\"img\"> needs a <title>, aria-label or aria-labelledby."
            ))

    # ==========================================================
    # HTML 5 <canvas>
    # ==========================================================

    for canvas in soup.find_all("canvas"):
        if not canvas.get_text(strip=True) and not canvas.get("aria-label") and not canvas.get("aria-labelledby"):
            results.append(issue(
                "NON_TEXT_006",
                canvas,
                "<canvas> element must contain fallback text content."
            ))

    # ==========================================================
    # Plug-ins
    # ==========================================================

    for obj in soup.find_all("object"):
        if not obj.get_text(strip=True) and not obj.get("aria-label") and not obj.get("title"):
            results.append(issue(
                "NON_TEXT_007",
                obj,
                "<object> element must contain alternative text content."
            ))

    return results
