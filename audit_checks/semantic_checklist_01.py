import re

from .accessible_name import accessible_name
from .common import clean, in_tab_order, issue, parse_tabindex, prepare
from .reference import LANDMARK_ROLES


# ==========================================================
# CONSTANTS
# ==========================================================

LANGUAGE_TAG_REGEX = re.compile(r"^[a-zA-Z]{2,3}(-[a-zA-Z0-9]{2,8})*$")

# HTML5 landmark elements mapped to ARIA landmark roles
LANDMARK_MAP = {
    "header": "banner",
    "nav": "navigation",
    "main": "main",
    "footer": "contentinfo",
    "aside": "complementary",
}

AMBIGUOUS_LINK_TEXT = {
    "click here", "here", "read more", "more", "link", "learn more",
    "click", "this", "this link", "details", "go",
}


# ==========================================================
# MAIN AUDIT FUNCTION
# ==========================================================

def audit_semantics(source, *, fragment=None):
    """Document-structure checks (titles, language, landmarks, headings, links, tables).

    Page-level rules (missing <title>, main landmark, <h1>, skip link...)
    are skipped for fragments such as the code snippets in the guides.
    """
    soup, fragment = prepare(source, fragment)
    results = []
    body = soup.find("body")

    # ==========================================================
    # PAGE TITLE
    # ==========================================================

    titles = soup.find_all("title")
    # <svg><title> is a text alternative, not a page title
    titles = [t for t in titles if not t.find_parent("svg")]

    if len(titles) == 0 and not fragment:
        results.append(issue(
            "PAGE_TITLE_001",
            soup.find("head"),
            "The page does not contain a <title> element."
        ))

    if len(titles) > 1:
        for t in titles:
            results.append(issue(
                "PAGE_TITLE_002",
                t,
                "More than one <title> element found."
            ))

    if titles and not titles[0].get_text(strip=True):
        results.append(issue(
            "PAGE_TITLE_003",
            titles[0],
            "<title> element exists but contains no text."
        ))

    # ==========================================================
    # LANGUAGE
    # ==========================================================

    html = soup.find("html")

    if html and not fragment:
        lang = html.get("lang")

        if not lang:
            results.append(issue(
                "LANG_001",
                html,
                "<html> element missing lang attribute."
            ))

        elif not LANGUAGE_TAG_REGEX.match(lang):
            results.append(issue(
                "LANG_002",
                html,
                f"Invalid language code '{lang}' on <html>."
            ))

    for el in soup.find_all(attrs={"lang": True}):
        if el.name == "html":
            continue
        lang_val = el.get("lang")
        if not LANGUAGE_TAG_REGEX.match(lang_val):
            results.append(issue(
                "LANG_003",
                el,
                f"Invalid lang attribute '{lang_val}'."
            ))

    # ==========================================================
    # LANDMARKS
    # ==========================================================

    landmarks = []

    for tag, role in LANDMARK_MAP.items():
        for el in soup.find_all(tag):
            # header/footer scoped to article or section are not landmarks
            if tag in ("header", "footer") and el.find_parent(["article", "section", "aside", "nav", "main"]):
                continue
            if el.get("role"):
                continue
            landmarks.append((el, role))

    for el in soup.find_all(attrs={"role": True}):
        role = el.get("role").strip().lower()
        if role in LANDMARK_ROLES:
            landmarks.append((el, role))

    role_map = {}
    for el, role in landmarks:
        role_map.setdefault(role, []).append(el)

    if "main" not in role_map and not fragment:
        results.append(issue(
            "LAND_001",
            body,
            "Page does not contain a <main> landmark."
        ))

    for role, rule_id in (("main", "LAND_002"), ("banner", "LAND_003"), ("contentinfo", "LAND_004")):
        if len(role_map.get(role, [])) > 1:
            for el in role_map[role]:
                results.append(issue(
                    rule_id,
                    el,
                    f"More than one '{role}' landmark found."
                ))

    for role, elements in role_map.items():
        if len(elements) > 1:
            for el in elements:
                if not el.get("aria-label") and not el.get("aria-labelledby"):
                    results.append(issue(
                        "LAND_005",
                        el,
                        f"Multiple '{role}' landmarks should have distinguishing aria-label or aria-labelledby attributes.",
                        rule_name=f"Multiple '{role}' landmarks without accessible labels",
                    ))

    landmark_elements = [el for el, _ in landmarks]

    if body and not fragment:
        for child in body.find_all(recursive=False):
            if child in landmark_elements or child.name in ("script", "style", "noscript", "template"):
                continue
            # skip links legitimately sit before the banner
            if child.name == "a" and (child.get("href") or "").startswith("#"):
                continue
            if any(lm in landmark_elements for lm in child.find_all(True)):
                continue
            if child.get_text(strip=True):
                results.append(issue(
                    "LAND_006",
                    child,
                    "Content found directly under <body> that is not contained within a landmark region."
                ))
                break

    # ==========================================================
    # HEADINGS
    # ==========================================================

    headings = soup.find_all(re.compile("^h[1-6]$"))
    previous_level = 0

    for h in headings:
        level = int(h.name[1])
        if previous_level and level > previous_level + 1:
            results.append(issue(
                "HEAD_001",
                h,
                f"Heading level skipped (h{previous_level} to h{level})."
            ))
        previous_level = level

    h1_elements = [h for h in headings if h.name == "h1"]

    if len(h1_elements) == 0 and not fragment:
        results.append(issue(
            "HEAD_003",
            body,
            "The page does not contain an <h1> element."
        ))

    if len(h1_elements) > 1:
        for h in h1_elements:
            results.append(issue(
                "HEAD_002",
                h,
                "More than one <h1> found."
            ))

    for h in headings:
        name, _ = accessible_name(h, soup)
        if not name:
            results.append(issue(
                "HEAD_004",
                h,
                "Heading element contains no text."
            ))

    # ==========================================================
    # LINKS
    # ==========================================================

    for a in soup.find_all("a"):
        name, _ = accessible_name(a, soup)

        if a.get("href") is not None and not name:
            results.append(issue(
                "LINK_001",
                a,
                "Link has no text, image alt text or aria-label."
            ))

        if a.get("href") is None and not a.get("id") and not a.get("name"):
            results.append(issue(
                "LINK_002",
                a,
                "Anchor element does not contain an href attribute."
            ))

        if name and clean(name).lower().rstrip(".!") in AMBIGUOUS_LINK_TEXT:
            results.append(issue(
                "LINK_003",
                a,
                f"Link text '{clean(name)}' does not describe its destination."
            ))

    # ==========================================================
    # SKIP LINKS
    # ==========================================================

    skip_links = []

    for a in soup.find_all("a"):
        href = a.get("href")
        text = a.get_text(strip=True).lower()

        if href and href.startswith("#") and len(href) > 1 and "skip" in text:
            skip_links.append(a)

    if not skip_links:
        if not fragment:
            results.append(issue(
                "NAV_001",
                body,
                "Page does not contain a skip navigation link."
            ))
    else:
        for skip in skip_links:
            target_id = skip.get("href")[1:]
            if not soup.find(id=target_id):
                results.append(issue(
                    "NAV_002",
                    skip,
                    f"Skip link points to '#{target_id}' but no element with that ID exists."
                ))

        if not fragment:
            focusable_elements = [el for el in soup.find_all(True) if in_tab_order(el)]
            if focusable_elements and focusable_elements[0] not in skip_links:
                results.append(issue(
                    "NAV_003",
                    focusable_elements[0],
                    "The first focusable element on the page is not a skip navigation link."
                ))

    # ==========================================================
    # FOCUS / TABINDEX
    # ==========================================================

    for el in soup.find_all(True):
        tabindex = parse_tabindex(el)
        if tabindex is not None and tabindex > 0:
            results.append(issue(
                "FOCUS_001",
                el,
                f"tabindex=\"{tabindex}\" overrides the natural focus order; use 0 or -1."
            ))

    # ==========================================================
    # TABLES
    # ==========================================================

    for table in soup.find_all("table"):
        if (table.get("role") or "").lower() in ("presentation", "none"):
            continue

        if not table.find("caption") and not table.get("aria-label") and not table.get("aria-labelledby"):
            results.append(issue(
                "TABLE_001",
                table,
                "Data table does not contain a <caption>."
            ))

        header_cells = table.find_all("th")
        if not header_cells:
            results.append(issue(
                "TABLE_002",
                table,
                "Table does not contain <th> elements."
            ))
            continue

        rows = table.find_all("tr")
        row_headers = [
            tr for tr in rows[1:]
            if tr.find(["th", "td"]) is not None and tr.find(["th", "td"]).name == "th"
        ]
        column_headers = rows[0].find_all("th") if rows else []
        if row_headers and column_headers:
            unscoped = [th for th in header_cells if not th.get("scope") and not th.get("id")]
            if unscoped:
                results.append(issue(
                    "TABLE_003",
                    table,
                    f"Table has row and column headers but {len(unscoped)} <th> lack a scope attribute."
                ))

    # ==========================================================
    # IFRAMES
    # ==========================================================

    for iframe in soup.find_all("iframe"):
        title = iframe.get("title")
        if title is None:
            results.append(issue(
                "IFRAME_001",
                iframe,
                "Iframe does not have a title attribute."
            ))
        elif not title.strip():
            results.append(issue(
                "IFRAME_002",
                iframe,
                "Iframe title attribute is empty."
            ))

    # ==========================================================
    # PARSING / VALIDITY
    # ==========================================================

    ids = {}
    for el in soup.find_all(attrs={"id": True}):
        id_val = el.get("id")
        if id_val in ids:
            results.append(issue(
                "PARSE_001",
                el,
                f"Duplicate id '{id_val}' found."
            ))
        else:
            ids[id_val] = el

    return results
