from pathlib import Path

import pytest

from audit_checks import CHECKLISTS, run_checklists
from audit_checks.common import (
    css_path,
    dedupe,
    element_location,
    format_issue,
    is_full_document,
    issue,
    load_soup,
    parse_tabindex,
)
from audit_checks.reference import (
    ARIA_ATTRIBUTES,
    RULES,
    WCAG_CRITERIA,
    criterion,
    is_valid_role,
    rule,
    rules_for_criterion,
)

from conftest import rule_ids


def test_css_path_counts_same_tag_siblings():
    soup = load_soup('<div><p>a</p><p><img src="x.png"></p></div>')
    assert css_path(soup.find("img")) == "html > body > div > p:nth-of-type(2) > img"


def test_element_location():
    soup = load_soup('<p id="intro" class="lead big">' + "x" * 100 + "</p>")
    loc = element_location(soup.find("p"))
    assert loc["tag"] == "p"
    assert loc["id"] == "intro"
    assert loc["class"] == ["lead", "big"]
    assert len(loc["text_preview"]) == 80
    assert element_location(None) is None


def test_issue_record_from_catalogue():
    soup = load_soup('<img src="x.png">')
    found = issue("NON_TEXT_001", soup.find("img"), "No alt.")
    assert found["rule_name"] == "Image missing alt attribute"
    assert found["checklist"] == "nontext"
    assert found["severity"] == "error"
    assert found["wcag"] == ["1.1.1"]
    assert found["location"]["css_path"] == "html > body > img"
    with pytest.raises(KeyError):
        issue("NOPE_001", None, "x")


def test_format_issue():
    soup = load_soup('<img id="hero" src="x.png">')
    text = format_issue(issue("NON_TEXT_001", soup.find("img"), "No alt."))
    assert text.splitlines()[0] == "[NON_TEXT_001] Image missing alt attribute (error, WCAG 1.1.1)"
    assert "  ID: hero" in text
    assert text.endswith("  Description: No alt.")


def test_dedupe_keeps_first():
    a = {"rule_id": "X", "location": {"css_path": "p"}, "description": "d"}
    b = {"rule_id": "X", "location": {"css_path": "p"}, "description": "d", "extra": 1}
    c = {"rule_id": "X", "location": {"css_path": "div"}, "description": "d"}
    assert dedupe([a, b, c]) == [a, c]


@pytest.mark.parametrize("markup, expected", [
    ("<!DOCTYPE html><p>x</p>", True),
    ("<HTML lang='en'></HTML>", True),
    ("<body>\n<p>x</p></body>", True),
    ("<p>x</p>", False),
    ("<header>x</header>", False),
])
def test_is_full_document(markup, expected):
    assert is_full_document(markup) is expected


def test_parse_tabindex():
    soup = load_soup('<div tabindex="0"></div><span tabIndex={-1}></span><i tabindex="x"></i><b></b>')
    assert [parse_tabindex(el) for el in soup.find_all(["div", "span", "i", "b"])] == [0, -1, None, None]


def test_run_checklists_in_checklist_order():
    html = '<div onclick="go()"><img src="x.png"></div>'
    ids = rule_ids(run_checklists(html))
    assert ids == ["FORM_CUSTOM_001", "NON_TEXT_001", "KEY_001", "KEY_002"]
    assert rule_ids(run_checklists(html, ["keyboard", "nontext"])) == ["KEY_001", "KEY_002", "NON_TEXT_001"]


def test_run_checklists_on_file(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("<html><body><main><h1>Hi</h1></main></body></html>", encoding="utf-8")
    ids = rule_ids(run_checklists(page))
    assert "PAGE_TITLE_001" in ids
    assert "LANG_001" in ids


def test_run_checklists_errors(tmp_path):
    with pytest.raises(KeyError):
        run_checklists("<p>x</p>", ["semantics"])
    with pytest.raises(FileNotFoundError):
        run_checklists(Path(tmp_path / "missing.html"))


def test_catalogue_is_consistent():
    checklists = set(CHECKLISTS)
    for r in RULES.values():
        assert r.checklist in checklists
        assert r.severity in ("error", "warning")
        for sc in r.wcag:
            assert sc in WCAG_CRITERIA
    for name in ARIA_ATTRIBUTES:
        assert name.startswith("aria-")


def test_reference_lookups():
    sc = criterion("1.4.3")
    assert (sc.name, sc.level, sc.principle) == ("Contrast (Minimum)", "AA", "Perceivable")
    assert rule("KEY_004").severity == "warning"
    assert "NON_TEXT_001" in [r.id for r in rules_for_criterion("1.1.1")]
    assert is_valid_role("button")
    assert not is_valid_role("widget")
    assert not is_valid_role("buton")
    with pytest.raises(KeyError):
        criterion("9.9.9")
