import pytest

from audit_checks.accessible_name import accessible_name, get_role, implicit_role
from audit_checks.common import load_soup


def name_of(html, selector):
    soup = load_soup(html)
    return accessible_name(soup.select_one(selector), soup)


@pytest.mark.parametrize("html, selector, expected", [
    ('<span id="l">Billing</span><input id="i" aria-labelledby="l" aria-label="Other">', "#i",
     ("Billing", "aria_labelledby")),
    ('<label for="i">Name</label><input id="i" aria-label="Full name">', "#i",
     ("Full name", "aria_label")),
    ('<label for="i">Name</label><input id="i" title="Tip">', "#i", ("Name", "label_for")),
    ('<label htmlFor="i">Name</label><input id="i" />', "#i", ("Name", "label_for")),
    ('<label>Email <input id="i" type="email"></label>', "#i", ("Email", "wrapping_label")),
    ('<img id="i" src="x.png" alt="Logo">', "#i", ("Logo", "alt")),
    ('<input id="i" type="image" src="go.png" alt="Search">', "#i", ("Search", "alt")),
    ('<input id="i" type="submit" value="Send">', "#i", ("Send", "value")),
    ('<input id="i" type="submit">', "#i", ("Submit", "value")),
    ('<fieldset id="i"><legend>Shipping</legend></fieldset>', "#i", ("Shipping", "legend")),
    ('<table id="i"><caption>Prices</caption></table>', "#i", ("Prices", "caption")),
    ('<button id="i">Save <b>draft</b></button>', "#i", ("Save draft", "contents")),
    ('<input id="i" title="Search terms">', "#i", ("Search terms", "title")),
    ('<input id="i" placeholder="Email">', "#i", ("Email", "placeholder_only")),
    ('<input id="i">', "#i", ("", "none")),
])
def test_name_sources(html, selector, expected):
    assert name_of(html, selector) == expected


def test_hidden_descendants_are_excluded():
    html = '<button id="b"><span aria-hidden="true">★</span> Favorite</button>'
    assert name_of(html, "#b") == ("Favorite", "contents")


def test_image_alt_contributes_to_link_name():
    html = '<a id="a" href="/"><img src="home.png" alt="Home"></a>'
    assert name_of(html, "#a") == ("Home", "contents")


def test_div_does_not_take_name_from_content():
    assert name_of('<div id="d">Some text</div>', "#d") == ("", "none")


def test_labelledby_joins_several_ids():
    html = '<span id="a">Delete</span><span id="b">invoice 42</span><button id="x" aria-labelledby="a b">X</button>'
    assert name_of(html, "#x") == ("Delete invoice 42", "aria_labelledby")


def test_roles():
    soup = load_soup('<a id="l" href="/">x</a><a id="n">x</a><input id="c" type="checkbox"><img id="d" src="x" alt="">'
                     '<div id="r" role="tab button">x</div>')
    assert implicit_role(soup.select_one("#l")) == "link"
    assert implicit_role(soup.select_one("#n")) is None
    assert implicit_role(soup.select_one("#c")) == "checkbox"
    assert implicit_role(soup.select_one("#d")) == "presentation"
    assert get_role(soup.select_one("#r")) == "tab"
