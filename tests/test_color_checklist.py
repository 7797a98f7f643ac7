import pytest

from audit_checks.color_checklist_06 import (
    audit_color,
    audit_css_color,
    contrast_ratio,
    font_size_px,
    is_large_text,
    parse_color,
    passes_contrast,
    relative_luminance,
)

from conftest import rule_ids


@pytest.mark.parametrize("value, expected", [
    ("#abc", (170, 187, 204)),
    ("#AABBCC", (170, 187, 204)),
    ("#12345678", (0x12, 0x34, 0x56)),
    ("rgb(255, 0, 0)", (255, 0, 0)),
    ("rgba(0, 128, 0, 0.5)", (0, 128, 0)),
    ("white", (255, 255, 255)),
])
def test_parse_color(value, expected):
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", [
    "", "not-a-color", "#12", "var(--fg)", "linear-gradient(red, blue)",
    "rgb(1.2.3, 0, 0)", "rgb(., 0, 0)", "rgba(0, 0, 0, 1.2.3)",
])
def test_parse_color_rejects(value):
    assert parse_color(value) is None


def test_luminance_bounds():
    assert relative_luminance("#000") == 0
    assert relative_luminance("#fff") == pytest.approx(1.0)


def test_contrast_ratio():
    assert contrast_ratio("#000", "#fff") == pytest.approx(21.0)
    assert contrast_ratio("#fff", "#000") == pytest.approx(21.0)
    assert contrast_ratio("red", "red") == pytest.approx(1.0)
    assert contrast_ratio("#777", "#fff") == pytest.approx(4.48, abs=0.01)


def test_contrast_ratio_unsupported_color():
    with pytest.raises(ValueError):
        contrast_ratio("transparent-ish", "#fff")


def test_passes_contrast_thresholds():
    assert passes_contrast(4.5)
    assert not passes_contrast(4.49)
    assert passes_contrast(3.0, large=True)
    assert not passes_contrast(6.9, level="AAA")
    assert passes_contrast(4.5, level="AAA", large=True)
    with pytest.raises(ValueError):
        passes_contrast(5.0, level="B")


def test_large_text():
    assert font_size_px("14pt") == pytest.approx(18.667, abs=0.01)
    assert font_size_px("1.5rem") == 24
    assert is_large_text({"font-size": "24px"})
    assert is_large_text({"font-size": "14pt", "font-weight": "bold"})
    assert is_large_text({"font-size": "19px", "font-weight": "700"})
    assert not is_large_text({"font-size": "18px", "font-weight": "bold"})
    assert not is_large_text({})


@pytest.mark.parametrize("value", ["1.2.3px", "..5em", ".px", "12.px"])
def test_font_size_malformed(value):
    assert font_size_px(value) is None
    assert not is_large_text({"font-size": value})


def test_malformed_inline_values_are_skipped():
    assert audit_color('<p style="color: rgb(1.2.3, 0, 0); background: white">x</p>') == []
    assert audit_color('<p style="color: #000; background: #fff; font-size: 1.2.3px">x</p>') == []


def test_inline_low_contrast():
    issues = audit_color('<p style="color: #999; background-color: #fff">Muted</p>')
    assert rule_ids(issues) == ["CONTRAST_001"]
    assert "2.85:1" in issues[0]["description"]


def test_inline_large_text_uses_lower_threshold():
    html = '<h2 style="color: #777; background: white; font-size: 24px">Title</h2>'
    assert audit_color(html) == []


def test_inline_without_background_is_not_checked():
    assert audit_color('<p style="color: #eee">Faint</p>') == []


def test_style_block_contrast():
    issues = audit_color("<style>.muted { color: #aaa; background: white; }</style><p class='muted'>x</p>")
    assert rule_ids(issues) == ["CONTRAST_002"]
    assert issues[0]["location"]["selector"] == ".muted"


@pytest.mark.parametrize("css", [
    ".error { color: red; }",
    "input:invalid { border-color: #d00; }",
    "[aria-invalid=\"true\"] { color: #c00; background-color: #fff; }",
])
def test_color_only_error_indicator(css):
    assert "COLOR_001" in rule_ids(audit_css_color(css))


@pytest.mark.parametrize("css", [
    ".error { color: #c00; border: 2px solid #c00; }",
    ".error-message { color: #c00; }",
    ".error::before { content: '⚠ '; }",
])
def test_error_indicator_not_color_only(css):
    assert "COLOR_001" not in rule_ids(audit_css_color(css))
