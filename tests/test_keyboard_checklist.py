from audit_checks.keyboard_checklist_05 import audit_keyboard, audit_stylesheet

from conftest import rule_ids


def test_clickable_div():
    assert rule_ids(audit_keyboard('<div onclick="openMenu()">Menu</div>')) == ["KEY_001", "KEY_002"]


def test_jsx_click_handler():
    assert rule_ids(audit_keyboard("<div onClick={openMenu}>Menu</div>")) == ["KEY_001", "KEY_002"]


def test_focusable_custom_button_with_key_handler():
    html = '<div role="button" tabindex="0" onclick="go()" onkeydown="onKey(event)">Go</div>'
    assert audit_keyboard(html) == []


def test_native_controls_are_not_flagged():
    assert audit_keyboard('<button onclick="save()">Save</button>') == []


def test_widget_role_not_focusable():
    issues = audit_keyboard('<span role="button">Go</span>')
    assert rule_ids(issues) == ["KEY_003"]
    assert audit_keyboard('<span role="button" aria-disabled="true">Go</span>') == []


def test_links_used_as_buttons():
    assert rule_ids(audit_keyboard('<a href="javascript:void(0)">Open</a>')) == ["KEY_004"]
    assert rule_ids(audit_keyboard('<a href="#" onclick="open()">Open</a>')) == ["KEY_004"]
    assert audit_keyboard('<a href="#top">Back to top</a>') == []


def test_native_control_removed_from_tab_order():
    issues = audit_keyboard('<button tabindex="-1">Save</button>')
    assert rule_ids(issues) == ["FOCUS_003"]
    assert issues[0]["severity"] == "warning"


def test_outline_removed_in_style_block():
    issues = audit_keyboard("<style>button:focus { outline: none; }</style><button>Save</button>")
    assert rule_ids(issues) == ["FOCUS_002"]
    assert issues[0]["location"]["selector"] == "button:focus"


def test_focus_visible_replacement():
    css = """
    button:focus { outline: none; }
    button:focus-visible { outline: 2px solid #1a73e8; }
    """
    assert audit_keyboard(f"<style>{css}</style><button>Save</button>") == []


def test_outline_removed_inline():
    issues = audit_keyboard('<button style="outline: none">Save</button>')
    assert rule_ids(issues) == ["FOCUS_002"]
    assert issues[0]["location"]["tag"] == "button"


def test_stylesheet_outline_zero():
    issues = audit_stylesheet("/* reset */\na:focus {\n  outline: 0;\n}\n")
    assert rule_ids(issues) == ["FOCUS_002"]
    assert issues[0]["location"] == {"selector": "a:focus", "line": 2, "css_path": None}


def test_stylesheet_rule_with_own_indicator():
    assert audit_stylesheet("a:focus { outline: none; box-shadow: 0 0 0 3px #1a73e8; }") == []
