from audit_checks.aria_checklist_04 import audit_aria

from conftest import rule_ids


def test_unknown_role():
    issues = audit_aria('<div role="buton" tabindex="0">Go</div>')
    assert rule_ids(issues) == ["ARIA_001"]
    assert "buton" in issues[0]["description"]


def test_fallback_role_list_uses_first_known_token():
    assert audit_aria('<div role="switch checkbox" aria-checked="false" tabindex="0">Wi-Fi</div>') == []


def test_abstract_role():
    assert rule_ids(audit_aria('<div role="widget">x</div>')) == ["ARIA_002"]


def test_unknown_aria_attribute():
    assert rule_ids(audit_aria('<div aria-labeled="x">x</div>')) == ["ARIA_003"]


def test_invalid_values():
    assert rule_ids(audit_aria('<button aria-pressed="yes">Bold</button>')) == ["ARIA_004"]
    assert rule_ids(audit_aria('<button aria-haspopup="popover">Menu</button>')) == ["ARIA_004"]
    assert audit_aria('<button aria-pressed="mixed">Bold</button>') == []


def test_template_values_are_not_checked():
    assert audit_aria('<button aria-expanded="{isOpen}">Menu</button>') == []


def test_idref_to_missing_element():
    issues = audit_aria('<button aria-controls="panel" aria-expanded="false">Menu</button>')
    assert rule_ids(issues) == ["ARIA_005"]
    assert audit_aria('<button aria-controls="panel">Menu</button><div id="panel"></div>') == []


def test_describedby_on_form_controls_left_to_forms_checklist():
    assert audit_aria('<input aria-label="Name" aria-describedby="hint">') == []


def test_required_state_missing():
    issues = audit_aria('<div role="checkbox" tabindex="0">Accept terms</div>')
    assert rule_ids(issues) == ["ARIA_006"]
    assert "aria-checked" in issues[0]["description"]


def test_native_elements_supply_required_state():
    assert audit_aria('<input type="checkbox" role="switch" aria-label="Wi-Fi">') == []
    # redundant, but no aria-level needed on a native heading
    assert rule_ids(audit_aria('<h2 role="heading">Title</h2>')) == ["ARIA_008"]


def test_aria_hidden_on_focusable_content():
    issues = audit_aria('<div aria-hidden="true"><a href="/x">Details</a></div>')
    assert rule_ids(issues) == ["ARIA_007"]
    assert audit_aria('<div aria-hidden="true"><a href="/x" tabindex="-1">Details</a></div>') == []


def test_redundant_role():
    assert rule_ids(audit_aria('<button role="button">Save</button>')) == ["ARIA_008"]
    issues = audit_aria('<nav role="navigation"><a href="/">Home</a></nav>')
    assert rule_ids(issues) == ["ARIA_008"]
    assert issues[0]["severity"] == "warning"


def test_widget_without_name():
    assert rule_ids(audit_aria('<div role="button" tabindex="0"></div>')) == ["ARIA_009"]
    assert rule_ids(audit_aria('<button><svg aria-hidden="true"></svg></button>')) == ["ARIA_009"]
    assert audit_aria('<button aria-label="Close"><svg aria-hidden="true"></svg></button>') == []
