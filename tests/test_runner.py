import json

import pytest

from guides.runner import SnippetResult, audit_snippet, lint_guides, write_lint_results
from scoring.score import BinaryMetrics, f1_binary, score_binary


def snippet(verdict, issues):
    return SnippetResult(
        file="t.md", topic="", line=1, language="html", heading=None,
        verdict=verdict, code="", issues=[{"rule_id": "X"}] * issues,
    )


def test_audit_snippet_by_language():
    assert [i["rule_id"] for i in audit_snippet("HTML", "<img src='x.png'>")] == ["NON_TEXT_001"]
    assert [i["rule_id"] for i in audit_snippet("css", "a:focus { outline: none }")] == ["FOCUS_002"]
    assert audit_snippet("jsx", "<button>Save</button>") == []
    assert audit_snippet("python", "print('hi')") is None


def test_snippets_are_audited_as_fragments():
    # a bare <body> snippet from a guide must not trigger page-level rules
    assert audit_snippet("html", "<body><main><h2>Intro</h2></main></body>") == []


def test_lint_guides(guide_root, capsys):
    results = lint_guides(guide_root, verbose=True)
    assert [(r.file, r.line, r.language, r.verdict) for r in results] == [
        ("02-aria-roles/buttons.md", 17, "html", "bad"),
        ("02-aria-roles/buttons.md", 23, "html", "good"),
        ("02-aria-roles/buttons.md", 27, "css", None),
    ]
    assert [r.has_issues for r in results] == [True, False, True]
    assert {i["rule_id"] for i in results[0].issues} == {"FORM_CUSTOM_001", "KEY_001", "KEY_002"}
    assert "[2/3] 02-aria-roles/buttons.md: 3 snippets, 2 flagged" in capsys.readouterr().out


def test_lint_guides_checklist_filter(guide_root):
    results = lint_guides(guide_root, ["forms"], verbose=False)
    assert [i["rule_id"] for i in results[0].issues] == ["FORM_CUSTOM_001"]


def test_write_lint_results(guide_root, tmp_path):
    results = lint_guides(guide_root, verbose=False)
    json_path, txt_path = write_lint_results(results, tmp_path / "results")
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["summary"]["total_snippets"] == 3
    assert payload["summary"]["flagged_snippets"] == 2
    assert payload["summary"]["issues_by_rule"]["FOCUS_002"] == 1
    assert payload["snippets"][0]["verdict"] == "bad"
    text = txt_path.read_text(encoding="utf-8")
    assert "File: 02-aria-roles/buttons.md:17" in text
    assert "[KEY_001]" in text


def test_score_binary():
    results = [
        snippet("bad", 2),    # tp
        snippet("bad", 0),    # fn
        snippet("good", 0),   # tn
        snippet("good", 1),   # fp
        snippet("good", 0),   # tn
        snippet(None, 3),     # unlabeled
    ]
    m = score_binary(results)
    assert (m.tp, m.tn, m.fp, m.fn, m.total, m.unlabeled) == (1, 2, 1, 1, 5, 1)
    assert m.accuracy == pytest.approx(3 / 5)
    assert f1_binary(m) == pytest.approx(0.5)


def test_score_binary_empty():
    m = score_binary([])
    assert m == BinaryMetrics(accuracy=0.0, tp=0, tn=0, fp=0, fn=0, total=0, unlabeled=0)
    assert f1_binary(m) == 0.0


def test_guide_labels_agree_with_checker(guide_root):
    m = score_binary(lint_guides(guide_root, verbose=False))
    assert (m.tp, m.tn, m.unlabeled, m.accuracy) == (1, 1, 1, 1.0)
